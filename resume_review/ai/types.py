from dataclasses import dataclass
from typing import Protocol, Union


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class InlineMedia:
    data: str
    mime_type: str


NormalizedPayload = Union[PlainText, InlineMedia]


class AIClient(Protocol):
    provider: str
    model: str

    async def analyze(self, payload: NormalizedPayload) -> str: ...
