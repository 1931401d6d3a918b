from __future__ import annotations

import os
from typing import Any, Optional

from openai import AsyncOpenAI

from resume_review.ai.prompts import IMAGE_PROMPT, json_schema_instruction, text_prompt
from resume_review.ai.types import InlineMedia, NormalizedPayload


class OpenAIProvider:
    provider = "openai"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        temperature: float = 0.2,
        max_output_tokens: int = 2500,
    ):
        self.model = model
        self._temperature = temperature
        self._max_output_tokens = max_output_tokens
        key = (api_key or os.getenv("OPENAI_API_KEY") or "").strip()
        if not key:
            raise RuntimeError("OPENAI_API_KEY is missing")

        # one round-trip per analysis; timeouts are enforced by the gateway
        self._client = AsyncOpenAI(
            api_key=key,
            base_url=(base_url or os.getenv("OPENAI_BASE_URL") or None),
            timeout=None,
            max_retries=0,
        )

    def _user_content(self, payload: NormalizedPayload) -> Any:
        if isinstance(payload, InlineMedia):
            return [
                {"type": "text", "text": IMAGE_PROMPT},
                {
                    "type": "image_url",
                    "image_url": {"url": f"data:{payload.mime_type};base64,{payload.data}"},
                },
            ]
        return text_prompt(payload.text)

    async def analyze(self, payload: NormalizedPayload) -> str:
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": json_schema_instruction()},
                {"role": "user", "content": self._user_content(payload)},
            ],
            temperature=self._temperature,
            response_format={"type": "json_object"},
            max_tokens=self._max_output_tokens,
        )
        content = response.choices[0].message.content if response.choices else ""
        return content or ""
