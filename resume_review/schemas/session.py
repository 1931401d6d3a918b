from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .analysis import HistoryEntry, ResumeAnalysis

SessionStatus = Literal["pending", "analyzing", "error", "result"]
InputSource = Literal["text", "pdf", "image", "text_file"]
Verdict = Literal["Excellent!", "Good Start", "Needs Work"]


def score_verdict(overall: int) -> Verdict:
    if overall >= 80:
        return "Excellent!"
    if overall >= 60:
        return "Good Start"
    return "Needs Work"


class AnalyzeTextRequest(BaseModel):
    text: str = Field(default="", max_length=200000)


class SessionView(BaseModel):
    status: SessionStatus
    analysis: ResumeAnalysis | None = None
    verdict: Verdict | None = None
    error: str | None = None
    warnings: list[str] = Field(default_factory=list)
    history: list[HistoryEntry] = Field(default_factory=list)


class ExtractResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source: InputSource
    text: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")
    warnings: list[str] = Field(default_factory=list)
