from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Priority = Literal["High", "Medium", "Low"]


class PersonalInfo(BaseModel):
    name: str
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None


class ScoreBreakdown(BaseModel):
    overall: int = Field(ge=0, le=100)
    formatting: int = Field(ge=0, le=100)
    impact: int = Field(ge=0, le=100)
    keywords: int = Field(ge=0, le=100)
    relevance: int = Field(ge=0, le=100)

    @field_validator("overall", "formatting", "impact", "keywords", "relevance", mode="before")
    @classmethod
    def _validate_numeric(cls, value: object) -> object:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("score must be a number")
        if isinstance(value, float):
            return round(value)
        return value


class ExperienceItem(BaseModel):
    company: str = ""
    role: str = ""
    duration: str = ""
    description: list[str] = Field(default_factory=list)


class EducationItem(BaseModel):
    institution: str = ""
    degree: str = ""
    year: str = ""


class ResumeSections(BaseModel):
    experience: list[ExperienceItem] = Field(default_factory=list)
    education: list[EducationItem] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)


class Improvement(BaseModel):
    category: str
    suggestion: str
    priority: Priority


class AnalysisContent(BaseModel):
    """Critique returned by the model, before the session assigns an identity."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    personal_info: PersonalInfo = Field(alias="personalInfo")
    score: ScoreBreakdown
    summary: str
    sections: ResumeSections
    improvements: list[Improvement]
    upskilling: list[str]


class ResumeAnalysis(AnalysisContent):
    id: str
    timestamp: datetime


class HistoryEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str
    display_name: str = Field(alias="name")
    overall_score: int = Field(alias="overallScore")
    timestamp: datetime

    @classmethod
    def from_analysis(cls, analysis: ResumeAnalysis) -> HistoryEntry:
        return cls(
            id=analysis.id,
            display_name=analysis.personal_info.name or "Untitled",
            overall_score=analysis.score.overall,
            timestamp=analysis.timestamp,
        )
