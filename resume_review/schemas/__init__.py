from .analysis import (
    AnalysisContent,
    EducationItem,
    ExperienceItem,
    HistoryEntry,
    Improvement,
    PersonalInfo,
    ResumeAnalysis,
    ResumeSections,
    ScoreBreakdown,
)
from .session import AnalyzeTextRequest, ExtractResponse, SessionView, score_verdict

__all__ = [
    "PersonalInfo",
    "ScoreBreakdown",
    "ExperienceItem",
    "EducationItem",
    "ResumeSections",
    "Improvement",
    "AnalysisContent",
    "ResumeAnalysis",
    "HistoryEntry",
    "AnalyzeTextRequest",
    "ExtractResponse",
    "SessionView",
    "score_verdict",
]
