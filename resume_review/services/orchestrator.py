from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from resume_review.ai.types import InlineMedia, NormalizedPayload
from resume_review.core.errors import (
    AnalysisError,
    AnalysisInProgress,
    AnalysisTimeout,
    HistoryWriteError,
    ResumeReviewError,
)
from resume_review.schemas.analysis import AnalysisContent, HistoryEntry, ResumeAnalysis
from resume_review.schemas.session import SessionView, score_verdict
from resume_review.services.analysis_gateway import AnalysisGateway
from resume_review.services.history_log import HistoryLog
from resume_review.services.input_normalizer import (
    FileInput,
    InputNormalizer,
    NormalizedInput,
    RawInput,
    TextInput,
)

logger = logging.getLogger(__name__)

TEXT_ANALYSIS_FAILED_MESSAGE = "Failed to analyze resume. Please try again."
IMAGE_ANALYSIS_FAILED_MESSAGE = (
    "Failed to analyze the resume image. Ensure the image is clear and contains readable text."
)
ANALYSIS_TIMEOUT_MESSAGE = "The analysis took too long to complete. Please try again."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred while processing your resume."


class PipelineState(str, Enum):
    IDLE = "idle"
    NORMALIZING = "normalizing"
    ANALYZING = "analyzing"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class PipelineOutcome:
    analysis: ResumeAnalysis | None = None
    error: Exception | None = None
    message: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.analysis is not None


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def analysis_failure_message(exc: AnalysisError, payload: NormalizedPayload) -> str:
    if isinstance(exc, AnalysisTimeout):
        return ANALYSIS_TIMEOUT_MESSAGE
    if isinstance(payload, InlineMedia):
        return IMAGE_ANALYSIS_FAILED_MESSAGE
    return TEXT_ANALYSIS_FAILED_MESSAGE


class AnalysisOrchestrator:
    """Owns the session: one pipeline run at a time, its result, its error and the history.

    A run goes IDLE -> NORMALIZING -> ANALYZING -> SUCCEEDED/FAILED -> IDLE.
    Normalization failures skip ANALYZING. Submissions made while a run is
    active raise ``AnalysisInProgress`` and leave the session untouched.
    """

    def __init__(
        self,
        gateway: AnalysisGateway,
        history: HistoryLog,
        normalizer: InputNormalizer | None = None,
    ):
        self._gateway = gateway
        self._normalizer = normalizer or InputNormalizer()
        self.history = history
        self.state = PipelineState.IDLE
        self.analysis: ResumeAnalysis | None = None
        self.error: str | None = None
        self.warnings: list[str] = []
        self._last_timestamp: datetime | None = None

    @property
    def busy(self) -> bool:
        return self.state is not PipelineState.IDLE

    def _begin(self) -> None:
        # no await between the check and the transition
        if self.busy:
            raise AnalysisInProgress()
        self.state = PipelineState.NORMALIZING

    async def submit_text(self, text: str) -> PipelineOutcome:
        return await self.submit(TextInput(text))

    async def submit_file(self, artifact: FileInput) -> PipelineOutcome:
        return await self.submit(artifact)

    async def submit(self, artifact: RawInput) -> PipelineOutcome:
        self._begin()
        self.error = None
        self.warnings = []
        try:
            return await self._run(artifact)
        finally:
            self.state = PipelineState.IDLE

    async def extract(self, artifact: RawInput) -> NormalizedInput:
        """Normalize without analyzing; the session and history are not touched."""
        self._begin()
        try:
            return await self._normalizer.normalize(artifact)
        finally:
            self.state = PipelineState.IDLE

    async def _run(self, artifact: RawInput) -> PipelineOutcome:
        try:
            normalized = await self._normalizer.normalize(artifact)
        except ResumeReviewError as exc:
            logger.info("normalization_failed code=%s", exc.code)
            return self._fail(exc, str(exc))
        except Exception as exc:
            logger.exception("normalization_crashed")
            return self._fail(exc, UNEXPECTED_ERROR_MESSAGE)

        self.warnings = list(normalized.warnings)
        self.state = PipelineState.ANALYZING
        try:
            content = await self._gateway.submit(normalized.payload)
        except AnalysisError as exc:
            logger.info("analysis_failed code=%s source=%s", exc.code, normalized.source)
            return self._fail(exc, analysis_failure_message(exc, normalized.payload))
        except Exception as exc:
            logger.exception("analysis_crashed source=%s", normalized.source)
            return self._fail(exc, UNEXPECTED_ERROR_MESSAGE)

        try:
            return self._succeed(content, normalized)
        except HistoryWriteError as exc:
            return self._fail(exc, str(exc))

    def _stamp(self, content: AnalysisContent) -> ResumeAnalysis:
        timestamp = _utc_now()
        if self._last_timestamp is not None and timestamp < self._last_timestamp:
            timestamp = self._last_timestamp
        self._last_timestamp = timestamp
        return ResumeAnalysis(
            **content.model_dump(by_alias=False),
            id=uuid.uuid4().hex,
            timestamp=timestamp,
        )

    def _succeed(self, content: AnalysisContent, normalized: NormalizedInput) -> PipelineOutcome:
        analysis = self._stamp(content)
        self.history.append(HistoryEntry.from_analysis(analysis))
        self.state = PipelineState.SUCCEEDED
        self.analysis = analysis
        logger.info(
            "analysis_succeeded id=%s source=%s overall=%s",
            analysis.id,
            normalized.source,
            analysis.score.overall,
        )
        return PipelineOutcome(analysis=analysis, warnings=list(self.warnings))

    def _fail(self, exc: Exception, message: str) -> PipelineOutcome:
        self.state = PipelineState.FAILED
        self.error = message
        return PipelineOutcome(error=exc, message=message, warnings=list(self.warnings))

    def view(self) -> SessionView:
        if self.busy:
            status = "analyzing"
        elif self.error:
            status = "error"
        elif self.analysis is not None:
            status = "result"
        else:
            status = "pending"
        return SessionView(
            status=status,
            analysis=self.analysis,
            verdict=score_verdict(self.analysis.score.overall) if self.analysis else None,
            error=self.error,
            warnings=list(self.warnings),
            history=self.history.all(),
        )
