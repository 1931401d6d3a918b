from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status

from resume_review.ai.types import InlineMedia
from resume_review.api.deps import get_orchestrator
from resume_review.core.errors import ExtractionError, ResumeReviewError
from resume_review.core.rate_limit import submission_limit
from resume_review.schemas.analysis import HistoryEntry
from resume_review.schemas.session import AnalyzeTextRequest, ExtractResponse, SessionView
from resume_review.services.input_normalizer import MAX_FILE_SIZE_BYTES, FileInput
from resume_review.services.orchestrator import AnalysisOrchestrator, PipelineOutcome

router = APIRouter()

READ_CHUNK_BYTES = 1024 * 64


async def read_upload(file: UploadFile) -> FileInput:
    """Read an upload in chunks; bytes past the size limit are counted, not kept."""
    filename = file.filename or ""
    chunks: list[bytes] = []
    total = 0
    try:
        while True:
            chunk = await file.read(READ_CHUNK_BYTES)
            if not chunk:
                break
            total += len(chunk)
            if total <= MAX_FILE_SIZE_BYTES:
                chunks.append(chunk)
    except OSError as exc:
        raise ExtractionError(
            "Failed to read the uploaded file. Please try again or paste the text instead.",
            code="file_read_failed",
        ) from exc
    finally:
        await file.close()

    return FileInput(
        content=b"".join(chunks),
        mime_type=file.content_type or "",
        size_bytes=total,
        file_name=filename,
    )


def _raise_for_error(exc: Exception, message: str | None = None) -> None:
    if isinstance(exc, ResumeReviewError):
        raise HTTPException(status_code=exc.status_code, detail=message or str(exc)) from exc
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=message or "An unexpected error occurred while processing your resume.",
    ) from exc


def _session_or_raise(orchestrator: AnalysisOrchestrator, outcome: PipelineOutcome) -> SessionView:
    if outcome.error is not None:
        _raise_for_error(outcome.error, outcome.message)
    return orchestrator.view()


@router.post("/analyze/text", response_model=SessionView)
@submission_limit()
async def analyze_text(
    request: Request,
    payload: AnalyzeTextRequest,
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    _ = request
    try:
        outcome = await orchestrator.submit_text(payload.text)
    except ResumeReviewError as exc:
        _raise_for_error(exc)
    return _session_or_raise(orchestrator, outcome)


@router.post("/analyze/file", response_model=SessionView)
@submission_limit()
async def analyze_file(
    request: Request,
    file: UploadFile = File(...),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    _ = request
    try:
        artifact = await read_upload(file)
        outcome = await orchestrator.submit_file(artifact)
    except ResumeReviewError as exc:
        _raise_for_error(exc)
    return _session_or_raise(orchestrator, outcome)


@router.post("/extract", response_model=ExtractResponse)
@submission_limit()
async def extract_file(
    request: Request,
    file: UploadFile = File(...),
    orchestrator: AnalysisOrchestrator = Depends(get_orchestrator),
):
    _ = request
    try:
        artifact = await read_upload(file)
        normalized = await orchestrator.extract(artifact)
    except ResumeReviewError as exc:
        _raise_for_error(exc)

    if isinstance(normalized.payload, InlineMedia):
        return ExtractResponse(
            source=normalized.source,
            mime_type=normalized.payload.mime_type,
            warnings=normalized.warnings,
        )
    return ExtractResponse(
        source=normalized.source,
        text=normalized.payload.text,
        warnings=normalized.warnings,
    )


@router.get("/session", response_model=SessionView)
async def get_session(orchestrator: AnalysisOrchestrator = Depends(get_orchestrator)):
    return orchestrator.view()


@router.get("/history", response_model=list[HistoryEntry])
async def get_history(orchestrator: AnalysisOrchestrator = Depends(get_orchestrator)):
    return orchestrator.history.all()
