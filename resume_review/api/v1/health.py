from fastapi import APIRouter, Depends

from resume_review.api.deps import get_orchestrator
from resume_review.services.orchestrator import AnalysisOrchestrator

router = APIRouter()


@router.get("/health", summary="Health Check", description="Report whether the analysis session is ready.")
async def health_check(orchestrator: AnalysisOrchestrator = Depends(get_orchestrator)):
    return {
        "status": "healthy",
        "state": orchestrator.state.value,
        "history_entries": len(orchestrator.history),
    }
