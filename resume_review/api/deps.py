from fastapi import HTTPException, Request, status

from resume_review.services.orchestrator import AnalysisOrchestrator


def get_orchestrator(request: Request) -> AnalysisOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="The analysis session is not ready yet.",
        )
    return orchestrator
