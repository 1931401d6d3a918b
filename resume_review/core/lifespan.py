from contextlib import asynccontextmanager
import logging

from resume_review.core.config import settings
from resume_review.core.kv_store import SQLiteKeyValueStore
from resume_review.services.analysis_gateway import AnalysisGateway
from resume_review.services.history_log import HistoryLog
from resume_review.services.orchestrator import AnalysisOrchestrator

logger = logging.getLogger(__name__)


def build_orchestrator(store: SQLiteKeyValueStore) -> AnalysisOrchestrator:
    history = HistoryLog(store)
    history.load()
    logger.info("history_loaded entries=%s path=%s", len(history), settings.history_db_path)
    return AnalysisOrchestrator(
        gateway=AnalysisGateway(timeout_s=settings.analysis_timeout_s),
        history=history,
    )


@asynccontextmanager
async def lifespan(app):
    store = SQLiteKeyValueStore(settings.history_db_path)
    app.state.orchestrator = build_orchestrator(store)
    yield
    store.close()
