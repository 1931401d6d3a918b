from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Callable

from pydantic import ValidationError

from resume_review.ai.factory import get_ai_client
from resume_review.ai.types import AIClient, InlineMedia, NormalizedPayload
from resume_review.core.errors import AnalysisError, AnalysisTimeout, MalformedResponse
from resume_review.schemas.analysis import AnalysisContent

logger = logging.getLogger(__name__)


def parse_analysis(raw: str) -> AnalysisContent:
    if not raw or not raw.strip():
        raise MalformedResponse("The analysis service returned an empty response.")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedResponse("The analysis service returned invalid JSON.") from exc
    if not isinstance(data, dict):
        raise MalformedResponse("The analysis service returned an unexpected payload.")
    try:
        return AnalysisContent.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponse(
            f"The analysis service response is missing required fields ({exc.error_count()} errors)."
        ) from exc


class AnalysisGateway:
    """Wraps exactly one provider round-trip per ``submit`` call."""

    def __init__(
        self,
        client_factory: Callable[[], AIClient] = get_ai_client,
        timeout_s: float | None = None,
    ):
        self._client_factory = client_factory
        self._client: AIClient | None = None
        self._timeout_s = timeout_s

    def _get_client(self) -> AIClient:
        if self._client is None:
            try:
                self._client = self._client_factory()
            except (RuntimeError, ValueError) as exc:
                raise AnalysisError(f"AI analysis is not configured: {exc}", code="llm_disabled") from exc
        return self._client

    @staticmethod
    def _call_failed(client: AIClient, exc: Exception) -> AnalysisError:
        logger.warning("analysis_call_failed provider=%s model=%s: %s", client.provider, client.model, exc)
        return AnalysisError(f"The analysis service request failed: {exc}")

    async def submit(self, payload: NormalizedPayload) -> AnalysisContent:
        client = self._get_client()
        modality = "image" if isinstance(payload, InlineMedia) else "text"
        started = time.perf_counter()
        status = "error"
        try:
            call = client.analyze(payload)
            if self._timeout_s is not None:
                raw = await asyncio.wait_for(call, timeout=self._timeout_s)
            else:
                raw = await call
            result = parse_analysis(raw)
            status = "success"
            return result
        except asyncio.TimeoutError as exc:
            # the builtin TimeoutError on 3.11+, so providers can raise it too
            if self._timeout_s is None:
                raise self._call_failed(client, exc) from exc
            status = "timeout"
            raise AnalysisTimeout(self._timeout_s) from exc
        except MalformedResponse:
            status = "invalid_schema"
            raise
        except Exception as exc:  # noqa: BLE001 - provider SDKs raise their own hierarchies
            raise self._call_failed(client, exc) from exc
        finally:
            logger.info(
                "analysis_run provider=%s model=%s modality=%s status=%s latency_ms=%s",
                client.provider,
                client.model,
                modality,
                status,
                int((time.perf_counter() - started) * 1000),
            )
