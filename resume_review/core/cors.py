from __future__ import annotations

from typing import Any

from resume_review.core.config import settings


def cors_options() -> dict[str, Any]:
    """Keyword arguments for ``CORSMiddleware``; the session surface only takes GET and POST."""
    regex = (settings.cors_allow_origin_regex or "").strip()
    return {
        "allow_origins": list(settings.cors_allowed_origins),
        "allow_origin_regex": regex or None,
        "allow_credentials": False,
        "allow_methods": ["GET", "POST"],
        "allow_headers": ["Content-Type"],
    }
