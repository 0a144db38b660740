from __future__ import annotations

from functools import lru_cache

from backend.app.config import get_settings
from backend.app.services.completion_gateway import CompletionGateway


@lru_cache(maxsize=1)
def get_gateway() -> CompletionGateway:
    """
    FastAPI dependency: the process-wide gateway (and its OpenAI client).
    Built once, eagerly from the startup hook, never per request.
    """
    return CompletionGateway(get_settings())
