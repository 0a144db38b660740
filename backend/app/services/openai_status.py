from __future__ import annotations

from typing import Any, Dict, Optional

from backend.app.config import Settings, get_settings


def openai_status(settings: Optional[Settings] = None) -> Dict[str, Any]:
    s = settings or get_settings()
    return {
        "ok": True,
        "openai_api_key_present": s.has_openai_key,
        "model": s.openai_model,
        "max_attempts": s.max_attempts,
        "timeout_seconds": s.timeout_seconds,
        "note": "Key presence indicates OpenAI can be called. Without it /api/openai answers 500 before any outbound call."
    }
