from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from backend.app.api.deps import get_gateway
from backend.app.services.completion_gateway import CompletionGateway

router = APIRouter()


@router.post("/openai")
async def openai_completion(request: Request, gateway: CompletionGateway = Depends(get_gateway)) -> Dict[str, Any]:
    # Raw body so malformed JSON maps to a 400 {"error": ...} instead of a 422.
    body = await request.body()
    # Blocking client + backoff sleeps run off the event loop.
    message = await run_in_threadpool(gateway.handle, body)
    return {"response": message}
