from __future__ import annotations

import json
import time
from typing import Any, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from backend.app.config import Settings
from backend.app.logging_config import get_logger
from backend.app.services.gateway_errors import (
    ConfigError,
    EmptyCompletion,
    GatewayError,
    InvalidMessageShape,
    MalformedRequest,
    MissingMessages,
    UnclassifiedError,
    classify_error,
    map_unclassified,
)

logger = get_logger("gateway")


# -------------------------------------------------
# Request model
# -------------------------------------------------
class ChatMessage(BaseModel):
    model_config = ConfigDict(strict=True, extra="ignore")

    role: Literal["system", "user", "assistant"]
    content: str

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be empty")
        return v


def validate_messages(payload: Any) -> List[ChatMessage]:
    """Validate a decoded request body. Raises before any network call."""
    messages = payload.get("messages") if isinstance(payload, dict) else None
    if not messages or not isinstance(messages, list):
        raise MissingMessages()

    validated: List[ChatMessage] = []
    for item in messages:
        if not isinstance(item, dict):
            raise InvalidMessageShape()
        try:
            validated.append(ChatMessage.model_validate(item))
        except ValidationError:
            raise InvalidMessageShape()
    return validated


def _build_client(settings: Settings) -> Any:
    from openai import OpenAI

    # SDK-level retries are disabled; the gateway owns the retry loop.
    return OpenAI(
        api_key=settings.openai_api_key,
        timeout=settings.timeout_seconds,
        max_retries=0,
    )


# -------------------------------------------------
# Gateway
# -------------------------------------------------
class CompletionGateway:
    """
    Stateless proxy to the hosted chat-completion API.

    One instance (and one OpenAI client) is shared by the whole process; the
    SDK client is safe to use from concurrent requests. Each call is
    independent: the caller resends the full transcript every time.
    """

    def __init__(
        self,
        settings: Settings,
        client: Any = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.settings = settings
        self._sleep = sleep
        if client is None and settings.has_openai_key:
            client = _build_client(settings)
        self.client = client

    def backoff_delay(self, attempts_made: int) -> float:
        """
        Seconds to wait after `attempts_made` failed attempts.

        The wait is proportional to the attempts still remaining, so it
        shrinks as the budget is used up (4s then 2s with 3 attempts).
        """
        remaining = self.settings.max_attempts - attempts_made
        return max(0, remaining) * self.settings.backoff_seconds

    def handle(self, body: bytes) -> Dict[str, Any]:
        """
        Run one inbound request end to end.

        Returns the chosen completion message as a dict. Only GatewayError
        subclasses escape.
        """
        if not self.settings.has_openai_key or self.client is None:
            raise ConfigError()

        try:
            payload = json.loads(body or b"")
        except (ValueError, UnicodeDecodeError, RecursionError):
            # RecursionError: pathologically nested JSON
            raise MalformedRequest()

        messages = validate_messages(payload)
        try:
            return self.complete(messages)
        except GatewayError:
            raise
        except Exception as e:
            logger.exception("Unexpected gateway failure")
            raise map_unclassified(e) from e

    def complete(self, messages: List[ChatMessage]) -> Dict[str, Any]:
        """
        Call the provider with bounded, sequential retries.

        Args:
            messages: Validated transcript, forwarded in order.

        Returns:
            The completion message ({"role": ..., "content": ..., ...}).

        Raises:
            GatewayError: On non-retryable failures, an empty completion, or
                once the attempt budget is exhausted.
        """
        if self.client is None:
            raise ConfigError()
        if not messages:
            raise MissingMessages()

        outbound = [{"role": m.role, "content": m.content} for m in messages]
        max_attempts = self.settings.max_attempts
        last_error: Optional[BaseException] = None

        for attempt in range(1, max_attempts + 1):
            try:
                completion = self.client.chat.completions.create(
                    model=self.settings.openai_model,
                    messages=outbound,
                    temperature=self.settings.temperature,
                    max_tokens=self.settings.max_tokens,
                )
            except Exception as e:
                last_error = e
                logger.error("OpenAI API error (attempt %d/%d): %r", attempt, max_attempts, e)

                kind = classify_error(e)
                if not kind.retryable:
                    if kind is UnclassifiedError:
                        raise map_unclassified(e) from e
                    raise kind() from e

                if attempt < max_attempts:
                    delay = self.backoff_delay(attempt)
                    logger.warning("Retrying after %s in %.1fs", kind.code, delay)
                    self._sleep(delay)
                continue

            message = _chosen_message(completion)
            if message is None:
                logger.error("Invalid response structure from OpenAI")
                raise EmptyCompletion()

            logger.info("Completion received on attempt %d/%d", attempt, max_attempts)
            return message

        logger.error("OpenAI call failed after %d attempts", max_attempts)
        if last_error is None:
            raise UnclassifiedError()
        raise map_unclassified(last_error) from last_error


def _chosen_message(completion: Any) -> Optional[Dict[str, Any]]:
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    if message is None:
        return None

    if hasattr(message, "model_dump"):
        data = message.model_dump(exclude_none=True)
    elif isinstance(message, dict):
        data = {k: v for k, v in message.items() if v is not None}
    else:
        data = {"role": getattr(message, "role", "assistant"), "content": getattr(message, "content", None)}

    content = data.get("content")
    if not isinstance(content, str) or not content.strip():
        return None
    data.setdefault("role", "assistant")
    return data
