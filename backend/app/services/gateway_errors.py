from __future__ import annotations

from typing import Optional, Tuple, Type


# -------------------------------------------------
# Error taxonomy
# -------------------------------------------------
class GatewayError(Exception):
    """Base error for the completion gateway. Rendered as {"error": message}."""

    code = "gateway_error"
    status_code = 500
    retryable = False
    default_message = "Failed to process request. Please try again later."

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ConfigError(GatewayError):
    code = "config_error"
    status_code = 500
    default_message = "OpenAI API key is not configured"


class MalformedRequest(GatewayError):
    code = "malformed_request"
    status_code = 400
    default_message = "Invalid JSON in request body"


class MissingMessages(GatewayError):
    code = "missing_messages"
    status_code = 400
    default_message = "Messages array is required"


class InvalidMessageShape(GatewayError):
    code = "invalid_message_shape"
    status_code = 400
    default_message = "Invalid message format"


class AuthError(GatewayError):
    code = "auth_error"
    status_code = 401
    default_message = "Invalid OpenAI API key configuration"


class ModelUnavailable(GatewayError):
    code = "model_unavailable"
    status_code = 503
    default_message = "Model not found or not available"


class EmptyCompletion(GatewayError):
    code = "empty_completion"
    status_code = 503
    default_message = "Invalid response from OpenAI API"


class RateLimited(GatewayError):
    code = "rate_limited"
    status_code = 429
    retryable = True
    default_message = "Rate limit exceeded. Please try again later."


class TransientServiceError(GatewayError):
    code = "transient_service_error"
    status_code = 503
    retryable = True
    default_message = "OpenAI service is temporarily unavailable"


class UnclassifiedError(GatewayError):
    code = "unclassified"
    status_code = 500


# -------------------------------------------------
# Classification
# -------------------------------------------------
# Everything that inspects provider errors lives below, so the substring
# heuristics can be swapped for structured codes in one place.
RETRYABLE_STATUS = {500, 502, 503}
TRANSIENT_MARKERS = ("timeout", "network")
RATE_LIMIT_MARKER = "rate limits"
AUTH_MARKER = "api key"


def _transport_error_types() -> Tuple[Type[BaseException], ...]:
    import openai

    return (openai.APITimeoutError, openai.APIConnectionError, TimeoutError, ConnectionError)


def error_status(exc: BaseException) -> Optional[int]:
    """Best-effort HTTP status of a provider error."""
    for attr in ("status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    response = getattr(exc, "response", None)
    value = getattr(response, "status_code", None)
    if isinstance(value, int):
        return value
    return None


def error_text(exc: BaseException) -> str:
    return str(getattr(exc, "message", None) or exc or "")


def classify_error(exc: BaseException) -> Type[GatewayError]:
    """
    Map one failed attempt to an error kind.

    Kinds with retryable=True are retried by the gateway; everything else
    stops the loop immediately.
    """
    status = error_status(exc)
    text = error_text(exc).lower()

    if status == 404:
        return ModelUnavailable
    if status == 401 or AUTH_MARKER in text:
        return AuthError
    if status == 429 or RATE_LIMIT_MARKER in text:
        return RateLimited
    if status in RETRYABLE_STATUS:
        return TransientServiceError
    if isinstance(exc, _transport_error_types()):
        return TransientServiceError
    if any(marker in text for marker in TRANSIENT_MARKERS):
        return TransientServiceError
    return UnclassifiedError


def map_unclassified(exc: BaseException) -> GatewayError:
    """
    Final mapping for errors that escaped the retry loop (exhausted or
    unclassified). Scans the message, falls back to a generic 500.
    """
    if isinstance(exc, GatewayError):
        return exc

    text = error_text(exc).lower()
    if AUTH_MARKER in text:
        return UnclassifiedError("Invalid OpenAI API key", status_code=401)
    if "rate limit" in text:
        return UnclassifiedError("Rate limit exceeded. Please try again later.", status_code=429)
    if "invalid message format" in text:
        return UnclassifiedError("Invalid message format in request", status_code=400)
    if "model" in text:
        return UnclassifiedError("Model error. Please try again.", status_code=503)
    return UnclassifiedError()
