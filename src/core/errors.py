"""Error taxonomy shared by the transport layer and the session controller.

Transport failures are raised as ``ApiError`` subclasses; the session
controller converts them to ``SessionError`` values so nothing raw reaches
the presentation layer.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorKind(str, Enum):
    NO_QUERY = "no_query"
    NETWORK = "network"
    AUTH = "auth"
    VALIDATION = "validation"
    STALE_RESULT = "stale_result"
    SERVER = "server"


class ApiError(Exception):
    """Base class for every failure surfaced by the transport client."""

    kind: ErrorKind = ErrorKind.SERVER
    retryable: bool = False

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class OfflineError(ApiError):
    """Connectivity failure or timeout."""

    kind = ErrorKind.NETWORK
    retryable = True


class AuthExpiredError(ApiError):
    """The backend rejected the credentials (401)."""

    kind = ErrorKind.AUTH


class FieldValidationError(ApiError):
    """A 4xx rejection, with per-field messages when the body had them."""

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        fields: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code)
        self.fields = fields or {}


class ServerError(ApiError):
    """5xx response or a body that could not be understood."""

    kind = ErrorKind.SERVER
    retryable = True


def _join(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def error_from_response(status_code: int, body: Any) -> ApiError:
    """Map an HTTP error status and its decoded body to an ``ApiError``.

    Bodies follow one of three conventions: a plain string, a dict with a
    ``detail`` key, or a dict keyed by field name. The message falls back
    to the first field entry when neither of the first two is present.
    """
    if status_code == 401:
        detail = body.get("detail") if isinstance(body, dict) else None
        return AuthExpiredError(
            str(detail or "Session expired. Please log in again."),
            status_code=status_code,
        )
    if status_code >= 500:
        return ServerError("Server error. Please try again later.", status_code=status_code)

    fields: dict[str, str] = {}
    message = ""
    if isinstance(body, str) and body.strip():
        message = body.strip()
    elif isinstance(body, dict):
        fields = {str(k): _join(v) for k, v in body.items() if k != "detail"}
        if body.get("detail"):
            message = _join(body["detail"])
        elif fields:
            key, value = next(iter(fields.items()))
            message = f"{key}: {value}"
    return FieldValidationError(
        message or f"Request rejected ({status_code})",
        status_code=status_code,
        fields=fields,
    )


class SessionError(BaseModel):
    """A failure as the presentation layer sees it."""

    model_config = ConfigDict(frozen=True)

    kind: ErrorKind
    message: str
    retryable: bool = False
    fields: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: ApiError) -> "SessionError":
        return cls(
            kind=exc.kind,
            message=exc.message,
            retryable=exc.retryable,
            fields=getattr(exc, "fields", {}),
        )
