"""Exception types raised by wikiclient."""

from __future__ import annotations

from typing import Any, Mapping, Optional


class WikiClientError(Exception):
    """Base exception class for wikiclient."""


class InvalidResponseError(WikiClientError):
    """The server response body could not be decoded as a MediaWiki JSON envelope."""

    def __init__(self, message: str, body: Optional[str] = None) -> None:
        super().__init__(message)
        self.body = body


class OperationFailedError(WikiClientError):
    """The MediaWiki API reported an ``error`` object instead of data."""

    def __init__(self, code: Optional[str], info: str, details: Optional[Mapping[str, Any]] = None) -> None:
        super().__init__(f"{code}: {info}" if code else info)
        self.code = code
        self.info = info
        self.details = dict(details or {})


class UnauthorizedOperationError(OperationFailedError):
    """Permission denied, or login required."""


class BadTokenError(OperationFailedError):
    """The CSRF (or other) token is missing or stale."""


class InvalidActionError(OperationFailedError):
    """The requested API action is not supported by the server."""


class AccountAssertionFailureError(OperationFailedError):
    """``assert=user`` / ``assert=bot`` failed."""


class OperationConflictError(OperationFailedError):
    """Edit conflict or a similar state conflict."""


class MaxLagError(OperationFailedError):
    """Replication lag stayed above ``maxlag`` for every retry."""

    def __init__(self, code: Optional[str], info: str, details: Optional[Mapping[str, Any]] = None,
                 retry_after: Optional[float] = None) -> None:
        super().__init__(code, info, details)
        self.retry_after = retry_after


class UnexpectedDataError(WikiClientError):
    """The server returned data that violates the expected protocol."""


class ContinuationLoopError(UnexpectedDataError):
    """The server kept returning the same continuation marker."""

    def __init__(self, marker: Optional[Mapping[str, Any]] = None,
                 message: str = "Unexpected continuation loop: the server returned the same continuation parameters twice.") -> None:
        super().__init__(message)
        self.marker = dict(marker) if marker else None


class EnumerationCancelled(Exception):
    """The enumeration was cancelled by the caller. Not a :class:`WikiClientError`."""


_UNAUTHORIZED_CODES = {"permissiondenied", "readapidenied", "mustbeloggedin", "permissions"}
_ASSERTION_CODES = {"assertuserfailed", "assertbotfailed"}


def error_from_response(error: Mapping[str, Any]) -> OperationFailedError:
    """Build the exception matching a MediaWiki ``error`` node."""

    code = error.get("code")
    info = str(error.get("info") or error.get("*") or "").strip()
    if code in _UNAUTHORIZED_CODES:
        if code == "permissions" and error.get("permissions"):
            info += f" Desired permissions: {error['permissions']}"
        return UnauthorizedOperationError(code, info, error)
    if code == "badtoken":
        return BadTokenError(code, info, error)
    if code == "unknown_action":
        return InvalidActionError(code, info, error)
    if code in _ASSERTION_CODES:
        return AccountAssertionFailureError(code, info, error)
    if code == "maxlag":
        return MaxLagError(code, info, error, retry_after=error.get("lag"))
    if code == "prev_revision" or (code and code.endswith("conflict")):
        return OperationConflictError(code, info, error)
    return OperationFailedError(code, info, error)
