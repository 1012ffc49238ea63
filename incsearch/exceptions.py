"""Custom exception hierarchy for incsearch.

This module provides a structured exception hierarchy for categorizing errors
across the incsearch codebase. Service errors are raised by search services
and never cross the controller boundary: the controller translates them into
one of the controller-level kinds before anything reaches the view.

Exception Hierarchy:
    IncsearchError (base)
    ├── ServiceError - raised by a SearchService
    │   ├── MissingCredentialError - no usable auth token
    │   ├── ApiConnectionError (retryable)
    │   ├── ApiRateLimitError (retryable)
    │   └── ServiceResponseError - unexpected or malformed response
    ├── TransientFetchFailure - controller-level recoverable fetch failure
    ├── IndexOutOfRangeError - select_record() outside the known items
    └── ConfigurationError - Settings/configuration issues

Usage:
    from incsearch.exceptions import MissingCredentialError, ServiceError

    try:
        page = await service.search(query, after=cursor)
    except MissingCredentialError:
        ...
"""

from typing import Any, Optional


class IncsearchError(Exception):
    """Base exception for all incsearch errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., query, status)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Service Errors
# =============================================================================


class ServiceError(IncsearchError):
    """Base exception for search service failures."""

    pass


class MissingCredentialError(ServiceError):
    """The service has no usable credential; the user must log in."""

    def __init__(
        self,
        message: str = "Missing credential",
        *,
        service: Optional[str] = None,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        super().__init__(message, retryable=False, **context)


class ApiConnectionError(ServiceError):
    """Failed to reach the remote service - typically retryable."""

    def __init__(
        self,
        message: str = "API connection failed",
        *,
        service: Optional[str] = None,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        super().__init__(message, retryable=True, **context)


class ApiRateLimitError(ServiceError):
    """Hit rate limit on the remote service - retryable with backoff."""

    def __init__(
        self,
        message: str = "API rate limit exceeded",
        *,
        service: Optional[str] = None,
        retry_after: Optional[float] = None,
        **context: Any,
    ) -> None:
        if service:
            context["service"] = service
        if retry_after is not None:
            context["retry_after"] = retry_after
        super().__init__(message, retryable=True, **context)


class ServiceResponseError(ServiceError):
    """The service answered, but not with something we can page through."""

    def __init__(
        self,
        message: str = "Unexpected service response",
        *,
        exit_code: Optional[int] = None,
        stderr: Optional[str] = None,
        **context: Any,
    ) -> None:
        if exit_code is not None:
            context["exit_code"] = exit_code
        if stderr:
            context["stderr"] = stderr[:200] + "..." if len(stderr) > 200 else stderr
        super().__init__(message, **context)


# =============================================================================
# Controller Errors
# =============================================================================


class TransientFetchFailure(IncsearchError):
    """A page fetch failed but left the search state untouched.

    The next trigger (new input or reaching the bottom) tries again.
    """

    def __init__(
        self,
        message: str = "Fetch failed",
        *,
        query: Optional[str] = None,
        **context: Any,
    ) -> None:
        if query is not None:
            context["query"] = query
        super().__init__(message, retryable=True, **context)

    @classmethod
    def from_error(cls, error: BaseException, query: Optional[str] = None) -> "TransientFetchFailure":
        """Wrap any service-originating error."""
        message = error.message if isinstance(error, IncsearchError) else str(error)
        failure = cls(message or type(error).__name__, query=query)
        failure.__cause__ = error
        return failure


class IndexOutOfRangeError(IncsearchError, IndexError):
    """A record index outside the currently known items was requested."""

    def __init__(
        self,
        message: str = "Record index out of range",
        *,
        index: Optional[int] = None,
        count: Optional[int] = None,
        **context: Any,
    ) -> None:
        if index is not None:
            context["index"] = index
        if count is not None:
            context["count"] = count
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(IncsearchError):
    """Configuration or settings error."""

    def __init__(
        self,
        message: str = "Configuration error",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
