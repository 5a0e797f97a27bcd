"""
BlogApp Client Core — Custom Exception Hierarchy
=================================================

What:  Defines the exceptions data sources raise.
How:   Each exception class carries a message and optional context dict.
       Repositories catch these and turn them into `Failure` values, so no
       exception defined here ever reaches a bloc.
Who:   Raised by data sources; caught by repositories.

Exception Hierarchy:
    BlogAppError (base)
    ├── ServerError   → any backend (Supabase) call failed
    └── CacheError    → the local cache box could not be read or written
"""

from typing import Any, Dict, Optional


class BlogAppError(Exception):
    """
    Base exception for all BlogApp errors.

    Attributes:
        message:  Human-readable description, surfaced verbatim to the user
        context:  Additional debug info (logged, never shown)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ServerError(BlogAppError):
    """
    Raised when a remote operation against the backend fails.

    What:    Network, auth, quota or query errors, flattened to one kind.
    When:    Any exception escapes a Supabase call inside a remote data source.
    How:     The original exception's string form becomes `message`; its type
             name is kept in `context["error_type"]`.

    The message may be empty (some client errors stringify to ""). The
    repository substitutes a fixed fallback message in that case.
    """

    def __init__(
        self,
        message: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)

    @classmethod
    def from_exception(cls, error: Exception, operation: str) -> "ServerError":
        """Flattens any exception raised by the backend client."""
        if isinstance(error, ServerError):
            return error
        return cls(
            message=str(error),
            context={"operation": operation, "error_type": type(error).__name__},
        )


class CacheError(BlogAppError):
    """
    Raised when the local cache box fails.

    What:    Could not read, write or decode the cached snapshot.
    When:    Disk full, permission denied, corrupted JSON, schema mismatch.

    Recovery:
        The blog repository turns this into a Failure on the offline read
        path. After a successful remote fetch a failed cache write is logged
        and the fetched data is still returned.
    """

    def __init__(
        self,
        message: str = "Local cache operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
