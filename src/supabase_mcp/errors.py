"""
Supabase MCP Exceptions.

Every failure a tool can report derives from SupabaseMCPError:
- ConfigurationError: missing or malformed environment configuration
- ValidationError: tool arguments rejected before any network activity
- TransportError: non-success HTTP status, malformed body or network failure

All exceptions include:
- Descriptive messages with context
- Optional original exception chaining
- Structured error codes for programmatic handling
"""

from __future__ import annotations

from typing import Any

MAX_ERROR_BODY_CHARS = 500


class SupabaseMCPError(Exception):
    """
    Base exception for all Supabase MCP errors.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for categorization
        context: Additional context dict for debugging
        original_error: The underlying exception if this wraps another error
    """

    default_code = "SUPABASE_MCP_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        original_error: Exception | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_code
        self.context = context or {}
        self.original_error = original_error

        full_message = message
        if context:
            context_str = ", ".join(f"{k}={v}" for k, v in context.items())
            full_message = f"{message} [{context_str}]"

        super().__init__(full_message)

        if original_error:
            self.__cause__ = original_error


class ConfigurationError(SupabaseMCPError):
    """Raised when the Supabase URL or key cannot be resolved."""

    default_code = "CONFIGURATION_ERROR"


class ValidationError(SupabaseMCPError):
    """Raised when tool arguments fail their schema or contain malformed JSON."""

    default_code = "VALIDATION_ERROR"

    def __init__(self, message: str, tool: str | None = None, **kwargs: Any):
        context = kwargs.pop("context", {})
        if tool:
            context["tool"] = tool
        super().__init__(message, context=context, **kwargs)


class TransportError(SupabaseMCPError):
    """Raised when the remote API call fails or returns an unusable body."""

    default_code = "TRANSPORT_ERROR"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str = "",
        **kwargs: Any,
    ):
        self.status_code = status_code
        self.body = body
        super().__init__(message, **kwargs)

    @classmethod
    def from_status(cls, status_code: int, body: str) -> TransportError:
        """Build the error for a non-success response, truncating the body."""
        truncated = body[:MAX_ERROR_BODY_CHARS]
        return cls(
            f"Supabase {status_code}: {truncated}",
            status_code=status_code,
            body=truncated,
        )
