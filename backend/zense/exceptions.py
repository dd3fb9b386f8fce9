"""
Zense Backend - Custom Exception Hierarchy
===========================================

What:  Application-specific exceptions, one per error class of the API.
How:   Each exception carries a user-safe message and an optional context
       dict. Global handlers (registered in main.py) translate them into
       structured JSON responses with the matching HTTP status.
Who:   Raised by services, the security helpers and middleware.

Exception Hierarchy:
    ZenseError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── ForbiddenError           → 403 Forbidden (caller is not the owner)
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict (duplicate email)
    ├── RateLimitExceededError   → 429 Too Many Requests
    ├── LLMServiceError          → 503 Service Unavailable
    └── CircuitBreakerOpenError  → 503 Service Unavailable
"""

from typing import Any, Dict, Optional, Union


class ZenseError(Exception):
    """
    Base exception for all Zense application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, only selectively returned)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ZenseError):
    """Raised when client input fails a business validation rule."""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(ZenseError):
    """
    Raised for bad credentials and for missing, malformed or expired tokens.

    Every cause produces the same 401 so clients cannot tell an unknown
    email from a wrong password.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(ZenseError):
    """
    Raised when an authenticated caller mutates a resource it does not own.

    HTTP:    403 Forbidden
    """

    def __init__(
        self,
        resource: str = "resource",
        action: str = "modify",
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"You do not have permission to {action} this {resource}"
        ctx = context or {}
        ctx["resource"] = resource
        ctx["action"] = action
        super().__init__(message=message, context=ctx)


class NotFoundError(ZenseError):
    """
    Raised when a requested resource does not exist.

    Also used when a collection is empty: listing an empty table is a
    404, never an empty 200.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Union[int, str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id is not None:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class ConflictError(ZenseError):
    """Raised when a write violates a uniqueness rule (duplicate email)."""

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class LLMServiceError(ZenseError):
    """Raised when the Gemini call fails after all retries."""

    def __init__(
        self,
        message: str = "The vent assistant is temporarily unavailable",
        retry_after: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if retry_after:
            ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class CircuitBreakerOpenError(ZenseError):
    """
    Raised while the Gemini circuit breaker is OPEN.

    CLOSED → (threshold failures) → OPEN → (recovery timeout) → HALF_OPEN
    → success closes the circuit, failure opens it again.
    """

    def __init__(
        self,
        recovery_time: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"The vent assistant is temporarily unavailable due to repeated failures. "
            f"Please try again in approximately {recovery_time} seconds."
        )
        ctx = context or {}
        ctx["recovery_time"] = recovery_time
        super().__init__(message=message, context=ctx)
        self.recovery_time = recovery_time


class RateLimitExceededError(ZenseError):
    """Raised when a client exceeds the per-IP request rate limit."""

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
