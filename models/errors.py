"""
Error taxonomy for ScreenCraft.

Every error that can reach a client carries its HTTP status and the public
`error` message; `index.py` renders them as `{"error": ..., "details": ...}`.
"""
from typing import Any, Dict, Optional


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, error: Optional[str] = None, details: Optional[Dict[str, Any]] = None,
                 headers: Optional[Dict[str, str]] = None):
        self.error = error or self.default_message
        self.details = details
        self.headers = headers
        super().__init__(self.error)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details:
            body["details"] = self.details
        return body


class AuthError(AppError):
    """No caller identity."""
    status_code = 401
    default_message = "Unauthorized"


class AuthzError(AppError):
    """Caller identity present but not the owner."""
    status_code = 403
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request body"


class RateLimitError(AppError):
    status_code = 429
    default_message = "Too many requests"

    def __init__(self, retry_after: int, limit: int):
        super().__init__(
            headers={
                "X-RateLimit-Limit": str(limit),
                "X-RateLimit-Remaining": "0",
                "Retry-After": str(retry_after),
            }
        )
        self.retry_after = retry_after

    def to_body(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "message": "Rate limit exceeded. Please try again later.",
            "retryAfter": self.retry_after,
        }


class InternalError(AppError):
    status_code = 500
    default_message = "Internal server error"


class UpstreamError(Exception):
    """
    The language model call failed or timed out.

    Not an AppError: generation absorbs it into the fallback path, so it never
    becomes an HTTP response on its own.
    """
