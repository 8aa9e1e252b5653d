"""
Authentication and rate-limit dependencies for ScreenCraft
"""
import logging
from fastapi import Depends, Request, Response
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional

from config.rate_limit_config import get_rate_limit
from models.errors import AuthError, RateLimitError
from .middleware import AuthMiddleware, get_auth_middleware

logger = logging.getLogger(__name__)

# auto_error=False: a missing header must become our own 401 body, not FastAPI's 403
security = HTTPBearer(auto_error=False)


def get_authenticator() -> AuthMiddleware:
    return get_auth_middleware()


async def get_caller_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    authenticator: AuthMiddleware = Depends(get_authenticator),
) -> Optional[str]:
    """
    Resolve the caller's user id, or None if unauthenticated
    """
    if not credentials:
        return None
    return authenticator.resolve_caller(credentials.credentials)


async def require_caller_id(caller_id: Optional[str] = Depends(get_caller_id)) -> str:
    if not caller_id:
        raise AuthError()
    return caller_id


def get_client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip
    return request.client.host if request.client else "anonymous"


def rate_limit(tier: str):
    """
    Dependency factory: reject the request with 429 once the caller has used
    up the tier's budget. Callers are keyed by user id when authenticated,
    by client IP otherwise.
    """
    config = get_rate_limit(tier)

    async def _check_rate_limit(request: Request, response: Response, caller_id: Optional[str] = Depends(get_caller_id)):
        identifier = f"user:{caller_id}" if caller_id else f"ip:{get_client_ip(request)}"
        limiter = request.app.state.rate_limiter

        if not limiter.check(identifier, config):
            logger.warning(f"Rate limit ({tier}) exceeded for {identifier}")
            raise RateLimitError(retry_after=config["window_seconds"], limit=config["requests"])

        response.headers["X-RateLimit-Limit"] = str(config["requests"])
        response.headers["X-RateLimit-Remaining"] = str(limiter.get_remaining(identifier, config))

    return _check_rate_limit


# Convenience dependencies
RateLimitStrict = rate_limit("strict")
RateLimitModerate = rate_limit("moderate")
RateLimitLenient = rate_limit("lenient")
