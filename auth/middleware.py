"""
Authentication middleware for ScreenCraft with local JWT validation
"""
import jwt
import logging
from typing import Optional
from supabase import create_client, Client

from config.settings import (
    JWT_ALGORITHM,
    JWT_AUDIENCE,
    JWT_SECRET,
    SUPABASE_SERVICE_KEY,
    SUPABASE_URL,
)
from models.errors import AuthError

logger = logging.getLogger(__name__)


class AuthMiddleware:
    def __init__(self, supabase_client: Optional[Client] = None, jwt_secret: Optional[str] = None):
        self.jwt_secret = jwt_secret or JWT_SECRET
        if not self.jwt_secret:
            raise ValueError("SUPABASE_JWT_SECRET environment variable is required")

        if supabase_client is None:
            if not SUPABASE_URL:
                raise ValueError("SUPABASE_URL environment variable is required")
            if not SUPABASE_SERVICE_KEY:
                raise ValueError("SUPABASE_SERVICE_KEY environment variable is required")
            supabase_client = create_client(SUPABASE_URL, SUPABASE_SERVICE_KEY)
            logger.info("Supabase client initialized with local JWT validation")

        self.supabase: Client = supabase_client

    def verify_token(self, token: str) -> dict:
        """
        Verify JWT token locally without round-trip to Supabase
        """
        try:
            payload = jwt.decode(
                token,
                self.jwt_secret,
                algorithms=[JWT_ALGORITHM],
                audience=JWT_AUDIENCE
            )
        except jwt.ExpiredSignatureError:
            raise AuthError("Token has expired")
        except jwt.InvalidAudienceError:
            raise AuthError("Invalid token audience")
        except jwt.InvalidSignatureError:
            raise AuthError("Invalid token signature")
        except jwt.PyJWTError as e:
            raise AuthError(f"Invalid token: {str(e)}")

        user_id = payload.get("sub")
        if not user_id:
            raise AuthError("Invalid token: missing user information")

        return {"id": user_id, "email": payload.get("email")}

    def resolve_caller(self, token: Optional[str]) -> Optional[str]:
        """
        Return the caller's user id, or None when the token is absent or invalid
        """
        if not token:
            return None
        try:
            return self.verify_token(token)["id"]
        except AuthError as e:
            logger.debug(f"Rejected bearer token: {e.error}")
            return None


# Global auth middleware instance - will be initialized when first used
auth_middleware = None

def get_auth_middleware() -> AuthMiddleware:
    """Get or create auth middleware instance"""
    global auth_middleware
    if auth_middleware is None:
        auth_middleware = AuthMiddleware()
    return auth_middleware
