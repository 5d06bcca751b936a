"""Authentication dependencies for FastAPI."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.exceptions import AuthenticationError, AuthorizationError, ErrorCode
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser

# Security scheme for OpenAPI docs
security = HTTPBearer(auto_error=False)

# Singleton auth provider
_auth_provider: JWTAuthProvider | None = None


def get_auth_provider() -> JWTAuthProvider:
    """Get or create the auth provider singleton."""
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = JWTAuthProvider()
    return _auth_provider


async def get_access_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ],
) -> str:
    """Raw bearer token, for calls that forward it to the identity service."""
    if not credentials:
        raise AuthenticationError(
            message="Authorization header required",
            error_code=ErrorCode.UNAUTHORIZED,
        )
    return credentials.credentials


async def get_current_user(
    token: Annotated[str, Depends(get_access_token)],
    auth_provider: JWTAuthProvider = Depends(get_auth_provider),
) -> TokenUser:
    """
    Dependency to get the current authenticated user.

    Raises:
        AuthenticationError: If no token provided or token is invalid
        AuthorizationError: If the account has been banned
    """
    user = await auth_provider.validate_token(token)

    if not user:
        raise AuthenticationError(
            message="Invalid or expired token",
            error_code=ErrorCode.INVALID_TOKEN,
        )

    if user.banned:
        raise AuthorizationError(
            message="This account has been banned",
            error_code=ErrorCode.ACCOUNT_BANNED,
        )

    return user


async def get_admin_user(
    user: Annotated[TokenUser, Depends(get_current_user)],
) -> TokenUser:
    """
    Dependency restricting a route to back-office administrators.

    Raises:
        AuthorizationError: If the user lacks the admin role
    """
    if not user.is_admin:
        raise AuthorizationError("Administrator access required")
    return user


# Type alias for convenience in route handlers
CurrentUser = Annotated[TokenUser, Depends(get_current_user)]
AdminUser = Annotated[TokenUser, Depends(get_admin_user)]
AccessToken = Annotated[str, Depends(get_access_token)]
