"""JWT validation for Supabase-issued access tokens.

Supabase signs access tokens with ES256 (public keys served from the
project's JWKS endpoint). HS256 tokens signed with the shared secret are
accepted too; tests mint them with ``create_token``.

Claims read from the payload:
    {
        "sub": "user-uuid",
        "email": "user@example.com",
        "role": "authenticated",
        "user_metadata": { "full_name": "Jane Doe" },
        "app_metadata": { "role": "admin", "banned": false },
        "exp": 1234567890
    }

``app_metadata`` is only writable with the service role key, so the admin
role and the banned flag are trusted from it. ``user_metadata`` is user
editable and only supplies the display name.
"""

from datetime import datetime, timedelta
from typing import Any, Optional
from uuid import UUID

import httpx
import structlog
from jose import JWTError, jwt
from jose.backends import ECKey

from core.config import settings
from infrastructure.auth.provider import TokenUser

logger = structlog.get_logger()

SUPABASE_ALGORITHM = "ES256"
_DISPLAY_NAME_KEYS = ("full_name", "name", "display_name")

# kid -> JWK, filled on first ES256 token and refreshed on an unknown kid
_jwks_cache: dict[str, Any] | None = None


async def _get_jwks_keys() -> dict[str, Any]:
    """Return the project's signing keys by kid, fetching them once."""
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache

    jwks_url = settings.supabase_jwks_url
    if not jwks_url:
        return {}

    try:
        async with httpx.AsyncClient() as client:
            response = await client.get(jwks_url, timeout=settings.supabase_timeout_seconds)
            response.raise_for_status()
            keys = response.json().get("keys", [])
    except Exception:
        logger.error("jwks_fetch_failed", url=jwks_url, exc_info=True)
        return {}

    _jwks_cache = {key["kid"]: key for key in keys if key.get("kid")}
    logger.info("jwks_fetched", key_count=len(_jwks_cache))
    return _jwks_cache


def _claims_to_user(payload: dict[str, Any]) -> Optional[TokenUser]:
    """Build a TokenUser from verified claims; None when sub or email is missing."""
    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        return None

    user_metadata = payload.get("user_metadata") or {}
    display_name = next(
        (user_metadata[key] for key in _DISPLAY_NAME_KEYS if user_metadata.get(key)),
        payload.get("name"),
    )
    app_metadata = payload.get("app_metadata") or {}

    return TokenUser(
        id=UUID(user_id),
        email=email,
        display_name=display_name,
        role=payload.get("role"),
        app_role=app_metadata.get("role"),
        banned=bool(app_metadata.get("banned", False)),
    )


class JWTAuthProvider:
    """Validates Supabase access tokens and mints HS256 tokens for tests."""

    def __init__(
        self,
        secret_key: str = settings.jwt_secret_key,
        algorithm: str = settings.jwt_algorithm,
        expire_minutes: int = settings.jwt_expire_minutes,
    ) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    async def validate_token(self, token: str) -> Optional[TokenUser]:
        """
        Verify a bearer token and extract the user.

        The header's ``alg`` picks the key: ES256 goes through JWKS, anything
        else is checked against the shared secret with the configured algorithm.

        Returns:
            TokenUser if valid, None if the token is malformed, expired,
            badly signed or missing required claims
        """
        try:
            header = jwt.get_unverified_header(token)
            if header.get("alg", self._algorithm) == SUPABASE_ALGORITHM:
                payload = await self._validate_es256(token, header)
            else:
                payload = jwt.decode(
                    token,
                    self._secret_key,
                    algorithms=[self._algorithm],
                    options={"verify_aud": False},
                )
            if payload is None:
                return None
            return _claims_to_user(payload)
        except (JWTError, ValueError):
            return None

    async def _validate_es256(self, token: str, header: dict) -> Optional[dict]:
        """Verify an ES256 token with the JWKS key named by its kid."""
        kid = header.get("kid")
        if not kid:
            return None

        key_data = (await _get_jwks_keys()).get(kid)
        if not key_data:
            # Unknown kid: Supabase may have rotated keys, refetch once
            global _jwks_cache
            _jwks_cache = None
            key_data = (await _get_jwks_keys()).get(kid)
            if not key_data:
                logger.warning("jwks_key_not_found", kid=kid)
                return None

        return jwt.decode(
            token,
            ECKey(key_data, algorithm=SUPABASE_ALGORITHM),
            algorithms=[SUPABASE_ALGORITHM],
            options={"verify_aud": False},
        )

    def create_token(self, user: TokenUser) -> str:
        """Mint an HS256 token carrying the same claims Supabase issues."""
        app_metadata: dict[str, Any] = {"banned": user.banned}
        if user.app_role:
            app_metadata["role"] = user.app_role

        payload: dict[str, Any] = {
            "sub": str(user.id),
            "email": user.email,
            "aud": "authenticated",
            "role": "authenticated",
            "exp": datetime.utcnow() + timedelta(minutes=self._expire_minutes),
            "user_metadata": {"full_name": user.display_name},
            "app_metadata": app_metadata,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
