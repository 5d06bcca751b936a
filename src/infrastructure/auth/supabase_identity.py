"""Supabase Auth HTTP client for session exchange and user administration."""

from datetime import datetime
from typing import Any
from uuid import UUID

import httpx
import structlog

from core.config import settings
from core.exceptions import AuthenticationError, ErrorCode, StorageError, UserNotFoundError
from domain.entities.identity import AuthSession, AuthUser

logger = structlog.get_logger()


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _to_auth_user(data: dict[str, Any]) -> AuthUser:
    app_metadata = data.get("app_metadata") or {}
    return AuthUser(
        id=UUID(data["id"]),
        email=data.get("email"),
        last_sign_in_at=_parse_timestamp(data.get("last_sign_in_at")),
        banned=bool(app_metadata.get("banned", False)),
    )


class SupabaseIdentityService:
    """Talks to the Supabase Auth REST API (GoTrue).

    Session calls use the anon key; admin calls use the service role key and
    must only run server-side.
    """

    def __init__(
        self,
        base_url: str = settings.supabase_url,
        anon_key: str = settings.supabase_anon_key,
        service_role_key: str = settings.supabase_service_role_key,
        timeout: float = settings.supabase_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = f"{base_url.rstrip('/')}/auth/v1"
        self._anon_key = anon_key
        self._service_role_key = service_role_key
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    def _admin_headers(self) -> dict[str, str]:
        return {
            "apikey": self._service_role_key,
            "Authorization": f"Bearer {self._service_role_key}",
        }

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send a request, converting transport failures into StorageError."""
        try:
            async with self._client() as client:
                return await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("identity_request_failed", method=method, path=path, error=str(e))
            raise StorageError("Identity service unavailable") from e

    def _raise_for_status(self, response: httpx.Response, user_id: UUID | None = None) -> None:
        if response.status_code == 404 and user_id is not None:
            raise UserNotFoundError(str(user_id))
        if response.is_error:
            logger.error(
                "identity_request_rejected",
                status_code=response.status_code,
                body=response.text[:200],
            )
            raise StorageError(
                "Identity service request failed",
                details={"status_code": response.status_code},
            )

    async def exchange_code_for_session(
        self, code: str, code_verifier: str | None = None
    ) -> AuthSession:
        """Exchange an OAuth/PKCE auth code for a session.

        Raises:
            AuthenticationError: If the identity service rejects the code.
            StorageError: If the identity service cannot be reached.
        """
        payload: dict[str, Any] = {"auth_code": code}
        if code_verifier:
            payload["code_verifier"] = code_verifier

        response = await self._send(
            "POST",
            "/token",
            params={"grant_type": "pkce"},
            json=payload,
            headers={"apikey": self._anon_key},
        )
        if response.status_code in (400, 401, 403, 404):
            logger.warning("auth_code_exchange_rejected", status_code=response.status_code)
            raise AuthenticationError(
                message="Could not exchange auth code for a session",
                error_code=ErrorCode.INVALID_TOKEN,
            )
        self._raise_for_status(response)

        data = response.json()
        user = data.get("user") or {}
        return AuthSession(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            user_id=UUID(user["id"]),
            email=user.get("email"),
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke the session for an access token."""
        response = await self._send(
            "POST",
            "/logout",
            headers={
                "apikey": self._anon_key,
                "Authorization": f"Bearer {access_token}",
            },
        )
        # An already-revoked session is not an error for the caller
        if response.status_code in (401, 404):
            return
        self._raise_for_status(response)

    async def list_users(self) -> list[AuthUser]:
        """List every account, following pagination."""
        users: list[AuthUser] = []
        page = 1
        per_page = 1000
        while True:
            response = await self._send(
                "GET",
                "/admin/users",
                params={"page": page, "per_page": per_page},
                headers=self._admin_headers(),
            )
            self._raise_for_status(response)
            batch = response.json().get("users", [])
            users.extend(_to_auth_user(item) for item in batch)
            if len(batch) < per_page:
                return users
            page += 1

    async def set_banned(self, user_id: UUID, banned: bool) -> AuthUser:
        """Flag an account as banned via app metadata."""
        response = await self._send(
            "PUT",
            f"/admin/users/{user_id}",
            json={"app_metadata": {"banned": banned}},
            headers=self._admin_headers(),
        )
        self._raise_for_status(response, user_id)
        logger.info("identity_user_banned", user_id=str(user_id), banned=banned)
        return _to_auth_user(response.json())

    async def delete_user(self, user_id: UUID) -> None:
        """Permanently delete an account."""
        response = await self._send(
            "DELETE",
            f"/admin/users/{user_id}",
            headers=self._admin_headers(),
        )
        self._raise_for_status(response, user_id)
        logger.info("identity_user_deleted", user_id=str(user_id))
