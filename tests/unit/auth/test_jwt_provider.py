"""Unit tests for JWTAuthProvider claim parsing and the ES256/JWKS path."""

from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from jose import jwt as jose_jwt

from infrastructure.auth import jwt_provider as jwt_provider_module
from infrastructure.auth.jwt_provider import JWTAuthProvider, _get_jwks_keys
from infrastructure.auth.provider import TokenUser

JWKS_URL = "https://example.supabase.co/auth/v1/.well-known/jwks.json"


def _make_hs256_token(payload: dict, secret: str = "test-secret") -> str:
    return jose_jwt.encode(payload, secret, algorithm="HS256")


def _mock_jwks_client(keys: list[dict]) -> AsyncMock:
    response = MagicMock()
    response.json.return_value = {"keys": keys}
    response.raise_for_status = MagicMock()

    client = AsyncMock()
    client.get.return_value = response
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=False)
    return client


@pytest.fixture(autouse=True)
def _clear_jwks_cache():
    jwt_provider_module._jwks_cache = None
    yield
    jwt_provider_module._jwks_cache = None


@pytest.fixture
def provider() -> JWTAuthProvider:
    return JWTAuthProvider(secret_key="test-secret", algorithm="HS256", expire_minutes=30)


class TestClaimParsing:
    async def test_reads_full_name_from_user_metadata(self, provider: JWTAuthProvider):
        user_id = uuid4()
        token = _make_hs256_token(
            {
                "sub": str(user_id),
                "email": "jane@example.com",
                "user_metadata": {"full_name": "Jane Doe"},
                "exp": 9999999999,
            }
        )

        result = await provider.validate_token(token)

        assert result is not None
        assert result.id == user_id
        assert result.display_name == "Jane Doe"
        assert result.is_admin is False
        assert result.banned is False

    async def test_falls_back_to_name_claim(self, provider: JWTAuthProvider):
        token = _make_hs256_token(
            {
                "sub": str(uuid4()),
                "email": "jane@example.com",
                "user_metadata": {"name": "Jane From Google"},
                "exp": 9999999999,
            }
        )

        result = await provider.validate_token(token)

        assert result is not None
        assert result.display_name == "Jane From Google"

    async def test_reads_admin_role_and_ban_from_app_metadata(self, provider: JWTAuthProvider):
        token = _make_hs256_token(
            {
                "sub": str(uuid4()),
                "email": "mod@example.com",
                "app_metadata": {"role": "admin", "banned": True},
                "exp": 9999999999,
            }
        )

        result = await provider.validate_token(token)

        assert result is not None
        assert result.is_admin is True
        assert result.banned is True

    async def test_role_in_user_metadata_does_not_grant_admin(self, provider: JWTAuthProvider):
        token = _make_hs256_token(
            {
                "sub": str(uuid4()),
                "email": "sneaky@example.com",
                "user_metadata": {"role": "admin"},
                "exp": 9999999999,
            }
        )

        result = await provider.validate_token(token)

        assert result is not None
        assert result.is_admin is False

    @pytest.mark.parametrize(
        "payload",
        [
            {"email": "user@example.com"},
            {"sub": str(uuid4())},
            {"sub": "", "email": "user@example.com"},
            {"sub": "not-a-uuid", "email": "user@example.com"},
        ],
    )
    async def test_returns_none_for_incomplete_claims(
        self, provider: JWTAuthProvider, payload: dict
    ):
        token = _make_hs256_token({**payload, "exp": 9999999999})

        assert await provider.validate_token(token) is None

    async def test_returns_none_for_wrong_secret(self, provider: JWTAuthProvider):
        token = _make_hs256_token(
            {"sub": str(uuid4()), "email": "a@example.com", "exp": 9999999999},
            secret="other-secret",
        )

        assert await provider.validate_token(token) is None

    async def test_created_token_round_trips_admin_claims(self, provider: JWTAuthProvider):
        user = TokenUser(
            id=uuid4(),
            email="admin@example.com",
            display_name="Admin",
            app_role="admin",
        )

        result = await provider.validate_token(provider.create_token(user))

        assert result is not None
        assert result.id == user.id
        assert result.is_admin is True


class TestGetJwksKeys:
    async def test_returns_empty_dict_without_supabase_url(self):
        with patch.object(jwt_provider_module, "settings", create=True) as mock_settings:
            mock_settings.supabase_jwks_url = ""

            assert await _get_jwks_keys() == {}

    async def test_fetches_and_caches_keys_by_kid(self):
        client = _mock_jwks_client(
            [
                {"kid": "key-1", "kty": "EC"},
                {"kty": "EC"},
            ]
        )

        with (
            patch.object(jwt_provider_module, "settings", create=True) as mock_settings,
            patch.object(jwt_provider_module, "httpx") as mock_httpx,
        ):
            mock_settings.supabase_jwks_url = JWKS_URL
            mock_settings.supabase_timeout_seconds = 5.0
            mock_httpx.AsyncClient.return_value = client

            result = await _get_jwks_keys()
            client.get.reset_mock()
            cached = await _get_jwks_keys()

        assert list(result) == ["key-1"]
        assert cached == result
        client.get.assert_not_called()

    async def test_returns_empty_dict_on_http_error(self):
        client = _mock_jwks_client([])
        client.get.side_effect = Exception("Connection refused")

        with (
            patch.object(jwt_provider_module, "settings", create=True) as mock_settings,
            patch.object(jwt_provider_module, "httpx") as mock_httpx,
        ):
            mock_settings.supabase_jwks_url = JWKS_URL
            mock_settings.supabase_timeout_seconds = 5.0
            mock_httpx.AsyncClient.return_value = client

            assert await _get_jwks_keys() == {}


class TestValidateEs256:
    async def test_returns_none_without_kid(self, provider: JWTAuthProvider):
        result = await provider._validate_es256("dummy.token.value", {"alg": "ES256"})

        assert result is None

    async def test_refetches_once_when_kid_is_unknown(self, provider: JWTAuthProvider):
        with patch.object(
            jwt_provider_module, "_get_jwks_keys", new_callable=AsyncMock
        ) as mock_get_jwks:
            mock_get_jwks.return_value = {"other-kid": {"kty": "EC"}}

            result = await provider._validate_es256(
                "dummy.token.value", {"alg": "ES256", "kid": "missing-kid"}
            )

        assert result is None
        assert mock_get_jwks.call_count == 2

    async def test_decodes_with_matching_key(self, provider: JWTAuthProvider):
        key_data = {"kid": "test-kid", "kty": "EC", "crv": "P-256"}
        payload = {"sub": str(uuid4()), "email": "test@example.com"}

        with (
            patch.object(
                jwt_provider_module, "_get_jwks_keys", new_callable=AsyncMock
            ) as mock_get_jwks,
            patch.object(jwt_provider_module, "ECKey") as mock_eckey_cls,
            patch.object(jwt_provider_module, "jwt") as mock_jwt,
        ):
            mock_get_jwks.return_value = {"test-kid": key_data}
            mock_jwt.decode.return_value = payload

            result = await provider._validate_es256(
                "es256.token.value", {"alg": "ES256", "kid": "test-kid"}
            )

        assert result == payload
        mock_eckey_cls.assert_called_once_with(key_data, algorithm="ES256")

    async def test_validate_token_routes_es256_tokens(self, provider: JWTAuthProvider):
        user_id = str(uuid4())
        payload = {
            "sub": user_id,
            "email": "es256user@example.com",
            "user_metadata": {"full_name": "ES256 User"},
            "app_metadata": {"role": "admin"},
            "role": "authenticated",
        }

        with patch.object(jwt_provider_module, "jwt") as mock_jwt:
            mock_jwt.get_unverified_header.return_value = {"alg": "ES256", "kid": "k1"}
            with patch.object(provider, "_validate_es256", new_callable=AsyncMock) as mock_es256:
                mock_es256.return_value = payload

                result = await provider.validate_token("es256.token.here")

        assert result is not None
        assert str(result.id) == user_id
        assert result.display_name == "ES256 User"
        assert result.is_admin is True
