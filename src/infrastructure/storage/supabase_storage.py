"""Supabase Storage HTTP client."""

import httpx
import structlog

from core.config import settings
from core.exceptions import StorageError

logger = structlog.get_logger()


class SupabaseObjectStorage:
    """Uploads blobs to Supabase Storage buckets over its REST API."""

    def __init__(
        self,
        base_url: str = settings.supabase_url,
        service_role_key: str = settings.supabase_service_role_key,
        timeout: float = settings.supabase_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = f"{base_url.rstrip('/')}/storage/v1"
        self._service_role_key = service_role_key
        self._timeout = timeout
        self._transport = transport

    async def upload(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        upsert: bool = True,
    ) -> str:
        """Upload an object, overwriting an existing one when upsert is set.

        Raises:
            StorageError: On transport failure or a non-2xx response.
        """
        headers = {
            "apikey": self._service_role_key,
            "Authorization": f"Bearer {self._service_role_key}",
            "Content-Type": content_type,
            "x-upsert": "true" if upsert else "false",
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(f"/object/{bucket}/{key}", content=data, headers=headers)
        except httpx.HTTPError as e:
            logger.error("storage_upload_failed", bucket=bucket, key=key, error=str(e))
            raise StorageError("Storage service unavailable") from e

        if response.is_error:
            logger.error(
                "storage_upload_rejected",
                bucket=bucket,
                key=key,
                status_code=response.status_code,
            )
            raise StorageError(
                "Failed to upload file",
                details={"status_code": response.status_code},
            )

        logger.info("storage_upload_completed", bucket=bucket, key=key, size=len(data))
        return f"{bucket}/{key}"

    def get_public_url(self, bucket: str, key: str) -> str:
        """Public buckets serve objects from a stable URL."""
        return f"{self._base_url}/object/public/{bucket}/{key}"
