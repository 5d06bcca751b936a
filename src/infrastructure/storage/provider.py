"""Object storage protocol."""

from typing import Protocol


class IObjectStorage(Protocol):
    """Protocol for blob storage used for avatars."""

    async def upload(
        self,
        bucket: str,
        key: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        upsert: bool = True,
    ) -> str:
        """Store data under bucket/key and return the stored object path."""
        ...

    def get_public_url(self, bucket: str, key: str) -> str:
        """Return the public URL for an object."""
        ...
