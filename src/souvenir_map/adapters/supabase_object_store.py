"""Supabase Storage object store."""

from dataclasses import dataclass

from supabase import Client

from souvenir_map.services.storage import ObjectStore


@dataclass
class SupabaseObjectStore(ObjectStore):
    """Public buckets in Supabase Storage."""

    client: Client
    cache_control_seconds: int = 3600

    def upload(self, bucket: str, key: str, data: bytes, content_type: str) -> str:
        """Upload bytes without overwriting and return their public URL."""
        self.client.storage.from_(bucket).upload(
            key,
            data,
            {
                "content-type": content_type,
                "cache-control": str(self.cache_control_seconds),
                "upsert": "false",
            },
        )
        return self.get_public_url(bucket, key)

    def get_public_url(self, bucket: str, key: str) -> str:
        """Return the public URL for a stored object."""
        return self.client.storage.from_(bucket).get_public_url(key)
