from __future__ import annotations

from dataclasses import dataclass

from legaldoc import logger as log

from ._auth import AuthConfig, build_storage_service, load_credentials
from ._retry import RetryConfig
from .gcs import CloudStorageFacade

log = log.get_logger()


@dataclass
class GoogleCloud:
    """Single entry point for the Google Cloud services legaldoc talks to.

    Example:
        from legaldoc.google import GoogleCloud
        gc = GoogleCloud.from_env("my-bucket")
        gc.storage.list_objects()
    """

    storage: CloudStorageFacade

    @classmethod
    def from_env(
        cls,
        bucket: str,
        *,
        auth: AuthConfig | None = None,
        retry: RetryConfig | None = None,
    ) -> "GoogleCloud":
        """Create clients using GOOGLE_CREDENTIALS_JSON (preferred) or credentials.json."""

        creds = load_credentials(auth or AuthConfig())
        storage_service = build_storage_service(creds)
        log.debug(f"Cloud Storage client built for bucket {bucket}")
        return cls(storage=CloudStorageFacade(storage_service, bucket, retry=retry))
