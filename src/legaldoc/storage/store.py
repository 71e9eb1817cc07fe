from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Optional

from legaldoc import config
from legaldoc import logger as logger_mod
from legaldoc.errors import InputError, NotFoundError
from legaldoc.google import GoogleCloud

from .base import StorageBackend
from .local import LocalBackend
from .remote import CloudStorageBackend
from .types import StoredArtifact, validate_artifact_id

log = logger_mod.get_logger()


@dataclass(frozen=True)
class StorageConfig:
    """Where artifacts live. Resolved once at startup and handed to the store."""

    bucket: Optional[str] = None
    local_root: str = config.LOCAL_STORAGE_DIR
    downloads_dir: str = config.DOWNLOADS_DIR
    uploads_dir: str = config.UPLOADS_DIR
    local_url_prefix: str = config.LOCAL_URL_PREFIX
    make_public: bool = True

    @classmethod
    def from_env(cls) -> "StorageConfig":
        return cls(
            bucket=config.BUCKET_NAME or None,
            local_root=config.LOCAL_STORAGE_DIR,
            downloads_dir=config.DOWNLOADS_DIR,
            uploads_dir=config.UPLOADS_DIR,
            make_public=config.MAKE_PUBLIC,
        )


class ContentStore:
    """One interface over whichever backend was selected at startup.

    Callers hold only artifact ids; the store owns the bytes and, for the
    local backend, the sidecar metadata.
    """

    def __init__(
        self,
        backend: StorageBackend,
        *,
        downloads_dir: str = config.DOWNLOADS_DIR,
        uploads_dir: str = config.UPLOADS_DIR,
    ):
        self._backend = backend
        self._downloads_dir = downloads_dir
        self._uploads_dir = uploads_dir

    @property
    def backend_name(self) -> str:
        return self._backend.name

    def store(self, local_path: str, original_name: str) -> StoredArtifact:
        if not isinstance(original_name, str) or not original_name.strip():
            raise InputError("original_name must be a non-empty string")
        if not local_path or not os.path.isfile(local_path):
            raise NotFoundError(f"File to store not found: {local_path}")
        return self._backend.store(local_path, original_name)

    def store_uploaded_file(self, upload_id: str, original_name: str) -> StoredArtifact:
        """Move a file from the temporary uploads area into permanent storage.

        The temporary file is left in place.
        """

        upload_id = validate_artifact_id(upload_id)
        temp_path = os.path.join(self._uploads_dir, upload_id)
        if not os.path.isfile(temp_path):
            raise NotFoundError(f"File {upload_id} not found in temporary storage")
        return self.store(temp_path, original_name)

    def fetch(self, artifact_id: str, destination: Optional[str] = None) -> str:
        """Copy an artifact's bytes to a local path and return that path."""

        artifact_id = validate_artifact_id(artifact_id)
        destination = destination or os.path.join(self._downloads_dir, artifact_id)
        os.makedirs(os.path.dirname(destination) or ".", exist_ok=True)
        return self._backend.fetch(artifact_id, destination)

    def describe(self, artifact_id: str) -> StoredArtifact:
        return self._backend.describe(validate_artifact_id(artifact_id))

    def list(self) -> list[StoredArtifact]:
        return self._backend.list()

    def delete(self, artifact_id: str) -> None:
        artifact_id = validate_artifact_id(artifact_id)
        self._backend.delete(artifact_id)
        log.info(f"Deleted {artifact_id} from {self._backend.name} storage")


def build_content_store(
    cfg: StorageConfig | None = None,
    *,
    cloud_factory: Callable[[str], GoogleCloud] = GoogleCloud.from_env,
) -> ContentStore:
    """Pick the backend once: the bucket when it is configured and reachable, else local disk."""

    cfg = cfg or StorageConfig.from_env()
    kwargs = {"downloads_dir": cfg.downloads_dir, "uploads_dir": cfg.uploads_dir}

    if cfg.bucket:
        try:
            cloud = cloud_factory(cfg.bucket)
            backend = CloudStorageBackend(cloud.storage, make_public=cfg.make_public)
            log.info(f"✅ Using Google Cloud Storage bucket {cfg.bucket}")
            return ContentStore(backend, **kwargs)
        except Exception as e:  # noqa: BLE001
            log.warning(
                f"⚠️ Google Cloud Storage initialization failed, using local storage instead: {e}"
            )
    else:
        log.warning("⚠️ BUCKET_NAME not set, using local storage")

    backend = LocalBackend(cfg.local_root, url_prefix=cfg.local_url_prefix)
    return ContentStore(backend, **kwargs)
