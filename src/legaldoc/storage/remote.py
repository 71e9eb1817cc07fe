from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Any, Iterator

import httplib2
from googleapiclient.errors import HttpError

from legaldoc import logger as logger_mod
from legaldoc.errors import NotFoundError, StorageError
from legaldoc.google._retry import http_status
from legaldoc.google.gcs import CloudStorageFacade

from .types import StoredArtifact, content_type_for, iso_timestamp, new_artifact_id

log = logger_mod.get_logger()


@contextmanager
def _storage_errors(
    action: str, object_name: str, *, map_not_found: bool = True
) -> Iterator[None]:
    try:
        yield
    except HttpError as e:
        if map_not_found and http_status(e) == 404:
            raise NotFoundError(f"File {object_name} not found in bucket") from e
        log.error(f"Cloud Storage error while {action} {object_name}: {e}")
        raise StorageError(
            f"Cloud Storage error while {action} {object_name}: {e}"
        ) from e
    except (httplib2.HttpLib2Error, OSError) as e:
        log.error(f"Transport error while {action} {object_name}: {e}")
        raise StorageError(
            f"Cloud Storage transport error while {action} {object_name}: {e}"
        ) from e


class CloudStorageBackend:
    """Artifacts as objects in one Cloud Storage bucket.

    The object name is the artifact id. The original filename and upload time
    travel as custom object metadata (`originalFilename`, `uploadedAt`).
    Access URLs are derived on every read rather than stored.
    """

    name = "gcs"

    def __init__(self, facade: CloudStorageFacade, *, make_public: bool = True):
        self._facade = facade
        self._make_public = make_public

    def _artifact(self, item: dict[str, Any]) -> StoredArtifact:
        object_name = item["name"]
        meta = item.get("metadata") or {}
        size = item.get("size")
        return StoredArtifact(
            id=object_name,
            name=meta.get("originalFilename") or object_name,
            content_type=item.get("contentType") or content_type_for(object_name),
            uploaded_at=meta.get("uploadedAt") or item.get("timeCreated", ""),
            url=self._facade.public_url(object_name),
            size=int(size) if size is not None else None,
        )

    def store(self, local_path: str, original_name: str) -> StoredArtifact:
        artifact_id = new_artifact_id(original_name)
        content_type = content_type_for(original_name)
        uploaded_at = iso_timestamp()

        with _storage_errors("uploading", artifact_id, map_not_found=False):
            item = self._facade.upload_file(
                local_path,
                object_name=artifact_id,
                content_type=content_type,
                metadata={
                    "originalFilename": original_name,
                    "uploadedAt": uploaded_at,
                },
            )
            if self._make_public:
                self._facade.make_public(artifact_id)

        log.info(
            f"Uploaded {original_name} to bucket {self._facade.bucket} as {artifact_id}"
        )
        size = (item or {}).get("size")
        return StoredArtifact(
            id=artifact_id,
            name=original_name,
            content_type=content_type,
            uploaded_at=uploaded_at,
            url=self._facade.public_url(artifact_id),
            size=int(size) if size is not None else os.path.getsize(local_path),
        )

    def describe(self, artifact_id: str) -> StoredArtifact:
        with _storage_errors("describing", artifact_id):
            item = self._facade.get_metadata(artifact_id)
        return self._artifact(item)

    def list(self) -> list[StoredArtifact]:
        with _storage_errors("listing", self._facade.bucket, map_not_found=False):
            items = self._facade.list_objects()
        return [self._artifact(item) for item in items]

    def fetch(self, artifact_id: str, destination: str) -> str:
        existed = os.path.exists(destination)
        try:
            with _storage_errors("downloading", artifact_id):
                self._facade.download_file(artifact_id, destination)
        except (NotFoundError, StorageError):
            # only clean up a truncated file this call created
            if not existed and os.path.exists(destination):
                os.remove(destination)
            raise
        return destination

    def delete(self, artifact_id: str) -> None:
        # a missing object is reported as a backend error, not mapped to not-found
        with _storage_errors("deleting", artifact_id, map_not_found=False):
            self._facade.delete_object(artifact_id)
