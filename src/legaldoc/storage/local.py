from __future__ import annotations

import datetime
import json
import os
import shutil
from pathlib import Path

from legaldoc import config
from legaldoc import logger as logger_mod
from legaldoc.errors import NotFoundError, StorageError

from .types import StoredArtifact, content_type_for, iso_timestamp, new_artifact_id

log = logger_mod.get_logger()


class LocalBackend:
    """Filesystem mirror of the bucket layout.

    Each artifact is two files under `root`: the content at `<id>` and its
    sidecar metadata at `<id>.meta.json`.
    """

    name = "local"

    def __init__(self, root: str, *, url_prefix: str = config.LOCAL_URL_PREFIX):
        self._root = Path(root)
        self._url_prefix = url_prefix
        if not self._root.exists():
            self._root.mkdir(parents=True, exist_ok=True)
            log.info(f"📁 Created local storage directory: {self._root}")

    @property
    def root(self) -> Path:
        return self._root

    def _content_path(self, artifact_id: str) -> Path:
        return self._root / artifact_id

    def _sidecar_path(self, artifact_id: str) -> Path:
        return self._root / f"{artifact_id}{config.METADATA_SUFFIX}"

    def _url(self, artifact_id: str) -> str:
        return f"{self._url_prefix}{artifact_id}"

    def store(self, local_path: str, original_name: str) -> StoredArtifact:
        artifact_id = new_artifact_id(original_name)
        dest = self._content_path(artifact_id)

        try:
            shutil.copyfile(local_path, dest)
            artifact = StoredArtifact(
                id=artifact_id,
                name=original_name,
                content_type=content_type_for(original_name),
                uploaded_at=iso_timestamp(),
                url=self._url(artifact_id),
                size=dest.stat().st_size,
            )
            self._sidecar_path(artifact_id).write_text(
                json.dumps(artifact.sidecar(), indent=2), encoding="utf-8"
            )
        except OSError as e:
            log.error(f"Error storing {original_name} in local storage: {e}")
            dest.unlink(missing_ok=True)
            self._sidecar_path(artifact_id).unlink(missing_ok=True)
            raise StorageError(
                f"Failed to store {original_name} in local storage: {e}"
            ) from e

        log.info(f"Stored {original_name} locally as {artifact_id}")
        return artifact

    def _synthesize(self, artifact_id: str, path: Path) -> StoredArtifact:
        stat = path.stat()
        mtime = datetime.datetime.fromtimestamp(stat.st_mtime, datetime.timezone.utc)
        return StoredArtifact(
            id=artifact_id,
            name=artifact_id,
            content_type=content_type_for(artifact_id),
            uploaded_at=iso_timestamp(mtime),
            url=self._url(artifact_id),
            size=stat.st_size,
        )

    def describe(self, artifact_id: str) -> StoredArtifact:
        path = self._content_path(artifact_id)
        if not path.is_file():
            raise NotFoundError(f"File {artifact_id} not found in local storage")

        sidecar = self._sidecar_path(artifact_id)
        try:
            if sidecar.is_file():
                try:
                    meta = json.loads(sidecar.read_text(encoding="utf-8"))
                    return StoredArtifact(
                        id=artifact_id,
                        name=meta.get("name") or artifact_id,
                        content_type=meta.get("contentType")
                        or content_type_for(artifact_id),
                        uploaded_at=meta["uploadedAt"],
                        url=self._url(artifact_id),
                        size=meta.get("size"),
                    )
                except (ValueError, KeyError, AttributeError) as e:
                    log.warning(
                        f"Unreadable metadata for {artifact_id} ({e}); using file stats"
                    )
            return self._synthesize(artifact_id, path)
        except FileNotFoundError as e:
            # deleted between the existence check and the read
            raise NotFoundError(
                f"File {artifact_id} not found in local storage"
            ) from e

    def list(self) -> list[StoredArtifact]:
        try:
            entries = sorted(os.listdir(self._root))
        except OSError as e:
            log.error(f"Error listing local storage at {self._root}: {e}")
            raise StorageError(f"Failed to list local storage: {e}") from e

        artifacts: list[StoredArtifact] = []
        for entry in entries:
            if entry.endswith(config.METADATA_SUFFIX):
                continue
            if not self._content_path(entry).is_file():
                continue
            try:
                artifacts.append(self.describe(entry))
            except NotFoundError:
                log.debug(f"{entry} disappeared while listing; skipping")
        return artifacts

    def fetch(self, artifact_id: str, destination: str) -> str:
        source = self._content_path(artifact_id)
        if not source.is_file():
            raise NotFoundError(f"File {artifact_id} not found in local storage")
        try:
            shutil.copyfile(source, destination)
        except FileNotFoundError as e:
            raise NotFoundError(
                f"File {artifact_id} not found in local storage"
            ) from e
        except OSError as e:
            log.error(f"Error copying {artifact_id} out of local storage: {e}")
            raise StorageError(f"Failed to fetch {artifact_id}: {e}") from e
        return destination

    def delete(self, artifact_id: str) -> None:
        try:
            for path in (
                self._content_path(artifact_id),
                self._sidecar_path(artifact_id),
            ):
                path.unlink(missing_ok=True)
        except OSError as e:
            log.error(f"Error deleting {artifact_id} from local storage: {e}")
            raise StorageError(f"Failed to delete {artifact_id}: {e}") from e
