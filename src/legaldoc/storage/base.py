from __future__ import annotations

from typing import Protocol

from .types import StoredArtifact


class StorageBackend(Protocol):
    """Physical store behind `ContentStore`.

    Ids passed in have already been validated. `fetch` writes to an explicit
    destination path chosen by the caller.
    """

    name: str

    def store(self, local_path: str, original_name: str) -> StoredArtifact: ...

    def describe(self, artifact_id: str) -> StoredArtifact: ...

    def list(self) -> list[StoredArtifact]: ...

    def fetch(self, artifact_id: str, destination: str) -> str: ...

    def delete(self, artifact_id: str) -> None: ...
