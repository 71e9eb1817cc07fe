"""Dual-backend content store.

    from legaldoc.storage import build_content_store

    store = build_content_store()
    artifact = store.store("/tmp/upload-123", "Lease Agreement.pdf")
    store.describe(artifact.id)
"""

from .local import LocalBackend
from .remote import CloudStorageBackend
from .store import ContentStore, StorageConfig, build_content_store
from .types import StoredArtifact, content_type_for

__all__ = [
    "CloudStorageBackend",
    "ContentStore",
    "LocalBackend",
    "StorageConfig",
    "StoredArtifact",
    "build_content_store",
    "content_type_for",
]
