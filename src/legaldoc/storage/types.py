from __future__ import annotations

import datetime
import os
import uuid
from dataclasses import dataclass
from typing import Any, Optional

from legaldoc import config
from legaldoc.errors import InputError

DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".doc": "application/msword",
    ".txt": "text/plain",
    ".csv": "text/csv",
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
}


@dataclass(frozen=True)
class StoredArtifact:
    """Descriptive record for one stored file. Immutable once stored."""

    id: str
    name: str
    content_type: str
    uploaded_at: str
    url: str
    size: Optional[int] = None

    def sidecar(self) -> dict[str, Any]:
        """Fields persisted next to a locally stored file."""
        return {
            "id": self.id,
            "name": self.name,
            "contentType": self.content_type,
            "uploadedAt": self.uploaded_at,
            "size": self.size,
        }

    def to_dict(self) -> dict[str, Any]:
        return {**self.sidecar(), "url": self.url}


def content_type_for(filename: str) -> str:
    ext = os.path.splitext(filename)[1].lower()
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)


def new_artifact_id(original_name: str) -> str:
    """Random, collision-resistant storage key that keeps the original extension."""
    ext = os.path.splitext(original_name)[1]
    # a Windows-style path can leave a separator inside the extension
    if "/" in ext or "\\" in ext:
        ext = ""
    return f"{uuid.uuid4()}{ext}"


def iso_timestamp(dt: Optional[datetime.datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    dt = dt or datetime.datetime.now(datetime.timezone.utc)
    text = dt.astimezone(datetime.timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def validate_artifact_id(artifact_id: Any) -> str:
    """Reject ids that are empty or could address anything but a stored artifact."""

    if not isinstance(artifact_id, str) or not artifact_id.strip():
        raise InputError("Artifact id must be a non-empty string")
    if (
        "/" in artifact_id
        or "\\" in artifact_id
        or artifact_id in (".", "..")
        or artifact_id.endswith(config.METADATA_SUFFIX)
    ):
        raise InputError(f"Invalid artifact id: {artifact_id!r}")
    return artifact_id
