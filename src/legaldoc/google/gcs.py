from __future__ import annotations

import io
import os
from typing import Any, Optional
from urllib.parse import quote

from googleapiclient.http import MediaFileUpload, MediaIoBaseDownload

from legaldoc import config
from legaldoc import logger as log

from ._retry import RetryConfig, execute_with_retry

log = log.get_logger()

OBJECT_FIELDS = "name, contentType, size, timeCreated, metadata"


class CloudStorageFacade:
    """Small wrapper around the Cloud Storage JSON API for a single bucket.

    Every call goes through `execute_with_retry`; errors surface as
    `googleapiclient.errors.HttpError`.
    """

    def __init__(self, service: Any, bucket: str, retry: RetryConfig | None = None):
        self._service = service
        self._bucket = bucket
        self._retry = retry or RetryConfig()

    @property
    def service(self) -> Any:
        return self._service

    @property
    def bucket(self) -> str:
        return self._bucket

    def upload_file(
        self,
        filepath: str,
        *,
        object_name: str,
        content_type: str,
        metadata: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        body = {
            "name": object_name,
            "contentType": content_type,
            "metadata": dict(metadata or {}),
        }
        media = MediaFileUpload(filepath, mimetype=content_type, resumable=True)
        return execute_with_retry(
            lambda: self._service.objects()
            .insert(bucket=self._bucket, body=body, media_body=media)
            .execute(),
            context=f"uploading {os.path.basename(filepath)} as {object_name}",
            retry=self._retry,
        )

    def make_public(self, object_name: str) -> None:
        execute_with_retry(
            lambda: self._service.objectAccessControls()
            .insert(
                bucket=self._bucket,
                object=object_name,
                body={"entity": "allUsers", "role": "READER"},
            )
            .execute(),
            context=f"granting public read on {object_name}",
            retry=self._retry,
        )

    def get_metadata(self, object_name: str) -> dict[str, Any]:
        return execute_with_retry(
            lambda: self._service.objects()
            .get(bucket=self._bucket, object=object_name, fields=OBJECT_FIELDS)
            .execute(),
            context=f"reading metadata for {object_name}",
            retry=self._retry,
        )

    def list_objects(self, *, prefix: Optional[str] = None) -> list[dict[str, Any]]:
        def _call(page_token: str | None):
            params = {
                "bucket": self._bucket,
                "fields": f"nextPageToken, items({OBJECT_FIELDS})",
                "pageToken": page_token,
            }
            if prefix:
                params["prefix"] = prefix
            return self._service.objects().list(**params).execute()

        items: list[dict[str, Any]] = []
        page_token: str | None = None
        while True:
            result = execute_with_retry(
                lambda: _call(page_token),
                context=f"listing objects in bucket {self._bucket}",
                retry=self._retry,
            )
            items.extend(result.get("items", []))
            page_token = result.get("nextPageToken")
            if not page_token:
                break
        return items

    def download_file(self, object_name: str, destination_path: str) -> None:
        # Chunked downloads happen client-side, but the initial request creation can fail.
        request = execute_with_retry(
            lambda: self._service.objects().get_media(
                bucket=self._bucket, object=object_name
            ),
            context=f"creating download request for {object_name}",
            retry=self._retry,
        )
        with io.FileIO(destination_path, "wb") as fh:
            downloader = MediaIoBaseDownload(fh, request)
            done = False
            while not done:
                _status, done = downloader.next_chunk()

    def delete_object(self, object_name: str) -> None:
        execute_with_retry(
            lambda: self._service.objects()
            .delete(bucket=self._bucket, object=object_name)
            .execute(),
            context=f"deleting {object_name}",
            retry=self._retry,
        )

    def public_url(self, object_name: str) -> str:
        return config.PUBLIC_URL_TEMPLATE.format(
            bucket=self._bucket, object_name=quote(object_name, safe="")
        )
