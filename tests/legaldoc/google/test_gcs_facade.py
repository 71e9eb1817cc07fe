from __future__ import annotations

from pathlib import Path

import pytest


class _Exec:
    def __init__(self, fn):
        self._fn = fn

    def execute(self):
        return self._fn()


class FakeStorageService:
    """Mimics the `objects()` / `objectAccessControls()` shape of the storage v1 client."""

    def __init__(self):
        self.calls = []
        self.objects_by_name = {}
        self._pages = [
            {"items": [{"name": "a.pdf"}, {"name": "b.txt"}], "nextPageToken": "p2"},
            {"items": [{"name": "c.docx"}]},
        ]

    def objects(self):
        svc = self

        class _Objects:
            def insert(self, bucket=None, body=None, media_body=None):
                svc.calls.append(("insert", bucket, body, media_body))
                item = {**body, "size": "5"}
                svc.objects_by_name[body["name"]] = item
                return _Exec(lambda: item)

            def get(self, bucket=None, object=None, fields=None):
                svc.calls.append(("get", bucket, object, fields))
                return _Exec(lambda: svc.objects_by_name[object])

            def list(self, **params):
                svc.calls.append(("list", params))
                page = 1 if params.get("pageToken") == "p2" else 0
                return _Exec(lambda: svc._pages[page])

            def get_media(self, bucket=None, object=None):
                svc.calls.append(("get_media", bucket, object))
                return {"data": b"hello"}

            def delete(self, bucket=None, object=None):
                svc.calls.append(("delete", bucket, object))
                return _Exec(lambda: "")

        return _Objects()

    def objectAccessControls(self):  # noqa: N802
        svc = self

        class _Acl:
            def insert(self, bucket=None, object=None, body=None):
                svc.calls.append(("acl", bucket, object, body))
                return _Exec(lambda: body)

        return _Acl()


class FakeMediaFileUpload:
    def __init__(self, filename, mimetype=None, resumable=False):
        self.filename = filename
        self.mimetype = mimetype
        self.resumable = resumable


class FakeMediaIoBaseDownload:
    def __init__(self, fh, request):
        self._fh = fh
        self._request = request
        self._done = False

    def next_chunk(self):
        if not self._done:
            self._fh.write(self._request["data"])
            self._done = True
        return None, self._done


@pytest.fixture
def facade(monkeypatch):
    from legaldoc.google.gcs import CloudStorageFacade

    monkeypatch.setattr("legaldoc.google.gcs.MediaFileUpload", FakeMediaFileUpload)
    monkeypatch.setattr("legaldoc.google.gcs.MediaIoBaseDownload", FakeMediaIoBaseDownload)
    return CloudStorageFacade(FakeStorageService(), "legal-bucket")


def test_upload_sets_content_type_and_metadata(facade, tmp_path: Path):
    p = tmp_path / "lease.pdf"
    p.write_bytes(b"%PDF-")

    item = facade.upload_file(
        str(p),
        object_name="abc.pdf",
        content_type="application/pdf",
        metadata={"originalFilename": "lease.pdf", "uploadedAt": "2026-01-01T00:00:00.000Z"},
    )

    _op, bucket, body, media = facade.service.calls[0]
    assert bucket == "legal-bucket"
    assert body["name"] == "abc.pdf"
    assert body["contentType"] == "application/pdf"
    assert body["metadata"]["originalFilename"] == "lease.pdf"
    assert media.mimetype == "application/pdf"
    assert media.resumable is True
    assert item["size"] == "5"


def test_make_public_grants_all_users_read(facade):
    facade.make_public("abc.pdf")
    assert facade.service.calls[-1] == (
        "acl",
        "legal-bucket",
        "abc.pdf",
        {"entity": "allUsers", "role": "READER"},
    )


def test_list_objects_paginates(facade):
    items = facade.list_objects()
    assert [i["name"] for i in items] == ["a.pdf", "b.txt", "c.docx"]
    assert len([c for c in facade.service.calls if c[0] == "list"]) == 2


def test_list_objects_passes_prefix(facade):
    facade.list_objects(prefix="2026/")
    assert facade.service.calls[0][1]["prefix"] == "2026/"


def test_get_metadata_requests_object(facade):
    facade.service.objects_by_name["x.txt"] = {"name": "x.txt"}
    assert facade.get_metadata("x.txt") == {"name": "x.txt"}
    assert facade.service.calls[-1][2] == "x.txt"


def test_download_file_writes_to_disk(facade, tmp_path: Path):
    dest = tmp_path / "out.bin"
    facade.download_file("abc.pdf", str(dest))
    assert dest.read_bytes() == b"hello"


def test_delete_object(facade):
    facade.delete_object("abc.pdf")
    assert facade.service.calls[-1] == ("delete", "legal-bucket", "abc.pdf")


def test_public_url_quotes_object_name(facade):
    assert (
        facade.public_url("a b.pdf")
        == "https://storage.googleapis.com/legal-bucket/a%20b.pdf"
    )


def test_google_cloud_from_env_builds_facade(monkeypatch):
    from legaldoc.google.google import GoogleCloud

    monkeypatch.setattr("legaldoc.google.google.load_credentials", lambda _auth: object())
    monkeypatch.setattr("legaldoc.google.google.build_storage_service", lambda _c: "storage")

    gc = GoogleCloud.from_env("bucket-1")
    assert gc.storage.service == "storage"
    assert gc.storage.bucket == "bucket-1"
