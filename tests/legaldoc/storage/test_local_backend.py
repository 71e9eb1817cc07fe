import json
import os
import re
from pathlib import Path

import pytest

UUID_ID = re.compile(r"^[0-9a-f-]{36}\.pdf$")


@pytest.fixture
def backend(tmp_path):
    from legaldoc.storage.local import LocalBackend

    return LocalBackend(str(tmp_path / "store"))


@pytest.fixture
def sample(tmp_path) -> Path:
    p = tmp_path / "upload.bin"
    p.write_bytes(b"%PDF-1.7 lease agreement")
    return p


def test_root_is_created(tmp_path):
    from legaldoc.storage.local import LocalBackend

    root = tmp_path / "deep" / "root"
    LocalBackend(str(root))
    assert root.is_dir()


def test_store_copies_bytes_and_writes_sidecar(backend, sample):
    artifact = backend.store(str(sample), "Lease Agreement.pdf")

    assert UUID_ID.match(artifact.id)
    assert artifact.name == "Lease Agreement.pdf"
    assert artifact.content_type == "application/pdf"
    assert artifact.size == len(sample.read_bytes())
    assert artifact.url == f"/api/storage/local/{artifact.id}"
    assert artifact.uploaded_at.endswith("Z")

    content = backend.root / artifact.id
    assert content.read_bytes() == sample.read_bytes()

    sidecar = json.loads((backend.root / f"{artifact.id}.meta.json").read_text())
    assert sidecar == {
        "id": artifact.id,
        "name": "Lease Agreement.pdf",
        "contentType": "application/pdf",
        "uploadedAt": artifact.uploaded_at,
        "size": artifact.size,
    }


def test_each_store_gets_a_fresh_id(backend, sample):
    a = backend.store(str(sample), "same.pdf")
    b = backend.store(str(sample), "same.pdf")
    assert a.id != b.id


def test_describe_reads_sidecar(backend, sample):
    stored = backend.store(str(sample), "nda.pdf")
    assert backend.describe(stored.id) == stored


def test_describe_without_sidecar_uses_file_stats(backend):
    (backend.root / "legacy.docx").write_bytes(b"12345")

    artifact = backend.describe("legacy.docx")
    assert artifact.name == "legacy.docx"
    assert artifact.size == 5
    assert artifact.content_type == (
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    )
    assert artifact.uploaded_at.endswith("Z")


def test_describe_with_corrupt_sidecar_uses_file_stats(backend):
    (backend.root / "x.txt").write_bytes(b"abc")
    (backend.root / "x.txt.meta.json").write_text("{not json")

    artifact = backend.describe("x.txt")
    assert artifact.name == "x.txt"
    assert artifact.content_type == "text/plain"


def test_describe_missing_raises_not_found(backend):
    from legaldoc.errors import NotFoundError

    with pytest.raises(NotFoundError):
        backend.describe("nope.pdf")


def test_list_excludes_sidecars(backend, sample):
    a = backend.store(str(sample), "one.pdf")
    b = backend.store(str(sample), "two.txt")

    listed = backend.list()
    assert len(listed) == 2
    assert {x.id for x in listed} == {a.id, b.id}
    assert not any(x.id.endswith(".meta.json") for x in listed)
    assert len(os.listdir(backend.root)) == 4


def test_list_with_missing_root_is_storage_error(backend):
    import shutil

    from legaldoc.errors import StorageError

    shutil.rmtree(backend.root)
    with pytest.raises(StorageError):
        backend.list()


def test_fetch_copies_bytes(backend, sample, tmp_path):
    stored = backend.store(str(sample), "a.pdf")
    dest = tmp_path / "fetched.pdf"

    assert backend.fetch(stored.id, str(dest)) == str(dest)
    assert dest.read_bytes() == sample.read_bytes()


def test_fetch_missing_raises_not_found(backend, tmp_path):
    from legaldoc.errors import NotFoundError

    with pytest.raises(NotFoundError):
        backend.fetch("missing.pdf", str(tmp_path / "x"))


def test_delete_removes_content_and_sidecar(backend, sample):
    from legaldoc.errors import NotFoundError

    stored = backend.store(str(sample), "a.pdf")
    backend.delete(stored.id)

    assert os.listdir(backend.root) == []
    with pytest.raises(NotFoundError):
        backend.describe(stored.id)


def test_delete_missing_is_not_an_error(backend):
    backend.delete("never-existed.pdf")


def test_store_failure_leaves_nothing_behind(backend, tmp_path):
    from legaldoc.errors import StorageError

    with pytest.raises(StorageError):
        backend.store(str(tmp_path / "does-not-exist"), "a.pdf")
    assert os.listdir(backend.root) == []
