import pytest


class FakeFacade:
    bucket = "legal-bucket"

    def __init__(self):
        self.objects = {}
        self.calls = []
        self.fail = {}

    def _maybe_fail(self, op):
        if op in self.fail:
            raise self.fail[op]

    def upload_file(self, filepath, *, object_name, content_type, metadata=None):
        self.calls.append(("upload", filepath, object_name, content_type, metadata))
        self._maybe_fail("upload")
        with open(filepath, "rb") as fh:
            data = fh.read()
        item = {
            "name": object_name,
            "contentType": content_type,
            "size": str(len(data)),
            "timeCreated": "2026-01-01T00:00:00.000Z",
            "metadata": dict(metadata or {}),
            "data": data,
        }
        self.objects[object_name] = item
        return item

    def make_public(self, object_name):
        self.calls.append(("public", object_name))

    def get_metadata(self, object_name):
        self.calls.append(("get", object_name))
        self._maybe_fail("get")
        return self.objects[object_name]

    def list_objects(self, *, prefix=None):
        self.calls.append(("list",))
        return list(self.objects.values())

    def download_file(self, object_name, destination_path):
        self.calls.append(("download", object_name))
        with open(destination_path, "wb") as fh:
            fh.write(b"partial")
        self._maybe_fail("download")
        with open(destination_path, "wb") as fh:
            fh.write(self.objects[object_name]["data"])

    def delete_object(self, object_name):
        self.calls.append(("delete", object_name))
        self._maybe_fail("delete")
        del self.objects[object_name]

    def public_url(self, object_name):
        return f"https://storage.googleapis.com/{self.bucket}/{object_name}"


@pytest.fixture
def facade():
    return FakeFacade()


@pytest.fixture
def backend(facade):
    from legaldoc.storage.remote import CloudStorageBackend

    return CloudStorageBackend(facade)


@pytest.fixture
def sample(tmp_path):
    p = tmp_path / "upload"
    p.write_bytes(b"contract body")
    return p


def test_store_uploads_with_metadata_and_makes_public(backend, facade, sample):
    artifact = backend.store(str(sample), "Contract.docx")

    _op, _path, object_name, content_type, metadata = facade.calls[0]
    assert object_name == artifact.id
    assert artifact.id.endswith(".docx")
    assert content_type.endswith("wordprocessingml.document")
    assert metadata == {
        "originalFilename": "Contract.docx",
        "uploadedAt": artifact.uploaded_at,
    }
    assert ("public", artifact.id) in facade.calls
    assert artifact.size == len(b"contract body")
    assert artifact.url == f"https://storage.googleapis.com/legal-bucket/{artifact.id}"


def test_store_without_public_access(facade, sample):
    from legaldoc.storage.remote import CloudStorageBackend

    CloudStorageBackend(facade, make_public=False).store(str(sample), "a.pdf")
    assert not any(c[0] == "public" for c in facade.calls)


def test_describe_maps_object_metadata(backend, sample):
    stored = backend.store(str(sample), "nda.pdf")
    described = backend.describe(stored.id)

    assert described.name == "nda.pdf"
    assert described.content_type == "application/pdf"
    assert described.size == stored.size
    assert described.uploaded_at == stored.uploaded_at
    assert described.url == stored.url


def test_describe_without_custom_metadata_uses_object_fields(backend, facade):
    facade.objects["raw.bin"] = {"name": "raw.bin", "timeCreated": "2025-05-05T00:00:00Z"}

    artifact = backend.describe("raw.bin")
    assert artifact.name == "raw.bin"
    assert artifact.content_type == "application/octet-stream"
    assert artifact.uploaded_at == "2025-05-05T00:00:00Z"
    assert artifact.size is None


def test_describe_missing_object_is_not_found(backend, facade, as_http_error):
    from legaldoc.errors import NotFoundError

    facade.fail["get"] = as_http_error(status=404, message="No such object")
    with pytest.raises(NotFoundError):
        backend.describe("gone.pdf")


def test_describe_other_errors_are_storage_errors(backend, facade, as_http_error):
    from legaldoc.errors import StorageError

    facade.fail["get"] = as_http_error(status=403, message="Access denied.")
    with pytest.raises(StorageError, match="Access denied"):
        backend.describe("secret.pdf")


def test_list_returns_every_object(backend, sample):
    a = backend.store(str(sample), "one.pdf")
    b = backend.store(str(sample), "two.pdf")

    listed = backend.list()
    assert {x.id for x in listed} == {a.id, b.id}
    assert {x.name for x in listed} == {"one.pdf", "two.pdf"}


def test_fetch_downloads_bytes(backend, sample, tmp_path):
    stored = backend.store(str(sample), "a.pdf")
    dest = tmp_path / "dl.pdf"

    assert backend.fetch(stored.id, str(dest)) == str(dest)
    assert dest.read_bytes() == b"contract body"


def test_failed_fetch_removes_partial_file(backend, facade, tmp_path, as_http_error):
    from legaldoc.errors import NotFoundError

    facade.fail["download"] = as_http_error(status=404)
    dest = tmp_path / "dl.pdf"

    with pytest.raises(NotFoundError):
        backend.fetch("gone.pdf", str(dest))
    assert not dest.exists()


def test_failed_fetch_keeps_a_file_that_was_already_there(
    backend, facade, tmp_path, as_http_error
):
    from legaldoc.errors import NotFoundError

    facade.fail["download"] = as_http_error(status=404)
    dest = tmp_path / "existing.pdf"
    dest.write_bytes(b"caller data")

    with pytest.raises(NotFoundError):
        backend.fetch("gone.pdf", str(dest))
    assert dest.exists()


def test_delete_removes_object(backend, facade, sample):
    stored = backend.store(str(sample), "a.pdf")
    backend.delete(stored.id)
    assert stored.id not in facade.objects


def test_delete_missing_object_surfaces_backend_error(backend, facade, as_http_error):
    from legaldoc.errors import StorageError

    facade.fail["delete"] = as_http_error(status=404, message="No such object: gone.pdf")
    with pytest.raises(StorageError, match="No such object"):
        backend.delete("gone.pdf")


def test_upload_failure_is_storage_error(backend, facade, sample, as_http_error):
    from legaldoc.errors import StorageError

    facade.fail["upload"] = as_http_error(status=500, message="backend down")
    with pytest.raises(StorageError):
        backend.store(str(sample), "a.pdf")
