"""Tests for document intake: validation, storage and download."""

from __future__ import annotations

import io

import pytest
from werkzeug.datastructures import FileStorage

from app.utils.errors import FileTooLarge, StoredFileNotFound, UnsupportedFileType
from app.utils.uploads import UploadStore, resolve_download_name
from tests.helpers import pdf_upload, submit


def make_file(name: str, mimetype: str, content: bytes = b"data") -> FileStorage:
    return FileStorage(stream=io.BytesIO(content), filename=name, content_type=mimetype)


class TestUploadStore:
    @pytest.mark.parametrize(
        "name, mimetype",
        [
            ("scan.pdf", "application/pdf"),
            ("photo.JPG", "image/jpeg"),
            ("photo.jpeg", "image/jpeg"),
            ("chart.png", "image/png"),
        ],
    )
    def test_accepts_supported_types(self, tmp_path, name: str, mimetype: str) -> None:
        store = UploadStore(tmp_path / "Uploads")

        path = store.accept(make_file(name, mimetype))

        assert path.startswith("Uploads/")
        assert path.endswith(name.rsplit(".", 1)[1].lower())
        assert (tmp_path / path).read_bytes() == b"data"

    @pytest.mark.parametrize(
        "name, mimetype",
        [
            ("virus.exe", "application/octet-stream"),
            ("renamed.pdf", "image/png"),
            ("photo.png", "application/pdf"),
            ("noextension", "application/pdf"),
        ],
    )
    def test_rejects_unsupported_types(self, tmp_path, name: str, mimetype: str) -> None:
        store = UploadStore(tmp_path / "Uploads")

        with pytest.raises(UnsupportedFileType):
            store.accept(make_file(name, mimetype))

        assert not (tmp_path / "Uploads").exists()

    def test_rejects_files_over_limit(self, tmp_path) -> None:
        store = UploadStore(tmp_path / "Uploads", max_size=10)

        with pytest.raises(FileTooLarge):
            store.validate(make_file("big.pdf", "application/pdf", b"x" * 11))

        store.validate(make_file("ok.pdf", "application/pdf", b"x" * 10))

    def test_missing_file_is_noop(self, tmp_path) -> None:
        store = UploadStore(tmp_path / "Uploads")

        assert store.accept(None) is None
        assert store.accept(make_file("", "application/octet-stream")) is None

    def test_generated_names_are_unique(self, tmp_path) -> None:
        store = UploadStore(tmp_path / "Uploads")

        paths = {store.accept(make_file("a.png", "image/png")) for _ in range(20)}

        assert len(paths) == 20

    def test_discard_removes_stored_file(self, tmp_path) -> None:
        store = UploadStore(tmp_path / "Uploads")
        path = store.accept(make_file("a.png", "image/png"))

        store.discard(path)

        assert not (tmp_path / path).exists()

    def test_locate_missing_file(self, tmp_path) -> None:
        store = UploadStore(tmp_path / "Uploads")

        with pytest.raises(StoredFileNotFound):
            store.locate("nothing.pdf")
        with pytest.raises(StoredFileNotFound):
            store.locate("../")


@pytest.mark.parametrize(
    "requested, expected",
    [
        ("../../etc/passwd", "passwd"),
        ("sub/dir/name.png", "name.png"),
        ("sub\\dir\\name.png", "name.png"),
        ("..\\..\\secret.pdf", "secret.pdf"),
        ("plain.pdf", "plain.pdf"),
        ("dir/..", None),
        ("", None),
    ],
)
def test_resolve_download_name(requested: str, expected: str | None) -> None:
    assert resolve_download_name(requested) == expected


class TestDocumentRoutes:
    def test_uploaded_pdf_downloads_identical_bytes(self, client) -> None:
        content = b"%PDF-1.4\n" + bytes(range(256)) * 10

        response = submit(client, program="Personal Loan", document=pdf_upload(content=content))

        assert response.status_code == 201
        document_path = response.get_json()["document_path"]
        assert document_path.startswith("Uploads/")

        download = client.get(f"/download/{document_path}")
        assert download.status_code == 200
        assert download.data == content
        disposition = download.headers["Content-Disposition"]
        assert disposition.startswith("attachment")
        assert document_path.split("/")[-1] in disposition

    def test_static_uploads_passthrough(self, client) -> None:
        response = submit(client, document=pdf_upload(content=b"%PDF-1.4 static"))
        document_path = response.get_json()["document_path"]

        passthrough = client.get(f"/{document_path}")

        assert passthrough.status_code == 200
        assert passthrough.data == b"%PDF-1.4 static"

    def test_exe_rejected_before_record_created(self, client, upload_dir) -> None:
        response = submit(
            client,
            document=(io.BytesIO(b"MZ..."), "setup.exe", "application/octet-stream"),
        )

        assert response.status_code == 400
        assert "error" in response.get_json()
        assert client.get("/api/requests").get_json() == []
        assert not upload_dir.exists() or list(upload_dir.iterdir()) == []

    def test_oversized_document_rejected(self, client) -> None:
        content = b"x" * (5 * 1024 * 1024 + 1)

        response = submit(client, document=pdf_upload(content=content))

        assert response.status_code == 413
        assert "error" in response.get_json()
        assert client.get("/api/requests").get_json() == []

    def test_oversized_request_body_rejected_as_json(self, client) -> None:
        content = b"x" * (7 * 1024 * 1024)

        response = submit(client, document=pdf_upload(content=content))

        assert response.status_code == 413
        assert "error" in response.get_json()

    def test_duplicate_submission_does_not_store_file(self, client, upload_dir) -> None:
        submit(client)

        response = submit(client, document=pdf_upload())

        assert response.status_code == 400
        assert not upload_dir.exists() or list(upload_dir.iterdir()) == []

    def test_failed_insert_removes_stored_file(self, client, upload_dir) -> None:
        response = submit(client, email=None, document=pdf_upload())

        assert response.status_code == 500
        assert list(upload_dir.iterdir()) == []

    def test_download_missing_file(self, client) -> None:
        response = client.get("/download/missing.pdf")

        assert response.status_code == 404
        assert response.get_json() == {"error": "File not found"}

    def test_download_resolves_only_last_component(self, client, upload_dir) -> None:
        upload_dir.mkdir(parents=True)
        (upload_dir / "passwd").write_bytes(b"inside uploads")
        (upload_dir / "name.png").write_bytes(b"png bytes")

        traversal = client.get("/download/../../etc/passwd")
        nested = client.get("/download/sub/dir/name.png")
        backslashed = client.get("/download/sub%5Cdir%5Cname.png")

        assert traversal.status_code == 200
        assert traversal.data == b"inside uploads"
        assert nested.data == b"png bytes"
        assert backslashed.data == b"png bytes"
