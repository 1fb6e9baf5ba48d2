"""
brikvest/test_uploads.py

Tests for admin document and image uploads.

Run:
    pytest brikvest/test_uploads.py -v
"""

import io
from unittest.mock import MagicMock

import pytest
from fastapi import UploadFile

from brikvest.auth import AdminContext
from brikvest.errors import ValidationError
from brikvest.file_storage import IMAGE_EXTENSIONS, LocalFileStorage, get_file_storage
from brikvest.main import app
from brikvest.models import AdminRole
from brikvest.routes_uploads import _store_upload


@pytest.fixture
def storage(tmp_path):
    store = LocalFileStorage(root=str(tmp_path), public_url="/uploads", max_bytes=1024)
    app.dependency_overrides[get_file_storage] = lambda: store
    yield store
    app.dependency_overrides.pop(get_file_storage, None)


class TestUploadEndpoints:
    def test_requires_admin(self, client, storage):
        response = client.post("/api/upload/document", files={"file": ("deal.pdf", b"%PDF-1.4", "application/pdf")})
        assert response.status_code == 401

    def test_document_upload(self, client, admin_headers, storage, tmp_path):
        response = client.post(
            "/api/upload/document",
            files={"file": ("Partnership Deal.pdf", b"%PDF-1.4 test", "application/pdf")},
            headers=admin_headers,
        )

        assert response.status_code == 200, response.json()
        data = response.json()
        assert data["url"].startswith("/uploads/documents/")
        assert data["url"].endswith(".pdf")
        assert data["originalName"] == "Partnership Deal.pdf"
        assert (tmp_path / data["id"]).read_bytes() == b"%PDF-1.4 test"

    def test_image_upload(self, client, admin_headers, storage):
        response = client.post(
            "/api/upload/image",
            files={"file": ("front.PNG", b"\x89PNG....", "image/png")},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["url"].startswith("/uploads/images/")

    def test_wrong_type_for_kind(self, client, admin_headers, storage):
        response = client.post(
            "/api/upload/image",
            files={"file": ("deal.pdf", b"%PDF", "application/pdf")},
            headers=admin_headers,
        )
        assert response.status_code == 400
        assert "not allowed" in response.json()["detail"]

    def test_too_large(self, client, admin_headers, storage):
        response = client.post(
            "/api/upload/document",
            files={"file": ("big.pdf", b"x" * 2048, "application/pdf")},
            headers=admin_headers,
        )
        assert response.status_code == 400

    def test_missing_file(self, client, admin_headers, storage):
        assert client.post("/api/upload/document", headers=admin_headers).status_code == 400


class TestLocalFileStorage:
    def test_empty_file_rejected(self, tmp_path):
        store = LocalFileStorage(root=str(tmp_path))
        with pytest.raises(ValidationError):
            store.save(b"", "images", "a.png", IMAGE_EXTENSIONS)

    def test_names_are_not_reused(self, tmp_path):
        store = LocalFileStorage(root=str(tmp_path))
        first = store.save(b"1", "images", "a.png", IMAGE_EXTENSIONS)
        second = store.save(b"2", "images", "a.png", IMAGE_EXTENSIONS)
        assert first["id"] != second["id"]

    def test_original_name_strips_directories(self, tmp_path):
        store = LocalFileStorage(root=str(tmp_path))
        stored = store.save(b"1", "images", "../../etc/a.png", IMAGE_EXTENSIONS)
        assert stored["original_name"] == "a.png"
        assert stored["id"].startswith("images/")


class TestUploadReadLimit:
    def test_reads_at_most_one_byte_past_limit(self, tmp_path):
        store = LocalFileStorage(root=str(tmp_path), max_bytes=1024)
        handle = MagicMock(wraps=io.BytesIO(b"x" * 10_000))
        upload = UploadFile(file=handle, filename="big.pdf")
        ctx = AdminContext(user_id=1, username="admin", role=AdminRole.admin, session_id="s")

        with pytest.raises(ValidationError):
            _store_upload("document", upload, store, ctx)

        handle.read.assert_called_once_with(1025)
        assert not (tmp_path / "documents").exists()
