import os
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from invoices.uploads import FileIntake, get_file_intake
from invoices.validation.errors import UploadError

from .conftest import PNG_BYTES


class TestFileIntake:
    def test_build_path_prefixes_millis(self, tmp_path):
        intake = FileIntake(tmp_path)
        assert intake.build_path("avatar.png", now_ms=1700000000123) == tmp_path / "1700000000123_avatar.png"

    def test_build_path_drops_directories(self, tmp_path):
        intake = FileIntake(tmp_path)
        path = intake.build_path("../../etc/passwd", now_ms=1)
        assert path == tmp_path / "1_passwd"

    def test_store_writes_bytes(self, tmp_path, make_image):
        intake = FileIntake(tmp_path / "nested")
        path = intake.store(make_image())

        assert Path(path).parent == tmp_path / "nested"
        assert Path(path).name.endswith("_avatar.png")
        assert Path(path).read_bytes() == PNG_BYTES

    def test_store_reads_from_start(self, tmp_path, make_image):
        upload = make_image()
        upload.read()
        path = FileIntake(tmp_path).store(upload)
        assert Path(path).read_bytes() == PNG_BYTES

    def test_write_failure_raises_upload_error(self, tmp_path, make_image):
        intake = FileIntake(tmp_path)
        with patch("invoices.uploads.open", side_effect=PermissionError("read-only"), create=True):
            with pytest.raises(UploadError) as excinfo:
                intake.store(make_image())
        assert isinstance(excinfo.value, IOError)
        assert excinfo.value.path.startswith(str(tmp_path))

    def test_read_failure_raises_upload_error(self, tmp_path):
        upload = MagicMock()
        upload.name = "avatar.png"
        upload.read.side_effect = OSError("temp file vanished")

        with pytest.raises(UploadError, match="temp file vanished"):
            FileIntake(tmp_path).store(upload)
        assert list(tmp_path.iterdir()) == []

    def test_discard(self, tmp_path, make_image):
        intake = FileIntake(tmp_path)
        path = intake.store(make_image())

        assert intake.discard(path) is True
        assert not os.path.exists(path)
        assert intake.discard(path) is False

    def test_default_root_from_settings(self, upload_root):
        assert get_file_intake().upload_root == Path(upload_root)


class TestUploadServing:
    def test_stored_upload_is_served(self, client, upload_root, make_image):
        path = Path(FileIntake(upload_root).store(make_image("lee.png")))

        response = client.get(f"/uploads/{path.name}")

        assert response.status_code == 200
        assert b"".join(response.streaming_content) == PNG_BYTES

    def test_missing_upload_is_404(self, client):
        assert client.get("/uploads/nope.png").status_code == 404
