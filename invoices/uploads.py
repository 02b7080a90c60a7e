"""File intake for customer profile images."""

import logging
import os
import time
from pathlib import Path
from typing import Optional, Union

from django.conf import settings

from .validation.errors import UploadError

logger = logging.getLogger(__name__)


class FileIntake:
    """Writes validated uploads under a fixed upload root.

    Paths follow ``<upload_root>/<epoch_millis>_<original_name>``. The
    timestamp is the only collision avoidance: two uploads with the same name
    in the same millisecond overwrite each other.
    """

    def __init__(self, upload_root: Union[str, Path, None] = None):
        self.upload_root = Path(upload_root if upload_root is not None else settings.UPLOAD_ROOT)

    def build_path(self, original_name: str, now_ms: Optional[int] = None) -> Path:
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        return self.upload_root / f"{now_ms}_{os.path.basename(original_name)}"

    def store(self, upload) -> str:
        path = self.build_path(upload.name)

        try:
            upload.seek(0)
            contents = upload.read()
            self.upload_root.mkdir(parents=True, exist_ok=True)
            with open(path, "wb") as fh:
                fh.write(contents)
        except OSError as exc:
            raise UploadError(f"Could not write upload to {path}: {exc}", path=str(path)) from exc

        logger.info("Stored upload %s (%d bytes)", path, len(contents))
        return str(path)

    def discard(self, path: str) -> bool:
        """Remove a previously stored upload. Returns False if it could not be removed."""
        try:
            os.remove(path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.warning("Could not discard upload %s: %s", path, exc)
            return False
        logger.info("Discarded orphaned upload %s", path)
        return True


def get_file_intake() -> FileIntake:
    return FileIntake(settings.UPLOAD_ROOT)
