"""Transient storage for uploaded reports.

Each upload is written under a fresh uuid4 name so concurrent requests never
share a path, and removed again once the request is done with it.
"""
from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass

logger = logging.getLogger(__name__)

KNOWN_EXTENSIONS = (".pdf",)


@dataclass(frozen=True)
class UploadedFile:
    temporary_path: str
    original_name: str
    mime_type: str


class UploadStore:
    def __init__(self, folder: str):
        self.folder = folder

    def _ensure_folder(self) -> None:
        os.makedirs(self.folder, exist_ok=True)

    def _path_for(self, filename: str) -> str:
        ext = os.path.splitext((filename or "").strip())[1].lower()
        if ext not in KNOWN_EXTENSIONS:
            ext = ".bin"
        return os.path.join(self.folder, f"{uuid.uuid4().hex}{ext}")

    def save(self, file_storage) -> UploadedFile:
        """Write a werkzeug ``FileStorage`` to the upload folder."""
        self._ensure_folder()
        path = self._path_for(file_storage.filename)
        try:
            file_storage.save(path)
        except OSError:
            logger.error("Failed to store upload %s", path)
            if os.path.exists(path):
                os.remove(path)
            raise
        return UploadedFile(
            temporary_path=path,
            original_name=file_storage.filename or "",
            mime_type=file_storage.mimetype or "application/octet-stream",
        )

    def discard(self, upload: UploadedFile) -> bool:
        """Delete the stored file. Failures are logged, never raised."""
        try:
            os.remove(upload.temporary_path)
        except OSError:
            logger.exception("Failed to delete the temporary file %s", upload.temporary_path)
            return False
        return True
