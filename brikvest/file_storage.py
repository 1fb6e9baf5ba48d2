"""
brikvest/file_storage.py

Local-directory file storage for admin uploads (partnership documents and
property images). Files are written under UPLOAD_DIR/<folder>/ with a random
name and served from PUBLIC_UPLOAD_URL.
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Dict, FrozenSet

from brikvest.config import MAX_UPLOAD_MB, PUBLIC_UPLOAD_URL, UPLOAD_DIR
from brikvest.errors import ValidationError

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS: FrozenSet[str] = frozenset({"pdf", "doc", "docx"})
IMAGE_EXTENSIONS: FrozenSet[str] = frozenset({"jpg", "jpeg", "png", "webp", "gif"})

# upload kind -> (folder, allowed extensions)
UPLOAD_KINDS: Dict[str, tuple] = {
    "document": ("documents", DOCUMENT_EXTENSIONS),
    "image": ("images", IMAGE_EXTENSIONS),
}


def file_extension(filename: str) -> str:
    return Path(filename or "").suffix.lower().lstrip(".")


class LocalFileStorage:
    def __init__(self, root: str = UPLOAD_DIR, public_url: str = PUBLIC_UPLOAD_URL, max_bytes: int = MAX_UPLOAD_MB * 1024 * 1024):
        self.root = Path(root)
        self.public_url = public_url.rstrip("/")
        self.max_bytes = max_bytes

    def validate(self, data: bytes, original_name: str, allowed: FrozenSet[str]) -> str:
        """Return the normalised extension or raise ValidationError."""
        ext = file_extension(original_name)
        if ext not in allowed:
            raise ValidationError(f"File type not allowed. Allowed: {', '.join(sorted(allowed))}")
        if not data:
            raise ValidationError("Uploaded file is empty")
        if len(data) > self.max_bytes:
            raise ValidationError(f"File exceeds the {self.max_bytes // (1024 * 1024)} MB limit")
        return ext

    def save(self, data: bytes, folder: str, original_name: str, allowed: FrozenSet[str]) -> Dict[str, str]:
        """
        Store `data` and describe where it can be fetched.

        Returns:
            {"url": public URL, "id": stored object id, "original_name": client filename}
        """
        ext = self.validate(data, original_name, allowed)
        file_id = f"{uuid.uuid4().hex}.{ext}"

        target_dir = self.root / folder
        target_dir.mkdir(parents=True, exist_ok=True)
        target = target_dir / file_id
        with open(target, "wb") as fh:
            fh.write(data)

        logger.info("[STORAGE] Stored %s/%s (%s bytes)", folder, file_id, len(data))
        return {
            "url": f"{self.public_url}/{folder}/{file_id}",
            "id": f"{folder}/{file_id}",
            "original_name": os.path.basename(original_name),
        }


_storage = None


def get_file_storage() -> LocalFileStorage:
    """FastAPI dependency returning the process-wide storage backend."""
    global _storage
    if _storage is None:
        _storage = LocalFileStorage()
    return _storage
