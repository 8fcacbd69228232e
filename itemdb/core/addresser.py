"""Content addressing for uploaded images."""

import hashlib
import logging
from pathlib import Path

from .errors import StorageError

logger = logging.getLogger(__name__)

# Images are never inspected, so every blob gets the same extension.
IMAGE_EXTENSION = ".jpg"


class ContentAddresser:
    """Derives canonical blob filenames from file contents."""

    CHUNK_SIZE = 8192

    @classmethod
    def compute_digest(cls, filepath: str | Path) -> bytes:
        """Compute the SHA-256 digest of a file's contents."""
        sha256 = hashlib.sha256()
        try:
            with open(filepath, "rb") as f:
                for chunk in iter(lambda: f.read(cls.CHUNK_SIZE), b""):
                    sha256.update(chunk)
        except OSError as e:
            logger.error("Could not hash %s: %s", filepath, e)
            raise StorageError(f"Could not read image {filepath}: {e}") from e
        return sha256.digest()

    @staticmethod
    def filename_for(digest: bytes) -> str:
        return digest.hex() + IMAGE_EXTENSION

    @classmethod
    def filename_for_path(cls, filepath: str | Path) -> str:
        filename = cls.filename_for(cls.compute_digest(filepath))
        logger.info("Receive image: %s", filename)
        return filename
