"""Content-addressed image directory."""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from ..core.addresser import IMAGE_EXTENSION
from ..core.errors import NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_IMAGE = "default.jpg"
STAGING_DIR = ".staging"


class ImageStore:
    """Manages the blobs under the image directory.

    Blobs are named ``<sha256 hex>.jpg`` and are never modified or deleted
    once written, so readers need no coordination. Uploads land in a staging
    area first and are adopted under their canonical name after hashing.
    """

    def __init__(self, image_dir: str | Path = "images"):
        self.image_dir = Path(image_dir)
        self.staging_dir = self.image_dir / STAGING_DIR
        try:
            self.staging_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Could not create image directory {self.image_dir}: {e}") from e

    def stage(self, stream: BinaryIO, suffix: str = IMAGE_EXTENSION) -> Path:
        """Write an upload stream to a fresh file in the staging area."""
        fd, tmp = tempfile.mkstemp(suffix=suffix, dir=self.staging_dir)
        try:
            with os.fdopen(fd, "wb") as f:
                shutil.copyfileobj(stream, f)
        except OSError as e:
            Path(tmp).unlink(missing_ok=True)
            logger.error("Could not stage upload: %s", e)
            raise StorageError(f"Could not store uploaded image: {e}") from e
        return Path(tmp)

    def discard(self, path: str | Path) -> None:
        Path(path).unlink(missing_ok=True)

    def path_for(self, filename: str) -> Path:
        return self.image_dir / filename

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).is_file()

    def adopt(self, source: str | Path, filename: str) -> Path:
        """Make the bytes of `source` available as `filename`.

        When a blob with that name already exists the identical content is
        already stored and nothing is written. The source file is left alone.
        """
        target = self.path_for(filename)
        if target.is_file():
            logger.debug("Image already stored: %s", filename)
            return target

        fd, tmp = tempfile.mkstemp(suffix=".tmp", dir=self.staging_dir)
        os.close(fd)
        try:
            shutil.copyfile(source, tmp)
            # Concurrent adopters of the same content write identical bytes.
            os.replace(tmp, target)
        except OSError as e:
            Path(tmp).unlink(missing_ok=True)
            logger.error("Could not store image %s: %s", filename, e)
            raise StorageError(f"Could not store image {filename}: {e}") from e
        logger.info("Stored image: %s", filename)
        return target

    @staticmethod
    def validate_filename(filename: str) -> None:
        if not filename.endswith(IMAGE_EXTENSION):
            raise ValidationError("Image path does not end with .jpg")
        if Path(filename).name != filename or filename.startswith("."):
            raise ValidationError(f"Invalid image filename: {filename}")

    def resolve(self, filename: str) -> Path:
        """Return the blob path for `filename`, or the default image if absent."""
        self.validate_filename(filename)
        path = self.path_for(filename)
        if path.is_file():
            return path

        logger.debug("Image not found: %s", path)
        default = self.path_for(DEFAULT_IMAGE)
        if not default.is_file():
            raise NotFoundError(f"Image not found: {filename} (and no {DEFAULT_IMAGE})")
        return default

    def read(self, filename: str) -> bytes:
        path = self.resolve(filename)
        try:
            return path.read_bytes()
        except OSError as e:
            raise StorageError(f"Could not read image {path}: {e}") from e
