from __future__ import annotations

import hashlib
import io
import logging
import os
import shutil
import tempfile
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class AvatarNotFound(LookupError):
    pass


def _write_atomic(image: Image.Image, path: str) -> None:
    # readers only ever see a complete file
    fd, tmp = tempfile.mkstemp(dir=os.path.dirname(path), suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            image.save(fh, "PNG")
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.remove(tmp)
        raise


@dataclass(slots=True)
class FolderAvatarStore:
    """
    Uploaded avatars on disk, one directory per identity:
    `<folder>/<sha256 of key>/avatar.png` plus resized copies `avatar.<size>.png`.
    """

    folder: str

    # -- Paths --------------------------------------------------------------
    def directory(self, key: str) -> str:
        digest = hashlib.sha256(key.encode("utf-8")).hexdigest()
        return os.path.join(self.folder, digest)

    def path(self, key: str, size: int | None = None) -> str:
        filename = "avatar.png" if size is None else f"avatar.{int(size)}.png"
        return os.path.join(self.directory(key), filename)

    # -- Read ---------------------------------------------------------------
    def exists(self, key: str) -> bool:
        return os.path.isfile(self.path(key))

    def get_file(self, key: str, size: int) -> bytes:
        original = self.path(key)
        if not os.path.isfile(original):
            raise AvatarNotFound(key)

        resized = self.path(key, size)
        if not os.path.isfile(resized):
            try:
                with Image.open(original) as img:
                    if img.size != (size, size):
                        img = img.resize((size, size), Image.Resampling.LANCZOS)
                    _write_atomic(img, resized)
            except (UnidentifiedImageError, OSError) as exc:
                logger.warning("Stored avatar %s is unreadable: %s", key, exc)
                raise AvatarNotFound(key) from exc
            logger.debug("Resized avatar %s to %spx", key, size)

        with open(resized, "rb") as fh:
            return fh.read()

    # -- Write --------------------------------------------------------------
    def save(self, key: str, data: bytes) -> None:
        try:
            img = Image.open(io.BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise ValueError("Uploaded data is not an image") from exc

        if img.mode not in ("RGB", "RGBA"):
            img = img.convert("RGBA")

        self.remove(key)
        os.makedirs(self.directory(key), exist_ok=True)
        _write_atomic(img, self.path(key))
        img.close()
        logger.info("Stored avatar %s", key)

    def remove(self, key: str) -> bool:
        directory = self.directory(key)
        if not os.path.isdir(directory):
            return False
        removed = os.path.isfile(self.path(key))
        shutil.rmtree(directory)
        return removed
