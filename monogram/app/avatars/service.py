import logging
from dataclasses import dataclass

from monogram.helpers.avatar import Avatar, Identity
from monogram.helpers.raster import Rasterizer
from monogram.helpers.store import AvatarNotFound, FolderAvatarStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class AvatarsService:
    """Stored avatar first, generated letter avatar otherwise."""

    store: FolderAvatarStore
    rasterizer: Rasterizer
    max_size: int = 2048
    default_size: int = 64

    def avatar(self, key: str, display_name: str | None = None, *, stored: bool = True) -> Avatar:
        return Avatar(
            Identity(display_name=display_name or key, identity_key=key),
            store=self.store if stored else None,
            rasterizer=self.rasterizer,
        )

    def check_size(self, size: int) -> int:
        if not 1 <= size <= self.max_size:
            raise ValueError(f"Size must be between 1 and {self.max_size}")
        return size

    def find_avatar(self, key: str, size: int, display_name: str | None = None) -> bytes:
        avatar = self.avatar(key, display_name)
        size = self.check_size(size)
        try:
            return avatar.get_file(size)
        except AvatarNotFound:
            pass

        data = avatar.generate(size)
        if data is None:
            raise AvatarNotFound(key)
        logger.debug("Generated default avatar for %s", key)
        return data

    def guest_avatar(self, name: str, size: int) -> bytes:
        data = self.avatar(name, stored=False).generate(self.check_size(size))
        if data is None:
            raise AvatarNotFound(name)
        return data

    def update_avatar(self, key: str, data: bytes) -> None:
        if not data:
            raise ValueError("Empty avatar upload")
        self.avatar(key).set(data)

    def delete_avatar(self, key: str) -> None:
        if not self.avatar(key).remove():
            raise AvatarNotFound(key)
