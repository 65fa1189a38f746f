from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from PIL import Image, UnidentifiedImageError

from .colors import Color
from .hashing import background_color
from .raster import Rasterizer
from .store import AvatarNotFound, FolderAvatarStore
from .text import extract_glyph
from .vector import VectorDescriptor, render_vector

logger = logging.getLogger(__name__)


class DisplayNameProvider(Protocol):
    @property
    def display_name(self) -> str: ...


@dataclass(frozen=True, slots=True)
class Identity:
    """A user, guest or group as seen by the avatar code."""

    display_name: str
    identity_key: Optional[str] = None


class Avatar:
    """
    Avatar of one identity.

    `get` only returns stored (uploaded) avatars, `generate` builds the
    default letter avatar. Choosing between the two is left to the caller.
    """

    def __init__(
        self,
        profile: DisplayNameProvider,
        *,
        store: Optional[FolderAvatarStore] = None,
        rasterizer: Optional[Rasterizer] = None,
        identity_key: Optional[str] = None,
    ) -> None:
        self.profile = profile
        self.store = store
        self.rasterizer = rasterizer
        self._identity_key = identity_key

    @property
    def display_name(self) -> str:
        return self.profile.display_name or ""

    @property
    def identity_key(self) -> str:
        key = self._identity_key or getattr(self.profile, "identity_key", None)
        return key or self.display_name

    # -- Letter avatar ------------------------------------------------------
    def text(self) -> str:
        return extract_glyph(self.display_name)

    def background_color(self) -> Color:
        return background_color(self.identity_key)

    def vector(self, size: int) -> VectorDescriptor:
        return render_vector(int(size), self.background_color(), self.text())

    def generate(self, size: int) -> Optional[bytes]:
        if self.rasterizer is None:
            logger.info("No rasterizer configured, letter avatar unavailable")
            return None
        return self.rasterizer.rasterize(self.vector(size))

    # -- Stored avatar ------------------------------------------------------
    def get_file(self, size: int) -> bytes:
        if self.store is None:
            raise AvatarNotFound(self.identity_key)
        return self.store.get_file(self.identity_key, size)

    def get(self, size: int = 64) -> Optional[Image.Image]:
        size = int(size)
        try:
            data = self.get_file(size)
        except AvatarNotFound:
            return None

        try:
            avatar = Image.open(io.BytesIO(data))
            avatar.load()
        except (UnidentifiedImageError, OSError) as exc:
            logger.warning("Stored avatar of %s cannot be decoded: %s", self.identity_key, exc)
            return None
        return avatar

    def exists(self) -> bool:
        return self.store is not None and self.store.exists(self.identity_key)

    def set(self, data: bytes) -> None:
        if self.store is None:
            raise ValueError("Avatar has no store")
        self.store.save(self.identity_key, data)

    def remove(self) -> bool:
        return self.store is not None and self.store.remove(self.identity_key)
