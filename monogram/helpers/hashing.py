import hashlib
import re

from .colors import Color, build_palette

# 32 hex chars, optionally dash-grouped by 4 (uuid-like keys)
_CANONICAL_HEX = re.compile(r"([0-9a-f]{4}-?){8}")
_NON_HEX = re.compile(r"[^0-9a-f]+")


def normalize_key(identity_key: str) -> str:
    """Lowercased hex form of a key: kept as is when already md5/uuid shaped, digested otherwise."""
    key = identity_key.lower()
    if _CANONICAL_HEX.fullmatch(key) is None:
        key = hashlib.md5(key.encode("utf-8"), usedforsecurity=False).hexdigest()
    return _NON_HEX.sub("", key)


def hash_to_index(identity_key: str, maximum: int = 18) -> int:
    total = sum(int(char, 16) % 16 for char in normalize_key(identity_key))
    return total % maximum


def background_color(identity_key: str) -> Color:
    palette = build_palette()
    return palette[hash_to_index(identity_key, len(palette))]
