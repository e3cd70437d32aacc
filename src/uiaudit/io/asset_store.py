"""Authored pixel dimensions of texture assets, read with Pillow."""

from __future__ import annotations

import os
from pathlib import Path

from PIL import Image

TEXTURE_EXTENSIONS: tuple[str, ...] = (
    ".png",
    ".jpg",
    ".jpeg",
    ".tga",
    ".psd",
    ".webp",
    ".bmp",
)


class AssetStore:
    """Maps texture paths to authored (width, height), caching lookups.

    Relative texture paths resolve against ``root`` when one is given.
    """

    def __init__(self, root: str | Path | None = None) -> None:
        self.root = Path(root) if root else None
        self._cache: dict[str, tuple[int, int] | None] = {}

    def resolve_path(self, texture_path: str) -> Path:
        path = Path(texture_path)
        if self.root is not None and not path.is_absolute():
            return self.root / path
        return path

    def pixel_size(self, texture_path: str) -> tuple[int, int] | None:
        """Return (width, height), or None for missing, unreadable or zero-area textures."""
        if not texture_path:
            return None
        if texture_path in self._cache:
            return self._cache[texture_path]

        size: tuple[int, int] | None
        # only the header is read, so the decompression bomb limit does not apply
        limit = Image.MAX_IMAGE_PIXELS
        Image.MAX_IMAGE_PIXELS = None
        try:
            with Image.open(self.resolve_path(texture_path)) as img:
                w, h = img.size
            size = (w, h) if w > 0 and h > 0 else None
        except (OSError, ValueError, Image.DecompressionBombError):
            size = None
        finally:
            Image.MAX_IMAGE_PIXELS = limit

        self._cache[texture_path] = size
        return size


def discover_textures(
    root: str | Path,
    extensions: tuple[str, ...] = TEXTURE_EXTENSIONS,
) -> list[str]:
    """Recursively discover texture files under root, sorted by path."""
    root = Path(root)
    found: list[str] = []
    ext_set = {e.lower() for e in extensions}
    for dirpath, _dirnames, filenames in os.walk(root):
        for fn in filenames:
            if any(fn.lower().endswith(ext) for ext in ext_set):
                found.append(os.path.join(dirpath, fn))
    found.sort()
    return found
