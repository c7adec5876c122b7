# iconcore/system/artwork.py
from __future__ import annotations
from collections.abc import Callable

from PIL import Image

__all__ = ["ArtworkHandle", "BitmapArtwork", "RenderedArtwork"]



class ArtworkHandle:
    """
    Opaque reference to a single image resource inside a pack.

    A handle either carries a concrete raster (`bitmap`) or knows how to render
    itself into a canvas of any size. Intrinsic sizes <= 0 mean "unknown".
    """
    bitmap: Image.Image | None = None

    @property
    def intrinsicWidth(self) -> int:
        return -1

    @property
    def intrinsicHeight(self) -> int:
        return -1

    def draw(self, canvas: Image.Image) -> None:
        raise NotImplementedError



class BitmapArtwork(ArtworkHandle):
    def __init__(self, image: Image.Image) -> None:
        self.bitmap = image

    @property
    def intrinsicWidth(self) -> int:
        return self.bitmap.width if self.bitmap is not None else -1

    @property
    def intrinsicHeight(self) -> int:
        return self.bitmap.height if self.bitmap is not None else -1

    def draw(self, canvas: Image.Image) -> None:
        if self.bitmap is None:
            return
        src = self.bitmap.convert("RGBA")
        if src.size != canvas.size:
            src = src.resize(canvas.size, Image.Resampling.LANCZOS)
        canvas.alpha_composite(src)

    def __repr__(self) -> str:
        return f"BitmapArtwork({self.intrinsicWidth}x{self.intrinsicHeight})"



class RenderedArtwork(ArtworkHandle):
    """Artwork without a backing raster; `render` paints into the full canvas it receives."""
    def __init__(self, render: Callable[[Image.Image], None], width: int = -1, height: int = -1) -> None:
        self._render = render
        self._width = int(width)
        self._height = int(height)

    @property
    def intrinsicWidth(self) -> int:
        return self._width

    @property
    def intrinsicHeight(self) -> int:
        return self._height

    def draw(self, canvas: Image.Image) -> None:
        self._render(canvas)
