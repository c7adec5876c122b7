# iconcore/iconpacks/normalizer.py
from __future__ import annotations

import io
import logging

from PIL import Image

from iconcore.app.globals import config
from iconcore.core.errors import EncodeError
from iconcore.system.artwork import ArtworkHandle

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_ICON_SIZE", "toEncodedRaster"]



DEFAULT_ICON_SIZE = 192

# Raster modes the PNG encoder writes without loss; 32-bit "I" is not one of them
_PNG_MODES = frozenset({"1", "L", "LA", "I;16", "P", "RGB", "RGBA"})



def _render(handle: ArtworkHandle, defaultSize: int) -> Image.Image:
    width = handle.intrinsicWidth if handle.intrinsicWidth > 0 else defaultSize
    height = handle.intrinsicHeight if handle.intrinsicHeight > 0 else defaultSize
    try:
        canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        handle.draw(canvas)
    except (MemoryError, ValueError, OSError) as err:
        raise EncodeError(f"Cannot render artwork into {width}x{height} raster: {err}") from err
    return canvas



def toEncodedRaster(handle: ArtworkHandle, *, defaultSize: int | None = None) -> bytes:
    """
    Returns PNG bytes for `handle`.

    Uses the handle's own raster when it has one; otherwise renders it into a
    transparent RGBA buffer of its intrinsic size, or `defaultSize` square
    (192 unless configured) when that is unknown.
    """
    bitmap = handle.bitmap
    if bitmap is None:
        size = defaultSize or int(config("iconPacks.defaultIconSize", DEFAULT_ICON_SIZE))
        bitmap = _render(handle, size)
    
    buffer = io.BytesIO()
    try:
        if bitmap.mode not in _PNG_MODES:
            bitmap = bitmap.convert("RGBA")
        bitmap.save(buffer, format="PNG")
    except (MemoryError, ValueError, OSError) as err:
        raise EncodeError(f"Cannot encode {bitmap.width}x{bitmap.height} raster as PNG: {err}") from err
    return buffer.getvalue()
