# iconcore/system/resources.py
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import BinaryIO, Protocol

from PIL import Image

from iconcore.core.errors import ResourceNotFoundError
from .artwork import ArtworkHandle, BitmapArtwork

logger = logging.getLogger(__name__)

__all__ = [
    "DRAWABLE_EXTENSIONS",
    "ResourceContainer",
    "FileSystemResourceContainer",
]



DRAWABLE_EXTENSIONS: tuple[str, ...] = (".png", ".webp", ".jpg", ".jpeg", ".gif", ".bmp")

# Denser buckets win when several carry the same drawable name.
_DENSITY_RANK: dict[str, int] = {
    "xxxhdpi": 6,
    "xxhdpi": 5,
    "xhdpi": 4,
    "hdpi": 3,
    "mdpi": 2,
    "nodpi": 1,
}

# Identifiers look like platform drawable ids so they are never 0 or negative.
_ID_BASE = 0x7F020000



class ResourceContainer(Protocol):
    """Per-package resource namespace: raw assets plus named drawables."""
    packageName: str

    def openAsset(self, name: str) -> BinaryIO:
        ...

    def getIdentifier(self, name: str, defType: str, defPackage: str) -> int:
        ...

    def getDrawable(self, resId: int) -> ArtworkHandle:
        ...



def _densityRank(dirName: str) -> int | None:
    """Returns the density rank of a `drawable[-qualifiers]` directory, or None for other dirs."""
    if dirName == "drawable":
        return 0
    if not dirName.startswith("drawable-"):
        return None
    qualifiers = dirName.split("-")[1:]
    return max((_DENSITY_RANK.get(q, 0) for q in qualifiers), default=0)



class FileSystemResourceContainer:
    """
    Resource container backed by an unpacked package directory.

    Layout:
      <packageDir>/assets/<name>                      raw assets (appfilter.xml)
      <packageDir>/res/drawable[-qualifiers]/<name>.<ext>  raster drawables
    
    The drawable index is built on first use and kept for the container's
    lifetime. Files removed afterwards surface as ResourceNotFoundError.
    """

    def __init__(self, packageName: str, packageDir: Path) -> None:
        self.packageName = packageName
        self.packageDir = Path(packageDir)
        self._lock = threading.Lock()
        self._ids: dict[str, int] | None = None
        self._paths: dict[int, Path] = {}

    def __repr__(self) -> str:
        return f"FileSystemResourceContainer({self.packageName!r}, {str(self.packageDir)!r})"

    # ----- Assets -----

    def openAsset(self, name: str) -> BinaryIO:
        assetsDir = (self.packageDir / "assets").resolve(strict=False)
        path = (assetsDir / name).resolve(strict=False)
        # Must remain inside the assets root
        if not path.is_relative_to(assetsDir):
            raise FileNotFoundError(f"Asset '{name}' points outside of {self.packageName} assets")
        return path.open("rb")

    # ----- Drawables -----

    def _index(self) -> dict[str, int]:
        with self._lock:
            if self._ids is not None:
                return self._ids
            best: dict[str, tuple[int, Path]] = {}
            resDir = self.packageDir / "res"
            if resDir.is_dir():
                for child in sorted(resDir.iterdir()):
                    rank = _densityRank(child.name)
                    if rank is None or not child.is_dir():
                        continue
                    for file in sorted(child.iterdir()):
                        if not file.is_file() or file.suffix.lower() not in DRAWABLE_EXTENSIONS:
                            continue
                        current = best.get(file.stem)
                        if current is None or rank > current[0]:
                            best[file.stem] = (rank, file)
            ids: dict[str, int] = {}
            for offset, name in enumerate(sorted(best), start=1):
                resId = _ID_BASE + offset
                ids[name] = resId
                self._paths[resId] = best[name][1]
            self._ids = ids
            logger.debug("Indexed %d drawables in '%s'", len(ids), self.packageName)
            return ids

    def getIdentifier(self, name: str, defType: str, defPackage: str) -> int:
        if defType != "drawable" or defPackage != self.packageName or not name:
            return 0
        return self._index().get(name, 0)

    def getDrawable(self, resId: int) -> ArtworkHandle:
        self._index()
        path = self._paths.get(resId)
        if path is None:
            raise ResourceNotFoundError(f"Resource 0x{resId:08x} not found in '{self.packageName}'")
        try:
            with Image.open(path) as img:
                image = img.copy()
        except (OSError, Image.DecompressionBombError) as err:
            # Vanished, undecodable or oversized
            raise ResourceNotFoundError(f"Drawable '{path.name}' of '{self.packageName}' cannot be loaded: {err}") from err
        return BitmapArtwork(image)
