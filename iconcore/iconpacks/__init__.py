# iconcore/iconpacks/__init__.py
from .types import ComponentKey, IconPack, IconMapping, PackIndexEntry
from .appfilter import AppFilterParser, parseAppFilter
from .cache import PackIndexCache
from .discovery import IconPackDiscovery
from .resolver import IconResolver
from .normalizer import toEncodedRaster
from .manager import IconPackManager

__all__ = [
    "ComponentKey",
    "IconPack",
    "IconMapping",
    "PackIndexEntry",
    "AppFilterParser",
    "parseAppFilter",
    "PackIndexCache",
    "IconPackDiscovery",
    "IconResolver",
    "toEncodedRaster",
    "IconPackManager",
]
