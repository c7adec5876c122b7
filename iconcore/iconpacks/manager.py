# iconcore/iconpacks/manager.py
from __future__ import annotations

import logging

from iconcore.system.registry import FileSystemPackageRegistry, PackageRegistry
from .cache import PackIndexCache
from .discovery import IconPackDiscovery
from .normalizer import toEncodedRaster
from .resolver import IconResolver
from .types import IconPack

logger = logging.getLogger(__name__)

__all__ = ["IconPackManager"]



class IconPackManager:
    """
    Entry point for callers: lists installed icon packs and loads icons for apps.

    Everything runs synchronously on the caller's thread. The only shared state
    is the pack cache, which is safe to use from several threads.
    """

    def __init__(
        self,
        registry: PackageRegistry,
        *,
        discovery: IconPackDiscovery | None = None,
        cache: PackIndexCache | None = None,
        resolver: IconResolver | None = None,
        defaultIconSize: int | None = None,
    ) -> None:
        self.registry = registry
        self.discovery = discovery or IconPackDiscovery(registry)
        self.cache = cache or PackIndexCache(registry)
        self.resolver = resolver or IconResolver(registry, self.cache)
        self.defaultIconSize = defaultIconSize

    @classmethod
    def fromSettings(cls) -> IconPackManager:
        return cls(FileSystemPackageRegistry.fromSettings())

    def listIconPacks(self) -> list[IconPack]:
        return self.discovery.listIconPacks()

    def getIconForApp(self, packId: str | None, appId: str | None) -> bytes | None:
        """
        PNG bytes of the pack's icon for the app, or None when the pack has no
        icon for it. PackNotFoundError, ParseError and EncodeError propagate.
        """
        handle = self.resolver.resolveIcon(packId, appId)
        if handle is None:
            return None
        data = toEncodedRaster(handle, defaultSize=self.defaultIconSize)
        logger.debug("Encoded icon for '%s' from '%s' (%d bytes)", appId, packId, len(data))
        return data
