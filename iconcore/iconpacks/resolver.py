# iconcore/iconpacks/resolver.py
from __future__ import annotations

import logging

from iconcore.core.errors import ResourceNotFoundError
from iconcore.system.artwork import ArtworkHandle
from iconcore.system.registry import PackageRegistry
from .cache import PackIndexCache

logger = logging.getLogger(__name__)

__all__ = ["IconResolver"]



def _isBlank(value: str | None) -> bool:
    return value is None or not str(value).strip()



class IconResolver:
    """Resolves (pack id, app id) to a piece of artwork inside that pack."""

    def __init__(self, registry: PackageRegistry, cache: PackIndexCache) -> None:
        self._registry = registry
        self._cache = cache

    def resolveIcon(self, packId: str | None, appId: str | None) -> ArtworkHandle | None:
        """
        Returns the pack's artwork for the app's launch component, or None when
        there is nothing to show. Only exact component matches count.

        Raises PackNotFoundError / ParseError when the pack itself cannot be
        indexed.
        """
        if _isBlank(packId) or _isBlank(appId):
            return None
        assert packId is not None and appId is not None

        component = self._registry.getLaunchComponent(appId)
        if component is None:
            logger.debug("App '%s' has no launch component", appId)
            return None

        entry = self._cache.getOrBuild(packId)
        artworkName = entry.mapping.artworkFor(component)
        if not artworkName:
            logger.debug("Pack '%s' has no artwork for %s", packId, component)
            return None

        resId = entry.resources.getIdentifier(artworkName, "drawable", packId)
        if resId <= 0:
            logger.debug("Pack '%s' maps %s to missing drawable '%s'", packId, component, artworkName)
            return None

        try:
            return entry.resources.getDrawable(resId)
        except ResourceNotFoundError as err:
            # Stale cache entry against a changed pack
            logger.debug("Pack '%s' drawable '%s' is gone: %s", packId, artworkName, err)
            return None
