# iconcore/iconpacks/discovery.py
from __future__ import annotations

import logging
from collections.abc import Sequence

from iconcore.app.globals import config
from iconcore.system.registry import PackageRegistry
from .types import IconPack

logger = logging.getLogger(__name__)

__all__ = ["DEFAULT_INTENT_ACTIONS", "IconPackDiscovery"]



# Intent actions popular icon packs declare
DEFAULT_INTENT_ACTIONS: tuple[str, ...] = (
    "org.adw.launcher.THEMES",
    "com.gau.go.launcherex.theme",
)



class IconPackDiscovery:
    """Finds installed packages that advertise icon pack support."""

    def __init__(self, registry: PackageRegistry, *, intentActions: Sequence[str] | None = None) -> None:
        self._registry = registry
        if intentActions is None:
            configured = config("iconPacks.intentActions", list(DEFAULT_INTENT_ACTIONS))
            intentActions = configured if isinstance(configured, list) else DEFAULT_INTENT_ACTIONS
        self.intentActions: tuple[str, ...] = tuple(str(action) for action in intentActions)

    def listIconPacks(self) -> list[IconPack]:
        """
        Returns installed icon packs sorted by label, case-insensitively.

        A package advertising several actions appears once. Candidates whose
        metadata cannot be read are dropped. Only a failing registry query
        raises (RegistryUnavailableError).
        """
        result: dict[str, IconPack] = {}
        for action in self.intentActions:
            for activity in self._registry.queryIntentActivities(action):
                packageName = activity.packageName
                if packageName in result:
                    continue
                try:
                    appInfo = self._registry.getApplicationInfo(packageName)
                    label = str(self._registry.getApplicationLabel(appInfo))
                except Exception as err:
                    # Uninstalled mid-query, malformed manifest, ...
                    logger.debug("Ignoring icon pack candidate '%s': %s", packageName, err)
                    continue
                result[packageName] = IconPack(id=packageName, displayName=label)
        
        packs = sorted(result.values(), key=lambda pack: pack.displayName.lower())
        logger.debug("Discovered %d icon pack(s)", len(packs))
        return packs
