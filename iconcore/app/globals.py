# iconcore/app/globals.py
from __future__ import annotations
from typing import Any, cast, TYPE_CHECKING

from iconcore.app.context import PROCESS_REGISTRY
from iconcore.app.settings import settings, settingsBool
from iconcore.core.errors import ReactorScramError

if TYPE_CHECKING:
    from iconcore.iconpacks.manager import IconPackManager

__all__ = ["config", "configBool", "getIconPackManager"]



def config(path: str, default: Any = None) -> Any:
    return settings(path, default)



def configBool(path: str, default: bool = False) -> bool:
    return settingsBool(path, default)



def getIconPackManager() -> IconPackManager:
    manager = PROCESS_REGISTRY.get("iconPacks.manager")
    if manager is None:
        raise ReactorScramError(
            "IconPackManager is None.\n"
            "⚠️ ICON PACK MANAGER MISSING ⚠️\n"
            "Every app is about to wear its factory icon forever.\n"
            "Create the app through createApp() or register a manager first."
        )
    return cast("IconPackManager", manager)
