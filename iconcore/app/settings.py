# iconcore/app/settings.py
from __future__ import annotations
import json5, os
from pydantic import JsonValue
from pathlib import Path
from typing import Any, cast
from functools import lru_cache

from iconcore.app.paths import ICONCORE_DIR, USER_SETTINGS_PATH

import logging
logger = logging.getLogger(__name__)

__all__ = [
    "SETTINGS_DEFAULT_PATH", "SETTINGS", "loadUserSettings", "loadSettings",
    "reloadSettings", "deepMerge", "getByPath", "settings", "settingsBool",
]


SETTINGS_DEFAULT_PATH = ICONCORE_DIR / "settings_default.json5"
SETTINGS: JsonValue = (
    json5.loads(SETTINGS_DEFAULT_PATH.read_text(encoding="utf-8"))
    if SETTINGS_DEFAULT_PATH.exists()
    else {
        "__source": "ICONCORE_DEFAULTS",
        "iconPacks": {
            "intentActions": ["org.adw.launcher.THEMES", "com.gau.go.launcherex.theme"],
            "descriptorAsset": "appfilter.xml",
            "defaultIconSize": 192,
            "parseChunkSize": 16384,
        },
        "packages": {"roots": []},
        "debug": {"devModeEnabled": True},
        "logging": {"file": "iconcore.log", "maxBytes": 10 * 1024 * 1024, "backupCount": 5},
        "http": {"cors": {"allowOrigins": ["http://localhost:5173", "http://127.0.0.1:5173"]}},
    }
)



def _userSettingsPath() -> Path:
    override = os.environ.get("ICONCORE_SETTINGS")
    if override:
        return Path(os.path.expanduser(override))
    return Path(os.path.expanduser(str(USER_SETTINGS_PATH)))



def loadUserSettings() -> JsonValue:
    filePath = _userSettingsPath()
    if filePath.exists():
        try:
            return json5.loads(filePath.read_text(encoding="utf-8"))
        except Exception as err:
            logger.error("Failed to parse '%s': %s", filePath, err)
    return {}



@lru_cache(maxsize=1)
def loadSettings():
    return deepMerge(SETTINGS, loadUserSettings())



def reloadSettings() -> None:
    """Drops the memoized merge so the next access re-reads the user file."""
    loadSettings.cache_clear()



def deepMerge(first: JsonValue, second: JsonValue) -> JsonValue:
    """
    Returns a new JsonValue where keys from `second` override/extend `first`.
    Only merges recursively when BOTH sides are JSON objects (dicts).
    For all other JSON types (lists, strings, numbers, booleans, null),
    the right-hand value `second` replaces `first`.
    """
    if isinstance(first, dict) and isinstance(second, dict):
        out: dict[str, JsonValue] = dict(first)
        for key, value in second.items():
            if key in out:
                out[key] = deepMerge(out[key], cast(JsonValue, value))
            else:
                out[key] = cast(JsonValue, value)
        return cast(JsonValue, out)
    
    return cast(JsonValue, second)



def getByPath(obj: Any, path: str, default: Any | None = None) -> Any:
    """Walks a dotted path through nested dicts; returns `default` when any hop is missing."""
    if not isinstance(path, str) or not path:
        return default
    current: Any = obj
    for part in path.split("."):
        if not part or not isinstance(current, dict) or part not in current:
            return default
        current = current[part]
    return current

# ---------- Ergonomic accessors over merged settings ----------

def settings(path: str, default: Any = None) -> Any:
    """Returns value at `path` from merged settings, or `default` if missing."""
    val = getByPath(loadSettings(), path)
    return default if val is None else val



def settingsBool(path: str, default: bool = False) -> bool:
    """Returns bool value at `path` or `default` if missing."""
    val = getByPath(loadSettings(), path)
    if isinstance(val, bool):
        return val
    if val is None:
        return default
    return bool(val)
