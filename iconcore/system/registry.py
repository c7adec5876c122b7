# iconcore/system/registry.py
from __future__ import annotations

import json
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import json5

from iconcore.app.globals import config
from iconcore.core.errors import PackageNameNotFoundError, RegistryUnavailableError
from .components import ComponentKey
from .resources import FileSystemResourceContainer, ResourceContainer

logger = logging.getLogger(__name__)

__all__ = [
    "ACTION_MAIN",
    "CATEGORY_LAUNCHER",
    "ActivityInfo",
    "ApplicationInfo",
    "PackageRegistry",
    "FileSystemPackageRegistry",
]



ACTION_MAIN = "android.intent.action.MAIN"
CATEGORY_LAUNCHER = "android.intent.category.LAUNCHER"

_MANIFEST_NAMES: tuple[str, ...] = ("manifest.json5", "manifest.json")
_PACKAGE_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]*(\.[A-Za-z0-9_]+)+$")



@dataclass(frozen=True, slots=True)
class ActivityInfo:
    packageName: str
    name: str
    actions: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()

    @property
    def component(self) -> ComponentKey:
        return ComponentKey.of(self.packageName, self.name)



@dataclass(frozen=True, slots=True)
class ApplicationInfo:
    packageName: str
    # Declared label, or None when the manifest has none
    label: str | None
    # Directory that contains the manifest - the package root
    packageDir: Path
    manifestPath: Path
    activities: tuple[ActivityInfo, ...]



class PackageRegistry(Protocol):
    """The system's package/component registry as the icon pack core sees it."""

    def queryIntentActivities(self, action: str) -> list[ActivityInfo]:
        ...

    def getApplicationInfo(self, packageName: str) -> ApplicationInfo:
        ...

    def getApplicationLabel(self, info: ApplicationInfo) -> str:
        ...

    def getLaunchComponent(self, packageName: str) -> ComponentKey | None:
        ...

    def getResourcesForApplication(self, packageName: str) -> ResourceContainer:
        ...

# ------------------------------------------------------------------ #
# Manifest reading / normalization
# ------------------------------------------------------------------ #

def _findManifestPath(dirPath: Path) -> Path | None:
    for name in _MANIFEST_NAMES:
        candidate = dirPath / name
        if candidate.is_file():
            return candidate
    return None



def _loadManifestFile(path: Path) -> Mapping[str, Any]:
    if path.suffix == ".json5":
        rawJson = json5.loads(path.read_text(encoding="utf-8"))
    elif path.suffix == ".json":
        rawJson = json.loads(path.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unknown manifest file extension '{path.suffix}'")
    if rawJson is None or not isinstance(rawJson, dict):
        raise ValueError(f"Manifest file '{path}' is not a JSON object")
    return rawJson



def _stringTuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())



def _normalizeApplicationInfo(packageName: str, rawJson: Mapping[str, Any], manifestPath: Path) -> ApplicationInfo:
    declared = rawJson.get("package")
    if declared is not None and str(declared).strip() != packageName:
        raise ValueError(f"Manifest {str(manifestPath)} declares package {declared!r}, expected {packageName!r}")
    
    label = rawJson.get("label")
    if isinstance(label, str):
        label = label.strip() or None
    else:
        label = None
    
    activitiesRaw = rawJson.get("activities") or []
    if not isinstance(activitiesRaw, list):
        raise ValueError(f"'activities' in manifest {str(manifestPath)} must be a list")
    
    activities: list[ActivityInfo] = []
    for entry in activitiesRaw:
        if not isinstance(entry, Mapping):
            raise ValueError(f"Activity entry in manifest {str(manifestPath)} is not an object")
        name = str(entry.get("name") or "").strip()
        if not name:
            raise ValueError(f"Activity without a name in manifest {str(manifestPath)}")
        if name.startswith("."):
            name = packageName + name
        activities.append(ActivityInfo(
            packageName=packageName,
            name=name,
            actions=_stringTuple(entry.get("actions")),
            categories=_stringTuple(entry.get("categories")),
        ))
    
    return ApplicationInfo(
        packageName=packageName,
        label=label,
        packageDir=manifestPath.parent,
        manifestPath=manifestPath,
        activities=tuple(activities),
    )

# ------------------------------------------------------------------ #
# File system registry
# ------------------------------------------------------------------ #

class FileSystemPackageRegistry:
    """
    Package registry over one or more directories of unpacked packages.

    Each `<root>/<package.name>/manifest.json5` is an installed package. Roots
    are scanned on every query; earlier roots shadow later ones for the same
    package name. Nothing is cached here.
    """

    def __init__(self, roots: Iterable[Path | str]) -> None:
        self.roots: tuple[Path, ...] = tuple(Path(root).expanduser() for root in roots)

    @classmethod
    def fromSettings(cls) -> FileSystemPackageRegistry:
        roots = config("packages.roots", [])
        if not isinstance(roots, list):
            logger.warning("Setting 'packages.roots' must be a list, got %s", type(roots).__name__)
            roots = []
        return cls([str(root) for root in roots if root])

    # ----- Scanning -----

    def _installed(self) -> dict[str, Path]:
        """Maps package name -> manifest path across all roots."""
        out: dict[str, Path] = {}
        for root in self.roots:
            if not root.is_dir():
                logger.debug("Package root '%s' does not exist, skipping", root)
                continue
            try:
                children = sorted(root.iterdir())
            except OSError as err:
                raise RegistryUnavailableError(f"Cannot list package root '{root}': {err}") from err
            for child in children:
                if child.name in out or not _PACKAGE_RE.fullmatch(child.name):
                    continue
                try:
                    manifestPath = _findManifestPath(child)
                except OSError as err:
                    logger.debug("Cannot stat '%s': %s", child, err)
                    continue
                if manifestPath is not None:
                    out[child.name] = manifestPath
        return out

    def _manifestPathFor(self, packageName: str) -> Path:
        if not packageName or not _PACKAGE_RE.fullmatch(packageName):
            raise PackageNameNotFoundError(packageName)
        for root in self.roots:
            manifestPath = _findManifestPath(root / packageName)
            if manifestPath is not None:
                return manifestPath
        raise PackageNameNotFoundError(packageName)

    # ----- Queries -----

    def queryIntentActivities(self, action: str) -> list[ActivityInfo]:
        matches: list[ActivityInfo] = []
        for packageName, manifestPath in self._installed().items():
            try:
                info = _normalizeApplicationInfo(packageName, _loadManifestFile(manifestPath), manifestPath)
            except Exception as err:
                logger.debug("Skipping package '%s' with unreadable manifest: %s", packageName, err)
                continue
            matches.extend(activity for activity in info.activities if action in activity.actions)
        return matches

    def getApplicationInfo(self, packageName: str) -> ApplicationInfo:
        manifestPath = self._manifestPathFor(packageName)
        try:
            rawJson = _loadManifestFile(manifestPath)
        except FileNotFoundError as err:
            # Uninstalled between lookup and read
            raise PackageNameNotFoundError(packageName) from err
        return _normalizeApplicationInfo(packageName, rawJson, manifestPath)

    def getApplicationLabel(self, info: ApplicationInfo) -> str:
        return info.label or info.packageName

    def getLaunchComponent(self, packageName: str) -> ComponentKey | None:
        try:
            info = self.getApplicationInfo(packageName)
        except PackageNameNotFoundError:
            return None
        except (ValueError, OSError) as err:
            logger.warning("Package '%s' has an unreadable manifest: %s", packageName, err)
            return None
        for activity in info.activities:
            if ACTION_MAIN in activity.actions and CATEGORY_LAUNCHER in activity.categories:
                return activity.component
        return None

    def getResourcesForApplication(self, packageName: str) -> ResourceContainer:
        manifestPath = self._manifestPathFor(packageName)
        return FileSystemResourceContainer(packageName, manifestPath.parent)
