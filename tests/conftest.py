import io
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import json5
import pytest
from PIL import Image

from iconcore.app.settings import reloadSettings
from iconcore.core.errors import PackageNameNotFoundError, ResourceNotFoundError
from iconcore.system.artwork import ArtworkHandle
from iconcore.system.components import ComponentKey
from iconcore.system.registry import (
    ACTION_MAIN,
    CATEGORY_LAUNCHER,
    ActivityInfo,
    ApplicationInfo,
)

THEMES_ACTION = "org.adw.launcher.THEMES"



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep the developer's ~/.iconcore settings out of every test."""
    monkeypatch.setenv("ICONCORE_SETTINGS", str(tmp_path / "no-user-settings.json5"))
    reloadSettings()
    yield
    reloadSettings()


# ----------------------------
# Images
# ----------------------------

def solid_image(width: int, height: int, color=(200, 30, 30, 255), mode: str = "RGBA") -> Image.Image:
    return Image.new(mode, (width, height), color)


def png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def decode_png(data: bytes) -> Image.Image:
    image = Image.open(io.BytesIO(data))
    assert image.format == "PNG"
    image.load()
    return image


@pytest.fixture()
def images():
    """Image helpers: solid(w, h), png(image), decode(bytes)."""
    class _Images:
        solid = staticmethod(solid_image)
        png = staticmethod(png_bytes)
        decode = staticmethod(decode_png)
    return _Images


# ----------------------------
# In-memory registry doubles
# ----------------------------

class FakeResources:
    """Stand-in for a pack's ResourceContainer."""

    def __init__(self, packageName: str, descriptor: bytes | None, drawables: dict[str, ArtworkHandle] | None = None) -> None:
        self.packageName = packageName
        self.descriptor = descriptor
        self.drawables: dict[str, ArtworkHandle] = dict(drawables or {})
        self.assetOpens = 0
        self._ids = {name: 0x7F020001 + idx for idx, name in enumerate(sorted(self.drawables))}

    def openAsset(self, name: str):
        self.assetOpens += 1
        if self.descriptor is None or name != "appfilter.xml":
            raise FileNotFoundError(name)
        return io.BytesIO(self.descriptor)

    def getIdentifier(self, name: str, defType: str, defPackage: str) -> int:
        if defType != "drawable" or defPackage != self.packageName:
            return 0
        return self._ids.get(name, 0)

    def getDrawable(self, resId: int) -> ArtworkHandle:
        for name, knownId in self._ids.items():
            if knownId == resId and name in self.drawables:
                return self.drawables[name]
        raise ResourceNotFoundError(f"0x{resId:08x}")


class FakeRegistry:
    """
    Stand-in for the PackageRegistry. Packages are registered with add();
    `broken` packages fail metadata lookups, `unavailable` fails every query.
    """

    def __init__(self) -> None:
        self.packages: dict[str, dict[str, Any]] = {}
        self.unavailable: Exception | None = None

    def add(
        self,
        packageName: str,
        *,
        label: str | None = None,
        actions: tuple[str, ...] = (),
        launchActivity: str | None = None,
        resources: FakeResources | None = None,
        broken: bool = False,
    ) -> "FakeRegistry":
        self.packages[packageName] = {
            "label": label,
            "actions": actions,
            "launch": ComponentKey.of(packageName, launchActivity) if launchActivity else None,
            "resources": resources,
            "broken": broken,
        }
        return self

    def queryIntentActivities(self, action: str) -> list[ActivityInfo]:
        if self.unavailable is not None:
            raise self.unavailable
        return [
            ActivityInfo(packageName=name, name=f"{name}.Theme", actions=pkg["actions"])
            for name, pkg in self.packages.items()
            if action in pkg["actions"]
        ]

    def getApplicationInfo(self, packageName: str) -> ApplicationInfo:
        pkg = self.packages.get(packageName)
        if pkg is None:
            raise PackageNameNotFoundError(packageName)
        if pkg["broken"]:
            raise ValueError(f"malformed manifest for {packageName}")
        return ApplicationInfo(
            packageName=packageName,
            label=pkg["label"],
            packageDir=Path("/nonexistent") / packageName,
            manifestPath=Path("/nonexistent") / packageName / "manifest.json5",
            activities=(),
        )

    def getApplicationLabel(self, info: ApplicationInfo) -> str:
        return info.label or info.packageName

    def getLaunchComponent(self, packageName: str) -> ComponentKey | None:
        pkg = self.packages.get(packageName)
        return pkg["launch"] if pkg else None

    def getResourcesForApplication(self, packageName: str) -> FakeResources:
        pkg = self.packages.get(packageName)
        if pkg is None or pkg["resources"] is None:
            raise PackageNameNotFoundError(packageName)
        return pkg["resources"]


@pytest.fixture()
def fake_registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture()
def fake_resources() -> Callable[..., FakeResources]:
    return FakeResources


def appfilter_xml(*items: tuple[str | None, str | None]) -> bytes:
    """Builds an appfilter document; None leaves the attribute out."""
    lines = ['<?xml version="1.0" encoding="utf-8"?>', "<resources>"]
    for component, drawable in items:
        attrs = []
        if component is not None:
            attrs.append(f'component="{component}"')
        if drawable is not None:
            attrs.append(f'drawable="{drawable}"')
        lines.append(f"    <item {' '.join(attrs)} />")
    lines.append("</resources>")
    return "\n".join(lines).encode("utf-8")


@pytest.fixture()
def appfilter() -> Callable[..., bytes]:
    return appfilter_xml


# ----------------------------
# Packages on disk
# ----------------------------

@pytest.fixture()
def package_root(tmp_path) -> Path:
    root = tmp_path / "packages"
    root.mkdir()
    return root


@pytest.fixture()
def install_package(package_root) -> Callable[..., Path]:
    """
    Writes an unpacked package under `package_root`:
      manifest.json5, assets/appfilter.xml, res/<bucket>/<name>.png
    """
    def _install(
        packageName: str,
        *,
        label: str | None = None,
        activities: list[dict[str, Any]] | None = None,
        launcher: bool = False,
        iconPack: bool = False,
        appfilter: bytes | None = None,
        drawables: dict[str, Image.Image] | None = None,
        bucket: str = "drawable-nodpi",
        manifest: str | None = None,
    ) -> Path:
        pkgDir = package_root / packageName
        pkgDir.mkdir(parents=True, exist_ok=True)
        if manifest is not None:
            (pkgDir / "manifest.json5").write_text(manifest, encoding="utf-8")
        else:
            acts = list(activities or [])
            if launcher:
                acts.append({"name": ".Main", "actions": [ACTION_MAIN], "categories": [CATEGORY_LAUNCHER]})
            if iconPack:
                acts.append({"name": ".IconPackActivity", "actions": [THEMES_ACTION]})
            payload: dict[str, Any] = {"package": packageName, "activities": acts}
            if label is not None:
                payload["label"] = label
            (pkgDir / "manifest.json5").write_text(json5.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        if appfilter is not None:
            (pkgDir / "assets").mkdir(exist_ok=True)
            (pkgDir / "assets" / "appfilter.xml").write_bytes(appfilter)
        for name, image in (drawables or {}).items():
            target = pkgDir / "res" / bucket
            target.mkdir(parents=True, exist_ok=True)
            image.save(target / f"{name}.png", format="PNG")
        return pkgDir
    return _install
