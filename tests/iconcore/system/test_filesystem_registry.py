# tests/iconcore/system/test_filesystem_registry.py
from __future__ import annotations

import pytest
from PIL import Image

from iconcore.core.errors import PackageNameNotFoundError, ResourceNotFoundError
from iconcore.system.artwork import BitmapArtwork
from iconcore.system.components import ComponentKey
from iconcore.system import registry as registry_module
from iconcore.system.registry import FileSystemPackageRegistry


THEMES = "org.adw.launcher.THEMES"


@pytest.fixture()
def registry(package_root):
    return FileSystemPackageRegistry([package_root])


def test_query_returns_matching_activities(registry, install_package):
    install_package("pack.icons", label="Icons", iconPack=True)
    install_package("app.pkg", label="App", launcher=True)

    matches = registry.queryIntentActivities(THEMES)

    assert [(a.packageName, a.name) for a in matches] == [("pack.icons", "pack.icons.IconPackActivity")]
    assert matches[0].component == ComponentKey("pack.icons", "pack.icons.IconPackActivity")


def test_query_skips_malformed_manifests(registry, install_package):
    install_package("pack.good", iconPack=True)
    install_package("pack.bad", manifest="{ this is : not json5 ")
    install_package("pack.wrongtype", manifest='{activities: "nope"}')

    assert [a.packageName for a in registry.queryIntentActivities(THEMES)] == ["pack.good"]


def test_application_info_and_label(registry, install_package):
    install_package("app.pkg", label="  My App  ", launcher=True)
    install_package("app.nolabel", launcher=True)

    info = registry.getApplicationInfo("app.pkg")
    assert info.label == "My App"
    assert registry.getApplicationLabel(info) == "My App"
    assert registry.getApplicationLabel(registry.getApplicationInfo("app.nolabel")) == "app.nolabel"


def test_application_info_rejects_mismatched_package(registry, install_package):
    install_package("app.pkg", manifest='{package: "evil.pkg"}')
    with pytest.raises(ValueError):
        registry.getApplicationInfo("app.pkg")


def test_unknown_package_raises_name_not_found(registry):
    with pytest.raises(PackageNameNotFoundError):
        registry.getApplicationInfo("not.installed")
    with pytest.raises(PackageNameNotFoundError):
        registry.getResourcesForApplication("not.installed")
    with pytest.raises(PackageNameNotFoundError):
        registry.getApplicationInfo("../escape")


def test_launch_component_needs_main_and_launcher(registry, install_package):
    install_package("app.pkg", launcher=True)
    install_package("app.service", activities=[{"name": ".Settings", "actions": ["android.intent.action.MAIN"]}])

    assert registry.getLaunchComponent("app.pkg") == ComponentKey("app.pkg", "app.pkg.Main")
    assert str(registry.getLaunchComponent("app.pkg")) == "ComponentInfo{app.pkg/app.pkg.Main}"
    assert registry.getLaunchComponent("app.service") is None
    assert registry.getLaunchComponent("not.installed") is None


def test_launch_component_of_malformed_manifest_is_none(registry, install_package):
    install_package("app.broken", manifest="[1, 2, 3]")
    assert registry.getLaunchComponent("app.broken") is None


def test_missing_root_is_skipped(tmp_path, package_root, install_package):
    install_package("pack.icons", iconPack=True)
    registry = FileSystemPackageRegistry([tmp_path / "does-not-exist", package_root])
    assert [a.packageName for a in registry.queryIntentActivities(THEMES)] == ["pack.icons"]


def test_earlier_root_shadows_later(tmp_path, package_root, install_package):
    install_package("app.pkg", label="Second Root", launcher=True)
    first = tmp_path / "first"
    (first / "app.pkg").mkdir(parents=True)
    (first / "app.pkg" / "manifest.json5").write_text('{label: "First Root"}', encoding="utf-8")

    registry = FileSystemPackageRegistry([first, package_root])
    assert registry.getApplicationInfo("app.pkg").label == "First Root"


# ----------------------------
# Resources
# ----------------------------

def test_open_asset_reads_descriptor(registry, install_package, appfilter):
    doc = appfilter(("ComponentInfo{a.b/a.b.C}", "icon_c"))
    install_package("pack.icons", iconPack=True, appfilter=doc)

    with registry.getResourcesForApplication("pack.icons").openAsset("appfilter.xml") as stream:
        assert stream.read() == doc


def test_open_asset_rejects_traversal(registry, install_package):
    install_package("pack.icons", iconPack=True)
    resources = registry.getResourcesForApplication("pack.icons")
    with pytest.raises(FileNotFoundError):
        resources.openAsset("../manifest.json5")
    with pytest.raises(FileNotFoundError):
        resources.openAsset("appfilter.xml")


def test_drawable_lookup(registry, install_package, images):
    install_package("pack.icons", iconPack=True, drawables={"icon_app": images.solid(48, 48)})
    resources = registry.getResourcesForApplication("pack.icons")

    resId = resources.getIdentifier("icon_app", "drawable", "pack.icons")
    assert resId > 0
    handle = resources.getDrawable(resId)
    assert isinstance(handle, BitmapArtwork)
    assert (handle.intrinsicWidth, handle.intrinsicHeight) == (48, 48)


def test_identifier_requires_type_and_package(registry, install_package, images):
    install_package("pack.icons", iconPack=True, drawables={"icon_app": images.solid(8, 8)})
    resources = registry.getResourcesForApplication("pack.icons")

    assert resources.getIdentifier("icon_app", "mipmap", "pack.icons") == 0
    assert resources.getIdentifier("icon_app", "drawable", "other.pack") == 0
    assert resources.getIdentifier("icon_missing", "drawable", "pack.icons") == 0
    assert resources.getIdentifier("", "drawable", "pack.icons") == 0


def test_densest_bucket_wins(registry, install_package, images):
    install_package("pack.icons", iconPack=True, drawables={"icon_app": images.solid(48, 48)}, bucket="drawable")
    install_package("pack.icons", iconPack=True, drawables={"icon_app": images.solid(192, 192)}, bucket="drawable-xxxhdpi")
    install_package("pack.icons", iconPack=True, drawables={"icon_app": images.solid(96, 96)}, bucket="drawable-xhdpi")
    resources = registry.getResourcesForApplication("pack.icons")

    handle = resources.getDrawable(resources.getIdentifier("icon_app", "drawable", "pack.icons"))
    assert handle.intrinsicWidth == 192


def test_vanished_drawable_raises_resource_not_found(registry, install_package, images):
    pkgDir = install_package("pack.icons", iconPack=True, drawables={"icon_app": images.solid(8, 8)})
    resources = registry.getResourcesForApplication("pack.icons")
    resId = resources.getIdentifier("icon_app", "drawable", "pack.icons")

    (pkgDir / "res" / "drawable-nodpi" / "icon_app.png").unlink()

    with pytest.raises(ResourceNotFoundError):
        resources.getDrawable(resId)
    with pytest.raises(ResourceNotFoundError):
        resources.getDrawable(12345)


def test_undecodable_drawable_raises_resource_not_found(registry, install_package):
    pkgDir = install_package("pack.icons", iconPack=True)
    (pkgDir / "res" / "drawable").mkdir(parents=True)
    (pkgDir / "res" / "drawable" / "icon_bad.png").write_bytes(b"definitely not a png")
    resources = registry.getResourcesForApplication("pack.icons")

    with pytest.raises(ResourceNotFoundError):
        resources.getDrawable(resources.getIdentifier("icon_bad", "drawable", "pack.icons"))


def test_oversized_drawable_raises_resource_not_found(monkeypatch, registry, install_package, images):
    install_package("pack.icons", iconPack=True, drawables={"icon_huge": images.solid(64, 64)})
    resources = registry.getResourcesForApplication("pack.icons")
    resId = resources.getIdentifier("icon_huge", "drawable", "pack.icons")

    # 64x64 is more than twice the limit, which Pillow refuses outright
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

    with pytest.raises(ResourceNotFoundError):
        resources.getDrawable(resId)


def test_launch_component_of_unreadable_manifest_is_none(monkeypatch, registry, install_package):
    install_package("app.locked", launcher=True)

    def _denied(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(registry_module, "_loadManifestFile", _denied)

    assert registry.getLaunchComponent("app.locked") is None
