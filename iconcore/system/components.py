# iconcore/system/components.py
from __future__ import annotations
from dataclasses import dataclass

__all__ = ["ComponentKey"]



@dataclass(frozen=True, slots=True)
class ComponentKey:
    """
    Canonical identifier of an application's launch entry point.

    `str()` renders the form icon pack descriptors use, e.g.
    `ComponentInfo{app.pkg/app.pkg.Main}`.
    """
    packageName: str
    className: str

    def __post_init__(self) -> None:
        if not self.packageName or not self.className:
            raise ValueError("ComponentKey needs both a package name and a class name")

    @classmethod
    def of(cls, packageName: str, className: str) -> ComponentKey:
        """Builds a key, expanding a leading-dot class name against the package."""
        if className.startswith("."):
            className = packageName + className
        return cls(packageName, className)

    def flatten(self) -> str:
        return f"{self.packageName}/{self.className}"

    def __str__(self) -> str:
        return f"ComponentInfo{{{self.flatten()}}}"
