# iconcore/iconpacks/types.py
from __future__ import annotations
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from iconcore.system.components import ComponentKey
from iconcore.system.resources import ResourceContainer

__all__ = ["ComponentKey", "IconPack", "IconMapping", "PackIndexEntry"]



@dataclass(frozen=True, slots=True)
class IconPack:
    """
    A discovered icon pack provider. Recomputed on every discovery call.
    """
    id: str             # Package id of the provider, unique key
    displayName: str    # User-facing label, used for sorting and presentation

    @property
    def packageId(self) -> str:
        return self.id



class IconMapping(Mapping[str, "str | None"]):
    """
    Read-only component -> artwork-name index parsed from a pack's descriptor.

    Keys are component strings exactly as the descriptor spells them
    (`ComponentInfo{pkg/cls}`). Values may be None when an entry claimed a
    component without naming a drawable.
    """
    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, str | None] | None = None) -> None:
        self._entries: Mapping[str, str | None] = MappingProxyType(dict(entries or {}))

    def __getitem__(self, key: str) -> str | None:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"IconMapping({len(self._entries)} components)"

    def artworkFor(self, component: ComponentKey | str) -> str | None:
        """Artwork name for an exact component match; None when missing or empty."""
        return self._entries.get(str(component)) or None



@dataclass(frozen=True, slots=True)
class PackIndexEntry:
    """Parsed mapping of one pack plus the live resource container it resolves against."""
    packId: str
    mapping: IconMapping
    resources: ResourceContainer
