# iconcore/iconpacks/cache.py
from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future

from iconcore.core.errors import PackageNameNotFoundError, PackNotFoundError
from iconcore.system.registry import PackageRegistry
from iconcore.system.resources import ResourceContainer
from .appfilter import AppFilterParser
from .types import IconMapping, PackIndexEntry

logger = logging.getLogger(__name__)

__all__ = ["MappingParser", "PackIndexCache"]



MappingParser = Callable[[ResourceContainer], IconMapping]



class PackIndexCache:
    """
    Process-lifetime memo of parsed icon packs, keyed by pack id.

    Concurrency:
      - Built entries are read under a short dictionary lock only.
      - The first request for an id owns its build; concurrent requests for the
        same id wait on the owner's Future and receive the same entry (or the
        same exception).
      - Builds for different ids run independently.
      - Failed builds are not remembered; the next request retries.
    
    There is no eviction policy. `evict()` exists for callers that know a pack
    changed on disk.
    """

    def __init__(self, registry: PackageRegistry, parser: MappingParser | None = None) -> None:
        self._registry = registry
        self._parser: MappingParser = parser or AppFilterParser()
        self._lock = threading.Lock()
        self._entries: dict[str, PackIndexEntry] = {}
        self._pending: dict[str, Future[PackIndexEntry]] = {}

    def __contains__(self, packId: object) -> bool:
        with self._lock:
            return packId in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def getOrBuild(self, packId: str) -> PackIndexEntry:
        with self._lock:
            entry = self._entries.get(packId)
            if entry is not None:
                return entry
            pending = self._pending.get(packId)
            owner = pending is None
            if pending is None:
                pending = Future()
                self._pending[packId] = pending

        if not owner:
            return pending.result()

        try:
            entry = self._build(packId)
        except BaseException as exc:
            with self._lock:
                self._pending.pop(packId, None)
            pending.set_exception(exc)
            raise

        with self._lock:
            self._entries[packId] = entry
            self._pending.pop(packId, None)
        pending.set_result(entry)
        return entry

    def _build(self, packId: str) -> PackIndexEntry:
        try:
            resources = self._registry.getResourcesForApplication(packId)
        except PackageNameNotFoundError as err:
            raise PackNotFoundError(packId, "package is not installed") from err
        mapping = self._parser(resources)
        logger.debug("Cached icon pack '%s' (%d components)", packId, len(mapping))
        return PackIndexEntry(packId=packId, mapping=mapping, resources=resources)

    def evict(self, packId: str) -> bool:
        """Drops a built entry. Returns True when something was removed."""
        with self._lock:
            return self._entries.pop(packId, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
