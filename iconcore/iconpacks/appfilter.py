# iconcore/iconpacks/appfilter.py
from __future__ import annotations

import logging
from typing import BinaryIO
from xml.etree import ElementTree

from iconcore.app.globals import config
from iconcore.core.errors import ParseError
from iconcore.system.resources import ResourceContainer
from .types import IconMapping

logger = logging.getLogger(__name__)

__all__ = ["ITEM_TAG", "COMPONENT_ATTR", "DRAWABLE_ATTR", "parseAppFilter", "AppFilterParser"]



ITEM_TAG = "item"
COMPONENT_ATTR = "component"
DRAWABLE_ATTR = "drawable"

_DEFAULT_CHUNK_SIZE = 16 * 1024



def _localName(tag: str) -> str:
    return tag.rpartition("}")[2]



class _AppFilterWalk:
    """Records the first drawable per component while pull events stream in."""

    def __init__(self) -> None:
        self.entries: dict[str, str | None] = {}
        self.skipped = 0
        self.root: ElementTree.Element | None = None

    def drain(self, parser: ElementTree.XMLPullParser) -> None:
        for event, elem in parser.read_events():
            if self.root is None:
                self.root = elem
            if event == "end":
                elem.clear()
                if _localName(elem.tag) == ITEM_TAG:
                    # Detach finished items so the root does not accumulate them
                    self.root.clear()
                continue
            if _localName(elem.tag) != ITEM_TAG:
                continue
            component = elem.get(COMPONENT_ATTR)
            if not component or not component.strip():
                self.skipped += 1
                continue
            if component not in self.entries:
                self.entries[component] = elem.get(DRAWABLE_ATTR)



def parseAppFilter(stream: BinaryIO, *, packId: str = "", chunkSize: int | None = None) -> IconMapping:
    """
    Streams an appfilter document and returns its component -> drawable index.

    The first occurrence of a component wins. Entries without a component are
    skipped. Corruption or I/O failure mid-document ends the walk and keeps
    what was collected so far.
    """
    size = chunkSize if chunkSize and chunkSize > 0 else _DEFAULT_CHUNK_SIZE
    walk = _AppFilterWalk()
    parser = ElementTree.XMLPullParser(events=("start", "end"))
    try:
        while True:
            chunk = stream.read(size)
            if not chunk:
                break
            parser.feed(chunk)
            walk.drain(parser)
        parser.close()
        walk.drain(parser)
    except (ElementTree.ParseError, OSError, ValueError) as err:
        # Events before the failure point were already consumed by the walk
        logger.debug("Descriptor of '%s' cut short after %d entries: %s", packId, len(walk.entries), err)
    if walk.skipped:
        logger.debug("Descriptor of '%s': skipped %d entries without a component", packId, walk.skipped)
    return IconMapping(walk.entries)



class AppFilterParser:
    """Opens a pack's descriptor asset and parses it into an IconMapping."""

    def __init__(self, *, descriptorAsset: str | None = None, chunkSize: int | None = None) -> None:
        self.descriptorAsset = descriptorAsset or str(config("iconPacks.descriptorAsset", "appfilter.xml"))
        self.chunkSize = chunkSize or int(config("iconPacks.parseChunkSize", _DEFAULT_CHUNK_SIZE))

    def parse(self, resources: ResourceContainer) -> IconMapping:
        packId = resources.packageName
        try:
            stream = resources.openAsset(self.descriptorAsset)
        except OSError as err:
            raise ParseError(packId, f"cannot open '{self.descriptorAsset}': {err}") from err
        with stream:
            mapping = parseAppFilter(stream, packId=packId, chunkSize=self.chunkSize)
        logger.info("Parsed %s of '%s': %d components", self.descriptorAsset, packId, len(mapping))
        return mapping

    __call__ = parse
