# iconcore/channel/models.py
from __future__ import annotations
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from iconcore.iconpacks.types import IconPack

__all__ = [
    "ICON_PACK_ERROR_CODE",
    "ICON_PACK_ICON_ERROR_CODE",
    "ICON_NOT_FOUND_CODE",
    "IconPackModel",
    "ChannelError",
]



ICON_PACK_ERROR_CODE = "ICON_PACK_ERROR"
ICON_PACK_ICON_ERROR_CODE = "ICON_PACK_ICON_ERROR"
ICON_NOT_FOUND_CODE = "ICON_NOT_FOUND"



class IconPackModel(BaseModel):
    """Wire shape of one discovered icon pack."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    package_id: str
    display_name: str

    @classmethod
    def fromPack(cls, pack: IconPack) -> IconPackModel:
        return cls(package_id=pack.packageId, display_name=pack.displayName)



class ChannelError(BaseModel):
    """Error body returned by the icon pack routes."""
    model_config = ConfigDict(extra="forbid")

    code: str
    message: str | None = None
