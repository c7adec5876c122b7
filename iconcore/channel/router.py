# iconcore/channel/router.py
from __future__ import annotations

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse, Response

from iconcore.app.globals import getIconPackManager
from iconcore.core.errors import (
    EncodeError,
    PackNotFoundError,
    ParseError,
    RegistryUnavailableError,
)
from iconcore.core.logger import clearLogContext, setLogContext
from .models import (
    ICON_NOT_FOUND_CODE,
    ICON_PACK_ERROR_CODE,
    ICON_PACK_ICON_ERROR_CODE,
    ChannelError,
    IconPackModel,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/iconPacks", tags=["iconPacks"])

__all__ = ["router"]



def _error(status: int, code: str, message: str | None = None) -> JSONResponse:
    body = ChannelError(code=code, message=message)
    return JSONResponse(body.model_dump(exclude_none=True), status_code=status)



# Handlers are plain functions: the core blocks, so FastAPI runs them in its threadpool.
@router.get("")
def listIconPacks():
    try:
        packs = getIconPackManager().listIconPacks()
    except RegistryUnavailableError as err:
        logger.error("Icon pack discovery failed: %s", err)
        return _error(503, ICON_PACK_ERROR_CODE, str(err))
    payload = [IconPackModel.fromPack(pack).model_dump(by_alias=True) for pack in packs]
    return JSONResponse(payload, status_code=200)



@router.get("/{packId}/icons/{appId}")
def getIconForApp(packId: str, appId: str):
    setLogContext(packId=packId, appId=appId)
    try:
        data = getIconPackManager().getIconForApp(packId, appId)
    except PackNotFoundError as err:
        logger.info("Icon request for unknown pack: %s", err)
        return _error(404, ICON_PACK_ICON_ERROR_CODE, str(err))
    except (ParseError, EncodeError) as err:
        logger.warning("Icon request failed: %s", err)
        return _error(500, ICON_PACK_ICON_ERROR_CODE, str(err))
    finally:
        clearLogContext()
    
    if data is None:
        return _error(404, ICON_NOT_FOUND_CODE)
    return Response(content=data, media_type="image/png")
