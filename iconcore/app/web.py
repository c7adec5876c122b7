# iconcore/app/web.py
from __future__ import annotations

import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from iconcore.app.settings import loadSettings

router = APIRouter()



@router.get("/settings")
async def getSettings():
    return JSONResponse(loadSettings(), status_code=200)



@router.get("/health")
async def health():
    return {"ok": True, "ts": int(time.time() * 1000)}
