# iconcore/core/logger.py
from __future__ import annotations
from .logging import (
    configureLogging,
    setLogContext,
    clearLogContext,
    getLogContext,
)

__all__ = [
    "configureLogging",
    "setLogContext",
    "clearLogContext",
    "getLogContext",
]
