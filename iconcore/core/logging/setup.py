# iconcore/core/logging/setup.py
from __future__ import annotations
import logging
import logging.handlers

from iconcore.app.globals import config, configBool
from .formatters import DevFormatter, JsonFormatter

__all__ = [
    "NO_PROPAGATE",
    "configureLogging",
]



# Disable propagation from common libraries
NO_PROPAGATE = [
    "uvicorn", "uvicorn.access", "uvicorn.error",
    "fastapi", "httpcore.connection", "httpcore.http11",
    "httpx", "PIL",
]



def configureLogging():
    """
    Initiate the global logging configuration.

    Dev:
      - Console pretty logs (DEBUG)
      - JSON file log (DEBUG), when `logging.file` is set
    
    Prod:
      - Console INFO
      - JSON file logs INFO with rotation
    """
    devMode = configBool("debug.devModeEnabled", True)
    rootLevel = logging.DEBUG if devMode else logging.INFO

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(rootLevel)
    
    for name in NO_PROPAGATE:
        logging.getLogger(name).propagate = False

    consoleHandler = logging.StreamHandler()
    consoleHandler.setLevel(rootLevel)
    consoleHandler.setFormatter(DevFormatter())
    root.addHandler(consoleHandler)

    logFile = config("logging.file", None)
    if logFile:
        fileHandler = logging.handlers.RotatingFileHandler(
            str(logFile),
            maxBytes=int(config("logging.maxBytes", 10 * 1024 * 1024)),
            backupCount=int(config("logging.backupCount", 5)),
            encoding="utf-8"
        )
        fileHandler.setLevel(rootLevel)
        fileHandler.setFormatter(JsonFormatter())
        root.addHandler(fileHandler)

    # Per-logger tweaks (reduce noise)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)
    logging.getLogger("PIL").setLevel(logging.INFO)
