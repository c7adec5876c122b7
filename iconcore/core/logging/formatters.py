# iconcore/core/logging/formatters.py
from __future__ import annotations

import json
import logging

from .context import getLogContext

__all__ = ["JsonFormatter", "DevFormatter"]



class JsonFormatter(logging.Formatter):
    """One-line JSON records for the rotating file log."""
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": int(record.created * 1000),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
            "ctx": getLogContext() or {},
            "thread": {"id": record.thread, "name": record.threadName},
        }

        if record.exc_info:
            excType = record.exc_info[0]
            excValue = record.exc_info[1]
            try:
                typ = getattr(excType, "__name__", type(excType).__name__)
                msg = str(excValue)
                stack = self.formatException(record.exc_info)
            except Exception:
                typ, msg, stack = "Error", "format failed", None
            base["exc"] = {"type": typ, "message": msg, "stack": stack}
        
        # default=str keeps odd context values (paths, ids) from breaking the record
        return json.dumps(base, ensure_ascii=False, separators=(",", ":"), default=str)



class DevFormatter(logging.Formatter):
    """Human-friendly console formatter (dev mode)."""
    def format(self, record: logging.LogRecord) -> str:
        ctx = getLogContext()
        ctxStr = ""
        if ctx:
            md = []
            for key in ("packId", "appId"):
                value = ctx.get(key)
                if value:
                    md.append(f"{key}={value}")
            if md:
                ctxStr = " [" + " ".join(md) + "]"
        msg = record.getMessage()
        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)
        if record.stack_info:
            msg += "\n" + str(record.stack_info)
        return f"{record.levelname}: [{record.name}] {msg}{ctxStr}"
