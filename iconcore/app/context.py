# iconcore/app/context.py
from __future__ import annotations

import threading
from typing import Any



class _ProcessContext:
    def __init__(self) -> None:
        self._services: dict[str, Any] = {}
        self._lock = threading.Lock()
    
    def register(self, name: str, service: Any, *, overwrite: bool = False) -> None:
        with self._lock:
            if not overwrite and name in self._services:
                raise ValueError(f"Service '{name}' already registered")
            self._services[name] = service

    def unregister(self, name: str) -> None:
        with self._lock:
            self._services.pop(name, None)

    def get(self, name: str) -> Any | None:
        return self._services.get(name)

# Single instance
PROCESS_REGISTRY = _ProcessContext()
