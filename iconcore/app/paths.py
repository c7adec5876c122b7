# iconcore/app/paths.py
from __future__ import annotations
from pathlib import Path



# Root directory structure constants
ICONCORE_DIR = Path(__file__).resolve().parent.parent   # iconcore/
USER_SETTINGS_PATH = Path("~/.iconcore/iconcore.json5")  # expanded on use
