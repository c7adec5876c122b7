# iconcore/server.py
from __future__ import annotations

import logging

from iconcore.app.factory import createApp

# Basic logging setup, replaced once createApp() reads the logging settings
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
logger.info("Basic logging initiated...")


# Run with: uvicorn iconcore.server:app
app = createApp()
