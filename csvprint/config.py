from __future__ import annotations

import logging
import os

from .rules import DEFAULT_DOCUMENT_TITLE

# ============================
# Logging
# ============================
LOG_LEVEL = os.environ.get("CSVPRINT_LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ============================
# Config
# ============================
DOCUMENT_TITLE = os.environ.get("CSVPRINT_DOCUMENT_TITLE", DEFAULT_DOCUMENT_TITLE)
