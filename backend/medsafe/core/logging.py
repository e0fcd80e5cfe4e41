"""
Root logging setup, applied on import by the app entry point.
"""

import logging

from medsafe.core.config import get_config

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logging.basicConfig(
    level=getattr(logging, get_config().log_level.upper(), logging.INFO),
    format=LOG_FORMAT,
)

# httpx logs every request at INFO
logging.getLogger("httpx").setLevel(logging.WARNING)
