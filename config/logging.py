import logging
import os

from config.settings import settings

# Make sure the log directory exists
os.makedirs(os.path.dirname(settings.LOG_FILE) or ".", exist_ok=True)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[
        # logging.StreamHandler(),
        logging.FileHandler(settings.LOG_FILE, encoding="utf-8")
    ]
)

logger = logging.getLogger("copilot")
