# core/logger.py
import logging
from planner.core.config import settings

# Create logger
logger = logging.getLogger("planner")
logger.setLevel(settings.LOG_LEVEL)

# Console Handler
console_handler = logging.StreamHandler()
formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] %(message)s")
console_handler.setFormatter(formatter)

# Add handler to logger
if not logger.handlers:
    logger.addHandler(console_handler)
