# app/core/logging.py
# -----------------------------------------------------------------------------
# Loguru setup
# - rotating file sink with backtrace/diagnose
# - stderr sink so fallbacks and geocode failures show up in container logs
# -----------------------------------------------------------------------------
import sys
from pathlib import Path

from loguru import logger

from app.core.config import settings

LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(exist_ok=True, parents=True)

logger.remove()  # drop the default handler
logger.add(
    sys.stderr,
    level=settings.LOG_LEVEL,
    format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}",
)
logger.add(
    LOG_DIR / "app.log",
    rotation="10 MB",
    retention=10,  # keep the 10 newest files
    enqueue=True,  # safe across worker processes
    backtrace=True,
    diagnose=True,
    level=settings.LOG_LEVEL,
)
