from loguru import logger
import sys

from movie_service.config import settings


logger.remove()
logger.add(sys.stderr, level=settings.log_level, backtrace=True, diagnose=True)
