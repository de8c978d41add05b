import logging

from ..settings import Settings
from .base import ActivityStore
from .database import SqlActivityStore
from .memory import MemoryActivityStore

logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> ActivityStore:
    if settings.storage_backend == "database":
        logger.info("Using relational activity store")
        return SqlActivityStore(settings.database_url)
    logger.info("Using in-memory activity store")
    return MemoryActivityStore()
