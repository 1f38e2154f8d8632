"""
Entity store backends.

``build_storage`` picks the backend named by ``settings.STORAGE_BACKEND``.
"""

import logging

from listo.storage.base import Storage
from listo.storage.memory import MemoryStorage
from listo.storage.sql import SQLStorage

logger = logging.getLogger(__name__)

__all__ = ["Storage", "MemoryStorage", "SQLStorage", "build_storage"]


def build_storage(settings) -> Storage:
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        logger.warning("Using in-memory storage; data is lost on restart")
        return MemoryStorage()
    if backend == "sqlite":
        logger.info(f"Using SQL storage at {settings.DATABASE_URL}")
        return SQLStorage(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    raise ValueError(f"Unknown storage backend: {settings.STORAGE_BACKEND}")
