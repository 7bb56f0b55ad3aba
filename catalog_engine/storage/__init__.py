"""存储层"""

from catalog_engine.core.config import Settings
from catalog_engine.storage.base import ByteCell, ByteLog, ByteMap, StorageProvider
from catalog_engine.storage.memory import MemoryStorage
from catalog_engine.storage.sql import SqlStorage
from catalog_engine.storage.typed import TypedCell, TypedLog, TypedMap


def create_storage(settings: Settings) -> StorageProvider:
    """根据配置创建存储提供者"""
    if settings.STORAGE_BACKEND == "memory":
        return MemoryStorage()
    if settings.STORAGE_BACKEND == "sqlite":
        settings.ensure_data_dir()
        return SqlStorage(settings.database_url)
    msg = f"不支持的存储后端: {settings.STORAGE_BACKEND}"
    raise ValueError(msg)


__all__ = [
    "ByteCell",
    "ByteLog",
    "ByteMap",
    "MemoryStorage",
    "SqlStorage",
    "StorageProvider",
    "TypedCell",
    "TypedLog",
    "TypedMap",
    "create_storage",
]
