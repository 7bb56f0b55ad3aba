"""业务服务层"""

from catalog_engine.services.audit import AuditService
from catalog_engine.services.item_insert import ItemInsertService
from catalog_engine.services.item_page import ItemPageService
from catalog_engine.services.keygen import (
    KEY_BATCH_SIZE,
    KeyGenerator,
    LocalKeyGenerator,
    RemoteKeyGenerator,
)
from catalog_engine.services.store_data import StoreService

__all__ = [
    "KEY_BATCH_SIZE",
    "AuditService",
    "ItemInsertService",
    "ItemPageService",
    "KeyGenerator",
    "LocalKeyGenerator",
    "RemoteKeyGenerator",
    "StoreService",
]
