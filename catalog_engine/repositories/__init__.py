"""数据访问层"""

from catalog_engine.repositories.audit_log import AuditLogRepository
from catalog_engine.repositories.catalog import CatalogRepository
from catalog_engine.repositories.store_data import StoreDataRepository

__all__ = [
    "AuditLogRepository",
    "CatalogRepository",
    "StoreDataRepository",
]
