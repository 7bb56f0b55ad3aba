"""FastAPI 依赖注入

存储提供者和键生成器在应用启动时创建，挂在 app.state.container 上；
路由通过 Depends(get_container) 取得容器，再从容器拿服务实例。
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from fastapi import Request

from catalog_engine.core.config import Settings
from catalog_engine.storage.base import StorageProvider

if TYPE_CHECKING:
    from catalog_engine.repositories.catalog import CatalogRepository
    from catalog_engine.services.audit import AuditService
    from catalog_engine.services.item_insert import ItemInsertService
    from catalog_engine.services.item_page import ItemPageService
    from catalog_engine.services.keygen import KeyGenerator
    from catalog_engine.services.store_data import StoreService


@dataclass
class CatalogContainer:
    """服务容器 - 统一管理目录引擎的服务实例

    使用方式：
    ```python
    @router.post("/items/page")
    async def page(container: CatalogContainer = Depends(get_container)):
        await container.item_page.get_item_page_data(...)
    ```
    """

    settings: Settings
    storage: StorageProvider
    keygen: "KeyGenerator"

    # Lazy-loaded services
    _catalog: "CatalogRepository | None" = field(default=None, init=False)
    _store: "StoreService | None" = field(default=None, init=False)
    _item_page: "ItemPageService | None" = field(default=None, init=False)
    _item_insert: "ItemInsertService | None" = field(default=None, init=False)
    _audit: "AuditService | None" = field(default=None, init=False)

    @property
    def catalog(self) -> "CatalogRepository":
        """商品目录"""
        if self._catalog is None:
            from catalog_engine.repositories.catalog import CatalogRepository
            self._catalog = CatalogRepository(self.storage)
        return self._catalog

    @property
    def store(self) -> "StoreService":
        """店铺信息服务"""
        if self._store is None:
            from catalog_engine.repositories.store_data import StoreDataRepository
            from catalog_engine.services.store_data import StoreService
            self._store = StoreService(
                StoreDataRepository(self.storage, max_bytes=self.settings.RECORD_MAX_BYTES)
            )
        return self._store

    @property
    def item_page(self) -> "ItemPageService":
        """商品页面服务"""
        if self._item_page is None:
            from catalog_engine.services.item_page import ItemPageService
            self._item_page = ItemPageService(self.catalog, self.store.repo)
        return self._item_page

    @property
    def item_insert(self) -> "ItemInsertService":
        """商品写入服务"""
        if self._item_insert is None:
            from catalog_engine.services.item_insert import ItemInsertService
            self._item_insert = ItemInsertService(self.catalog, self.keygen)
        return self._item_insert

    @property
    def audit(self) -> "AuditService":
        """审计日志服务"""
        if self._audit is None:
            from catalog_engine.repositories.audit_log import AuditLogRepository
            from catalog_engine.services.audit import AuditService
            self._audit = AuditService(
                AuditLogRepository(self.storage), enabled=self.settings.AUDIT_LOG_ENABLED
            )
        return self._audit


def create_keygen(settings: Settings, storage: StorageProvider) -> "KeyGenerator":
    """根据配置创建键生成器：配置了 KEYGEN_URL 则调用外部服务，否则使用本地计数器"""
    from catalog_engine.services.keygen import LocalKeyGenerator, RemoteKeyGenerator

    if settings.KEYGEN_URL:
        return RemoteKeyGenerator(settings.KEYGEN_URL, timeout=settings.KEYGEN_TIMEOUT_SECONDS)
    return LocalKeyGenerator(storage)


def get_container(request: Request) -> CatalogContainer:
    """获取服务容器（用于 FastAPI 路由依赖注入）"""
    return request.app.state.container
