"""商品页面数据服务

组装商品详情页需要的全部数据：通过目录索引找到商品，计算各维度的可用状态，
解析请求的组合（必要时回退到替代组合），首次加载时附带静态数据。
"""

from catalog_engine.core.errors import ItemPageError, ItemPageErrorCode
from catalog_engine.core.logging import get_logger
from catalog_engine.repositories.catalog import CatalogRepository
from catalog_engine.repositories.store_data import StoreDataRepository
from catalog_engine.schemas.attr import AttrCoreSpecificDataResponse
from catalog_engine.schemas.item import Item
from catalog_engine.schemas.page import (
    ItemCoreDataRequest,
    ItemPageRequest,
    ItemPageResponse,
    ItemPageStaticData,
)
from catalog_engine.services.resolution import (
    item_data,
    resolve_core,
    resolve_or_fallback,
    status_by_dimension,
)

logger = get_logger("item_page")


class ItemPageService:
    """商品页面数据服务"""

    def __init__(self, catalog: CatalogRepository, store_data: StoreDataRepository):
        self.catalog = catalog
        self.store_data = store_data

    async def load_item(self, item_id: str) -> Item:
        """商品 ID → 存储键 → 商品，任一步找不到都视为商品不存在"""
        key = await self.catalog.get_key(item_id)
        if key is None:
            raise ItemPageError(
                ItemPageErrorCode.ITEM_NOT_FOUND,
                f"商品 {item_id} 不存在",
                data={"item_id": item_id},
            )

        item = await self.catalog.get_by_key(key)
        if item is None:
            # 索引指向了不存在的记录
            logger.error("商品索引指向的记录不存在", item_id=item_id, key=key)
            raise ItemPageError(
                ItemPageErrorCode.ITEM_NOT_FOUND,
                f"存储键 {key} 对应的商品不存在（商品 {item_id}）",
                data={"item_id": item_id, "key": key},
            )
        return item

    async def get_item_page_data(self, request: ItemPageRequest) -> ItemPageResponse:
        """获取商品页面数据

        Raises:
            ItemPageError: ItemNotFound / NoAvailableAttr
        """
        item = await self.load_item(request.item_id)
        data = item_data(item)
        keys = request.attr.keys
        changed = request.attr.changed_key_index

        static_data = None
        if changed is None:
            static_data = ItemPageStaticData(
                item_name=item.name,
                descriptions=list(data.descriptions),
                tags=list(data.tags),
                attrs=data.attrs.dimensions_snapshot(),
                store_name=await self.store_data.store_name(),
            )

        statuses = status_by_dimension(item, keys)
        attr_data, fallback_keys = resolve_or_fallback(item, keys, request.currency, changed, statuses)

        if attr_data is None:
            logger.warning(
                "没有可用的属性组合",
                item_id=item.id,
                keys=str(keys),
                labels=data.attrs.dimension_labels(keys),
                currency=request.currency.value,
            )
            raise ItemPageError(
                ItemPageErrorCode.NO_AVAILABLE_ATTR,
                f"商品 {request.item_id} 的属性组合 {keys} 不存在或不可用",
                data={"item_id": request.item_id, "keys": list(keys.slots)},
            )

        if fallback_keys is not None:
            # 状态要反映实际展示的组合
            statuses = status_by_dimension(item, fallback_keys)
            logger.info(
                "属性组合已回退",
                item_id=item.id,
                requested=data.attrs.dimension_labels(keys),
                actual=data.attrs.dimension_labels(fallback_keys),
            )

        return ItemPageResponse(
            static_data=static_data,
            price=attr_data.price,
            images=attr_data.images,
            stock=attr_data.stock,
            attr_status=statuses,
            specs=attr_data.specs,
            fallback_attr=fallback_keys,
        )

    async def get_item_core_data(self, request: ItemCoreDataRequest) -> AttrCoreSpecificDataResponse:
        """获取组合摘要（价格、库存、基础图），不做回退"""
        item = await self.load_item(request.item_id)
        core = resolve_core(item, request.keys, request.currency)
        if core is None:
            raise ItemPageError(
                ItemPageErrorCode.NO_AVAILABLE_ATTR,
                f"商品 {request.item_id} 的属性组合 {request.keys} 不存在或不可用",
                data={"item_id": request.item_id, "keys": list(request.keys.slots)},
            )
        return core
