"""商品 API

- POST /api/v1/items/page   商品页面数据（支持组合回退）
- POST /api/v1/items/core   组合摘要（不回退）
- POST /api/v1/items/batch  批量写入商品
"""

from fastapi import APIRouter, Depends, Header

from catalog_engine.core.dependencies import CatalogContainer, get_container
from catalog_engine.core.errors import ItemPageError, KeyGenerationError, raise_service_unavailable
from catalog_engine.core.logging import get_logger
from catalog_engine.schemas.attr import AttrCoreSpecificDataResponse
from catalog_engine.schemas.item import Item, PreviousItemKey
from catalog_engine.schemas.page import ItemCoreDataRequest, ItemPageRequest, ItemPageResponse

router = APIRouter(prefix="/api/v1/items", tags=["items"])
logger = get_logger("api.items")


@router.post("/page", response_model=ItemPageResponse)
async def get_item_page_data(
    request: ItemPageRequest,
    caller: str | None = Header(None, alias="X-Caller-Id"),
    container: CatalogContainer = Depends(get_container),
):
    """获取商品页面数据

    首次加载（changed_key_index 为空）时附带静态数据；请求的组合不可用时
    返回替代组合的数据，并在 fallback_attr 中给出实际使用的组合。
    每次查询都会写一条审计记录。
    """
    try:
        response = await container.item_page.get_item_page_data(request)
    except ItemPageError as e:
        await container.audit.record_page_query(caller, e)
        raise
    await container.audit.record_page_query(caller)
    return response


@router.post("/core", response_model=AttrCoreSpecificDataResponse)
async def get_item_core_data(
    request: ItemCoreDataRequest,
    container: CatalogContainer = Depends(get_container),
):
    """获取组合摘要（价格、库存、基础图）"""
    return await container.item_page.get_item_core_data(request)


@router.post("/batch", response_model=list[PreviousItemKey])
async def insert_items(
    items: list[Item],
    container: CatalogContainer = Depends(get_container),
):
    """批量写入商品，返回已存在商品被替换掉的旧存储键"""
    try:
        return await container.item_insert.insert_items(items)
    except KeyGenerationError as e:
        logger.error("存储键分配失败，批量写入已中止", count=len(items), error=str(e))
        raise_service_unavailable("keygen", f"存储键分配失败: {e}", cause=e)
