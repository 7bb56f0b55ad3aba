"""店铺信息 API"""

from fastapi import APIRouter, Depends

from catalog_engine.core.dependencies import CatalogContainer, get_container
from catalog_engine.core.errors import raise_not_found
from catalog_engine.schemas.store import StoreDataV1, StoreInitArg, StoreUpdateResponse

router = APIRouter(prefix="/api/v1/store", tags=["store"])


@router.get("", response_model=StoreDataV1)
async def get_store(container: CatalogContainer = Depends(get_container)):
    """获取店铺信息，未初始化时返回 404"""
    data = await container.store.get_store_data()
    if not isinstance(data, StoreDataV1):
        raise_not_found("store")
    return data


@router.put("", response_model=StoreUpdateResponse)
async def update_store(
    data: StoreInitArg,
    container: CatalogContainer = Depends(get_container),
):
    """整体替换店铺信息，返回旧记录和新记录"""
    previous = await container.store.update_store_data(data.id, data.name)
    return StoreUpdateResponse(previous=previous, current=StoreDataV1(id=data.id, name=data.name))
