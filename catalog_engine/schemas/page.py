"""商品页面查询的请求与响应"""

from pydantic import BaseModel, Field

from catalog_engine.schemas.attr import (
    ATTR_SLOTS,
    AttrDimension,
    AttrKeys,
    AttrStatuses,
)
from catalog_engine.schemas.common import Currency, Price, Stock
from catalog_engine.schemas.image import ImageData
from catalog_engine.schemas.item import ItemId, Tag
from catalog_engine.schemas.spec import SpecCategoryResponse


class AttrRequest(BaseModel):
    """请求的属性组合"""

    keys: AttrKeys = Field(default_factory=AttrKeys)
    # 用户刚刚切换的维度；为空表示首次加载该商品
    changed_key_index: int | None = Field(None, ge=0, lt=ATTR_SLOTS)


class ItemPageRequest(BaseModel):
    """商品页面查询请求"""

    item_id: ItemId
    attr: AttrRequest = Field(default_factory=AttrRequest)
    currency: Currency


class ItemPageStaticData(BaseModel):
    """首次加载时附带的静态数据"""

    item_name: str
    descriptions: list[str]
    tags: list[Tag]
    attrs: tuple[AttrDimension | None, AttrDimension | None, AttrDimension | None, AttrDimension | None]
    store_name: str


class ItemPageResponse(BaseModel):
    """商品页面查询响应"""

    static_data: ItemPageStaticData | None = None
    price: Price
    images: list[ImageData]
    stock: Stock
    attr_status: AttrStatuses
    specs: list[SpecCategoryResponse] | None = None
    # 实际展示的组合与请求不同时给出
    fallback_attr: AttrKeys | None = None


class ItemCoreDataRequest(BaseModel):
    """商品摘要查询请求（列表缩略图等，不做回退）"""

    item_id: ItemId
    keys: AttrKeys = Field(default_factory=AttrKeys)
    currency: Currency
