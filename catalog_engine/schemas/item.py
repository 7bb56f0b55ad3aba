"""商品记录

商品本体（id、名称）之外的数据都挂在版本标签下。已持久化的旧版本记录必须
始终可读：新增版本时追加新的变体，读取方逐个处理已知版本，遇到未知版本
直接报错，不做默认处理。
"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

from catalog_engine.schemas.attr import ItemAttrsV1
from catalog_engine.schemas.common import U64
from catalog_engine.schemas.image import ItemImagesV1
from catalog_engine.schemas.spec import ItemSpecsV1

ItemId = Annotated[str, Field(min_length=1, max_length=128, description="商品 ID（对外稳定标识）")]
ItemKey = U64  # 存储键，由外部服务分配，重新写入后会变化
ItemName = Annotated[str, Field(min_length=1, max_length=200)]
Tag = Annotated[str, Field(min_length=1, max_length=64)]


class ItemVersionV1(BaseModel):
    """商品数据 V1"""

    tag: Literal["v1"] = "v1"
    descriptions: list[str] = Field(default_factory=list)
    tags: list[Tag] = Field(default_factory=list)
    images: ItemImagesV1 = Field(default_factory=ItemImagesV1)
    specs: ItemSpecsV1 = Field(default_factory=ItemSpecsV1)
    attrs: ItemAttrsV1 = Field(default_factory=ItemAttrsV1)


# 新增版本时改为：Annotated[ItemVersionV1 | ItemVersionV2, Field(discriminator="tag")]
ItemVersion = ItemVersionV1


class Item(BaseModel):
    """商品"""

    id: ItemId
    name: ItemName
    version: ItemVersion


class PreviousItemKey(BaseModel):
    """批量写入后被替换掉的旧存储键"""

    id: ItemId
    key: ItemKey
