"""店铺信息（单值记录）"""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

StoreId = Annotated[str, Field(min_length=1, max_length=128)]
StoreName = Annotated[str, Field(min_length=1, max_length=100)]


class StoreDataNone(BaseModel):
    """尚未初始化"""

    tag: Literal["none"] = "none"


class StoreDataV1(BaseModel):
    """店铺信息 V1"""

    tag: Literal["v1"] = "v1"
    id: StoreId
    name: StoreName


StoreData = Annotated[StoreDataNone | StoreDataV1, Field(discriminator="tag")]


class StoreInitArg(BaseModel):
    """店铺初始化 / 更新参数"""

    id: StoreId
    name: StoreName


class StoreUpdateResponse(BaseModel):
    """店铺信息更新结果"""

    previous: StoreData
    current: StoreDataV1
