"""通用类型定义"""

from enum import StrEnum
from typing import Annotated

from pydantic import Field

# 单字节键（图片键、属性值索引、规格键等）
U8 = Annotated[int, Field(ge=0, le=0xFF)]
U32 = Annotated[int, Field(ge=0, le=0xFFFF_FFFF)]
U64 = Annotated[int, Field(ge=0, le=0xFFFF_FFFF_FFFF_FFFF)]

Stock = Annotated[int, Field(ge=0, description="库存数量")]
Price = Annotated[float, Field(ge=0, description="价格")]


class Currency(StrEnum):
    """币种（ISO 4217）"""

    USD = "USD"
    EUR = "EUR"
    JPY = "JPY"
    GBP = "GBP"
    CNY = "CNY"
    KRW = "KRW"
