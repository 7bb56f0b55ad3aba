"""商品属性表

属性组合键（AttrKeys）是固定 4 个槽位的元组，第 i 个槽位是第 i 个属性维度
（如颜色、尺码）选中的值索引，None 表示该维度不限定。每个实际存在的组合对应
一条 AttrSpecificData（库存、多币种价格、图片组、规格索引）。
"""

from functools import total_ordering
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializationInfo,
    field_serializer,
    field_validator,
    model_serializer,
    model_validator,
)

from catalog_engine.schemas.common import U8, Currency, Price, Stock
from catalog_engine.schemas.image import ImageData, ImageGroupKey
from catalog_engine.schemas.spec import SpecCategoryResponse, SpecIndexKey

ATTR_SLOTS = 4

AttrKey = U8


@total_ordering
class AttrKeys(BaseModel):
    """属性组合键

    按槽位字典序全序排列，未设置的槽位排在任何已设置的值之前。
    输入输出都使用长度为 4 的列表，例如 ``[0, 1, None, None]``。
    """

    model_config = ConfigDict(frozen=True)

    slots: tuple[AttrKey | None, AttrKey | None, AttrKey | None, AttrKey | None] = (
        None,
        None,
        None,
        None,
    )

    @model_validator(mode="before")
    @classmethod
    def _from_sequence(cls, data: Any) -> Any:
        if isinstance(data, (list, tuple)):
            return {"slots": tuple(data)}
        return data

    @model_serializer(mode="plain")
    def _to_list(self) -> list[int | None]:
        return list(self.slots)

    @classmethod
    def default(cls) -> "AttrKeys":
        """所有槽位都未设置的默认键"""
        return cls()

    def replace(self, index: int, value: int | None) -> "AttrKeys":
        """返回把第 index 个槽位替换为 value 的新键"""
        if not 0 <= index < ATTR_SLOTS:
            raise ValueError(f"属性槽位 {index} 超出范围 0..{ATTR_SLOTS - 1}")
        slots = list(self.slots)
        slots[index] = value
        return AttrKeys(slots=tuple(slots))

    def __getitem__(self, index: int) -> int | None:
        return self.slots[index]

    def _sort_key(self) -> tuple:
        return tuple((0, 0) if slot is None else (1, slot) for slot in self.slots)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, AttrKeys):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        return "(" + ", ".join("-" if slot is None else str(slot) for slot in self.slots) + ")"


class AttrText(BaseModel):
    """文字属性值（如尺码 "M"）"""

    kind: Literal["text"] = "text"
    text: str

    @property
    def label(self) -> str:
        return self.text


class AttrColor(BaseModel):
    """颜色属性值（色块）"""

    kind: Literal["color"] = "color"
    name: str
    code: str = Field(..., description="CSS 颜色值，如 #ff0000")

    @property
    def label(self) -> str:
        return self.name


AttrType = Annotated[AttrText | AttrColor, Field(discriminator="kind")]


class AttrIndex(BaseModel):
    """一个属性维度：值索引 → 属性值"""

    name: str
    values: dict[AttrKey, AttrType] = Field(default_factory=dict)

    def value_indices(self) -> list[int]:
        """按升序返回所有值索引"""
        return sorted(self.values)


class AttrIndexes(BaseModel):
    """最多 4 个属性维度，与 AttrKeys 的槽位一一对应"""

    dimensions: tuple[AttrIndex | None, AttrIndex | None, AttrIndex | None, AttrIndex | None] = (
        None,
        None,
        None,
        None,
    )

    @field_validator("dimensions", mode="before")
    @classmethod
    def _pad(cls, value: Any) -> Any:
        # 允许只给出前几个维度
        if isinstance(value, (list, tuple)) and len(value) < ATTR_SLOTS:
            return tuple(value) + (None,) * (ATTR_SLOTS - len(value))
        return value


class AttrDimension(BaseModel):
    """维度快照：名称 + 按值索引升序排列的属性值"""

    name: str
    values: list[AttrType]


class AttrStatus(BaseModel):
    """某个候选组合的可用状态"""

    is_in_stock: bool


# 每个维度一个与值索引平行的状态列表，None 表示该组合不存在
AttrStatuses = tuple[
    list[AttrStatus | None],
    list[AttrStatus | None],
    list[AttrStatus | None],
    list[AttrStatus | None],
]


class AttrSpecificData(BaseModel):
    """某个属性组合的商业数据"""

    stock: Stock = 0
    price: dict[Currency, Price] = Field(default_factory=dict)
    image_group_key: ImageGroupKey
    spec_keys: list[SpecIndexKey] = Field(default_factory=list)
    # 占位字段，具体含义由商品数据的录入方定义
    sale: None = None


class AttrSpecificDataResponse(BaseModel):
    """组合解析结果（完整）"""

    stock: Stock
    price: Price
    images: list[ImageData]
    specs: list[SpecCategoryResponse] | None = None
    sale: None = None


class AttrCoreSpecificDataResponse(BaseModel):
    """组合解析结果（摘要，只含基础图）"""

    stock: Stock
    price: Price
    image: ImageData
    sale: None = None


class ItemAttrsV1(BaseModel):
    """属性表（V1）

    combinations 在序列化时写成 ``[{"keys": [...], "data": {...}}, ...]``，
    因为组合键不是字符串，不能直接作为 JSON 对象的键。
    """

    combinations: dict[AttrKeys, AttrSpecificData] = Field(default_factory=dict)
    indexes: AttrIndexes = Field(default_factory=AttrIndexes)

    @field_validator("combinations", mode="before")
    @classmethod
    def _from_entries(cls, value: Any) -> Any:
        if isinstance(value, list):
            return {AttrKeys.model_validate(entry["keys"]): entry["data"] for entry in value}
        return value

    @field_serializer("combinations")
    def _to_entries(
        self, combinations: dict[AttrKeys, AttrSpecificData], info: SerializationInfo
    ) -> list[dict[str, Any]]:
        return [
            {"keys": list(keys.slots), "data": combinations[keys].model_dump(mode=info.mode)}
            for keys in sorted(combinations)
        ]

    def lookup(self, keys: AttrKeys) -> AttrSpecificData | None:
        """精确查找组合数据（不做任何回退）"""
        return self.combinations.get(keys)

    def is_in_stock(self, keys: AttrKeys) -> bool | None:
        """组合不存在返回 None，否则返回是否有货"""
        data = self.combinations.get(keys)
        if data is None:
            return None
        return data.stock > 0

    def dimensions_snapshot(self) -> tuple[AttrDimension | None, ...]:
        """各维度的名称与按值索引升序排列的属性值"""
        snapshot: list[AttrDimension | None] = [None] * ATTR_SLOTS
        for i, index in enumerate(self.indexes.dimensions):
            if index is not None:
                snapshot[i] = AttrDimension(
                    name=index.name,
                    values=[index.values[j] for j in index.value_indices()],
                )
        return tuple(snapshot)

    def dimension_labels(self, keys: AttrKeys) -> list[str | None]:
        """组合键在各已定义维度上对应的属性值名称（用于日志等可读输出）"""
        labels = []
        for i, index in enumerate(self.indexes.dimensions):
            if index is None:
                continue
            slot = keys[i]
            value = index.values.get(slot) if slot is not None else None
            labels.append(value.label if value is not None else None)
        return labels
