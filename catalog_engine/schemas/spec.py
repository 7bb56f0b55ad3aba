"""商品规格表

规格数据按 分类 → 标签 → 值 三层存储；属性组合只引用规格索引键，
每个索引键指向"某个分类下若干 (标签, 值) 的组合"，常用的规格组合只存一份。
"""

from pydantic import BaseModel, Field

from catalog_engine.schemas.common import U8

SpecCategoryKey = U8
SpecLabelKey = U8
SpecValueKey = U8
SpecIndexKey = U8

# 一个值可以有多行显示（例如多张尺码表）
SpecValue = list[str]


class SpecLabel(BaseModel):
    """规格标签（如"材质"）"""

    name: str
    values: dict[SpecValueKey, SpecValue] = Field(default_factory=dict)


class SpecCategory(BaseModel):
    """规格分类（如"基本信息"）"""

    name: str
    labels: dict[SpecLabelKey, SpecLabel] = Field(default_factory=dict)


class SpecKeyLabel(BaseModel):
    """索引中的一个 (标签键, 值键) 对"""

    label_key: SpecLabelKey
    value_key: SpecValueKey


class SpecKey(BaseModel):
    """规格索引项：一个分类下选定的若干标签与值"""

    category_key: SpecCategoryKey
    labels: list[SpecKeyLabel] = Field(default_factory=list)


class SpecLabelResponse(BaseModel):
    """解析后的标签与值"""

    label_name: str
    value: SpecValue


class SpecCategoryResponse(BaseModel):
    """解析后的规格分类"""

    category_name: str
    labels: list[SpecLabelResponse]


class ItemSpecsV1(BaseModel):
    """规格表（V1）"""

    # 规格实际数据
    categories: dict[SpecCategoryKey, SpecCategory] = Field(default_factory=dict)
    # 规格组合索引
    index: dict[SpecIndexKey, SpecKey] = Field(default_factory=dict)

    def resolve(self, keys: list[int]) -> list[SpecCategoryResponse] | None:
        """按顺序解析一组规格索引键

        全有或全无：任意一个索引、分类、标签或值缺失，整个调用返回 None，
        不会返回部分解析的结果。
        """
        result = []
        for key in keys:
            spec_key = self.index.get(key)
            if spec_key is None:
                return None
            category = self.categories.get(spec_key.category_key)
            if category is None:
                return None

            labels = []
            for pair in spec_key.labels:
                label = category.labels.get(pair.label_key)
                if label is None:
                    return None
                value = label.values.get(pair.value_key)
                if value is None:
                    return None
                labels.append(SpecLabelResponse(label_name=label.name, value=list(value)))

            result.append(SpecCategoryResponse(category_name=category.name, labels=labels))

        return result
