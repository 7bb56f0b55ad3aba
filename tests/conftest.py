"""Pytest 配置"""

import os

import pytest

# 测试环境使用内存存储，不写日志文件
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("LOG_FILE", "")
os.environ.setdefault("LOG_MODE", "simple")
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("KEYGEN_URL", "")

from catalog_engine.schemas import (  # noqa: E402
    AttrColor,
    AttrIndex,
    AttrIndexes,
    AttrKeys,
    AttrSpecificData,
    AttrText,
    Currency,
    ImageData,
    Item,
    ItemAttrsV1,
    ItemImagesV1,
    ItemSpecsV1,
    ItemVersionV1,
    SpecCategory,
    SpecKey,
    SpecKeyLabel,
    SpecLabel,
)
from catalog_engine.storage import MemoryStorage, SqlStorage  # noqa: E402

RED, BLUE = 0, 1
SIZE_S, SIZE_M = 0, 1


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
async def sql_storage(tmp_path, anyio_backend):
    """SQLite 存储，用于并发写入场景"""
    provider = SqlStorage(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    await provider.init()
    yield provider
    await provider.close()


def _images() -> ItemImagesV1:
    return ItemImagesV1(
        images={
            0: ImageData(url="https://img.example.com/red-front.jpg", caption="正面"),
            1: ImageData(url="https://img.example.com/red-back.jpg"),
            2: ImageData(url="https://img.example.com/blue.jpg"),
        },
        groups={0: [0, 1], 1: [2]},
    )


def _specs() -> ItemSpecsV1:
    return ItemSpecsV1(
        categories={
            0: SpecCategory(
                name="基本信息",
                labels={0: SpecLabel(name="材质", values={0: ["棉"], 1: ["麻"]})},
            )
        },
        index={0: SpecKey(category_key=0, labels=[SpecKeyLabel(label_key=0, value_key=0)])},
    )


def _indexes() -> AttrIndexes:
    return AttrIndexes(
        dimensions=[
            AttrIndex(
                name="颜色",
                values={
                    RED: AttrColor(name="红色", code="#ff0000"),
                    BLUE: AttrColor(name="蓝色", code="#0000ff"),
                },
            ),
            AttrIndex(name="尺码", values={SIZE_S: AttrText(text="S"), SIZE_M: AttrText(text="M")}),
        ]
    )


def default_combinations() -> dict[AttrKeys, AttrSpecificData]:
    """红S 有货、蓝S 缺货、蓝M 有货，红M 不存在"""
    return {
        AttrKeys(slots=(RED, SIZE_S, None, None)): AttrSpecificData(
            stock=5,
            price={Currency.USD: 10, Currency.EUR: 9.5},
            image_group_key=0,
            spec_keys=[0],
        ),
        AttrKeys(slots=(BLUE, SIZE_S, None, None)): AttrSpecificData(
            stock=0, price={Currency.USD: 12}, image_group_key=1
        ),
        AttrKeys(slots=(BLUE, SIZE_M, None, None)): AttrSpecificData(
            stock=3, price={Currency.USD: 12}, image_group_key=1
        ),
    }


@pytest.fixture
def make_item():
    """商品工厂：颜色 {红@0, 蓝@1} × 尺码 {S@0, M@1}"""

    def _make(
        item_id: str = "item-1",
        combinations: dict[AttrKeys, AttrSpecificData] | None = None,
        name: str = "纯棉T恤",
    ) -> Item:
        return Item(
            id=item_id,
            name=name,
            version=ItemVersionV1(
                descriptions=["100% 纯棉", "宽松版型"],
                tags=["新品"],
                images=_images(),
                specs=_specs(),
                attrs=ItemAttrsV1(
                    combinations=default_combinations() if combinations is None else combinations,
                    indexes=_indexes(),
                ),
            ),
        )

    return _make


@pytest.fixture
def item(make_item) -> Item:
    return make_item()
