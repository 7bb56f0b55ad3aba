"""属性组合解析引擎测试

商品：颜色 {红@0, 蓝@1} × 尺码 {S@0, M@1}
- 红S: 库存 5，USD 10 / EUR 9.5，图片组 0，规格 [0]
- 蓝S: 库存 0，USD 12，图片组 1
- 蓝M: 库存 3，USD 12，图片组 1
- 红M: 不存在
"""

import pytest

from catalog_engine.core.errors import UnsupportedVersionError
from catalog_engine.schemas import (
    AttrIndex,
    AttrIndexes,
    AttrKeys,
    AttrSpecificData,
    AttrStatus,
    AttrText,
    Currency,
    Item,
    ItemAttrsV1,
)
from catalog_engine.services.resolution import (
    item_data,
    resolve_attr,
    resolve_core,
    resolve_or_fallback,
    status_by_dimension,
)

RED_S = AttrKeys(slots=(0, 0, None, None))
RED_M = AttrKeys(slots=(0, 1, None, None))
BLUE_S = AttrKeys(slots=(1, 0, None, None))
BLUE_M = AttrKeys(slots=(1, 1, None, None))
DEFAULT = AttrKeys.default()

IN_STOCK = AttrStatus(is_in_stock=True)
OUT_OF_STOCK = AttrStatus(is_in_stock=False)


def _data(stock: int = 1, price: float = 1, group: int = 1, spec_keys=()) -> AttrSpecificData:
    return AttrSpecificData(
        stock=stock, price={Currency.USD: price}, image_group_key=group, spec_keys=list(spec_keys)
    )


def _text_index(name: str, values: dict[int, str]) -> AttrIndex:
    return AttrIndex(name=name, values={k: AttrText(text=v) for k, v in values.items()})


def _with_dimensions(base: Item, combinations, dimensions) -> Item:
    """沿用 base 的图片和规格，替换属性表"""
    version = base.version.model_copy(
        update={
            "attrs": ItemAttrsV1(
                combinations=combinations, indexes=AttrIndexes(dimensions=dimensions)
            )
        }
    )
    return base.model_copy(update={"version": version})


class TestItemData:
    def test_v1(self, item):
        assert item_data(item) is item.version

    def test_unknown_version(self, item):
        broken = Item.model_construct(id=item.id, name=item.name, version=object())
        with pytest.raises(UnsupportedVersionError):
            item_data(broken)


class TestResolveAttr:
    """测试完整解析"""

    def test_exact(self, item):
        data = resolve_attr(item, RED_S, Currency.USD)
        assert data.stock == 5
        assert data.price == 10
        assert [i.url for i in data.images] == [
            "https://img.example.com/red-front.jpg",
            "https://img.example.com/red-back.jpg",
        ]
        assert data.specs[0].category_name == "基本信息"
        assert data.specs[0].labels[0].value == ["棉"]
        assert data.sale is None

    def test_price_per_currency(self, item):
        assert resolve_attr(item, RED_S, Currency.EUR).price == 9.5

    def test_missing_currency(self, item):
        assert resolve_attr(item, RED_S, Currency.JPY) is None

    def test_missing_combination(self, item):
        assert resolve_attr(item, RED_M, Currency.USD) is None

    def test_missing_image_group(self, make_item):
        item = make_item(combinations={RED_S: _data(group=9)})
        assert resolve_attr(item, RED_S, Currency.USD) is None

    def test_spec_failure_does_not_fail_resolution(self, make_item):
        item = make_item(combinations={RED_S: _data(spec_keys=[0, 9])})
        data = resolve_attr(item, RED_S, Currency.USD)
        assert data is not None
        assert data.specs is None

    def test_no_spec_keys_resolves_to_empty_list(self, item):
        assert resolve_attr(item, BLUE_M, Currency.USD).specs == []

    def test_out_of_stock_still_resolves(self, item):
        assert resolve_attr(item, BLUE_S, Currency.USD).stock == 0


class TestResolveCore:
    """测试摘要解析"""

    def test_base_image(self, item):
        core = resolve_core(item, RED_S, Currency.USD)
        assert core.image.url == "https://img.example.com/red-front.jpg"
        assert core.stock == 5
        assert core.price == 10

    def test_short_circuits(self, make_item):
        assert resolve_core(make_item(), RED_M, Currency.USD) is None
        assert resolve_core(make_item(), RED_S, Currency.KRW) is None
        assert resolve_core(make_item(combinations={RED_S: _data(group=9)}), RED_S, Currency.USD) is None


class TestStatusByDimension:
    """测试各维度可用状态"""

    def test_red_m(self, item):
        statuses = status_by_dimension(item, RED_M)
        # 颜色维度：红M 不存在，蓝M 有货
        assert statuses[0] == [None, IN_STOCK]
        # 尺码维度：红S 有货，红M 不存在
        assert statuses[1] == [IN_STOCK, None]
        assert statuses[2] == []
        assert statuses[3] == []

    def test_blue_s(self, item):
        statuses = status_by_dimension(item, BLUE_S)
        assert statuses[0] == [IN_STOCK, OUT_OF_STOCK]
        assert statuses[1] == [OUT_OF_STOCK, IN_STOCK]

    def test_absent_is_never_reported_in_stock(self, item):
        for keys in (RED_S, RED_M, BLUE_S, BLUE_M, DEFAULT):
            statuses = status_by_dimension(item, keys)
            for i, dimension in enumerate(statuses):
                for value_index, status in enumerate(dimension):
                    exists = item.version.attrs.lookup(keys.replace(i, value_index)) is not None
                    assert (status is None) == (not exists)

    def test_follows_sorted_value_indices(self, make_item):
        """值索引不连续时按升序逐个检查"""
        item = _with_dimensions(
            make_item(),
            {AttrKeys(slots=(5, None, None, None)): _data()},
            [_text_index("颜色", {0: "红", 5: "绿"})],
        )
        statuses = status_by_dimension(item, DEFAULT)
        assert statuses[0] == [None, IN_STOCK]


class TestResolveOrFallback:
    """测试替代组合查找"""

    def test_exact_match_has_no_fallback(self, item):
        data, fallback = resolve_or_fallback(item, RED_S, Currency.USD, changed_dimension=1)
        assert data.stock == 5
        assert fallback is None

    def test_changed_size_scans_color(self, item):
        """切换尺码到 M：红M 不存在，扫描颜色维度得到蓝M"""
        data, fallback = resolve_or_fallback(item, RED_M, Currency.USD, changed_dimension=1)
        assert fallback == BLUE_M
        assert data.stock == 3

    def test_changed_color_scans_size(self, item):
        """切换颜色到红：红M 不存在，扫描尺码维度得到红S"""
        data, fallback = resolve_or_fallback(item, RED_M, Currency.USD, changed_dimension=0)
        assert fallback == RED_S
        assert data.stock == 5

    def test_never_substitutes_changed_dimension(self, make_item):
        """唯一可用的组合需要改动刚切换的维度时，不使用它"""
        item = make_item(combinations={RED_S: _data()})
        assert resolve_or_fallback(item, RED_M, Currency.USD, changed_dimension=1) == (None, None)

    def test_out_of_stock_candidate_is_allowed(self, make_item):
        item = make_item(combinations={RED_S: _data(), BLUE_M: _data(stock=0)})
        data, fallback = resolve_or_fallback(item, RED_M, Currency.USD, changed_dimension=1)
        assert fallback == BLUE_M
        assert data.stock == 0

    def test_unresolvable_candidate_is_skipped(self, make_item):
        """组合存在但缺少币种价格时继续往后找"""
        item = make_item(
            combinations={
                BLUE_M: AttrSpecificData(stock=1, price={Currency.EUR: 1}, image_group_key=1),
                DEFAULT: _data(stock=2),
            }
        )
        data, fallback = resolve_or_fallback(item, RED_M, Currency.USD, changed_dimension=1)
        assert fallback == DEFAULT
        assert data.stock == 2

    def test_lower_dimension_first(self, make_item):
        """两个维度都有候选时，优先较低维度"""
        item = _with_dimensions(
            make_item(),
            {
                AttrKeys(slots=(1, 1, 0, None)): _data(stock=11),
                AttrKeys(slots=(0, 1, 1, None)): _data(stock=22),
            },
            [
                _text_index("颜色", {0: "红", 1: "蓝"}),
                _text_index("尺码", {0: "S", 1: "M"}),
                _text_index("款式", {0: "A", 1: "B"}),
            ],
        )
        data, fallback = resolve_or_fallback(
            item, AttrKeys(slots=(0, 1, 0, None)), Currency.USD, changed_dimension=1
        )
        # 维度 0 的 (1, 1, 0) 和维度 2 的 (0, 1, 1) 都可用，取维度 0
        assert fallback == AttrKeys(slots=(1, 1, 0, None))
        assert data.stock == 11

    def test_lower_value_index_first(self, make_item):
        item = make_item(
            combinations={
                AttrKeys(slots=(0, 0, None, None)): _data(stock=1),
                AttrKeys(slots=(1, 0, None, None)): _data(stock=2),
            }
        )
        _, fallback = resolve_or_fallback(
            item, AttrKeys(slots=(None, 0, None, None)), Currency.USD, changed_dimension=1
        )
        assert fallback == AttrKeys(slots=(0, 0, None, None))

    def test_default_key_fallback(self, make_item):
        item = make_item(combinations={RED_S: _data(), DEFAULT: _data(stock=7)})
        data, fallback = resolve_or_fallback(item, BLUE_M, Currency.USD)
        assert fallback == DEFAULT
        assert data.stock == 7

    def test_first_load_skips_dimension_scan(self, item):
        """没有切换维度时直接尝试默认组合"""
        assert resolve_or_fallback(item, RED_M, Currency.USD) == (None, None)

    def test_deterministic(self, item):
        first = resolve_or_fallback(item, RED_M, Currency.USD, changed_dimension=1)
        second = resolve_or_fallback(item, RED_M, Currency.USD, changed_dimension=1)
        assert first == second

    def test_precomputed_statuses_are_used(self, item):
        """调用方传入的状态决定候选顺序"""
        statuses = ([None, None], [], [], [])
        assert resolve_or_fallback(item, RED_M, Currency.USD, 1, statuses) == (None, None)
