"""属性组合解析引擎

给定商品和请求的属性组合键，解析出价格、库存、图片、规格，并在组合不存在
或不可用时按固定顺序寻找替代组合：

1. 精确匹配
2. 若调用方告知刚切换的维度：依次在其余维度（维度序号升序、值索引升序）
   中替换单个槽位，只要组合存在（不论是否有货）就尝试解析
3. 默认组合（所有槽位未设置）
4. 全部失败

刚切换的维度永远不会被替换，否则会撤销用户的显式选择。

所有查找失败都以 None 表示并逐层短路，只有未知记录版本会抛出异常。
"""

from catalog_engine.core.errors import UnsupportedVersionError
from catalog_engine.core.logging import get_logger
from catalog_engine.schemas.attr import (
    AttrCoreSpecificDataResponse,
    AttrKeys,
    AttrSpecificDataResponse,
    AttrStatus,
    AttrStatuses,
)
from catalog_engine.schemas.common import Currency
from catalog_engine.schemas.item import Item, ItemVersionV1

logger = get_logger("resolution")


def item_data(item: Item) -> ItemVersionV1:
    """按版本取出商品数据，未知版本直接报错"""
    version = item.version
    if isinstance(version, ItemVersionV1):
        return version
    raise UnsupportedVersionError("Item", getattr(version, "tag", None))


def resolve_attr(item: Item, keys: AttrKeys, currency: Currency) -> AttrSpecificDataResponse | None:
    """解析组合的完整数据

    库存、该币种的价格、图片组三者任一无法解析则返回 None；
    规格解析失败不影响结果，只是 specs 为 None。
    """
    data = item_data(item)

    attr = data.attrs.lookup(keys)
    if attr is None:
        return None
    price = attr.price.get(currency)
    if price is None:
        return None
    images = data.images.image_list(attr.image_group_key)
    if images is None:
        return None

    return AttrSpecificDataResponse(
        stock=attr.stock,
        price=price,
        images=images,
        specs=data.specs.resolve(attr.spec_keys),
        sale=attr.sale,
    )


def resolve_core(item: Item, keys: AttrKeys, currency: Currency) -> AttrCoreSpecificDataResponse | None:
    """解析组合的摘要数据（只取基础图，用于列表缩略图）"""
    data = item_data(item)

    attr = data.attrs.lookup(keys)
    if attr is None:
        return None
    price = attr.price.get(currency)
    if price is None:
        return None
    image = data.images.base_image(attr.image_group_key)
    if image is None:
        return None

    return AttrCoreSpecificDataResponse(stock=attr.stock, price=price, image=image, sale=attr.sale)


def status_by_dimension(item: Item, keys: AttrKeys) -> AttrStatuses:
    """各维度每个候选值的可用状态

    对第 i 个维度的每个值索引（升序），把 keys 的第 i 个槽位替换成该值得到候选组合：
    组合存在时给出是否有货，不存在时为 None。未定义的维度返回空列表。
    """
    attrs = item_data(item).attrs
    result: AttrStatuses = ([], [], [], [])

    for i, index in enumerate(attrs.indexes.dimensions):
        if index is None:
            continue
        for value_index in index.value_indices():
            in_stock = attrs.is_in_stock(keys.replace(i, value_index))
            result[i].append(None if in_stock is None else AttrStatus(is_in_stock=in_stock))

    return result


def resolve_or_fallback(
    item: Item,
    keys: AttrKeys,
    currency: Currency,
    changed_dimension: int | None = None,
    statuses: AttrStatuses | None = None,
) -> tuple[AttrSpecificDataResponse | None, AttrKeys | None]:
    """解析请求的组合，失败时寻找替代组合

    Args:
        item: 商品
        keys: 请求的组合键
        currency: 币种
        changed_dimension: 调用方刚切换的维度，None 表示首次加载
        statuses: 针对 keys 计算好的可用状态，省略时内部计算

    Returns:
        (解析结果, 替代组合键)。精确命中时替代组合键为 None；
        全部失败时两者都为 None。
    """
    data = resolve_attr(item, keys, currency)
    if data is not None:
        return data, None

    if changed_dimension is not None:
        if statuses is None:
            statuses = status_by_dimension(item, keys)
        dimensions = item_data(item).attrs.indexes.dimensions

        for i, dimension_statuses in enumerate(statuses):
            index = dimensions[i]
            if i == changed_dimension or index is None:
                continue
            for value_index, status in zip(index.value_indices(), dimension_statuses):
                # 只看组合是否存在，不看库存
                if status is None:
                    continue
                candidate = keys.replace(i, value_index)
                data = resolve_attr(item, candidate, currency)
                if data is not None:
                    logger.debug(
                        "使用相邻组合替代",
                        item_id=item.id,
                        requested=str(keys),
                        fallback=str(candidate),
                        dimension=i,
                    )
                    return data, candidate

    default_keys = AttrKeys.default()
    data = resolve_attr(item, default_keys, currency)
    if data is not None:
        logger.debug("使用默认组合替代", item_id=item.id, requested=str(keys))
        return data, default_keys

    return None, None
