"""商品目录索引

两张独立存储的有序表：
- items: 存储键 → 商品（主表）
- items_in_id: 商品 ID → 存储键（对外稳定标识）

items_in_id 中的每个 ID 都必须能在 items 中找到对应商品，因此写入顺序固定为：
先把新商品完整写入 items，再把 ID 指向新的存储键。
"""

from catalog_engine.core.codec import RecordCodec, StrKeyCodec, UIntKeyCodec
from catalog_engine.schemas.item import Item, PreviousItemKey
from catalog_engine.storage.base import StorageProvider
from catalog_engine.storage.typed import TypedMap

ITEMS_NAMESPACE = "items"
ITEMS_IN_ID_NAMESPACE = "items_in_id"


class CatalogRepository:
    """商品目录数据访问"""

    def __init__(self, storage: StorageProvider):
        self.items: TypedMap[int, Item] = TypedMap(
            storage.map(ITEMS_NAMESPACE), UIntKeyCodec(), RecordCodec(Item)
        )
        self.ids: TypedMap[str, int] = TypedMap(
            storage.map(ITEMS_IN_ID_NAMESPACE), StrKeyCodec(), UIntKeyCodec()
        )

    async def get_key(self, item_id: str) -> int | None:
        """商品 ID → 当前存储键"""
        return await self.ids.get(item_id)

    async def get_by_key(self, key: int) -> Item | None:
        """按存储键读取商品"""
        return await self.items.get(key)

    async def put_items(self, pairs: list[tuple[int, Item]]) -> None:
        """把商品写入各自的新存储键"""
        await self.items.insert_many(pairs)

    async def point_ids(self, pairs: list[tuple[str, int]]) -> list[PreviousItemKey]:
        """把商品 ID 指向新的存储键，返回被替换掉的旧键

        旧键上的商品记录保留不动，由调用方负责回收。
        """
        previous = await self.ids.insert_many(pairs)
        return [
            PreviousItemKey(id=item_id, key=prev_key)
            for (item_id, _), prev_key in zip(pairs, previous)
            if prev_key is not None
        ]

    async def count(self) -> int:
        """当前对外可见的商品数"""
        return await self.ids.count()
