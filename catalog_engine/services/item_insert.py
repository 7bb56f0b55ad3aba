"""商品批量写入服务

写入分三步：
1. 向键生成器按批（每批 4 个）申请存储键，直到每个商品都有键
2. 把所有商品写入 items（新键）
3. 把商品 ID 指向新键，收集被替换掉的旧键

键分配失败时直接中止，两张表都不会被修改。
同一个服务实例上的批量写入串行执行。
"""

import asyncio

from catalog_engine.core.errors import KeyGenerationError
from catalog_engine.core.logging import get_logger
from catalog_engine.repositories.catalog import CatalogRepository
from catalog_engine.schemas.item import Item, PreviousItemKey
from catalog_engine.services.keygen import KEY_BATCH_SIZE, KeyGenerator

logger = get_logger("item_insert")


class ItemInsertService:
    """商品批量写入"""

    def __init__(self, catalog: CatalogRepository, keygen: KeyGenerator):
        self.catalog = catalog
        self.keygen = keygen
        self._write_lock = asyncio.Lock()

    async def allocate_keys(self, count: int) -> list[int]:
        """申请 count 个存储键，最后一批多出的键直接丢弃"""
        keys: list[int] = []
        batches = 0
        while len(keys) < count:
            batch = await self.keygen.create_four()
            batches += 1
            if len(batch) != KEY_BATCH_SIZE:
                raise KeyGenerationError(f"键生成器应返回 {KEY_BATCH_SIZE} 个键，实际 {len(batch)} 个")
            keys.extend(batch)

        keys = keys[:count]
        if len(set(keys)) != len(keys):
            raise KeyGenerationError(f"键生成器返回了重复的键: {keys!r}")

        logger.debug("存储键分配完成", count=count, batches=batches)
        return keys

    async def insert_items(self, items: list[Item]) -> list[PreviousItemKey]:
        """批量写入商品

        Returns:
            已存在的商品 ID 及其被替换掉的旧存储键（旧记录保留，由调用方回收）

        Raises:
            KeyGenerationError: 键分配失败，此时没有任何写入
        """
        if not items:
            return []

        async with self._write_lock:
            keys = await self.allocate_keys(len(items))
            pairs = list(zip(keys, items))

            await self.catalog.put_items(pairs)
            previous = await self.catalog.point_ids([(item.id, key) for key, item in pairs])

        logger.info(
            "商品批量写入完成",
            count=len(items),
            replaced=len(previous),
        )
        return previous
