"""带编解码的类型化存储

在字节存储之上套一层 Codec，仓储层只和模型打交道。
编码在写入之前完成，编码失败时底层存储保持不变。
"""

from collections.abc import AsyncIterator
from typing import Generic, TypeVar

from catalog_engine.core.codec import Codec
from catalog_engine.storage.base import ByteCell, ByteLog, ByteMap

K = TypeVar("K")
V = TypeVar("V")


class TypedMap(Generic[K, V]):
    """有序映射"""

    def __init__(self, raw: ByteMap, key_codec: Codec[K], value_codec: Codec[V]):
        self.raw = raw
        self.key_codec = key_codec
        self.value_codec = value_codec

    def _decode_value(self, data: bytes | None) -> V | None:
        return None if data is None else self.value_codec.decode(data)

    async def get(self, key: K) -> V | None:
        return self._decode_value(await self.raw.get(self.key_codec.encode(key)))

    async def insert(self, key: K, value: V) -> V | None:
        previous = await self.insert_many([(key, value)])
        return previous[0]

    async def insert_many(self, pairs: list[tuple[K, V]]) -> list[V | None]:
        encoded = [(self.key_codec.encode(k), self.value_codec.encode(v)) for k, v in pairs]
        return [self._decode_value(p) for p in await self.raw.insert_many(encoded)]

    async def remove(self, key: K) -> V | None:
        return self._decode_value(await self.raw.remove(self.key_codec.encode(key)))

    async def contains(self, key: K) -> bool:
        return await self.raw.contains(self.key_codec.encode(key))

    async def items(self, start: K | None = None) -> AsyncIterator[tuple[K, V]]:
        raw_start = None if start is None else self.key_codec.encode(start)
        async for k, v in self.raw.items(raw_start):
            yield self.key_codec.decode(k), self.value_codec.decode(v)

    async def count(self) -> int:
        return await self.raw.count()


class TypedCell(Generic[V]):
    """单值存储，未写入过时返回 default"""

    def __init__(self, raw: ByteCell, codec: Codec[V], default: V):
        self.raw = raw
        self.codec = codec
        self.default = default

    async def get(self) -> V:
        data = await self.raw.get()
        return self.default if data is None else self.codec.decode(data)

    async def set(self, value: V) -> V:
        """整体替换，返回旧值"""
        data = self.codec.encode(value)
        previous = await self.raw.set(data)
        return self.default if previous is None else self.codec.decode(previous)


class TypedLog(Generic[V]):
    """追加日志"""

    def __init__(self, raw: ByteLog, codec: Codec[V]):
        self.raw = raw
        self.codec = codec

    async def append(self, value: V) -> int:
        return await self.raw.append(self.codec.encode(value))

    async def get(self, index: int) -> V | None:
        data = await self.raw.get(index)
        return None if data is None else self.codec.decode(data)

    async def count(self) -> int:
        return await self.raw.count()

    async def tail(self, limit: int) -> list[V]:
        """最近的 limit 条记录（按写入顺序）"""
        total = await self.count()
        entries = []
        for index in range(max(0, total - limit), total):
            value = await self.get(index)
            if value is not None:
                entries.append(value)
        return entries
