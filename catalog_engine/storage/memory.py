"""内存存储（开发调试 / 单测用，进程退出即丢失）"""

import bisect
from collections.abc import AsyncIterator

from catalog_engine.storage.base import ByteCell, ByteLog, ByteMap, StorageProvider


class MemoryByteMap(ByteMap):
    """基于有序键列表 + 字典的有序映射"""

    def __init__(self) -> None:
        self._data: dict[bytes, bytes] = {}
        self._keys: list[bytes] = []

    async def get(self, key: bytes) -> bytes | None:
        return self._data.get(key)

    async def insert_many(self, pairs: list[tuple[bytes, bytes]]) -> list[bytes | None]:
        previous = []
        for key, value in pairs:
            if key not in self._data:
                bisect.insort(self._keys, key)
            previous.append(self._data.get(key))
            self._data[key] = value
        return previous

    async def remove(self, key: bytes) -> bytes | None:
        value = self._data.pop(key, None)
        if value is not None:
            del self._keys[bisect.bisect_left(self._keys, key)]
        return value

    async def items(self, start: bytes | None = None) -> AsyncIterator[tuple[bytes, bytes]]:
        begin = 0 if start is None else bisect.bisect_left(self._keys, start)
        # 迭代快照，迭代过程中的写入不影响本次结果
        for key in self._keys[begin:]:
            yield key, self._data[key]

    async def count(self) -> int:
        return len(self._data)


class MemoryByteCell(ByteCell):
    def __init__(self) -> None:
        self._value: bytes | None = None

    async def get(self) -> bytes | None:
        return self._value

    async def set(self, value: bytes) -> bytes | None:
        previous, self._value = self._value, value
        return previous


class MemoryByteLog(ByteLog):
    def __init__(self) -> None:
        self._entries: list[bytes] = []

    async def append(self, value: bytes) -> int:
        self._entries.append(value)
        return len(self._entries) - 1

    async def get(self, index: int) -> bytes | None:
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    async def count(self) -> int:
        return len(self._entries)


class MemoryStorage(StorageProvider):
    """内存存储提供者"""

    def __init__(self) -> None:
        self._maps: dict[str, MemoryByteMap] = {}
        self._cells: dict[str, MemoryByteCell] = {}
        self._logs: dict[str, MemoryByteLog] = {}

    @property
    def backend_name(self) -> str:
        return "memory"

    def map(self, namespace: str) -> MemoryByteMap:
        return self._maps.setdefault(namespace, MemoryByteMap())

    def cell(self, name: str) -> MemoryByteCell:
        return self._cells.setdefault(name, MemoryByteCell())

    def log(self, namespace: str) -> MemoryByteLog:
        return self._logs.setdefault(namespace, MemoryByteLog())
