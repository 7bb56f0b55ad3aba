"""存储抽象层

目录引擎依赖三种按字节存取的存储：
- ByteMap: 有序映射（按键字节序迭代）
- ByteCell: 单值存储
- ByteLog: 追加日志

StorageProvider 按名称提供这些存储，具体实现有内存版和 SQLite 版。
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class ByteMap(ABC):
    """有序字节映射"""

    @abstractmethod
    async def get(self, key: bytes) -> bytes | None:
        """读取键对应的值"""

    @abstractmethod
    async def insert_many(self, pairs: list[tuple[bytes, bytes]]) -> list[bytes | None]:
        """按顺序写入多个键值对，返回每次写入前的旧值

        同一次调用内的写入要么全部生效，要么全部不生效。
        """

    @abstractmethod
    async def remove(self, key: bytes) -> bytes | None:
        """删除键，返回旧值"""

    @abstractmethod
    def items(self, start: bytes | None = None) -> AsyncIterator[tuple[bytes, bytes]]:
        """按键升序迭代（从 start 开始，包含 start）"""

    @abstractmethod
    async def count(self) -> int:
        """条目数"""

    async def insert(self, key: bytes, value: bytes) -> bytes | None:
        """写入单个键值对，返回旧值"""
        previous = await self.insert_many([(key, value)])
        return previous[0]

    async def contains(self, key: bytes) -> bool:
        return await self.get(key) is not None


class ByteCell(ABC):
    """单值存储"""

    @abstractmethod
    async def get(self) -> bytes | None:
        """读取当前值，从未写入时返回 None"""

    @abstractmethod
    async def set(self, value: bytes) -> bytes | None:
        """整体替换当前值，返回旧值"""


class ByteLog(ABC):
    """追加日志"""

    @abstractmethod
    async def append(self, value: bytes) -> int:
        """追加一条记录，返回其序号（从 0 开始）"""

    @abstractmethod
    async def get(self, index: int) -> bytes | None:
        """按序号读取"""

    @abstractmethod
    async def count(self) -> int:
        """记录数"""


class StorageProvider(ABC):
    """存储提供者：同一名称始终返回同一逻辑存储"""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """返回后端名称: memory, sqlite"""

    @abstractmethod
    def map(self, namespace: str) -> ByteMap:
        """获取有序映射"""

    @abstractmethod
    def cell(self, name: str) -> ByteCell:
        """获取单值存储"""

    @abstractmethod
    def log(self, namespace: str) -> ByteLog:
        """获取追加日志"""

    async def init(self) -> None:
        """初始化（建表等）"""

    async def close(self) -> None:
        """释放资源"""
