"""SQLite 持久化存储（SQLAlchemy asyncio）

每个操作使用独立事务；insert_many 在同一个事务内完成，保证批量写入的原子性。
同一个 SqlStorage 派生的所有写操作共用一把写锁，事务之间串行执行。
"""

import asyncio
from collections.abc import AsyncIterator

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from catalog_engine.core.database import SQLiteProvider
from catalog_engine.models.storage import CellEntry, LogRecord, MapEntry
from catalog_engine.storage.base import ByteCell, ByteLog, ByteMap, StorageProvider


class SqlByteMap(ByteMap):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        namespace: str,
        write_lock: asyncio.Lock,
    ):
        self._session_factory = session_factory
        self._write_lock = write_lock
        self.namespace = namespace

    async def get(self, key: bytes) -> bytes | None:
        async with self._session_factory() as session:
            row = await session.get(MapEntry, (self.namespace, key))
            return row.value if row is not None else None

    async def insert_many(self, pairs: list[tuple[bytes, bytes]]) -> list[bytes | None]:
        previous: list[bytes | None] = []
        async with self._write_lock, self._session_factory() as session, session.begin():
            for key, value in pairs:
                row = await session.get(MapEntry, (self.namespace, key))
                if row is None:
                    previous.append(None)
                    session.add(MapEntry(namespace=self.namespace, key=key, value=value))
                    # 同一批次内重复的键需要能被后续 get 读到
                    await session.flush()
                else:
                    previous.append(row.value)
                    row.value = value
        return previous

    async def remove(self, key: bytes) -> bytes | None:
        async with self._write_lock, self._session_factory() as session, session.begin():
            row = await session.get(MapEntry, (self.namespace, key))
            if row is None:
                return None
            value = row.value
            await session.delete(row)
            return value

    async def items(self, start: bytes | None = None) -> AsyncIterator[tuple[bytes, bytes]]:
        stmt = select(MapEntry.key, MapEntry.value).where(MapEntry.namespace == self.namespace)
        if start is not None:
            stmt = stmt.where(MapEntry.key >= start)
        async with self._session_factory() as session:
            result = await session.execute(stmt.order_by(MapEntry.key))
            rows = result.all()
        for key, value in rows:
            yield key, value

    async def count(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(MapEntry).where(MapEntry.namespace == self.namespace)
            )
            return result.scalar_one()


class SqlByteCell(ByteCell):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        name: str,
        write_lock: asyncio.Lock,
    ):
        self._session_factory = session_factory
        self._write_lock = write_lock
        self.name = name

    async def get(self) -> bytes | None:
        async with self._session_factory() as session:
            row = await session.get(CellEntry, self.name)
            return row.value if row is not None else None

    async def set(self, value: bytes) -> bytes | None:
        async with self._write_lock, self._session_factory() as session, session.begin():
            row = await session.get(CellEntry, self.name)
            if row is None:
                session.add(CellEntry(name=self.name, value=value))
                return None
            previous = row.value
            row.value = value
            return previous


class SqlByteLog(ByteLog):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        namespace: str,
        write_lock: asyncio.Lock,
    ):
        self._session_factory = session_factory
        self._write_lock = write_lock
        self.namespace = namespace

    async def append(self, value: bytes) -> int:
        async with self._write_lock, self._session_factory() as session, session.begin():
            result = await session.execute(
                select(func.max(LogRecord.idx)).where(LogRecord.namespace == self.namespace)
            )
            last = result.scalar_one_or_none()
            index = 0 if last is None else last + 1
            session.add(LogRecord(namespace=self.namespace, idx=index, value=value))
        return index

    async def get(self, index: int) -> bytes | None:
        async with self._session_factory() as session:
            row = await session.get(LogRecord, (self.namespace, index))
            return row.value if row is not None else None

    async def count(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(LogRecord).where(LogRecord.namespace == self.namespace)
            )
            return result.scalar_one()


class SqlStorage(StorageProvider):
    """SQLite 存储提供者"""

    def __init__(self, database_url: str):
        self._provider = SQLiteProvider(database_url)
        # SQLite 同一时刻只允许一个写事务
        self._write_lock = asyncio.Lock()

    @property
    def backend_name(self) -> str:
        return "sqlite"

    def map(self, namespace: str) -> SqlByteMap:
        return SqlByteMap(self._provider.session_factory, namespace, self._write_lock)

    def cell(self, name: str) -> SqlByteCell:
        return SqlByteCell(self._provider.session_factory, name, self._write_lock)

    def log(self, namespace: str) -> SqlByteLog:
        return SqlByteLog(self._provider.session_factory, namespace, self._write_lock)

    async def init(self) -> None:
        await self._provider.init_db()

    async def close(self) -> None:
        await self._provider.close()
