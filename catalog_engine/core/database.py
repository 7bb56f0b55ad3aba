"""数据库连接管理（SQLite + SQLAlchemy asyncio）"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from catalog_engine.core.logging import get_logger
from catalog_engine.models.base import Base

logger = get_logger("database")


class SQLiteProvider:
    """SQLite 数据库提供者"""

    def __init__(self, database_url: str):
        self._database_url = database_url
        self._engine = create_async_engine(
            database_url,
            connect_args={"timeout": 30, "check_same_thread": False},
            echo=False,
        )
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    async def init_db(self) -> None:
        """初始化数据库（创建表）"""
        async with self._engine.begin() as conn:
            await conn.execute(text("PRAGMA journal_mode=WAL"))
            await conn.run_sync(Base.metadata.create_all)
        logger.info("SQLite 数据库初始化完成", url=self._database_url)

    async def close(self) -> None:
        await self._engine.dispose()
        logger.info("SQLite 连接已关闭")
