"""持久化存储表

三张表分别承载有序映射、单值存储和追加日志，按 namespace / name 区分
不同的逻辑存储。键和值都是编码后的字节。
"""

from sqlalchemy import Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_engine.models.base import Base


class MapEntry(Base):
    """有序映射条目"""

    __tablename__ = "map_entries"

    namespace: Mapped[str] = mapped_column(String(64), primary_key=True)
    # SQLite 按 memcmp 比较 BLOB，与字节序一致
    key: Mapped[bytes] = mapped_column(LargeBinary, primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class CellEntry(Base):
    """单值存储"""

    __tablename__ = "cell_entries"

    name: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)


class LogRecord(Base):
    """追加日志记录"""

    __tablename__ = "log_records"

    namespace: Mapped[str] = mapped_column(String(64), primary_key=True)
    idx: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    value: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
