"""数据库模型"""

from catalog_engine.models.base import Base
from catalog_engine.models.storage import CellEntry, LogRecord, MapEntry

__all__ = ["Base", "CellEntry", "LogRecord", "MapEntry"]
