"""审计日志条目"""

from datetime import datetime, timezone
from enum import StrEnum

from pydantic import BaseModel, Field


class AuditLevel(StrEnum):
    """审计日志级别"""

    DEBUG = "Debug"
    TRACE = "Trace"
    INFO = "Info"
    WARN = "Warn"
    ERROR = "Error"


class AuditEntry(BaseModel):
    """追加写入审计日志的一条记录"""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    level: AuditLevel
    caller: str | None = None
    message: str
    context: str | None = None
