"""审计日志 Repository（追加写入）"""

from catalog_engine.core.codec import RecordCodec
from catalog_engine.schemas.audit import AuditEntry
from catalog_engine.storage.base import StorageProvider
from catalog_engine.storage.typed import TypedLog

AUDIT_LOG_NAMESPACE = "audit_log"


class AuditLogRepository:
    def __init__(self, storage: StorageProvider):
        self.log: TypedLog[AuditEntry] = TypedLog(
            storage.log(AUDIT_LOG_NAMESPACE), RecordCodec(AuditEntry)
        )

    async def append(self, entry: AuditEntry) -> int:
        return await self.log.append(entry)

    async def recent(self, limit: int = 50) -> list[AuditEntry]:
        """最近的若干条记录，按写入顺序"""
        return await self.log.tail(limit)
