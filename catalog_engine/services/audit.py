"""审计日志服务

每次商品页面查询追加一条审计记录：成功为 Info，失败为 Error 并附带错误码和消息。
"""

from catalog_engine.core.errors import ItemPageError
from catalog_engine.core.logging import get_logger
from catalog_engine.repositories.audit_log import AuditLogRepository
from catalog_engine.schemas.audit import AuditEntry, AuditLevel

logger = get_logger("audit")

PAGE_QUERY_OK = "get_item_page_data: Ok"
PAGE_QUERY_ERR = "get_item_page_data: Err"


class AuditService:
    def __init__(self, repo: AuditLogRepository, enabled: bool = True):
        self.repo = repo
        self.enabled = enabled

    async def record(
        self,
        level: AuditLevel,
        message: str,
        *,
        caller: str | None = None,
        context: str | None = None,
    ) -> int | None:
        """追加一条记录，未启用时返回 None"""
        if not self.enabled:
            return None
        return await self.repo.append(
            AuditEntry(level=level, caller=caller, message=message, context=context)
        )

    async def record_page_query(self, caller: str | None, error: ItemPageError | None = None) -> int | None:
        if error is None:
            return await self.record(AuditLevel.INFO, PAGE_QUERY_OK, caller=caller)

        logger.debug("记录页面查询失败", caller=caller, code=error.code)
        return await self.record(
            AuditLevel.ERROR,
            PAGE_QUERY_ERR,
            caller=caller,
            context=f"code: {error.code}, message: {error.error_message}",
        )

    async def recent(self, limit: int = 50) -> list[AuditEntry]:
        return await self.repo.recent(limit)
