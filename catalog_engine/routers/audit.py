"""审计日志 API"""

from fastapi import APIRouter, Depends, Query

from catalog_engine.core.dependencies import CatalogContainer, get_container
from catalog_engine.schemas.audit import AuditEntry

router = APIRouter(prefix="/api/v1/audit", tags=["audit"])


@router.get("", response_model=list[AuditEntry])
async def list_audit_entries(
    limit: int = Query(50, ge=1, le=1000, description="返回最近的条数"),
    container: CatalogContainer = Depends(get_container),
):
    """获取最近的审计日志（按写入顺序）"""
    return await container.audit.recent(limit)
