"""统一错误处理

提供标准化的错误响应结构、HTTP 层异常，以及目录引擎内部的异常体系。

查找类的"不存在"（图片组、规格、属性组合等）在引擎内部一律用 None 表示，
不会抛出异常；只有编码失败、外部依赖失败等真正的异常情况才会走到这里。
"""

from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel


class ErrorPayload(BaseModel):
    """标准错误响应结构"""

    code: str
    message: str
    data: dict[str, Any] | None = None
    timestamp: str


class AppError(HTTPException):
    """应用自定义异常

    使用示例:
        raise AppError(
            code="store_not_initialized",
            message="店铺尚未初始化",
            status_code=409,
        )
    """

    def __init__(
        self,
        *,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        data: dict[str, Any] | None = None,
    ):
        self.code = code
        self.error_message = message
        self.data = data
        super().__init__(status_code=status_code, detail=message)


class ItemPageErrorCode(StrEnum):
    """商品页面查询错误码"""

    ITEM_NOT_FOUND = "ItemNotFound"
    NO_AVAILABLE_ATTR = "NoAvailableAttr"


_PAGE_ERROR_STATUS = {
    ItemPageErrorCode.ITEM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ItemPageErrorCode.NO_AVAILABLE_ATTR: status.HTTP_409_CONFLICT,
}


class ItemPageError(AppError):
    """商品页面查询失败（带错误码和可读消息）"""

    def __init__(
        self,
        code: ItemPageErrorCode,
        message: str,
        data: dict[str, Any] | None = None,
    ):
        self.page_code = code
        super().__init__(
            code=code.value,
            message=message,
            status_code=_PAGE_ERROR_STATUS[code],
            data=data,
        )


class CatalogError(Exception):
    """目录引擎内部异常基类"""


class RecordEncodeError(CatalogError):
    """记录无法编码（或编码后超出允许大小）"""


class RecordDecodeError(CatalogError):
    """存储中的字节无法解码为期望的版本化类型"""


class UnsupportedVersionError(CatalogError):
    """读取到未知的记录版本"""

    def __init__(self, record: str, version: Any):
        self.record = record
        self.version = version
        super().__init__(f"{record} 的版本 {version!r} 不受支持")


class KeyGenerationError(CatalogError):
    """外部存储键生成服务无法返回一批新键"""


def create_error_response(
    code: str,
    message: str,
    data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """创建标准错误响应"""
    return {
        "error": {
            "code": code,
            "message": message,
            "data": data,
            "timestamp": datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z",
        }
    }


def raise_not_found(resource: str, resource_id: str | None = None) -> None:
    """抛出资源不存在错误"""
    raise AppError(
        code=f"{resource}_not_found",
        message=f"{resource.capitalize()} 不存在",
        status_code=status.HTTP_404_NOT_FOUND,
        data={"resource": resource, "id": resource_id} if resource_id else {"resource": resource},
    )


def raise_service_unavailable(
    service: str,
    message: str | None = None,
    *,
    cause: Exception | None = None,
) -> None:
    """抛出服务不可用错误"""
    raise AppError(
        code="service_unavailable",
        message=message or f"{service} 服务不可用",
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        data={"service": service},
    ) from cause
