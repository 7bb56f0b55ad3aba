"""记录与键的字节编码

持久化记录统一用 pydantic 编码为 JSON 字节；存储键使用定长大端编码，
保证字节序与数值序一致，有序存储按字节比较即可得到按键排序的结果。
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from catalog_engine.core.errors import RecordDecodeError, RecordEncodeError

T = TypeVar("T")


class Codec(ABC, Generic[T]):
    """值 ↔ 字节"""

    @abstractmethod
    def encode(self, value: T) -> bytes:
        """编码"""

    @abstractmethod
    def decode(self, data: bytes) -> T:
        """解码"""


class RecordCodec(Codec[T]):
    """pydantic 记录编码（JSON）

    Args:
        record_type: 模型类或 Annotated 联合类型
        name: 记录名称（用于错误消息）
        max_bytes: 编码后允许的最大字节数，None 表示不限制
    """

    def __init__(self, record_type: Any, *, name: str | None = None, max_bytes: int | None = None):
        self._adapter: TypeAdapter[T] = TypeAdapter(record_type)
        self.name = name or getattr(record_type, "__name__", repr(record_type))
        self.max_bytes = max_bytes

    def encode(self, value: T) -> bytes:
        try:
            data = self._adapter.dump_json(value)
        except PydanticSerializationError as e:
            raise RecordEncodeError(f"{self.name} 编码失败: {e}") from e
        if self.max_bytes is not None and len(data) > self.max_bytes:
            raise RecordEncodeError(
                f"{self.name} 编码后 {len(data)} 字节，超过上限 {self.max_bytes} 字节"
            )
        return data

    def decode(self, data: bytes) -> T:
        try:
            return self._adapter.validate_json(data)
        except ValidationError as e:
            raise RecordDecodeError(f"{self.name} 解码失败: {e}") from e


class UIntKeyCodec(Codec[int]):
    """无符号整数键（定长大端）"""

    def __init__(self, width: int = 8):
        self.width = width

    def encode(self, value: int) -> bytes:
        try:
            return value.to_bytes(self.width, "big", signed=False)
        except OverflowError as e:
            raise RecordEncodeError(f"键 {value} 超出 {self.width} 字节无符号整数范围") from e

    def decode(self, data: bytes) -> int:
        if len(data) != self.width:
            raise RecordDecodeError(f"整数键长度应为 {self.width} 字节，实际 {len(data)} 字节")
        return int.from_bytes(data, "big", signed=False)


class StrKeyCodec(Codec[str]):
    """字符串键（UTF-8）"""

    def encode(self, value: str) -> bytes:
        return value.encode("utf-8")

    def decode(self, data: bytes) -> str:
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise RecordDecodeError(f"字符串键不是合法的 UTF-8: {e}") from e
