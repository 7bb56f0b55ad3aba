"""存储键生成器

存储键由外部服务分配，每次调用固定返回 4 个全局唯一的新键。
- RemoteKeyGenerator: 通过 HTTP 调用外部分配服务
- LocalKeyGenerator: 本地持久化计数器（未配置外部服务时使用）

任何失败都以 KeyGenerationError 抛出，不做重试，也不自行编造键。
"""

import asyncio
from abc import ABC, abstractmethod

import httpx

from catalog_engine.core.codec import UIntKeyCodec
from catalog_engine.core.errors import KeyGenerationError
from catalog_engine.core.logging import get_logger
from catalog_engine.storage.base import StorageProvider
from catalog_engine.storage.typed import TypedCell

logger = get_logger("keygen")

KEY_BATCH_SIZE = 4
KEY_COUNTER_CELL = "key_counter"


class KeyGenerator(ABC):
    """批量存储键生成器"""

    @abstractmethod
    async def create_four(self) -> list[int]:
        """分配 4 个新的存储键"""


class RemoteKeyGenerator(KeyGenerator):
    """外部键分配服务客户端

    约定接口：POST {base_url}/keys，返回 {"keys": [k1, k2, k3, k4]}
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint = f"{base_url.rstrip('/')}/keys"
        self.timeout = timeout
        self._transport = transport

    async def create_four(self) -> list[int]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.endpoint, json={"count": KEY_BATCH_SIZE})
        except httpx.ConnectError as e:
            raise KeyGenerationError(f"无法连接到键分配服务 {self.endpoint}") from e
        except httpx.TimeoutException as e:
            raise KeyGenerationError(f"键分配服务请求超时: {self.endpoint}") from e
        except httpx.HTTPError as e:
            raise KeyGenerationError(f"键分配服务请求失败: {e}") from e

        if response.status_code != 200:
            raise KeyGenerationError(
                f"键分配服务返回错误状态码: {response.status_code} - {response.text[:200]}"
            )

        try:
            keys = response.json()["keys"]
        except (ValueError, KeyError, TypeError) as e:
            raise KeyGenerationError(f"键分配服务返回了无法解析的内容: {response.text[:200]}") from e

        if (
            not isinstance(keys, list)
            or len(keys) != KEY_BATCH_SIZE
            or not all(isinstance(k, int) and not isinstance(k, bool) and k >= 0 for k in keys)
        ):
            raise KeyGenerationError(f"键分配服务应返回 {KEY_BATCH_SIZE} 个非负整数键，实际: {keys!r}")

        logger.debug("分配存储键", keys=keys)
        return keys


class LocalKeyGenerator(KeyGenerator):
    """本地持久化计数器，键单调递增，进程重启后继续计数"""

    def __init__(self, storage: StorageProvider):
        self.counter: TypedCell[int] = TypedCell(storage.cell(KEY_COUNTER_CELL), UIntKeyCodec(), 0)
        self._lock = asyncio.Lock()

    async def create_four(self) -> list[int]:
        # 计数器的读改写串行执行
        async with self._lock:
            start = await self.counter.get()
            await self.counter.set(start + KEY_BATCH_SIZE)
        return list(range(start, start + KEY_BATCH_SIZE))
