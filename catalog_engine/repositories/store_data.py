"""店铺信息 Repository"""

from catalog_engine.core.codec import RecordCodec
from catalog_engine.core.errors import UnsupportedVersionError
from catalog_engine.schemas.store import StoreData, StoreDataNone, StoreDataV1
from catalog_engine.storage.base import StorageProvider
from catalog_engine.storage.typed import TypedCell

STORE_DATA_CELL = "store_data"


class StoreDataRepository:
    """店铺信息数据访问（单值，整体替换）"""

    def __init__(self, storage: StorageProvider, max_bytes: int | None = None):
        self.cell: TypedCell[StoreDataNone | StoreDataV1] = TypedCell(
            storage.cell(STORE_DATA_CELL),
            RecordCodec(StoreData, name="StoreData", max_bytes=max_bytes),
            StoreDataNone(),
        )

    async def get(self) -> StoreDataNone | StoreDataV1:
        return await self.cell.get()

    async def replace(self, data: StoreDataNone | StoreDataV1) -> StoreDataNone | StoreDataV1:
        """整体替换，返回旧值；编码失败时抛出 RecordEncodeError 且不修改存储"""
        return await self.cell.set(data)

    async def store_name(self) -> str:
        """店铺展示名称，未初始化时为空字符串"""
        data = await self.get()
        if isinstance(data, StoreDataV1):
            return data.name
        if isinstance(data, StoreDataNone):
            return ""
        raise UnsupportedVersionError("StoreData", getattr(data, "tag", None))
