"""店铺信息服务"""

from catalog_engine.core.logging import get_logger
from catalog_engine.repositories.store_data import StoreDataRepository
from catalog_engine.schemas.store import StoreDataNone, StoreDataV1, StoreInitArg

logger = get_logger("store_data")


class StoreService:
    """店铺信息读写"""

    def __init__(self, repo: StoreDataRepository):
        self.repo = repo

    async def get_store_data(self) -> StoreDataNone | StoreDataV1:
        return await self.repo.get()

    async def init_store(self, arg: StoreInitArg | None) -> StoreDataNone | StoreDataV1:
        """启动时初始化店铺信息

        没有初始化参数时保持现状，返回当前记录。
        """
        if arg is None:
            logger.debug("未提供店铺初始化参数，保持现状")
            return await self.repo.get()
        await self.update_store_data(arg.id, arg.name)
        return await self.repo.get()

    async def update_store_data(self, store_id: str, name: str) -> StoreDataNone | StoreDataV1:
        """整体替换店铺信息，返回旧记录

        Raises:
            RecordEncodeError: 编码失败（如超出大小上限），存储保持不变
        """
        previous = await self.repo.replace(StoreDataV1(id=store_id, name=name))
        logger.info("店铺信息已更新", store_id=store_id, name=name, previous=previous.tag)
        return previous
