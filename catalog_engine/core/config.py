"""应用配置管理"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ========== 存储配置 ==========
    # sqlite: 持久化存储（进程重启后数据仍在）
    # memory: 纯内存存储（开发调试 / 单测）
    STORAGE_BACKEND: Literal["sqlite", "memory"] = "sqlite"
    DATABASE_PATH: str = "./data/catalog.db"
    # 单值存储（店铺信息等）编码后的最大字节数，超出则拒绝写入
    RECORD_MAX_BYTES: int = 1024 * 1024

    # ========== 存储键生成服务 ==========
    # 每次请求返回 4 个全局唯一的存储键；留空则使用本地持久化计数器
    KEYGEN_URL: str = ""
    KEYGEN_TIMEOUT_SECONDS: float = 10.0

    # ========== 店铺初始化参数（可选） ==========
    # 两者同时提供时，启动时写入店铺信息
    STORE_ID: str | None = None
    STORE_NAME: str | None = None

    # ========== 审计日志 ==========
    AUDIT_LOG_ENABLED: bool = True

    # 服务配置
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:3000"

    # 日志配置
    LOG_LEVEL: str = "DEBUG"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    LOG_MODE: str = "detailed"  # simple, detailed, json
    LOG_FILE: str = "./logs/catalog.log"  # 日志文件路径，留空则不记录文件
    LOG_FILE_ROTATION: str = "10 MB"  # 日志文件轮转大小
    LOG_FILE_RETENTION: str = "7 days"  # 日志文件保留时间

    @property
    def database_url(self) -> str:
        """SQLite 数据库 URL"""
        return f"sqlite+aiosqlite:///{self.DATABASE_PATH}"

    @property
    def cors_origins_list(self) -> list[str]:
        """
        CORS 允许的源列表

        支持两种写法：
        1. 逗号分隔字符串：http://a.com,http://b.com
        2. JSON 数组：["http://a.com", "http://b.com"]
        """
        raw = (self.CORS_ORIGINS or "").strip()
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
            except json.JSONDecodeError:
                parsed = None
            if isinstance(parsed, list):
                return [str(origin).strip() for origin in parsed]
        return [origin.strip() for origin in raw.split(",") if origin.strip()]

    @property
    def store_init_arg(self) -> tuple[str, str] | None:
        """启动时的店铺初始化参数，未完整配置时返回 None"""
        if self.STORE_ID and self.STORE_NAME:
            return self.STORE_ID, self.STORE_NAME
        return None

    def ensure_data_dir(self) -> None:
        """确保数据目录存在"""
        if self.STORAGE_BACKEND == "sqlite":
            Path(self.DATABASE_PATH).parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()


settings = get_settings()
