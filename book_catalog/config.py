"""
应用配置

所有配置项均可通过 CATALOG_ 前缀的环境变量或 .env 文件覆盖
"""
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """应用配置"""

    model_config = SettingsConfigDict(
        env_prefix="CATALOG_",
        env_file=".env",
        extra="ignore",
    )

    # 数据库
    database_url: str = "sqlite+aiosqlite:///./data/catalog.db"
    database_echo: bool = False

    # 应用
    app_title: str = "图书目录服务"
    app_version: str = "1.0.0"
    cors_origins: List[str] = ["*"]

    # 服务器
    host: str = "127.0.0.1"
    port: int = 8000

    # 日志
    log_level: str = "INFO"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_async_driver(cls, v: str) -> str:
        """sqlite:// 地址自动切换为 aiosqlite 驱动"""
        if isinstance(v, str) and v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()
