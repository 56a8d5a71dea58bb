"""
数据库配置
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base

from .config import get_settings

logger = logging.getLogger(__name__)

# 创建基础模型类
Base = declarative_base()


def get_database_url() -> str:
    """获取数据库URL"""
    return get_settings().database_url


def _casefold(value: Optional[str]) -> Optional[str]:
    return value.casefold() if value is not None else None


def _register_sqlite_functions(dbapi_connection, connection_record):
    """SQLite内置的lower()只处理ASCII，注册casefold()用于不区分大小写的搜索"""
    dbapi_connection.create_function("casefold", 1, _casefold)


class Database:
    """数据库连接管理器"""

    def __init__(self, database_url: Optional[str] = None, echo: bool = False):
        self.database_url = database_url or get_database_url()
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None

    def _ensure_sqlite_directory(self):
        url = make_url(self.database_url)
        if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    async def init_db(self):
        """初始化数据库引擎并创建表结构"""
        # 注册ORM映射
        from .models import orm  # noqa: F401

        self._ensure_sqlite_directory()
        self.engine = create_async_engine(self.database_url, echo=self.echo)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _register_sqlite_functions)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            autoflush=False,
            expire_on_commit=False,
        )

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info(f"数据库初始化完成: {self.database_url}")

    async def close(self):
        """释放连接池"""
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("数据库连接已关闭")
        self.engine = None
        self.session_factory = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """获取数据库会话的上下文管理器"""
        if self.session_factory is None:
            raise RuntimeError("Database is not initialized, call init_db() first")
        async with self.session_factory() as session:
            yield session

    async def ping(self) -> bool:
        """检查数据库连通性"""
        if self.engine is None:
            return False
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
