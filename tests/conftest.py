"""
pytest配置文件，定义全局fixtures和测试配置
"""
import tempfile
from pathlib import Path
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from book_catalog.config import Settings
from book_catalog.database import Database
from book_catalog.main import create_app
from book_catalog.repositories.book_repository import BookRepository


def _sqlite_url(path: str) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def temp_db_path() -> Generator[str, None, None]:
    """为每个测试分配独立的图书目录SQLite文件，测试结束后删除"""
    with tempfile.NamedTemporaryFile(prefix="catalog-", suffix=".db", delete=False) as temp_file:
        temp_path = temp_file.name
    yield temp_path
    Path(temp_path).unlink(missing_ok=True)


@pytest_asyncio.fixture
async def test_db(temp_db_path: str) -> AsyncGenerator[Database, None]:
    """初始化建好books表的目录数据库"""
    test_database = Database(_sqlite_url(temp_db_path))
    await test_database.init_db()
    yield test_database
    await test_database.close()


@pytest_asyncio.fixture
async def db_session(test_db: Database) -> AsyncGenerator[AsyncSession, None]:
    async with test_db.session() as session:
        yield session


@pytest.fixture
def book_repository(db_session: AsyncSession) -> BookRepository:
    return BookRepository(db_session)


@pytest.fixture
def test_settings(temp_db_path: str) -> Settings:
    return Settings(database_url=_sqlite_url(temp_db_path), cors_origins=["*"])


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """创建FastAPI测试客户端（每个测试使用独立数据库）"""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client


@pytest.fixture
def sample_book_data():
    """示例书籍数据"""
    return {
        "title": "Go in Action",
        "author": "William Kennedy",
        "isbn": "978-1-333",
        "publication_year": 2015,
    }


def pytest_configure(config):
    """配置pytest标记"""
    config.addinivalue_line(
        "markers", "unit: 单元测试"
    )
    config.addinivalue_line(
        "markers", "integration: 集成测试"
    )
    config.addinivalue_line(
        "markers", "e2e: 端到端测试"
    )
