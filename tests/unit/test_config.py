"""
配置与异常单元测试
"""
import pytest

from book_catalog.config import Settings, get_settings
from book_catalog.exceptions import (
    BookNotFoundError,
    CatalogException,
    ConflictError,
    DuplicateBookError,
    NotFoundError,
    ValidationError,
)


class TestSettings:
    """Settings测试类"""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CATALOG_DATABASE_URL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.database_url.startswith("sqlite+aiosqlite:///")
        assert settings.port == 8000
        assert settings.log_level == "INFO"

    def test_env_override(self, monkeypatch):
        """测试环境变量覆盖配置"""
        monkeypatch.setenv("CATALOG_PORT", "9000")
        monkeypatch.setenv("CATALOG_LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.port == 9000
        assert settings.log_level == "DEBUG"

    def test_sqlite_url_uses_async_driver(self):
        settings = Settings(_env_file=None, database_url="sqlite:///./books.db")

        assert settings.database_url == "sqlite+aiosqlite:///./books.db"

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()

        assert get_settings() is get_settings()


class TestExceptions:
    """异常层级测试"""

    @pytest.mark.parametrize("exc_type,base", [
        (ValidationError, CatalogException),
        (ConflictError, CatalogException),
        (NotFoundError, CatalogException),
        (DuplicateBookError, ConflictError),
        (BookNotFoundError, NotFoundError),
    ])
    def test_hierarchy(self, exc_type, base):
        assert issubclass(exc_type, base)

    def test_message(self):
        exc = BookNotFoundError("Book not found with id: 1")

        assert exc.message == "Book not found with id: 1"
        assert str(exc) == "Book not found with id: 1"
