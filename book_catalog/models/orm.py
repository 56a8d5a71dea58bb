"""
数据库表映射
"""
from sqlalchemy import Column, DateTime, Integer, String

from ..database import Base
from .book import AUTHOR_MAX_LENGTH, ISBN_MAX_LENGTH, TITLE_MAX_LENGTH, Book


class BookRecord(Base):
    """books表"""

    __tablename__ = "books"
    # AUTOINCREMENT 保证删除后的id不会被重新分配
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False, index=True)
    author = Column(String(AUTHOR_MAX_LENGTH), nullable=False, index=True)
    isbn = Column(String(ISBN_MAX_LENGTH), unique=True, nullable=True)
    publication_year = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime, nullable=False)
    updated_at = Column(DateTime, nullable=False)

    def to_book(self) -> Book:
        """转换为与会话无关的领域对象"""
        return Book(
            id=self.id,
            title=self.title,
            author=self.author,
            isbn=self.isbn,
            publication_year=self.publication_year,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def __repr__(self):
        return f"BookRecord(id={self.id}, isbn='{self.isbn}')"
