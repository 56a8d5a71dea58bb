"""
书籍模型
"""
from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Optional, Dict, Any

# 字段约束
TITLE_MAX_LENGTH = 200
AUTHOR_MAX_LENGTH = 100
ISBN_MAX_LENGTH = 20
MIN_PUBLICATION_YEAR = 1000
MAX_PUBLICATION_YEAR = 2100

# 调用方可写入的字段，id和时间戳由存储层维护
EDITABLE_FIELDS = ("title", "author", "isbn", "publication_year")


@dataclass
class Book:
    """书籍模型"""
    title: str
    author: str
    isbn: Optional[str] = None
    publication_year: Optional[int] = None
    id: Optional[int] = None  # 数据库自增主键
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __repr__(self):
        return f"Book(id={self.id}, title='{self.title}', author='{self.author}', isbn={self.isbn!r})"


@dataclass(frozen=True)
class BookStatistics:
    """目录统计"""
    total_books: int
    unique_authors: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self):
        return f"Total Books: {self.total_books} | Unique Authors: {self.unique_authors}"
