"""
书籍存储抽象接口
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.book import Book


class BookStore(ABC):
    """书籍存储接口

    业务层只通过这些方法访问持久化数据，id和created_at/updated_at
    只能由实现类在save/save_all中设置。
    """

    @abstractmethod
    async def save(self, book: Book) -> Book:
        """保存书籍

        book.id为空时新增记录，否则覆盖已有记录的可变字段。

        Returns:
            带有id和时间戳的持久化结果
        """

    @abstractmethod
    async def save_all(self, books: List[Book]) -> List[Book]:
        """在同一事务内保存多本书籍，按输入顺序返回"""

    @abstractmethod
    async def find_by_id(self, book_id: int) -> Optional[Book]:
        pass

    @abstractmethod
    async def find_by_isbn(self, isbn: str) -> Optional[Book]:
        pass

    @abstractmethod
    async def find_all(self) -> List[Book]:
        pass

    @abstractmethod
    async def find_by_author(self, author: str) -> List[Book]:
        """作者精确匹配"""

    @abstractmethod
    async def find_by_author_newest_first(self, author: str) -> List[Book]:
        """作者精确匹配，按出版年份倒序"""

    @abstractmethod
    async def find_by_title_contains(self, substring: str, case_insensitive: bool = True) -> List[Book]:
        pass

    @abstractmethod
    async def find_by_year(self, year: int) -> List[Book]:
        pass

    @abstractmethod
    async def find_by_year_range(self, start_year: int, end_year: int) -> List[Book]:
        """闭区间 [start_year, end_year]"""

    @abstractmethod
    async def find_published_after(self, year: int) -> List[Book]:
        pass

    @abstractmethod
    async def search(self, term: str) -> List[Book]:
        """标题或作者包含term（不区分大小写）"""

    @abstractmethod
    async def exists_by_isbn(self, isbn: str) -> bool:
        pass

    @abstractmethod
    async def exists_by_id(self, book_id: int) -> bool:
        pass

    @abstractmethod
    async def delete_by_id(self, book_id: int) -> bool:
        pass

    @abstractmethod
    async def delete_all(self, books: Optional[List[Book]] = None) -> int:
        """删除给定书籍，books为None时清空全部，返回删除数量"""

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def count_by_author(self, author: str) -> int:
        pass

    @abstractmethod
    async def count_in_year_range(self, start_year: int, end_year: int) -> int:
        pass

    @abstractmethod
    async def distinct_authors(self) -> List[str]:
        """去重后按字典序排列的作者列表"""
