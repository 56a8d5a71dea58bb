"""
书籍业务服务层
"""
import logging
from typing import Any, Dict, List, Optional

from ..exceptions import BookNotFoundError, DuplicateBookError, ValidationError
from ..models.book import (
    AUTHOR_MAX_LENGTH,
    EDITABLE_FIELDS,
    ISBN_MAX_LENGTH,
    MAX_PUBLICATION_YEAR,
    MIN_PUBLICATION_YEAR,
    TITLE_MAX_LENGTH,
    Book,
    BookStatistics,
)
from ..repositories.base import BookStore

logger = logging.getLogger(__name__)

_MAX_LENGTHS = {
    "title": TITLE_MAX_LENGTH,
    "author": AUTHOR_MAX_LENGTH,
    "isbn": ISBN_MAX_LENGTH,
}


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


class BookService:
    """书籍服务类"""

    def __init__(self, book_repository: BookStore):
        self.book_repository = book_repository

    # ---------- 校验 ----------

    def _check_fields(self, data: Dict[str, Any]) -> None:
        unknown = sorted(set(data) - set(EDITABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown book fields: {', '.join(unknown)}")

    def _check_text(self, field: str, value: Any) -> str:
        if not isinstance(value, str):
            raise ValidationError(f"Book {field} must be a string!")
        # 长度按去除首尾空白后计算，保存时保留原值
        if len(value.strip()) > _MAX_LENGTHS[field]:
            raise ValidationError(f"Book {field} must be at most {_MAX_LENGTHS[field]} characters!")
        return value

    def _check_year(self, year: Any) -> int:
        # bool是int的子类
        if isinstance(year, bool) or not isinstance(year, int):
            raise ValidationError("Publication year must be an integer!")
        if year < MIN_PUBLICATION_YEAR or year > MAX_PUBLICATION_YEAR:
            raise ValidationError("Invalid publication year!")
        return year

    def _require_term(self, term: Optional[str], message: str) -> str:
        if _is_blank(term):
            raise ValidationError(message)
        return term

    def _check_year_range(self, start_year: Optional[int], end_year: Optional[int]) -> None:
        if start_year is None or end_year is None:
            raise ValidationError("Start year and end year are required!")
        if start_year > end_year:
            raise ValidationError("Start year must be before end year!")

    def _build_candidate(self, book_data: Dict[str, Any]) -> Book:
        """校验新增书籍数据并构造待保存对象"""
        self._check_fields(book_data)

        title = book_data.get("title")
        author = book_data.get("author")
        if _is_blank(title):
            raise ValidationError("Book title is required!")
        if _is_blank(author):
            raise ValidationError("Book author is required!")

        isbn = book_data.get("isbn")
        if isbn is not None:
            isbn = self._check_text("isbn", isbn)

        year = book_data.get("publication_year")
        if year is not None:
            year = self._check_year(year)

        return Book(
            title=self._check_text("title", title),
            author=self._check_text("author", author),
            isbn=isbn,
            publication_year=year,
        )

    def _merge(self, book: Book, update_data: Dict[str, Any]) -> Book:
        """合并更新字段，标题和作者空白时保留原值，ISBN和年份非None即覆盖"""
        for field in ("title", "author"):
            value = update_data.get(field)
            if not _is_blank(value):
                setattr(book, field, self._check_text(field, value))

        isbn = update_data.get("isbn")
        if isbn is not None:
            book.isbn = self._check_text("isbn", isbn)

        year = update_data.get("publication_year")
        if year is not None:
            book.publication_year = self._check_year(year)
        return book

    # ---------- 新增 ----------

    async def add_book(self, book_data: Dict[str, Any]) -> Book:
        """新增书籍"""
        candidate = self._build_candidate(book_data)

        if candidate.isbn is not None and await self.book_repository.exists_by_isbn(candidate.isbn):
            raise DuplicateBookError(f"Book with ISBN {candidate.isbn} already exists!")

        book = await self.book_repository.save(candidate)
        logger.info(f"新增书籍: {book!r}")
        return book

    async def add_books(self, books_data: List[Dict[str, Any]]) -> List[Book]:
        """批量新增书籍，任一校验失败则全部不保存"""
        candidates = [self._build_candidate(book_data) for book_data in books_data]

        seen = set()
        for candidate in candidates:
            if candidate.isbn is None:
                continue
            if candidate.isbn in seen:
                raise DuplicateBookError(f"Duplicate ISBN {candidate.isbn} in batch!")
            seen.add(candidate.isbn)

        for isbn in seen:
            if await self.book_repository.exists_by_isbn(isbn):
                raise DuplicateBookError(f"Book with ISBN {isbn} already exists!")

        books = await self.book_repository.save_all(candidates)
        logger.info(f"批量新增书籍: {len(books)} 本")
        return books

    # ---------- 查询 ----------

    async def get_all_books(self) -> List[Book]:
        return await self.book_repository.find_all()

    async def get_book_by_id(self, book_id: int) -> Optional[Book]:
        """根据ID获取书籍，不存在时返回None"""
        return await self.book_repository.find_by_id(book_id)

    async def get_book_or_raise(self, book_id: int) -> Book:
        book = await self.book_repository.find_by_id(book_id)
        if not book:
            raise BookNotFoundError(f"Book not found with id: {book_id}")
        return book

    async def get_book_by_isbn(self, isbn: str) -> Optional[Book]:
        """根据ISBN获取书籍"""
        return await self.book_repository.find_by_isbn(isbn)

    async def search_books_by_title(self, title: str) -> List[Book]:
        """根据标题搜索书籍（不区分大小写）"""
        term = self._require_term(title, "Search term cannot be empty!")
        return await self.book_repository.find_by_title_contains(term, case_insensitive=True)

    async def search_books(self, search_term: str) -> List[Book]:
        """标题或作者模糊搜索"""
        term = self._require_term(search_term, "Search term cannot be empty!")
        return await self.book_repository.search(term)

    async def get_books_by_author(self, author: str) -> List[Book]:
        """根据作者获取书籍（精确匹配）"""
        self._require_term(author, "Author name cannot be empty!")
        return await self.book_repository.find_by_author(author)

    async def get_books_by_author_newest_first(self, author: str) -> List[Book]:
        self._require_term(author, "Author name cannot be empty!")
        return await self.book_repository.find_by_author_newest_first(author)

    async def get_books_by_year(self, year: Optional[int]) -> List[Book]:
        """根据出版年份获取书籍"""
        if year is None:
            raise ValidationError("Invalid publication year!")
        return await self.book_repository.find_by_year(self._check_year(year))

    async def get_books_by_year_range(self, start_year: Optional[int], end_year: Optional[int]) -> List[Book]:
        """获取出版年份在闭区间内的书籍"""
        self._check_year_range(start_year, end_year)
        return await self.book_repository.find_by_year_range(start_year, end_year)

    async def get_books_published_after(self, year: Optional[int]) -> List[Book]:
        if year is None:
            raise ValidationError("Year is required!")
        return await self.book_repository.find_published_after(year)

    async def count_books_in_year_range(self, start_year: Optional[int], end_year: Optional[int]) -> int:
        self._check_year_range(start_year, end_year)
        return await self.book_repository.count_in_year_range(start_year, end_year)

    async def get_all_authors(self) -> List[str]:
        """获取所有作者（去重、排序）"""
        return await self.book_repository.distinct_authors()

    async def get_total_book_count(self) -> int:
        return await self.book_repository.count()

    async def get_book_count_by_author(self, author: str) -> int:
        return await self.book_repository.count_by_author(author)

    async def book_exists(self, book_id: int) -> bool:
        return await self.book_repository.exists_by_id(book_id)

    async def is_catalog_empty(self) -> bool:
        return await self.book_repository.count() == 0

    async def get_book_statistics(self) -> BookStatistics:
        """获取目录统计信息"""
        total_books = await self.book_repository.count()
        authors = await self.book_repository.distinct_authors()
        return BookStatistics(total_books=total_books, unique_authors=len(authors))

    # ---------- 更新 ----------

    async def update_book(self, book_id: int, update_data: Dict[str, Any]) -> Book:
        """更新书籍（合并语义，未提供的字段不会被清空）"""
        self._check_fields(update_data)
        book = await self.get_book_or_raise(book_id)

        current_isbn = book.isbn
        book = self._merge(book, update_data)
        if book.isbn != current_isbn and await self.book_repository.exists_by_isbn(book.isbn):
            raise DuplicateBookError(f"Another book with ISBN {book.isbn} already exists!")

        book = await self.book_repository.save(book)
        logger.info(f"更新书籍: {book!r}")
        return book

    async def partial_update_book(
        self,
        book_id: int,
        title: Optional[str] = None,
        author: Optional[str] = None,
        isbn: Optional[str] = None,
        year: Optional[int] = None,
    ) -> Book:
        """部分更新书籍，只修改提供的字段"""
        return await self.update_book(
            book_id,
            {"title": title, "author": author, "isbn": isbn, "publication_year": year},
        )

    # ---------- 删除 ----------

    async def delete_book(self, book_id: int) -> None:
        """删除书籍"""
        if not await self.book_repository.exists_by_id(book_id):
            raise BookNotFoundError(f"Cannot delete: Book not found with id: {book_id}")
        await self.book_repository.delete_by_id(book_id)
        logger.info(f"删除书籍: id={book_id}")

    async def delete_book_by_isbn(self, isbn: str) -> None:
        book = await self.book_repository.find_by_isbn(isbn)
        if not book:
            raise BookNotFoundError(f"Book not found with ISBN: {isbn}")
        await self.book_repository.delete_all([book])
        logger.info(f"删除书籍: isbn={isbn}")

    async def delete_books_by_author(self, author: str) -> int:
        """删除某作者的全部书籍，返回删除数量"""
        books = await self.book_repository.find_by_author(author)
        if not books:
            raise BookNotFoundError(f"No books found by author: {author}")

        await self.book_repository.delete_all(books)
        logger.info(f"删除作者 {author} 的书籍: {len(books)} 本")
        return len(books)

    async def delete_all_books(self) -> int:
        """清空目录"""
        deleted = await self.book_repository.delete_all()
        logger.warning(f"已清空图书目录，共删除 {deleted} 本")
        return deleted
