"""
书籍数据访问层
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import delete, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import BookNotFoundError, DuplicateBookError
from ..models.book import Book
from ..models.orm import BookRecord
from .base import BookStore

logger = logging.getLogger(__name__)

LIKE_ESCAPE = "/"


def _contains_pattern(term: str) -> str:
    """构造LIKE子串匹配模式，term中的通配符按字面量匹配"""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"


def _icontains(column, term: str):
    # casefold()由Database在每个SQLite连接上注册，支持非ASCII字母
    return func.casefold(column).like(_contains_pattern(term.casefold()), escape=LIKE_ESCAPE)


class BookRepository(BookStore):
    """书籍仓库类（SQLAlchemy实现）"""

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _next_timestamp(previous: Optional[datetime] = None) -> datetime:
        """生成时间戳，保证严格晚于上一次修改时间"""
        now = datetime.now()
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    async def _write(self, book: Book) -> BookRecord:
        if book.id is None:
            now = self._next_timestamp()
            record = BookRecord(
                title=book.title,
                author=book.author,
                isbn=book.isbn,
                publication_year=book.publication_year,
                created_at=now,
                updated_at=now,
            )
            self.session.add(record)
        else:
            record = await self.session.get(BookRecord, book.id, populate_existing=True)
            if record is None:
                raise BookNotFoundError(f"Book not found with id: {book.id}")
            record.title = book.title
            record.author = book.author
            record.isbn = book.isbn
            record.publication_year = book.publication_year
            record.updated_at = self._next_timestamp(record.updated_at)

        await self.session.flush()
        return record

    async def _commit_writes(self, books: List[Book]) -> List[Book]:
        try:
            records = [await self._write(book) for book in books]
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            isbns = [book.isbn for book in books if book.isbn]
            logger.warning(f"ISBN唯一约束冲突，已回滚: {isbns}")
            raise DuplicateBookError(f"Book with ISBN {', '.join(isbns)} already exists") from e
        except Exception:
            await self.session.rollback()
            raise
        return [record.to_book() for record in records]

    async def _fetch(self, stmt) -> List[Book]:
        result = await self.session.execute(stmt)
        return [record.to_book() for record in result.scalars().all()]

    async def save(self, book: Book) -> Book:
        """创建或更新书籍"""
        saved = await self._commit_writes([book])
        return saved[0]

    async def save_all(self, books: List[Book]) -> List[Book]:
        """批量保存书籍"""
        if not books:
            return []
        return await self._commit_writes(books)

    async def find_by_id(self, book_id: int) -> Optional[Book]:
        """根据ID获取书籍"""
        stmt = select(BookRecord).where(BookRecord.id == book_id)
        books = await self._fetch(stmt)
        return books[0] if books else None

    async def find_by_isbn(self, isbn: str) -> Optional[Book]:
        """根据ISBN获取书籍"""
        stmt = select(BookRecord).where(BookRecord.isbn == isbn)
        books = await self._fetch(stmt)
        return books[0] if books else None

    async def find_all(self) -> List[Book]:
        """获取所有书籍"""
        return await self._fetch(select(BookRecord).order_by(BookRecord.id))

    async def find_by_author(self, author: str) -> List[Book]:
        """根据作者获取书籍"""
        stmt = select(BookRecord).where(BookRecord.author == author).order_by(BookRecord.id)
        return await self._fetch(stmt)

    async def find_by_author_newest_first(self, author: str) -> List[Book]:
        stmt = (
            select(BookRecord)
            .where(BookRecord.author == author)
            .order_by(BookRecord.publication_year.desc(), BookRecord.id)
        )
        return await self._fetch(stmt)

    async def find_by_title_contains(self, substring: str, case_insensitive: bool = True) -> List[Book]:
        """根据标题搜索书籍"""
        if case_insensitive:
            condition = _icontains(BookRecord.title, substring)
        else:
            condition = BookRecord.title.like(_contains_pattern(substring), escape=LIKE_ESCAPE)
        books = await self._fetch(select(BookRecord).where(condition).order_by(BookRecord.id))
        if not case_insensitive:
            # SQLite的LIKE对ASCII不区分大小写
            books = [book for book in books if substring in book.title]
        return books

    async def find_by_year(self, year: int) -> List[Book]:
        stmt = select(BookRecord).where(BookRecord.publication_year == year).order_by(BookRecord.id)
        return await self._fetch(stmt)

    async def find_by_year_range(self, start_year: int, end_year: int) -> List[Book]:
        stmt = (
            select(BookRecord)
            .where(BookRecord.publication_year.between(start_year, end_year))
            .order_by(BookRecord.publication_year, BookRecord.id)
        )
        return await self._fetch(stmt)

    async def find_published_after(self, year: int) -> List[Book]:
        stmt = (
            select(BookRecord)
            .where(BookRecord.publication_year > year)
            .order_by(BookRecord.publication_year, BookRecord.id)
        )
        return await self._fetch(stmt)

    async def search(self, term: str) -> List[Book]:
        """标题或作者模糊搜索"""
        stmt = (
            select(BookRecord)
            .where(_icontains(BookRecord.title, term) | _icontains(BookRecord.author, term))
            .order_by(BookRecord.id)
        )
        return await self._fetch(stmt)

    async def exists_by_isbn(self, isbn: str) -> bool:
        return bool(await self.session.scalar(select(exists().where(BookRecord.isbn == isbn))))

    async def exists_by_id(self, book_id: int) -> bool:
        return bool(await self.session.scalar(select(exists().where(BookRecord.id == book_id))))

    async def _delete(self, stmt) -> int:
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        return result.rowcount

    async def delete_by_id(self, book_id: int) -> bool:
        """删除书籍"""
        return await self._delete(delete(BookRecord).where(BookRecord.id == book_id)) > 0

    async def delete_all(self, books: Optional[List[Book]] = None) -> int:
        """批量删除书籍"""
        if books is None:
            return await self._delete(delete(BookRecord))

        ids = [book.id for book in books if book.id is not None]
        if not ids:
            return 0
        return await self._delete(delete(BookRecord).where(BookRecord.id.in_(ids)))

    async def count(self) -> int:
        return await self.session.scalar(select(func.count()).select_from(BookRecord))

    async def count_by_author(self, author: str) -> int:
        stmt = select(func.count()).select_from(BookRecord).where(BookRecord.author == author)
        return await self.session.scalar(stmt)

    async def count_in_year_range(self, start_year: int, end_year: int) -> int:
        stmt = (
            select(func.count())
            .select_from(BookRecord)
            .where(BookRecord.publication_year.between(start_year, end_year))
        )
        return await self.session.scalar(stmt)

    async def distinct_authors(self) -> List[str]:
        """获取所有作者（去重）"""
        stmt = select(BookRecord.author).distinct().order_by(BookRecord.author)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
