"""
书籍管理路由
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel

from ..dependencies import get_book_service
from ..models.book import Book
from ..services.book_service import BookService

logger = logging.getLogger(__name__)

# 创建路由
book_router = APIRouter(prefix="/api/books", tags=["books"])


class BookCreateRequest(BaseModel):
    """创建书籍请求"""
    title: str
    author: str
    isbn: Optional[str] = None
    publication_year: Optional[int] = None


class BookUpdateRequest(BaseModel):
    """更新书籍请求"""
    title: Optional[str] = None
    author: Optional[str] = None
    isbn: Optional[str] = None
    publication_year: Optional[int] = None


def _books_payload(books: List[Book]) -> Dict[str, Any]:
    return {
        "success": True,
        "data": [book.to_dict() for book in books],
        "total": len(books),
    }


# ---------- 新增 ----------

@book_router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(request: BookCreateRequest, service: BookService = Depends(get_book_service)):
    """新增书籍"""
    book = await service.add_book(request.model_dump())
    return {"success": True, "message": "书籍创建成功", "data": book.to_dict()}


@book_router.post("/bulk", status_code=status.HTTP_201_CREATED)
async def create_books(requests: List[BookCreateRequest], service: BookService = Depends(get_book_service)):
    """批量新增书籍"""
    books = await service.add_books([request.model_dump() for request in requests])
    return _books_payload(books)


# ---------- 查询 ----------

@book_router.get("")
async def get_all_books(service: BookService = Depends(get_book_service)):
    """获取所有书籍"""
    return _books_payload(await service.get_all_books())


@book_router.get("/health")
async def books_health():
    return {"success": True, "message": "Book API is running!"}


@book_router.get("/search")
async def search_books_by_title(title: str = Query(...), service: BookService = Depends(get_book_service)):
    """根据标题搜索书籍"""
    return _books_payload(await service.search_books_by_title(title))


@book_router.get("/search/advanced")
async def advanced_search(term: str = Query(...), service: BookService = Depends(get_book_service)):
    """标题或作者搜索"""
    return _books_payload(await service.search_books(term))


@book_router.get("/authors")
async def get_all_authors(service: BookService = Depends(get_book_service)):
    """获取所有作者"""
    authors = await service.get_all_authors()
    return {"success": True, "data": authors, "total": len(authors)}


@book_router.get("/count")
async def get_total_book_count(service: BookService = Depends(get_book_service)):
    return {"success": True, "data": {"count": await service.get_total_book_count()}}


@book_router.get("/stats")
async def get_statistics(service: BookService = Depends(get_book_service)):
    """获取统计信息"""
    stats = await service.get_book_statistics()
    return {"success": True, "data": stats.to_dict(), "message": str(stats)}


@book_router.get("/year-range")
async def get_books_by_year_range(
    start: int = Query(...),
    end: int = Query(...),
    service: BookService = Depends(get_book_service),
):
    """获取出版年份区间内的书籍"""
    return _books_payload(await service.get_books_by_year_range(start, end))


@book_router.get("/year/{year}")
async def get_books_by_year(year: int, service: BookService = Depends(get_book_service)):
    return _books_payload(await service.get_books_by_year(year))


@book_router.get("/published-after/{year}")
async def get_books_published_after(year: int, service: BookService = Depends(get_book_service)):
    return _books_payload(await service.get_books_published_after(year))


@book_router.get("/author/{author}")
async def get_books_by_author(
    author: str,
    newest_first: bool = Query(False),
    service: BookService = Depends(get_book_service),
):
    """根据作者获取书籍"""
    if newest_first:
        books = await service.get_books_by_author_newest_first(author)
    else:
        books = await service.get_books_by_author(author)
    return _books_payload(books)


@book_router.get("/isbn/{isbn}")
async def get_book_by_isbn(isbn: str, service: BookService = Depends(get_book_service)):
    """根据ISBN获取书籍"""
    book = await service.get_book_by_isbn(isbn)
    if not book:
        raise HTTPException(status_code=404, detail=f"Book not found with ISBN: {isbn}")
    return {"success": True, "data": book.to_dict()}


@book_router.get("/{book_id}")
async def get_book_by_id(book_id: int, service: BookService = Depends(get_book_service)):
    """根据ID获取书籍"""
    book = await service.get_book_by_id(book_id)
    if not book:
        raise HTTPException(status_code=404, detail=f"Book not found with id: {book_id}")
    return {"success": True, "data": book.to_dict()}


# ---------- 更新 ----------

@book_router.put("/{book_id}")
async def update_book(
    book_id: int,
    request: BookUpdateRequest,
    service: BookService = Depends(get_book_service),
):
    """更新书籍"""
    book = await service.update_book(book_id, request.model_dump(exclude_unset=True))
    return {"success": True, "message": "书籍更新成功", "data": book.to_dict()}


@book_router.patch("/{book_id}")
async def partial_update_book(
    book_id: int,
    title: Optional[str] = Query(None),
    author: Optional[str] = Query(None),
    isbn: Optional[str] = Query(None),
    year: Optional[int] = Query(None),
    service: BookService = Depends(get_book_service),
):
    """部分更新书籍"""
    book = await service.partial_update_book(book_id, title=title, author=author, isbn=isbn, year=year)
    return {"success": True, "message": "书籍更新成功", "data": book.to_dict()}


# ---------- 删除 ----------

@book_router.delete("/all")
async def delete_all_books(service: BookService = Depends(get_book_service)):
    """清空所有书籍"""
    deleted = await service.delete_all_books()
    return {"success": True, "message": f"Deleted {deleted} books", "data": {"deleted": deleted}}


@book_router.delete("/isbn/{isbn}")
async def delete_book_by_isbn(isbn: str, service: BookService = Depends(get_book_service)):
    await service.delete_book_by_isbn(isbn)
    return {"success": True, "message": f"Deleted book with ISBN {isbn}"}


@book_router.delete("/author/{author}")
async def delete_books_by_author(author: str, service: BookService = Depends(get_book_service)):
    """删除某作者的全部书籍"""
    deleted = await service.delete_books_by_author(author)
    return {
        "success": True,
        "message": f"Deleted {deleted} books by {author}",
        "data": {"deleted": deleted},
    }


@book_router.delete("/{book_id}")
async def delete_book(book_id: int, service: BookService = Depends(get_book_service)):
    """删除书籍"""
    await service.delete_book(book_id)
    return {"success": True, "message": f"Deleted book {book_id}"}
