"""
FastAPI依赖注入
"""
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .database import Database
from .repositories.book_repository import BookRepository
from .services.book_service import BookService


def get_database(request: Request) -> Database:
    return request.app.state.db


async def get_session(db: Database = Depends(get_database)) -> AsyncGenerator[AsyncSession, None]:
    """每个请求一个数据库会话"""
    async with db.session() as session:
        yield session


def get_book_service(session: AsyncSession = Depends(get_session)) -> BookService:
    return BookService(BookRepository(session))
