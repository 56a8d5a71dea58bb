#!/usr/bin/env python3
"""
主应用入口
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .database import Database
from .routes.book_routes import book_router
from .routes.error_handlers import register_error_handlers

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = "INFO"):
    """配置日志"""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """创建FastAPI应用"""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("应用启动中...")
        db = Database(settings.database_url, echo=settings.database_echo)
        await db.init_db()
        app.state.db = db
        logger.info("数据库连接就绪")
        try:
            yield
        finally:
            logger.info("应用关闭中...")
            await db.close()

    app = FastAPI(
        title=settings.app_title,
        description="图书目录管理系统",
        version=settings.app_version,
        lifespan=lifespan,
    )

    # 配置CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(book_router)

    @app.get("/health")
    async def health_check(request: Request):
        """健康检查接口"""
        db: Database = request.app.state.db
        try:
            connected = await db.ping()
        except Exception as e:
            logger.error(f"数据库连接检查失败: {e}")
            connected = False
        return {
            "status": "healthy" if connected else "degraded",
            "database": "connected" if connected else "unavailable",
        }

    return app


app = create_app()


def run_server(host: Optional[str] = None, port: Optional[int] = None):
    """运行服务器"""
    settings = get_settings()
    setup_logging(settings.log_level)
    uvicorn.run(
        "book_catalog.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run_server()
