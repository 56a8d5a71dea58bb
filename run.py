#!/usr/bin/env python3
"""
启动脚本 - 图书目录服务
使用方法: uv run python run.py
"""
import logging

import uvicorn

from book_catalog.config import get_settings
from book_catalog.main import setup_logging

if __name__ == "__main__":
    settings = get_settings()
    setup_logging(settings.log_level)

    logging.info("=" * 60)
    logging.info(f"启动{settings.app_title}")
    logging.info(f"数据库: {settings.database_url}")
    logging.info(f"日志级别: {settings.log_level}")
    logging.info("=" * 60)

    uvicorn.run(
        "book_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=True,
        reload_dirs=["book_catalog"],
        log_level=settings.log_level.lower(),
    )
