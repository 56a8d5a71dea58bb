"""
测试fixtures包
"""
from .sample_data import (
    SAMPLE_BOOKS,
    SAMPLE_BOOK_RECORDS,
    INVALID_YEARS,
)

__all__ = [
    "SAMPLE_BOOKS",
    "SAMPLE_BOOK_RECORDS",
    "INVALID_YEARS",
]
