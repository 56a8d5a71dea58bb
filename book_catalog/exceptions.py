"""
业务异常定义
"""


class CatalogException(Exception):
    """基础异常类"""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogException):
    """输入数据校验失败"""
    pass


class ConflictError(CatalogException):
    """唯一性约束冲突"""
    pass


class NotFoundError(CatalogException):
    """引用的实体不存在"""
    pass


class BookNotFoundError(NotFoundError):
    """书籍未找到异常"""
    pass


class DuplicateBookError(ConflictError):
    """重复书籍异常（ISBN已存在）"""
    pass
