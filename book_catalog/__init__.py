"""
图书目录服务
"""
__version__ = "1.0.0"
