"""
数据模型包
"""
