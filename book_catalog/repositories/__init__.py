"""
数据访问层包
"""
