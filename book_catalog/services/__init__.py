"""
业务服务层包
"""
