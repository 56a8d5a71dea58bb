"""
API路由包
"""
