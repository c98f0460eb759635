"""Domain 服务"""
