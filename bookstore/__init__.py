"""
Bookstore 图书目录服务
管理 Book / Author / Publisher 及其关联关系，以及独立的 User 登记
"""
__version__ = "1.0.0"
