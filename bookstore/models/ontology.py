"""
本体对象定义
Book 拥有两张关联表 (作者 / 译者) 和一个出版社外键
作者与译者共用 authors 表，通过两张独立的关联表区分角色
"""
from datetime import datetime
from enum import Enum
from typing import List

from sqlalchemy import (
    Column, Integer, String, Float, DateTime, Date,
    ForeignKey, Text, Enum as SQLEnum, Boolean, Numeric
)
from sqlalchemy.orm import relationship
from bookstore.database import Base


# ============== 枚举定义 ==============

class Gender(str, Enum):
    """用户性别"""
    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"


# ============== 本体对象定义 ==============

class Publisher(Base):
    """出版社对象，名称全局唯一"""
    __tablename__ = "publishers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), unique=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    # 链接：一个出版社对应多本书
    books = relationship("Book", back_populates="publisher")


class Author(Base):
    """
    作者对象 (译者同样使用本表)
    译者通常缺少国籍、生卒等信息，因此均为可选
    """
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    country = Column(String(100))
    birth_date = Column(Date)
    death_date = Column(Date)                # 为空表示仍在世
    introduction = Column(Text)              # 个人简介
    created_at = Column(DateTime, default=datetime.utcnow)


class BookAuthor(Base):
    """书籍-作者 关联行 (authored-by)"""
    __tablename__ = "book_authors"

    book_id = Column(Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True)
    author_id = Column(Integer, ForeignKey("authors.id"), primary_key=True, index=True)
    sort_order = Column(Integer, nullable=False, default=0)

    book = relationship("Book", back_populates="author_links")
    author = relationship("Author")


class BookTranslator(Base):
    """书籍-译者 关联行 (translated-by)"""
    __tablename__ = "book_translators"

    book_id = Column(Integer, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True)
    translator_id = Column(Integer, ForeignKey("authors.id"), primary_key=True, index=True)
    sort_order = Column(Integer, nullable=False, default=0)

    book = relationship("Book", back_populates="translator_links")
    translator = relationship("Author")


class Book(Base):
    """
    书籍对象 - 目录的核心实体
    关联行完全由 Book 持有，删除书籍时一并删除
    """
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(500), nullable=False)
    isbn = Column(String(32), unique=True, nullable=False, index=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    edition = Column(String(50), nullable=False, default="")    # 版次
    printing = Column(String(50), nullable=False, default="")   # 印次
    image_url = Column(String(500), nullable=False, default="")
    remark = Column(Text)
    publisher_id = Column(Integer, ForeignKey("publishers.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 链接
    publisher = relationship("Publisher", back_populates="books")
    author_links = relationship(
        "BookAuthor", back_populates="book",
        cascade="all, delete-orphan", order_by="BookAuthor.sort_order"
    )
    translator_links = relationship(
        "BookTranslator", back_populates="book",
        cascade="all, delete-orphan", order_by="BookTranslator.sort_order"
    )

    @property
    def author_ids(self) -> List[int]:
        return [link.author_id for link in self.author_links]

    @property
    def translator_ids(self) -> List[int]:
        return [link.translator_id for link in self.translator_links]

    @property
    def authors(self) -> List[Author]:
        return [link.author for link in self.author_links]

    @property
    def translators(self) -> List[Author]:
        return [link.translator for link in self.translator_links]


class User(Base):
    """用户对象，与目录实体无关联"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(200), nullable=False)
    birthdate = Column(Date)
    gender = Column(SQLEnum(Gender), default=Gender.UNKNOWN)
    height = Column(Float)
    status = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
