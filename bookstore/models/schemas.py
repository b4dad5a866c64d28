"""
Pydantic 模式定义
用于 API 请求/响应验证

书籍写入分两层：
- *Form: HTTP 请求体，关联既可给 ID 也可给名称
- BookCreate / BookUpdate: 关联已解析为 ID 后交给 BookService
"""
from datetime import datetime, date
from decimal import Decimal
from typing import Annotated, Optional, List
from pydantic import BaseModel, Field, ConfigDict
from bookstore.models.ontology import Gender


# ============== 出版社 Schemas ==============

class PublisherBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)


class PublisherCreate(PublisherBase):
    pass


class PublisherUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)


class PublisherResponse(PublisherBase):
    id: int
    book_count: int = 0
    model_config = ConfigDict(from_attributes=True)


# ============== 作者 Schemas ==============

class AuthorBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    country: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[date] = None
    death_date: Optional[date] = None
    introduction: Optional[str] = None


class AuthorCreate(AuthorBase):
    pass


class AuthorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    country: Optional[str] = Field(None, max_length=100)
    birth_date: Optional[date] = None
    death_date: Optional[date] = None
    introduction: Optional[str] = None


class AuthorResponse(AuthorBase):
    id: int
    model_config = ConfigDict(from_attributes=True)


# ============== 书籍 Schemas ==============

# 按名称新建作者/出版社时的名称，长度与 AuthorBase/PublisherBase 一致
RelationName = Annotated[str, Field(max_length=200)]


class EntitySummary(BaseModel):
    """关联实体摘要 (id + name)"""
    id: int
    name: str
    model_config = ConfigDict(from_attributes=True)


class BookBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    isbn: str = Field(..., min_length=1, max_length=32)
    price: Decimal = Field(..., ge=0)
    edition: str = ""
    printing: str = ""
    image_url: str = ""
    remark: Optional[str] = None


class BookForm(BookBase):
    """创建书籍请求：每种关联可给 ID 列表或名称列表，ID 优先"""
    author_ids: List[int] = Field(default_factory=list)
    author_names: List[RelationName] = Field(default_factory=list)
    translator_ids: List[int] = Field(default_factory=list)
    translator_names: List[RelationName] = Field(default_factory=list)
    publisher_id: Optional[int] = None
    publisher_name: Optional[str] = Field(None, max_length=200)


class BookUpdateForm(BaseModel):
    """更新书籍请求：只限制长度，空值由 sanitize_book_update 丢弃"""
    title: Optional[str] = Field(None, max_length=500)
    isbn: Optional[str] = Field(None, max_length=32)
    price: Optional[Decimal] = None
    edition: Optional[str] = None
    printing: Optional[str] = None
    image_url: Optional[str] = None
    remark: Optional[str] = None
    author_ids: Optional[List[int]] = None
    author_names: Optional[List[RelationName]] = None
    translator_ids: Optional[List[int]] = None
    translator_names: Optional[List[RelationName]] = None
    publisher_id: Optional[int] = None
    publisher_name: Optional[str] = Field(None, max_length=200)


class BookCreate(BookBase):
    author_ids: List[int] = Field(..., min_length=1)
    translator_ids: List[int] = Field(default_factory=list)
    publisher_id: int = Field(..., gt=0)


class BookUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    isbn: Optional[str] = Field(None, min_length=1, max_length=32)
    price: Optional[Decimal] = Field(None, ge=0)
    edition: Optional[str] = None
    printing: Optional[str] = None
    image_url: Optional[str] = None
    remark: Optional[str] = None
    author_ids: Optional[List[int]] = Field(None, min_length=1)
    translator_ids: Optional[List[int]] = None
    publisher_id: Optional[int] = Field(None, gt=0)


class BookResponse(BookBase):
    id: int
    author_ids: List[int]
    translator_ids: List[int] = []
    publisher_id: int
    model_config = ConfigDict(from_attributes=True)


class BookDetailResponse(BookResponse):
    """书籍详情，附带关联实体摘要"""
    authors: List[EntitySummary] = []
    translators: List[EntitySummary] = []
    publisher: Optional[EntitySummary] = None


# ============== 用户 Schemas ==============

class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=200)
    birthdate: Optional[date] = None
    gender: Gender = Gender.UNKNOWN
    height: Optional[float] = Field(None, ge=0)
    status: bool = True


class UserCreate(UserBase):
    pass


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, min_length=3, max_length=200)
    birthdate: Optional[date] = None
    gender: Optional[Gender] = None
    height: Optional[float] = Field(None, ge=0)
    status: Optional[bool] = None


class UserResponse(UserBase):
    id: int
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)
