"""
作者服务 - 作者/译者目录
删除前检查书籍对该作者的引用 (作者角色 + 译者角色)
"""
from typing import List, Optional
import logging
from sqlalchemy.orm import Session
from bookstore.exceptions import NotFoundError, RelatedEntityError
from bookstore.models.ontology import Author
from bookstore.models.schemas import AuthorCreate, AuthorUpdate
from bookstore.services.book_service import BookService

logger = logging.getLogger(__name__)


class AuthorService:
    """作者服务"""

    def __init__(self, db: Session):
        self.db = db
        self.book_service = BookService(db)

    def get_authors(self) -> List[Author]:
        """获取所有作者/译者"""
        return self.db.query(Author).order_by(Author.id).all()

    def get_author(self, author_id: int) -> Optional[Author]:
        """获取单个作者"""
        return self.db.query(Author).filter(Author.id == author_id).first()

    def get_author_by_name(self, name: str) -> Optional[Author]:
        """根据名称获取作者 (名称不唯一，返回最早创建的一个)"""
        return self.db.query(Author).filter(Author.name == name).order_by(Author.id).first()

    def create_author(self, data: AuthorCreate) -> Author:
        """创建作者/译者"""
        author = Author(**data.model_dump())
        self.db.add(author)
        self.db.commit()
        self.db.refresh(author)
        logger.info(f"Author {author.id} created: {author.name}")
        return author

    def update_author(self, author_id: int, data: AuthorUpdate) -> Author:
        """更新作者信息"""
        author = self.get_author(author_id)
        if not author:
            raise NotFoundError("Author", author_id)

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("name") is None:
            update_data.pop("name", None)

        for key, value in update_data.items():
            setattr(author, key, value)

        self.db.commit()
        self.db.refresh(author)
        return author

    def delete_author(self, author_id: int) -> bool:
        """删除作者；仍被书籍引用 (作者或译者) 时拒绝"""
        count = (
            self.book_service.count_by_author(author_id)
            + self.book_service.count_by_translator(author_id)
        )
        if count > 0:
            logger.warning(f"Author {author_id} delete blocked: {count} book reference(s)")
            raise RelatedEntityError("Author", author_id, count)

        author = self.get_author(author_id)
        if not author:
            raise NotFoundError("Author", author_id)

        self.db.delete(author)
        self.db.commit()
        logger.info(f"Author {author_id} deleted")
        return True
