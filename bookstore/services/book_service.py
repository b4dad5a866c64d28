"""
书籍服务 - 目录一致性引擎
管理 Book 及其三类关联：作者集合、译者集合、出版社外键

写入规则：
- 创建时在同一事务内写入书籍行和全部关联行
- 更新时关联集合整体替换 (先删后建)，不做差异合并
- 删除书籍时关联行随之删除 (delete-orphan)
- 提供按作者/译者/出版社的引用计数，供删除守卫使用
"""
from typing import Any, Dict, Iterable, List, Optional
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from bookstore.exceptions import (
    NotFoundError, AlreadyExistsError, ConflictError, RelationInputError
)
from bookstore.models.ontology import Book, BookAuthor, BookTranslator, Author, Publisher
from bookstore.models.schemas import BookCreate, BookUpdate

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("title", "isbn", "edition", "printing", "image_url", "remark")
_ID_LIST_FIELDS = ("author_ids", "translator_ids")
_NAME_LIST_FIELDS = ("author_names", "translator_names")


def _dedupe(ids: Iterable[int]) -> List[int]:
    """去重并保持首次出现的顺序"""
    return list(dict.fromkeys(ids))


def sanitize_book_update(changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    丢弃“存在但语义为空”的更新字段：
    空白字符串、非正价格、非正出版社ID、空的ID/名称列表
    """
    cleaned = {}
    for key, value in changes.items():
        if value is None:
            continue
        if key in _TEXT_FIELDS or key == "publisher_name":
            if not value.strip():
                continue
        elif key == "price":
            if value <= 0:
                continue
        elif key == "publisher_id":
            if value <= 0:
                continue
        elif key in _ID_LIST_FIELDS:
            if not value:
                continue
        elif key in _NAME_LIST_FIELDS:
            value = [name for name in value if name and name.strip()]
            if not value:
                continue
        cleaned[key] = value
    return cleaned


class BookService:
    """书籍服务"""

    def __init__(self, db: Session):
        self.db = db

    # ============== 查询 ==============

    def get_books(self) -> List[Book]:
        """获取所有书籍"""
        return self.db.query(Book).order_by(Book.id).all()

    def get_book(self, book_id: int) -> Optional[Book]:
        """获取单本书籍"""
        return self.db.query(Book).filter(Book.id == book_id).first()

    def get_book_by_isbn(self, isbn: str) -> Optional[Book]:
        """根据 ISBN 获取书籍"""
        return self.db.query(Book).filter(Book.isbn == isbn).first()

    # ============== 引用计数 ==============

    def count_by_author(self, author_id: int) -> int:
        return self.db.query(BookAuthor).filter(BookAuthor.author_id == author_id).count()

    def count_by_translator(self, author_id: int) -> int:
        return self.db.query(BookTranslator).filter(BookTranslator.translator_id == author_id).count()

    def count_by_publisher(self, publisher_id: int) -> int:
        return self.db.query(Book).filter(Book.publisher_id == publisher_id).count()

    # ============== 写入 ==============

    def create_book(self, data: BookCreate) -> Book:
        """创建书籍，并在同一事务内建立作者/译者关联和出版社外键"""
        if self.get_book_by_isbn(data.isbn):
            raise AlreadyExistsError("Book", data.isbn)

        author_ids = _dedupe(data.author_ids)
        translator_ids = _dedupe(data.translator_ids)
        self._ensure_authors_exist(author_ids + translator_ids)
        self._ensure_publisher_exists(data.publisher_id)

        book = Book(**data.model_dump(exclude={"author_ids", "translator_ids"}))
        book.author_links = [
            BookAuthor(author_id=author_id, sort_order=i)
            for i, author_id in enumerate(author_ids)
        ]
        book.translator_links = [
            BookTranslator(translator_id=translator_id, sort_order=i)
            for i, translator_id in enumerate(translator_ids)
        ]

        try:
            self.db.add(book)
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise self._translate_integrity_error(e, data.isbn) from e

        self.db.refresh(book)
        logger.info(
            f"Book {book.id} created: isbn={book.isbn} authors={author_ids} "
            f"translators={translator_ids} publisher={book.publisher_id}"
        )
        return book

    def update_book(self, book_id: int, data: BookUpdate) -> Book:
        """
        更新书籍
        标量字段只覆盖请求中出现的部分；
        author_ids / translator_ids 出现时整体替换对应关联集合，translator_ids=[] 清空译者
        """
        book = self.get_book(book_id)
        if not book:
            raise NotFoundError("Book", book_id)

        update_data = {
            key: value for key, value in data.model_dump(exclude_unset=True).items()
            if value is not None or key == "remark"
        }
        if not update_data:
            raise RelationInputError("No fields to update")

        if "isbn" in update_data:
            existing = self.get_book_by_isbn(update_data["isbn"])
            if existing and existing.id != book_id:
                raise AlreadyExistsError("Book", update_data["isbn"])

        author_ids = update_data.pop("author_ids", None)
        translator_ids = update_data.pop("translator_ids", None)
        if author_ids is not None:
            author_ids = _dedupe(author_ids)
            self._ensure_authors_exist(author_ids)
        if translator_ids is not None:
            translator_ids = _dedupe(translator_ids)
            self._ensure_authors_exist(translator_ids)
        if "publisher_id" in update_data:
            self._ensure_publisher_exists(update_data["publisher_id"])

        try:
            for key, value in update_data.items():
                setattr(book, key, value)

            # 先删后建：两次 flush 之间旧关联行已从会话中移除
            if author_ids is not None:
                book.author_links = []
                self.db.flush()
                book.author_links = [
                    BookAuthor(author_id=author_id, sort_order=i)
                    for i, author_id in enumerate(author_ids)
                ]
            if translator_ids is not None:
                book.translator_links = []
                self.db.flush()
                book.translator_links = [
                    BookTranslator(translator_id=translator_id, sort_order=i)
                    for i, translator_id in enumerate(translator_ids)
                ]

            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise self._translate_integrity_error(e, update_data.get("isbn")) from e

        self.db.refresh(book)
        logger.info(f"Book {book_id} updated: fields={sorted(data.model_fields_set)}")
        return book

    def delete_book(self, book_id: int) -> bool:
        """删除书籍，作者/译者关联行随书籍一并删除"""
        book = self.get_book(book_id)
        if not book:
            raise NotFoundError("Book", book_id)

        self.db.delete(book)
        self.db.commit()
        logger.info(f"Book {book_id} deleted")
        return True

    # ============== 内部校验 ==============

    def _ensure_authors_exist(self, author_ids: List[int]) -> None:
        if not author_ids:
            return
        found = {
            row.id for row in
            self.db.query(Author.id).filter(Author.id.in_(author_ids)).all()
        }
        for author_id in author_ids:
            if author_id not in found:
                raise NotFoundError("Author", author_id)

    def _ensure_publisher_exists(self, publisher_id: int) -> None:
        exists = self.db.query(Publisher.id).filter(Publisher.id == publisher_id).first()
        if not exists:
            raise NotFoundError("Publisher", publisher_id)

    @staticmethod
    def _translate_integrity_error(error: IntegrityError, isbn: Optional[str]) -> ConflictError:
        """把存储层约束失败转换为目录异常"""
        message = str(error.orig)
        logger.warning(f"Book write rejected by store constraint: {message}")
        if "isbn" in message.lower() and isbn:
            return AlreadyExistsError("Book", isbn)
        return ConflictError(f"Book write violates a store constraint: {message}")
