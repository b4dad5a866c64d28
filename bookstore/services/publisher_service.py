"""
出版社服务
名称全局唯一；删除前检查书籍引用
"""
from typing import List, Optional
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from bookstore.exceptions import AlreadyExistsError, NotFoundError, RelatedEntityError
from bookstore.models.ontology import Publisher
from bookstore.models.schemas import PublisherCreate, PublisherUpdate
from bookstore.services.book_service import BookService

logger = logging.getLogger(__name__)


class PublisherService:
    """出版社服务"""

    def __init__(self, db: Session):
        self.db = db
        self.book_service = BookService(db)

    def get_publishers(self) -> List[Publisher]:
        """获取所有出版社"""
        return self.db.query(Publisher).order_by(Publisher.id).all()

    def get_publisher(self, publisher_id: int) -> Optional[Publisher]:
        """获取单个出版社"""
        return self.db.query(Publisher).filter(Publisher.id == publisher_id).first()

    def get_publisher_by_name(self, name: str) -> Optional[Publisher]:
        """根据名称获取出版社"""
        return self.db.query(Publisher).filter(Publisher.name == name).first()

    def create_publisher(self, data: PublisherCreate) -> Publisher:
        """创建出版社"""
        if self.get_publisher_by_name(data.name):
            raise AlreadyExistsError("Publisher", data.name)

        publisher = Publisher(**data.model_dump())
        self.db.add(publisher)
        self._commit(data.name)
        self.db.refresh(publisher)
        logger.info(f"Publisher {publisher.id} created: {publisher.name}")
        return publisher

    def update_publisher(self, publisher_id: int, data: PublisherUpdate) -> Publisher:
        """更新出版社"""
        publisher = self.get_publisher(publisher_id)
        if not publisher:
            raise NotFoundError("Publisher", publisher_id)

        update_data = data.model_dump(exclude_unset=True)
        if update_data.get("name") is None:
            update_data.pop("name", None)
        if "name" in update_data:
            existing = self.get_publisher_by_name(update_data["name"])
            if existing and existing.id != publisher_id:
                raise AlreadyExistsError("Publisher", update_data["name"])

        for key, value in update_data.items():
            setattr(publisher, key, value)

        self._commit(publisher.name)
        self.db.refresh(publisher)
        return publisher

    def delete_publisher(self, publisher_id: int) -> bool:
        """删除出版社；仍被书籍引用时拒绝"""
        count = self.book_service.count_by_publisher(publisher_id)
        if count > 0:
            logger.warning(f"Publisher {publisher_id} delete blocked: {count} book reference(s)")
            raise RelatedEntityError("Publisher", publisher_id, count)

        publisher = self.get_publisher(publisher_id)
        if not publisher:
            raise NotFoundError("Publisher", publisher_id)

        self.db.delete(publisher)
        self.db.commit()
        logger.info(f"Publisher {publisher_id} deleted")
        return True

    def _commit(self, name: str) -> None:
        # 并发创建同名出版社时由唯一约束兜底
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"Publisher write rejected by store constraint: {e.orig}")
            raise AlreadyExistsError("Publisher", name) from e
