"""
关联解析 - 把 “ID 或 名称” 形式的关联请求解析为 ID 列表

规则 (每种角色相同)：
- 给出非空 ID 列表 (出版社为正整数 ID) 时原样使用，不在这里做存在性校验
- 否则按名称逐个创建新记录，按输入顺序收集新 ID
- 同时给出 ID 和名称时 ID 优先，名称忽略
- 必填角色 (作者、出版社) 解析结果为空时报输入错误

按名称创建的记录各自独立提交；之后的书籍写入失败时这些记录不会回滚
"""
from typing import Any, Dict, List, Optional, Sequence
import logging
from sqlalchemy.orm import Session
from bookstore.exceptions import RelationInputError
from bookstore.models.schemas import AuthorCreate, PublisherCreate
from bookstore.services.author_service import AuthorService
from bookstore.services.publisher_service import PublisherService

logger = logging.getLogger(__name__)


def _clean_names(names: Optional[Sequence[str]]) -> List[str]:
    return [name.strip() for name in (names or []) if name and name.strip()]


class RelationResolver:
    """关联解析器"""

    def __init__(self, db: Session):
        self.author_service = AuthorService(db)
        self.publisher_service = PublisherService(db)

    @staticmethod
    def check_required(
        author_ids: Optional[Sequence[int]], author_names: Optional[Sequence[str]],
        publisher_id: Optional[int], publisher_name: Optional[str],
    ) -> None:
        """在任何按名称创建之前检查必填角色 (作者、出版社) 是否给出了 ID 或名称"""
        if not author_ids and not _clean_names(author_names):
            raise RelationInputError("Either author_ids or author_names must be provided")
        if not (publisher_id is not None and publisher_id > 0) and not (publisher_name and publisher_name.strip()):
            raise RelationInputError("Either publisher_id or publisher_name must be provided")

    def resolve_authors(
        self, ids: Optional[Sequence[int]], names: Optional[Sequence[str]]
    ) -> List[int]:
        """解析作者 (必填)"""
        resolved = self._resolve_people(ids, names, "author")
        if not resolved:
            raise RelationInputError("Either author_ids or author_names must be provided")
        return resolved

    def resolve_translators(
        self, ids: Optional[Sequence[int]], names: Optional[Sequence[str]]
    ) -> List[int]:
        """解析译者 (可选，可以为空)"""
        return self._resolve_people(ids, names, "translator")

    def resolve_publisher(self, publisher_id: Optional[int], name: Optional[str]) -> int:
        """解析出版社 (必填)"""
        if publisher_id is not None and publisher_id > 0:
            return publisher_id
        if name and name.strip():
            publisher = self.publisher_service.create_publisher(PublisherCreate(name=name.strip()))
            logger.info(f"Publisher {publisher.id} created from name '{publisher.name}'")
            return publisher.id
        raise RelationInputError("Either publisher_id or publisher_name must be provided")

    def resolve_for_update(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        解析更新请求中出现的关联字段，未出现的角色保持不变
        返回的字典不再包含 *_names / publisher_name
        """
        resolved = dict(changes)
        author_names = resolved.pop("author_names", None)
        translator_names = resolved.pop("translator_names", None)
        publisher_name = resolved.pop("publisher_name", None)

        if resolved.get("author_ids") or author_names:
            resolved["author_ids"] = self.resolve_authors(resolved.get("author_ids"), author_names)
        if "translator_ids" in resolved or translator_names:
            resolved["translator_ids"] = self.resolve_translators(
                resolved.get("translator_ids"), translator_names
            )
        if resolved.get("publisher_id") or publisher_name:
            resolved["publisher_id"] = self.resolve_publisher(resolved.get("publisher_id"), publisher_name)
        return resolved

    def _resolve_people(
        self, ids: Optional[Sequence[int]], names: Optional[Sequence[str]], role: str
    ) -> List[int]:
        if ids:
            return list(ids)
        created = []
        for name in _clean_names(names):
            author = self.author_service.create_author(AuthorCreate(name=name))
            logger.info(f"Author {author.id} created from {role} name '{author.name}'")
            created.append(author.id)
        return created
