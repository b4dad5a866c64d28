"""
目录服务异常定义
每个异常携带对应的 HTTP 状态码，路由层据此转换为 HTTPException
"""
from typing import Union


class CatalogError(Exception):
    """目录服务异常基类"""
    status_code = 500


class NotFoundError(CatalogError):
    """请求的记录不存在"""
    status_code = 404

    def __init__(self, entity_kind: str, key: Union[int, str]):
        self.entity_kind = entity_kind
        self.key = key
        super().__init__(f'"{entity_kind}" with key "{key}" not found')


class ConflictError(CatalogError):
    """存储层唯一约束/完整性冲突"""
    status_code = 409


class AlreadyExistsError(ConflictError):
    """业务唯一键冲突 (isbn, 出版社名称)"""

    def __init__(self, entity_kind: str, value: Union[int, str]):
        self.entity_kind = entity_kind
        self.value = value
        super().__init__(f'"{entity_kind}" with name "{value}" already exists')


class RelatedEntityError(CatalogError):
    """存在关联记录，拒绝删除"""
    status_code = 409

    def __init__(self, entity_kind: str, key: Union[int, str], count: int):
        self.entity_kind = entity_kind
        self.key = key
        self.count = count
        super().__init__(
            f'Cannot delete "{entity_kind}" with "{key}" because it has "{count}" related entities.'
        )


class RelationInputError(CatalogError):
    """关联解析输入不完整，或更新请求没有有效字段"""
    status_code = 400
