"""
出版社管理路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from bookstore.database import get_db
from bookstore.exceptions import CatalogError
from bookstore.models.ontology import Publisher
from bookstore.models.schemas import PublisherCreate, PublisherUpdate, PublisherResponse
from bookstore.services.publisher_service import PublisherService

router = APIRouter(prefix="/publishers", tags=["出版社管理"])


def _to_response(service: PublisherService, publisher: Publisher) -> PublisherResponse:
    resp = PublisherResponse.model_validate(publisher)
    resp.book_count = service.book_service.count_by_publisher(publisher.id)
    return resp


@router.get("", response_model=List[PublisherResponse])
def list_publishers(db: Session = Depends(get_db)):
    """获取出版社列表 (含书籍数量)"""
    service = PublisherService(db)
    return [_to_response(service, p) for p in service.get_publishers()]


@router.get("/name/{name}", response_model=PublisherResponse)
def get_publisher_by_name(name: str, db: Session = Depends(get_db)):
    """根据名称获取出版社"""
    service = PublisherService(db)
    publisher = service.get_publisher_by_name(name)
    if not publisher:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Publisher not found")
    return _to_response(service, publisher)


@router.get("/{publisher_id}", response_model=PublisherResponse)
def get_publisher(publisher_id: int, db: Session = Depends(get_db)):
    """获取出版社详情"""
    service = PublisherService(db)
    publisher = service.get_publisher(publisher_id)
    if not publisher:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Publisher not found")
    return _to_response(service, publisher)


@router.post("", response_model=PublisherResponse, status_code=status.HTTP_201_CREATED)
def create_publisher(data: PublisherCreate, db: Session = Depends(get_db)):
    """创建出版社；名称重复返回 409"""
    service = PublisherService(db)
    try:
        return _to_response(service, service.create_publisher(data))
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{publisher_id}", response_model=PublisherResponse)
def update_publisher(publisher_id: int, data: PublisherUpdate, db: Session = Depends(get_db)):
    """更新出版社"""
    service = PublisherService(db)
    try:
        return _to_response(service, service.update_publisher(publisher_id, data))
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{publisher_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_publisher(publisher_id: int, db: Session = Depends(get_db)):
    """删除出版社；仍被书籍引用时返回 409"""
    try:
        PublisherService(db).delete_publisher(publisher_id)
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
