"""
作者管理路由 (译者同样在这里维护)
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from bookstore.database import get_db
from bookstore.exceptions import CatalogError
from bookstore.models.schemas import AuthorCreate, AuthorUpdate, AuthorResponse
from bookstore.services.author_service import AuthorService

router = APIRouter(prefix="/authors", tags=["作者管理"])


@router.get("", response_model=List[AuthorResponse])
def list_authors(db: Session = Depends(get_db)):
    """获取作者列表"""
    return AuthorService(db).get_authors()


@router.get("/{author_id}", response_model=AuthorResponse)
def get_author(author_id: int, db: Session = Depends(get_db)):
    """获取作者详情"""
    author = AuthorService(db).get_author(author_id)
    if not author:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Author not found")
    return author


@router.post("", response_model=AuthorResponse, status_code=status.HTTP_201_CREATED)
def create_author(data: AuthorCreate, db: Session = Depends(get_db)):
    """创建作者/译者"""
    return AuthorService(db).create_author(data)


@router.put("/{author_id}", response_model=AuthorResponse)
def update_author(author_id: int, data: AuthorUpdate, db: Session = Depends(get_db)):
    """更新作者"""
    try:
        return AuthorService(db).update_author(author_id, data)
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_author(author_id: int, db: Session = Depends(get_db)):
    """删除作者；仍被书籍引用时返回 409"""
    try:
        AuthorService(db).delete_author(author_id)
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
