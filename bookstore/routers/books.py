"""
书籍管理路由
写入请求先经 RelationResolver 把作者/译者/出版社解析为 ID，再交给 BookService
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from bookstore.database import get_db
from bookstore.exceptions import CatalogError
from bookstore.models.schemas import (
    BookBase, BookForm, BookUpdateForm, BookCreate, BookUpdate,
    BookResponse, BookDetailResponse
)
from bookstore.services.book_service import BookService, sanitize_book_update
from bookstore.services.relation_resolver import RelationResolver

router = APIRouter(prefix="/books", tags=["书籍管理"])


@router.get("", response_model=List[BookDetailResponse])
def list_books(db: Session = Depends(get_db)):
    """获取书籍列表"""
    service = BookService(db)
    return [BookDetailResponse.model_validate(book) for book in service.get_books()]


@router.get("/isbn/{isbn}", response_model=BookResponse)
def get_book_by_isbn(isbn: str, db: Session = Depends(get_db)):
    """根据 ISBN 获取书籍"""
    book = BookService(db).get_book_by_isbn(isbn)
    if not book:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return BookResponse.model_validate(book)


@router.get("/{book_id}", response_model=BookDetailResponse)
def get_book(book_id: int, db: Session = Depends(get_db)):
    """获取书籍详情 (含作者/译者/出版社摘要)"""
    book = BookService(db).get_book(book_id)
    if not book:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")
    return BookDetailResponse.model_validate(book)


@router.post("", response_model=BookDetailResponse, status_code=status.HTTP_201_CREATED)
def create_book(data: BookForm, db: Session = Depends(get_db)):
    """创建书籍；作者、译者、出版社可以给 ID，也可以给名称由系统新建"""
    resolver = RelationResolver(db)
    try:
        resolver.check_required(data.author_ids, data.author_names, data.publisher_id, data.publisher_name)
        author_ids = resolver.resolve_authors(data.author_ids, data.author_names)
        translator_ids = resolver.resolve_translators(data.translator_ids, data.translator_names)
        publisher_id = resolver.resolve_publisher(data.publisher_id, data.publisher_name)
        book = BookService(db).create_book(BookCreate(
            **data.model_dump(include=set(BookBase.model_fields)),
            author_ids=author_ids,
            translator_ids=translator_ids,
            publisher_id=publisher_id,
        ))
        return BookDetailResponse.model_validate(book)
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.put("/{book_id}", response_model=BookDetailResponse)
def update_book(book_id: int, data: BookUpdateForm, db: Session = Depends(get_db)):
    """更新书籍；出现的关联字段整体替换原有关联"""
    service = BookService(db)
    if not service.get_book(book_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Book not found")

    changes = sanitize_book_update(data.model_dump(exclude_unset=True))
    if not changes:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No fields to update")

    try:
        resolved = RelationResolver(db).resolve_for_update(changes)
        book = service.update_book(book_id, BookUpdate(**resolved))
        return BookDetailResponse.model_validate(book)
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, db: Session = Depends(get_db)):
    """删除书籍"""
    try:
        BookService(db).delete_book(book_id)
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
