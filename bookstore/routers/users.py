"""
用户管理路由
"""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from bookstore.database import get_db
from bookstore.exceptions import CatalogError
from bookstore.models.schemas import UserCreate, UserUpdate, UserResponse
from bookstore.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["用户管理"])


@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return UserService(db).get_users()


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = UserService(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    return UserService(db).create_user(data)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: int, data: UserUpdate, db: Session = Depends(get_db)):
    try:
        return UserService(db).update_user(user_id, data)
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    try:
        UserService(db).delete_user(user_id)
    except CatalogError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
