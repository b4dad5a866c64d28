"""
用户服务 - 与目录无关联的单实体 CRUD
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from bookstore.exceptions import NotFoundError
from bookstore.models.ontology import User
from bookstore.models.schemas import UserCreate, UserUpdate


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id).all()

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def create_user(self, data: UserCreate) -> User:
        user = User(**data.model_dump())
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def update_user(self, user_id: int, data: UserUpdate) -> User:
        user = self.get_user(user_id)
        if not user:
            raise NotFoundError("User", user_id)

        for key, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(user, key, value)

        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: int) -> bool:
        user = self.get_user(user_id)
        if not user:
            raise NotFoundError("User", user_id)

        self.db.delete(user)
        self.db.commit()
        return True
