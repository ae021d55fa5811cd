from typing import List, Optional

from schemas.user import UserBase, UserRole
from store.base import DataStore


class UserRepository:
    def __init__(self, store: DataStore):
        self.store = store

    def get_all(self) -> List[UserBase]:
        return [UserBase.model_validate(user) for user in self.store.get_users()]

    def get_by_role(self, role: UserRole) -> List[UserBase]:
        return [user for user in self.get_all() if user.role == role]

    def get_by_id(self, _id: str) -> Optional[UserBase]:
        return next((user for user in self.get_all() if user.id == _id), None)

    def get_by_email_password(self, email: str, password: str) -> Optional[UserBase]:
        return next((user for user in self.get_all() if user.email == email and user.password == password), None)

    def exist_by_email(self, email: str) -> bool:
        return any(user.email == email for user in self.get_all())

    def create(self, user: UserBase) -> UserBase:
        self.store.save_user(user.to_record())
        return user

    def update(self, user: UserBase) -> UserBase:
        self.store.update_user(user.to_record())
        return user
