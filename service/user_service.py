from typing import List, Optional

from fastapi import HTTPException
from starlette import status

from logger_config import logger
from repository.user_repository import UserRepository
from schemas.user import UserBase, LoginUser, RegisterUser, UserRole
from service.session_service import SessionService
from store.base import DataStore
from util import generate_id


class UserService:
    """
    로그인, 회원가입, 계정 차단을 처리합니다.
    비밀번호는 평문 비교이며 데모 목적의 단순화입니다. 운영 환경이라면 salt를 적용한 해시 비교로 바꿔야 합니다.
    """

    def __init__(self, store: DataStore):
        self.repository = UserRepository(store)
        self.session = SessionService(store)

    def list_users(self, role: Optional[UserRole] = None) -> List[UserBase]:
        if role is None:
            return self.repository.get_all()

        return self.repository.get_by_role(role)

    def login(self, login_user: LoginUser) -> UserBase:
        user = self.repository.get_by_email_password(login_user.email, login_user.password)

        if not user:
            logger.info(f'Login failed for {login_user.email}')
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail='Invalid credentials. Please try again.')

        if user.is_blocked:
            logger.info(f'Blocked user {user.id} tried to log in')
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                                detail='Your account has been blocked by the administrator.')

        self.session.start(user)
        logger.info(f'User {user.id} logged in')
        return user

    def register(self, new_user: RegisterUser) -> UserBase:
        if self.repository.exist_by_email(new_user.email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail='An account with this email already exists.')

        user = self.repository.create(UserBase(
            id=generate_id('user'),
            role=UserRole.STUDENT,
            is_blocked=False,
            **new_user.model_dump()
        ))

        self.session.start(user)
        logger.info(f'Registered student {user.id}')
        return user

    def logout(self):
        self.session.end()

    def current_user(self) -> Optional[UserBase]:
        return self.session.current()

    def set_blocked(self, user_id: str, blocked: bool) -> UserBase:
        user = self.repository.get_by_id(user_id)

        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='User not found')

        # 관리자 계정은 차단 대상이 아닙니다
        if user.role == UserRole.ADMIN or user.is_blocked == blocked:
            return user

        user.is_blocked = blocked
        self.repository.update(user)
        logger.info(f'User {user.id} {"blocked" if blocked else "unblocked"}')
        return user
