from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.params import Path

from schemas import base, user
from service.user_service import UserService
from store.base import DataStore
from store.provider import get_store

user_router = APIRouter(
    prefix='/users',
    tags=['유저']
)


@user_router.get('', response_model=List[user.UserOutput], name='유저 목록 조회')
def get_users(store: DataStore = Depends(get_store), role:
Annotated[
    Optional[user.UserRole],
    Query(
        title="유저 role",
        description="STUDENT/ ADMIN 중 하나를 전달하면 해당 role을 가진 유저만 반환합니다.",
    ),
] = None):
    """
    유저들의 리스트를 반환합니다. 어드민의 학생 관리 화면에서 사용합니다.
    """
    user_service = UserService(store)
    return user_service.list_users(role)


@user_router.post('/login', response_model=user.UserOutput, name='로그인', responses={
    400: {
        "description": "잘못된 로그인 정보",
        "content": {
            "application/json": {
                "example": {"detail": "Invalid credentials. Please try again."}
            }
        }
    },
    403: {
        "description": "어드민이 차단한 계정",
        "content": {
            "application/json": {
                "example": {"detail": "Your account has been blocked by the administrator."}
            }
        }
    }
})
def login(login_user: user.LoginUser, store: DataStore = Depends(get_store)):
    """
    입력한 `email`과 `password`로 로그인을 합니다. 로그인에 성공하면 현재 세션에 유저가 저장됩니다.
    """
    user_service = UserService(store)
    return user_service.login(login_user)


@user_router.post('/register', response_model=user.UserOutput, status_code=201, name='회원가입', responses={
    409: {
        "description": "같은 이메일을 가진 계정이 이미 있는 경우",
        "content": {
            "application/json": {
                "example": {"detail": "An account with this email already exists."}
            }
        }
    }
})
def register(register_user: user.RegisterUser, store: DataStore = Depends(get_store)):
    """
    학생 계정을 새로 만들고 바로 로그인합니다. 어드민 계정은 회원가입으로 만들 수 없습니다.
    """
    user_service = UserService(store)
    return user_service.register(register_user)


@user_router.post('/logout', response_model=base.MessageOutputBase, name='로그아웃')
def logout(store: DataStore = Depends(get_store)):
    user_service = UserService(store)
    user_service.logout()
    return base.MessageOutputBase(message='Logged out')


@user_router.get('/session', response_model=Optional[user.UserOutput], name='현재 세션 조회')
def get_session(store: DataStore = Depends(get_store)):
    """
    현재 로그인한 유저를 반환합니다. 로그인한 유저가 없으면 `null`을 반환합니다.

    세션은 클라이언트별이 아니라 서버 프로세스 전체에 하나뿐입니다. 어느 클라이언트든 로그인하면 이전 세션을 대체하고, 로그아웃하면 모두의 세션이 사라집니다.
    """
    user_service = UserService(store)
    return user_service.current_user()


@user_router.put('/{user_id}/block', response_model=user.UserOutput, name='계정 차단/해제', responses={
    404: {
        "description": "`user_id`값을 가진 유저가 없는 경우",
        "content": {
            "application/json": {
                "example": {"detail": "User not found"}
            }
        }
    }
})
def set_blocked(block_request: user.BlockUserInput,
                store: DataStore = Depends(get_store),
                user_id: str = Path(..., description='차단하거나 해제할 유저의 `id`')):
    """
    학생 계정을 차단하거나 차단을 해제합니다. 어드민 계정은 변경되지 않습니다.
    어드민 화면에서만 호출하는 API 이며, 서버에서 권한을 확인하지는 않습니다.
    """
    user_service = UserService(store)
    return user_service.set_blocked(user_id, block_request.blocked)
