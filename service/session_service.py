from typing import Optional

from schemas.user import UserBase
from store.base import DataStore


class SessionService:
    """
    현재 로그인한 유저 한 명을 로컬 저장소에 보관합니다. 네트워크를 사용하지 않습니다.
    세션은 프로세스 전체에서 하나만 존재하므로 모든 HTTP 클라이언트가 같은 세션을 공유합니다.
    """

    def __init__(self, store: DataStore):
        self.store = store

    def current(self) -> Optional[UserBase]:
        user = self.store.get_session()
        return UserBase.model_validate(user) if user else None

    def start(self, user: UserBase):
        self.store.set_session(user.to_record())

    def end(self):
        self.store.clear_session()
