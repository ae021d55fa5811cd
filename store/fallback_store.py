import threading
from typing import List, Optional

from logger_config import logger
from store.base import DataStore, RemoteUnavailableError
from store.local_store import LocalStore


class FallbackStore(DataStore):
    """
    원격 저장소를 먼저 사용하고, 원격 호출이 한 번이라도 실패하면 이 인스턴스가 사라질 때까지 로컬 저장소만 사용합니다.
    실패한 호출 자체도 로컬 저장소에 다시 적용되므로 호출한 쪽은 실패를 알지 못합니다.
    오프라인 플래그는 한 번 켜지면 다시 꺼지지 않습니다.
    """

    def __init__(self, remote: Optional[DataStore], local: LocalStore, offline: bool = False):
        self.remote = remote
        self.local = local
        self._offline = offline or remote is None
        self._lock = threading.Lock()

    @property
    def is_offline(self) -> bool:
        with self._lock:
            return self._offline

    def _go_offline(self, error: RemoteUnavailableError) -> None:
        with self._lock:
            if self._offline:
                return
            self._offline = True
        logger.warning(f'Backend unreachable, switching to offline mode (local storage): {error}')

    def _call(self, operation: str, *args):
        if not self.is_offline:
            try:
                return getattr(self.remote, operation)(*args)
            except RemoteUnavailableError as e:
                self._go_offline(e)

        return getattr(self.local, operation)(*args)

    def get_users(self) -> List[dict]:
        return self._call('get_users')

    def save_user(self, user: dict) -> None:
        self._call('save_user', user)

    def update_user(self, user: dict) -> None:
        self._call('update_user', user)

    def get_seats(self) -> List[dict]:
        return self._call('get_seats')

    def save_seats(self, seats: List[dict]) -> None:
        self._call('save_seats', seats)

    def toggle_seat_maintenance(self, seat_id: str) -> None:
        self._call('toggle_seat_maintenance', seat_id)

    def get_bookings(self) -> List[dict]:
        return self._call('get_bookings')

    def create_booking(self, booking: dict) -> bool:
        return self._call('create_booking', booking)

    def cancel_booking(self, booking_id: str) -> None:
        self._call('cancel_booking', booking_id)

    def get_session(self) -> Optional[dict]:
        return self.local.get_session()

    def set_session(self, user: dict) -> None:
        self.local.set_session(user)

    def clear_session(self) -> None:
        self.local.clear_session()
