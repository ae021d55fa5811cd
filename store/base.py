"""
유저, 좌석, 예약 세 컬렉션과 현재 세션을 저장하는 저장소의 공통 인터페이스입니다.
레코드는 원격 백엔드가 사용하는 camelCase JSON 형식의 `dict`로 주고받습니다.
"""
from abc import ABC, abstractmethod
from typing import List, Optional


class Collection:
    USERS = 'libbook_users'
    SEATS = 'libbook_seats'
    BOOKINGS = 'libbook_bookings'
    CURRENT_USER = 'libbook_current_user'


class RemoteUnavailableError(Exception):
    """원격 백엔드에 연결할 수 없거나, 시간 초과 또는 5xx 응답을 받은 경우 발생합니다."""


class DataStore(ABC):
    @abstractmethod
    def get_users(self) -> List[dict]:
        ...

    @abstractmethod
    def save_user(self, user: dict) -> None:
        ...

    @abstractmethod
    def update_user(self, user: dict) -> None:
        ...

    @abstractmethod
    def get_seats(self) -> List[dict]:
        ...

    @abstractmethod
    def save_seats(self, seats: List[dict]) -> None:
        """좌석 컬렉션 전체를 주어진 목록으로 교체합니다."""

    @abstractmethod
    def toggle_seat_maintenance(self, seat_id: str) -> None:
        ...

    @abstractmethod
    def get_bookings(self) -> List[dict]:
        ...

    @abstractmethod
    def create_booking(self, booking: dict) -> bool:
        """예약이 저장되면 `True`, 충돌 등으로 거절되면 `False`를 반환합니다."""

    @abstractmethod
    def cancel_booking(self, booking_id: str) -> None:
        ...

    @abstractmethod
    def get_session(self) -> Optional[dict]:
        ...

    @abstractmethod
    def set_session(self, user: dict) -> None:
        ...

    @abstractmethod
    def clear_session(self) -> None:
        ...


def is_slot_taken(bookings: List[dict], booking: dict) -> bool:
    return any(
        existing['seatId'] == booking['seatId']
        and existing['date'] == booking['date']
        and existing['startTime'] == booking['startTime']
        and existing['status'] == 'ACTIVE'
        for existing in bookings
    )
