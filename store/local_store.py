import json
import threading
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from db.db_uploader import load_seed_seats, load_seed_users
from db.models import StoredBlob
from logger_config import logger
from store.base import Collection, DataStore, is_slot_taken


class LocalStore(DataStore):
    """
    로컬 키-값 저장소입니다. 컬렉션마다 하나의 행에 컬렉션 전체를 JSON으로 직렬화해 저장합니다.
    읽을 때는 전체를 역직렬화하고, 쓸 때는 전체를 다시 직렬화해 덮어씁니다.
    읽고-검사하고-쓰는 작업은 모두 `_lock` 안에서 실행되므로 같은 인스턴스를 여러 스레드에서 사용해도 쓰기가 유실되지 않습니다.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory
        self._lock = threading.RLock()

    def _read(self, key: str):
        with self.session_factory() as session:
            blob = session.get(StoredBlob, key)
            return json.loads(blob.value) if blob else None

    def _write(self, key: str, value) -> None:
        with self.session_factory() as session:
            session.merge(StoredBlob(key=key, value=json.dumps(value)))
            session.commit()

    def _remove(self, key: str) -> None:
        with self.session_factory() as session:
            blob = session.get(StoredBlob, key)
            if blob:
                session.delete(blob)
                session.commit()

    def get_users(self) -> List[dict]:
        with self._lock:
            users = self._read(Collection.USERS)
            if users is None:
                users = load_seed_users()
                self._write(Collection.USERS, users)
                logger.info(f'Seeded local store with {len(users)} users')
            return users

    def save_user(self, user: dict) -> None:
        with self._lock:
            users = self.get_users()
            users.append(user)
            self._write(Collection.USERS, users)

    def update_user(self, user: dict) -> None:
        with self._lock:
            users = self.get_users()
            for index, existing in enumerate(users):
                if existing['id'] == user['id']:
                    users[index] = user
                    self._write(Collection.USERS, users)
                    return

    def get_seats(self) -> List[dict]:
        with self._lock:
            seats = self._read(Collection.SEATS)
            if seats is None:
                seats = load_seed_seats()
                self._write(Collection.SEATS, seats)
                logger.info(f'Seeded local store with {len(seats)} seats')
            return seats

    def save_seats(self, seats: List[dict]) -> None:
        with self._lock:
            self._write(Collection.SEATS, seats)

    def toggle_seat_maintenance(self, seat_id: str) -> None:
        with self._lock:
            seats = self.get_seats()
            for seat in seats:
                if seat['id'] == seat_id:
                    seat['isMaintenance'] = not seat['isMaintenance']
                    self._write(Collection.SEATS, seats)
                    return

    def get_bookings(self) -> List[dict]:
        with self._lock:
            return self._read(Collection.BOOKINGS) or []

    def create_booking(self, booking: dict) -> bool:
        with self._lock:
            bookings = self.get_bookings()

            if is_slot_taken(bookings, booking):
                return False

            bookings.append(booking)
            self._write(Collection.BOOKINGS, bookings)
            return True

    def cancel_booking(self, booking_id: str) -> None:
        with self._lock:
            bookings = self.get_bookings()
            for booking in bookings:
                if booking['id'] == booking_id:
                    booking['status'] = 'CANCELLED'
                    self._write(Collection.BOOKINGS, bookings)
                    return

    def get_session(self) -> Optional[dict]:
        with self._lock:
            return self._read(Collection.CURRENT_USER)

    def set_session(self, user: dict) -> None:
        with self._lock:
            self._write(Collection.CURRENT_USER, user)

    def clear_session(self) -> None:
        with self._lock:
            self._remove(Collection.CURRENT_USER)
