from typing import List

from fastapi import HTTPException
from starlette import status

from logger_config import logger
from repository.seat_repository import SeatRepository
from schemas.seat import SeatBase, SeatType
from store.base import DataStore
from util import generate_id


def generate_label(x: int, y: int) -> str:
    """
    그리드 좌표로 좌석 이름을 만듭니다. 행은 알파벳(A부터), 열은 1부터 시작하는 숫자입니다. (0, 0) -> A1
    """
    return f'{chr(ord("A") + y)}{x + 1}'


class SeatLayoutService:
    """
    좌석 배치도를 편집합니다. 모든 변경은 좌석 컬렉션 전체를 저장소에 다시 쓰는 방식이며, 동시에 편집하면 마지막 쓰기가 이깁니다.
    변경은 먼저 메모리의 `seats`에 반영한 뒤 저장하고, 저장이 실패하면 이전 상태로 되돌립니다.
    """

    def __init__(self, store: DataStore):
        self.repository = SeatRepository(store)
        self.seats: List[SeatBase] = []

    def refresh(self) -> List[SeatBase]:
        self.seats = self.repository.get_all()
        return self.seats

    def _commit(self, updated_seats: List[SeatBase]):
        previous_seats = self.seats
        self.seats = updated_seats
        try:
            self.repository.replace_all(updated_seats)
        except Exception:
            self.seats = previous_seats
            logger.exception('Saving seat layout failed, rolled back the local view')
            raise

        logger.info(f'Seat layout saved ({len(updated_seats)} seats)')

    def _get_seat(self, seat_id: str) -> SeatBase:
        seat = next((seat for seat in self.seats if seat.id == seat_id), None)

        if not seat:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Seat not found')

        return seat

    def _check_cell_free(self, x: int, y: int):
        if any(seat.x == x and seat.y == y for seat in self.seats):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail=f'Cell {generate_label(x, y)} already has a seat')

    def _replace(self, seat_id: str, **changes) -> SeatBase:
        seat = self._get_seat(seat_id)
        updated_seat = seat.model_copy(update=changes)
        self._commit([updated_seat if s.id == seat_id else s for s in self.seats])
        return updated_seat

    def add_seat(self, x: int, y: int) -> SeatBase:
        self._check_cell_free(x, y)

        seat = SeatBase(
            id=generate_id('seat'),
            label=generate_label(x, y),
            type=SeatType.STANDARD,
            is_maintenance=False,
            x=x,
            y=y,
            rotation=0
        )
        self._commit(self.seats + [seat])
        return seat

    def move_seat(self, seat_id: str, x: int, y: int) -> SeatBase:
        seat = self._get_seat(seat_id)
        if (seat.x, seat.y) != (x, y):
            self._check_cell_free(x, y)

        return self._replace(seat_id, x=x, y=y, label=generate_label(x, y))

    def rotate_seat(self, seat_id: str) -> SeatBase:
        seat = self._get_seat(seat_id)
        return self._replace(seat_id, rotation=(seat.rotation + 90) % 360)

    def change_type(self, seat_id: str, seat_type: SeatType) -> SeatBase:
        return self._replace(seat_id, type=seat_type)

    def delete_seat(self, seat_id: str):
        self._get_seat(seat_id)
        self._commit([seat for seat in self.seats if seat.id != seat_id])

    def toggle_maintenance(self, seat_id: str) -> SeatBase:
        self._get_seat(seat_id)
        self.repository.toggle_maintenance(seat_id)
        self.refresh()
        return self._get_seat(seat_id)

