import datetime
from typing import List

from fastapi import APIRouter, Depends, Query
from fastapi.params import Path
from starlette import status

from schemas import base, seat
from service.report_service import ReportService
from service.seat_layout_service import SeatLayoutService
from store.base import DataStore
from store.provider import get_store

seat_router = APIRouter(
    prefix='/seats',
    tags=['좌석']
)

SEAT_NOT_FOUND = {
    404: {
        "description": "`seat_id`값을 가진 좌석이 없는 경우",
        "content": {
            "application/json": {
                "example": {"detail": "Seat not found"}
            }
        }
    }
}

CELL_OCCUPIED = {
    409: {
        "description": "해당 칸에 이미 좌석이 있는 경우",
        "content": {
            "application/json": {
                "example": {"detail": "Cell C5 already has a seat"}
            }
        }
    }
}


def _editor(store: DataStore) -> SeatLayoutService:
    seat_layout_service = SeatLayoutService(store)
    seat_layout_service.refresh()
    return seat_layout_service


@seat_router.get('', response_model=List[seat.SeatBase], name='좌석 목록 조회')
def get_seats(store: DataStore = Depends(get_store)):
    return SeatLayoutService(store).refresh()


@seat_router.get('/map', response_model=List[seat.SeatMapEntry], name='좌석 배치도 조회')
def get_seat_map(date: datetime.date = Query(..., description='조회할 날짜'),
                 start_time: str = Query(..., description='조회할 슬롯의 시작 시간', examples=['10:00']),
                 store: DataStore = Depends(get_store)):
    """
    주어진 날짜와 슬롯에서 각 좌석의 상태(AVAILABLE / BOOKED / MAINTENANCE)를 반환합니다.
    """
    report_service = ReportService(store)
    return report_service.seat_map(date, start_time)


@seat_router.post('', response_model=seat.SeatBase, status_code=status.HTTP_201_CREATED, name='좌석 추가',
                  responses=CELL_OCCUPIED)
def add_seat(position: seat.GridPosition, store: DataStore = Depends(get_store)):
    """
    빈 칸에 일반 좌석을 추가합니다. 좌석 이름은 좌표로 정해집니다. (예: x=4, y=2 -> C5)
    """
    return _editor(store).add_seat(position.x, position.y)


@seat_router.put('/{seat_id}/move', response_model=seat.SeatBase, name='좌석 이동',
                 responses={**SEAT_NOT_FOUND, **CELL_OCCUPIED})
def move_seat(position: seat.GridPosition,
              store: DataStore = Depends(get_store),
              seat_id: str = Path(..., description='이동할 좌석의 `id`')):
    return _editor(store).move_seat(seat_id, position.x, position.y)


@seat_router.put('/{seat_id}/rotate', response_model=seat.SeatBase, name='좌석 회전', responses=SEAT_NOT_FOUND)
def rotate_seat(store: DataStore = Depends(get_store),
                seat_id: str = Path(..., description='회전할 좌석의 `id`')):
    """
    좌석을 시계 방향으로 90도 회전합니다.
    """
    return _editor(store).rotate_seat(seat_id)


@seat_router.put('/{seat_id}/type', response_model=seat.SeatBase, name='좌석 종류 변경', responses=SEAT_NOT_FOUND)
def change_seat_type(change_request: seat.ChangeSeatTypeInput,
                     store: DataStore = Depends(get_store),
                     seat_id: str = Path(..., description='변경할 좌석의 `id`')):
    return _editor(store).change_type(seat_id, change_request.type)


@seat_router.put('/{seat_id}/maintenance', response_model=seat.SeatBase, name='좌석 점검 상태 전환',
                 responses=SEAT_NOT_FOUND)
def toggle_maintenance(store: DataStore = Depends(get_store),
                       seat_id: str = Path(..., description='점검 상태를 바꿀 좌석의 `id`')):
    return _editor(store).toggle_maintenance(seat_id)


@seat_router.delete('/{seat_id}', response_model=base.MessageOutputBase, name='좌석 삭제', responses=SEAT_NOT_FOUND)
def delete_seat(store: DataStore = Depends(get_store),
                seat_id: str = Path(..., description='삭제할 좌석의 `id`')):
    """
    좌석을 삭제합니다. 삭제된 좌석을 가리키는 예약은 그대로 남습니다.
    """
    _editor(store).delete_seat(seat_id)
    return base.MessageOutputBase(message='Seat deleted successfully')
