import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.params import Path
from starlette import status

from schemas import booking
from service.booking_service import BookingService
from store.base import DataStore
from store.provider import get_store

booking_router = APIRouter(
    prefix='/bookings',
    tags=['예약']
)


@booking_router.get('', response_model=List[booking.BookingBase], name='예약 조회')
def get_bookings(store: DataStore = Depends(get_store),
                 user_id: Optional[str] = Query(None, description='주어지면 해당 유저의 예약만 최신순으로 반환합니다')):
    booking_service = BookingService(store)
    return booking_service.get_bookings(user_id)


@booking_router.get('/dates', response_model=List[datetime.date], name='예약 가능 날짜 조회')
def get_bookable_dates(store: DataStore = Depends(get_store)):
    """
    오늘부터 사흘 동안의 날짜를 반환합니다.
    """
    booking_service = BookingService(store)
    return booking_service.bookable_dates()


@booking_router.get('/slots', response_model=booking.AvailableSlots, name='예약 가능 슬롯 조회')
def get_available_slots(date: datetime.date = Query(..., description='조회할 날짜'),
                        store: DataStore = Depends(get_store)):
    """
    해당 날짜에 선택할 수 있는 한 시간 단위 슬롯(08:00 ~ 20:00)을 반환합니다.
    오늘 날짜인 경우 이미 시작한 슬롯은 제외됩니다.
    """
    booking_service = BookingService(store)
    return booking.AvailableSlots(date=date, slots=booking_service.available_slots(date))


@booking_router.post('', response_model=booking.BookingBase, status_code=status.HTTP_201_CREATED, name='좌석 예약',
                     responses={
                         400: {
                             "description": "잘못된 슬롯이거나 예약 가능 기간이 아닌 경우, 점검 중인 좌석인 경우",
                             "content": {
                                 "application/json": {
                                     "example": {"detail": "This time slot has already started"}
                                 }
                             }
                         },
                         404: {
                             "description": "유저나 좌석을 찾을 수 없는 경우",
                             "content": {
                                 "application/json": {
                                     "example": {"detail": "Seat not found"}
                                 }
                             }
                         },
                         409: {
                             "description": "유저가 같은 슬롯에 이미 예약했거나 좌석이 이미 예약된 경우",
                             "content": {
                                 "application/json": {
                                     "example": {"detail": "Seat already booked for this time slot."}
                                 }
                             }
                         }
                     })
def create_booking(create_booking_request: booking.CreateBookingInput, store: DataStore = Depends(get_store)):
    """
    좌석 하나를 한 시간 슬롯 동안 예약합니다.
    같은 좌석, 같은 날짜, 같은 시작 시간에는 ACTIVE 예약이 하나만 있을 수 있고, 한 유저도 같은 슬롯에 예약을 하나만 가질 수 있습니다.
    """
    booking_service = BookingService(store)
    return booking_service.create_booking(create_booking_request)


@booking_router.put('/{booking_id}/cancel', response_model=booking.BookingBase, name='예약 취소', responses={
    404: {
        "description": "`booking_id`값을 가진 예약이 없는 경우",
        "content": {
            "application/json": {
                "example": {"detail": "Booking not found"}
            }
        }
    }
})
def cancel_booking(store: DataStore = Depends(get_store),
                   booking_id: str = Path(..., description='취소할 예약의 `id`')):
    """
    예약을 취소합니다. 이미 취소된 예약을 다시 취소해도 취소 상태가 유지됩니다.
    """
    booking_service = BookingService(store)
    return booking_service.cancel_booking(booking_id)
