import datetime
from typing import Callable, List

from fastapi import HTTPException
from starlette import status

from logger_config import logger
from repository.booking_repository import BookingRepository
from repository.seat_repository import SeatRepository
from repository.user_repository import UserRepository
from schemas.booking import BookingBase, BookingStatus, CreateBookingInput, TimeSlot
from store.base import DataStore
from util import generate_id, local_now, now_millis

OPENING_HOUR = 8
SLOT_COUNT = 12
BOOKING_WINDOW_DAYS = 3


def _hour_label(hour: int) -> str:
    return f'{hour % 12 or 12} {"AM" if hour < 12 else "PM"}'


TIME_SLOTS = [
    TimeSlot(start=f'{hour:02d}:00', end=f'{hour + 1:02d}:00',
             label=f'{_hour_label(hour)} - {_hour_label(hour + 1)}', hour=hour)
    for hour in range(OPENING_HOUR, OPENING_HOUR + SLOT_COUNT)
]


def find_slot(start_time: str):
    return next((slot for slot in TIME_SLOTS if slot.start == start_time), None)


class BookingService:
    """
    좌석 예약 생성과 취소를 처리합니다.
    충돌 검사는 저장 직전에 한 번 수행하는 best-effort 검사이며, 여러 클라이언트 사이의 원자성은 보장하지 않습니다.
    """

    def __init__(self, store: DataStore, clock: Callable[[], datetime.datetime] = local_now):
        self.booking_repository = BookingRepository(store)
        self.seat_repository = SeatRepository(store)
        self.user_repository = UserRepository(store)
        self.clock = clock

    def bookable_dates(self) -> List[datetime.date]:
        today = self.clock().date()
        return [today + datetime.timedelta(days=days) for days in range(BOOKING_WINDOW_DAYS)]

    def available_slots(self, date: datetime.date) -> List[TimeSlot]:
        """
        해당 날짜에 선택할 수 있는 슬롯을 반환합니다.
        오늘이면 시작 시각이 현재 시각보다 이후인 슬롯만, 이후 날짜면 모든 슬롯을 반환합니다.
        """
        now = self.clock()

        if date < now.date():
            return []

        if date == now.date():
            return [slot for slot in TIME_SLOTS if slot.hour > now.hour]

        return list(TIME_SLOTS)

    def get_bookings(self, user_id: str = None) -> List[BookingBase]:
        if user_id is None:
            return self.booking_repository.get_all()

        return self.my_bookings(user_id)

    def my_bookings(self, user_id: str) -> List[BookingBase]:
        bookings = self.booking_repository.get_by_user_id(user_id)
        return sorted(bookings, key=lambda booking: booking.timestamp, reverse=True)

    def slot_bookings(self, date: datetime.date, start_time: str) -> List[str]:
        return [booking.seat_id for booking in self.booking_repository.get_active_by_slot(date, start_time)]

    def create_booking(self, new_booking: CreateBookingInput) -> BookingBase:
        slot = find_slot(new_booking.start_time)

        if not slot:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Invalid time slot')

        if new_booking.date not in self.bookable_dates():
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail='Bookings can only be made for today and the next two days')

        if slot not in self.available_slots(new_booking.date):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='This time slot has already started')

        user = self.user_repository.get_by_id(new_booking.user_id)

        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='User not found')

        seat = self.seat_repository.get_by_id(new_booking.seat_id)

        if not seat:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Seat not found')

        if seat.is_maintenance:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Seat is under maintenance')

        slot_bookings = self.booking_repository.get_active_by_slot(new_booking.date, slot.start)

        if any(booking.user_id == user.id for booking in slot_bookings):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail='You already have a booking for this time slot.')

        if any(booking.seat_id == seat.id for booking in slot_bookings):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail='Seat already booked for this time slot.')

        booking = BookingBase(
            id=generate_id('bk'),
            seat_id=seat.id,
            user_id=user.id,
            user_name=user.name,
            date=new_booking.date,
            start_time=slot.start,
            end_time=slot.end,
            timestamp=now_millis(),
            status=BookingStatus.ACTIVE
        )

        if not self.booking_repository.create(booking):
            logger.info(f'Store refused booking of seat {seat.id} on {booking.date} {booking.start_time}')
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail='Failed to book seat. It may have been taken.')

        logger.info(f'Booking {booking.id} created: seat {seat.id} on {booking.date} {booking.start_time}')
        return booking

    def cancel_booking(self, booking_id: str) -> BookingBase:
        # 예약 소유자 확인은 하지 않습니다. id를 아는 누구나 취소할 수 있습니다.
        booking = self.booking_repository.get_by_id(booking_id)

        if not booking:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Booking not found')

        if booking.status != BookingStatus.CANCELLED:
            self.booking_repository.cancel(booking_id)
            logger.info(f'Booking {booking_id} cancelled')

        booking.status = BookingStatus.CANCELLED
        return booking
