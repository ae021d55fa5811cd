import datetime
from typing import List, Optional

from schemas.booking import BookingBase, BookingStatus
from store.base import DataStore


class BookingRepository:
    def __init__(self, store: DataStore):
        self.store = store

    def get_all(self) -> List[BookingBase]:
        return [BookingBase.model_validate(booking) for booking in self.store.get_bookings()]

    def get_by_id(self, _id: str) -> Optional[BookingBase]:
        return next((booking for booking in self.get_all() if booking.id == _id), None)

    def get_by_user_id(self, user_id: str) -> List[BookingBase]:
        return [booking for booking in self.get_all() if booking.user_id == user_id]

    def get_active_by_slot(self, date: datetime.date, start_time: str) -> List[BookingBase]:
        return [booking for booking in self.get_all()
                if booking.date == date and booking.start_time == start_time
                and booking.status == BookingStatus.ACTIVE]

    def get_by_date_range(self, start_date: datetime.date, end_date: datetime.date) -> List[BookingBase]:
        return [booking for booking in self.get_all() if start_date <= booking.date <= end_date]

    def create(self, booking: BookingBase) -> bool:
        return self.store.create_booking(booking.to_record())

    def cancel(self, _id: str):
        self.store.cancel_booking(_id)
