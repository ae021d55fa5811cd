import datetime
from enum import Enum
from typing import List

from pydantic import Field

from schemas.base import CamelModel


class BookingStatus(str, Enum):
    ACTIVE = 'ACTIVE'
    COMPLETED = 'COMPLETED'
    CANCELLED = 'CANCELLED'


class BookingBase(CamelModel):
    """
    좌석 예약을 나타냅니다. 한 예약은 하루 중 한 시간짜리 슬롯 하나를 차지합니다.
    """
    id: str
    seat_id: str
    user_id: str
    user_name: str
    date: datetime.date
    start_time: str
    end_time: str
    timestamp: int
    status: BookingStatus = BookingStatus.ACTIVE


class CreateBookingInput(CamelModel):
    seat_id: str = Field(description='예약할 좌석의 `id`', examples=['s-c1'])
    user_id: str = Field(description='예약하는 유저의 `id`', examples=['student-1'])
    date: datetime.date = Field(description='예약 날짜', examples=['2025-02-20'])
    start_time: str = Field(description='슬롯 시작 시간', examples=['10:00'])


class TimeSlot(CamelModel):
    start: str
    end: str
    label: str
    hour: int


class AvailableSlots(CamelModel):
    date: datetime.date
    slots: List[TimeSlot]
