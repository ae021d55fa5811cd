import csv
import datetime
import io
from typing import List

from fastapi import HTTPException
from starlette import status

from repository.booking_repository import BookingRepository
from repository.seat_repository import SeatRepository
from repository.user_repository import UserRepository
from schemas.booking import BookingBase, BookingStatus
from schemas.report import UsageStats
from schemas.seat import SeatMapEntry, SeatStatus
from schemas.user import UserRole
from store.base import DataStore

CSV_HEADERS = ['Booking ID', 'Student Name', 'Student ID', 'Department', 'Seat', 'Date', 'Time', 'Status']


class ReportService:
    def __init__(self, store: DataStore):
        self.booking_repository = BookingRepository(store)
        self.seat_repository = SeatRepository(store)
        self.user_repository = UserRepository(store)

    def stats(self) -> UsageStats:
        bookings = self.booking_repository.get_all()
        seats = self.seat_repository.get_all()

        return UsageStats(
            total_bookings=len(bookings),
            active_bookings=len([b for b in bookings if b.status == BookingStatus.ACTIVE]),
            total_seats=len(seats),
            maintenance_seats=len([s for s in seats if s.is_maintenance]),
            total_students=len(self.user_repository.get_by_role(UserRole.STUDENT))
        )

    def seat_map(self, date: datetime.date, start_time: str) -> List[SeatMapEntry]:
        """
        선택한 날짜와 슬롯 기준으로 각 좌석의 상태를 반환합니다. 점검 중인 좌석은 예약 여부와 관계없이 MAINTENANCE 입니다.
        """
        booked_seat_ids = {booking.seat_id for booking in self.booking_repository.get_active_by_slot(date, start_time)}

        entries = []
        for seat in self.seat_repository.get_all():
            if seat.is_maintenance:
                seat_status = SeatStatus.MAINTENANCE
            elif seat.id in booked_seat_ids:
                seat_status = SeatStatus.BOOKED
            else:
                seat_status = SeatStatus.AVAILABLE

            entries.append(SeatMapEntry(status=seat_status, **seat.model_dump()))

        return entries

    def recent_activity(self, limit: int = 10) -> List[BookingBase]:
        bookings = sorted(self.booking_repository.get_all(), key=lambda b: b.timestamp, reverse=True)
        return bookings[:limit]

    def export_csv(self, start_date: datetime.date, end_date: datetime.date) -> str:
        """
        기간 안(양 끝 포함)의 예약을 CSV 문자열로 만듭니다. 모든 필드는 큰따옴표로 감쌉니다.
        삭제된 좌석은 `Unknown`, 찾을 수 없는 유저 정보는 `N/A`로 표시합니다.
        """
        bookings = self.booking_repository.get_by_date_range(start_date, end_date)

        if not bookings:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail='No bookings found in the selected date range.')

        users = {user.id: user for user in self.user_repository.get_all()}
        seats = {seat.id: seat for seat in self.seat_repository.get_all()}

        output = io.StringIO()
        writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator='\n')
        output.write(','.join(CSV_HEADERS) + '\n')

        for booking in bookings:
            student = users.get(booking.user_id)
            seat = seats.get(booking.seat_id)

            writer.writerow([
                booking.id,
                booking.user_name,
                (student.student_id if student else None) or 'N/A',
                (student.department if student else None) or 'N/A',
                seat.label if seat else 'Unknown',
                booking.date.isoformat(),
                f'{booking.start_time} - {booking.end_time}',
                booking.status.value
            ])

        return output.getvalue()
