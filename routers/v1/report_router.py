import datetime
from typing import List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from schemas import booking, report
from service.report_service import ReportService
from store.base import DataStore
from store.provider import get_store

report_router = APIRouter(
    prefix='/reports',
    tags=['통계']
)


@report_router.get('/stats', response_model=report.UsageStats, name='이용 현황 조회')
def get_stats(store: DataStore = Depends(get_store)):
    """
    전체 예약 수, 진행 중인 예약 수, 좌석 수, 점검 중인 좌석 수, 학생 수를 반환합니다.
    """
    report_service = ReportService(store)
    return report_service.stats()


@report_router.get('/activity', response_model=List[booking.BookingBase], name='최근 예약 활동 조회')
def get_recent_activity(store: DataStore = Depends(get_store),
                        limit: int = Query(10, ge=1, le=100, description='반환할 예약 수')):
    report_service = ReportService(store)
    return report_service.recent_activity(limit)


@report_router.get('/export', name='예약 내역 CSV 내보내기', response_class=Response, responses={
    200: {"content": {"text/csv": {}}},
    404: {
        "description": "기간 안에 예약이 없는 경우",
        "content": {
            "application/json": {
                "example": {"detail": "No bookings found in the selected date range."}
            }
        }
    }
})
def export_bookings(start_date: datetime.date = Query(..., description='시작 날짜 (포함)'),
                    end_date: datetime.date = Query(..., description='끝 날짜 (포함)'),
                    store: DataStore = Depends(get_store)):
    """
    기간 안의 예약을 CSV 파일로 내려받습니다.
    """
    report_service = ReportService(store)
    content = report_service.export_csv(start_date, end_date)
    filename = f'library_bookings_{start_date}_to_{end_date}.csv'

    return Response(content=content, media_type='text/csv; charset=utf-8',
                    headers={'Content-Disposition': f'attachment; filename="{filename}"'})
