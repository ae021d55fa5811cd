from fastapi import APIRouter
from routers.v1.booking_router import booking_router
from routers.v1.report_router import report_router
from routers.v1.seat_router import seat_router
from routers.v1.user_router import user_router

router = APIRouter(
    prefix='/api/v1'
)

router.include_router(user_router)
router.include_router(seat_router)
router.include_router(booking_router)
router.include_router(report_router)
