from pydantic import BaseModel, ConfigDict

from schemas.base import CamelModel


class UsageStats(CamelModel):
    total_bookings: int
    active_bookings: int
    total_seats: int
    maintenance_seats: int
    total_students: int


class StoreStatus(BaseModel):
    model_config = ConfigDict(extra='ignore')

    mode: str
