from typing import List, Optional

from schemas.seat import SeatBase
from store.base import DataStore


class SeatRepository:
    def __init__(self, store: DataStore):
        self.store = store

    def get_all(self) -> List[SeatBase]:
        return [SeatBase.model_validate(seat) for seat in self.store.get_seats()]

    def get_by_id(self, _id: str) -> Optional[SeatBase]:
        return next((seat for seat in self.get_all() if seat.id == _id), None)

    def replace_all(self, seats: List[SeatBase]):
        self.store.save_seats([seat.to_record() for seat in seats])

    def toggle_maintenance(self, _id: str):
        self.store.toggle_seat_maintenance(_id)
