from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from schemas.base import CamelModel

GRID_COLUMNS = 15
GRID_ROWS = 26


class SeatType(str, Enum):
    STANDARD = 'Standard'
    QUIET = 'Quiet Zone'
    PC = 'PC Station'


class SeatStatus(str, Enum):
    AVAILABLE = 'AVAILABLE'
    BOOKED = 'BOOKED'
    MAINTENANCE = 'MAINTENANCE'


class SeatBase(CamelModel):
    """
    좌석 배치도의 좌석 하나를 나타냅니다. `x`, `y`는 배치도 그리드 좌표이고 `label`은 좌표에서 계산됩니다.
    """
    id: str
    label: str
    type: SeatType = SeatType.STANDARD
    is_maintenance: bool = False
    x: int
    y: int
    rotation: int = 0


class GridPosition(BaseModel):
    model_config = ConfigDict(extra='ignore')

    x: int = Field(ge=0, lt=GRID_COLUMNS, description='열 (0부터 시작)', examples=[4])
    y: int = Field(ge=0, lt=GRID_ROWS, description='행 (0부터 시작, A행이 0)', examples=[2])


class ChangeSeatTypeInput(BaseModel):
    model_config = ConfigDict(extra='ignore')

    type: SeatType = Field(description='좌석 종류', examples=['Quiet Zone'])


class SeatMapEntry(SeatBase):
    status: SeatStatus
