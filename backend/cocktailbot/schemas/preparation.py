# cocktailbot/schemas/preparation.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field

from cocktailbot.schemas.base import CamelModel
from cocktailbot.schemas.recipe import RecipeItem


class PrepareRequest(CamelModel):
    cocktail_id: str
    size_ml: float = Field(300, description="Target glass volume (ml)")


class ShotRequest(CamelModel):
    ingredient_id: str
    amount_ml: Optional[float] = None


class DispenseStep(CamelModel):
    ingredient_id: str
    pump_id: int
    pin: int
    amount: float
    duration_ms: int
    delayed: bool = False


class PreparationResult(CamelModel):
    success: bool
    message: str
    cocktail_id: Optional[str] = None
    size_ml: Optional[float] = None
    dispensed: List[DispenseStep] = []
    skipped: List[str] = []
    manual: List[RecipeItem] = []
    cancelled: bool = False


class MachineState(str, Enum):
    IDLE = "idle"
    CHECKING = "checking"
    DISPENSING = "dispensing"
    FINISHING = "finishing"


class MachineStatus(CamelModel):
    state: MachineState = MachineState.IDLE
    job: Optional[str] = None
    started_at: Optional[datetime] = None
    cancel_requested: bool = False
