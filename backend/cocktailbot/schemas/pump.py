# cocktailbot/schemas/pump.py

from typing import Optional

from pydantic import Field

from cocktailbot.schemas.base import CamelModel


class PumpEntry(CamelModel):
    id: int = Field(..., ge=1)
    ingredient: str = Field(..., description="Ingredient id routed to this pump")
    pin: int = Field(..., ge=0, description="GPIO pin (BCM)")
    flow_rate: float = Field(..., gt=0, description="ml per second")
    enabled: bool = True


class PumpActivateRequest(CamelModel):
    duration_ms: int = Field(..., gt=0, le=60000)
    # prime | vent | clean | test | calibrate
    purpose: str = "test"


class PumpCalibrationRequest(CamelModel):
    measured_ml: float = Field(..., gt=0)
    duration_ms: int = Field(..., gt=0)


class PumpActionResult(CamelModel):
    success: bool = True
    pump_id: int
    duration_ms: int
    purpose: str
    flow_rate: Optional[float] = None
