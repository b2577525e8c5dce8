# cocktailbot/api/v1/pumps.py

from typing import List

from fastapi import APIRouter, Depends

from cocktailbot.api.deps import get_container, get_machine
from cocktailbot.core.container import Container
from cocktailbot.schemas.pump import (
    PumpActionResult,
    PumpActivateRequest,
    PumpCalibrationRequest,
    PumpEntry,
)
from cocktailbot.services.machine_service import CocktailMachine

router = APIRouter(prefix="/pumps", tags=["pumps"])


@router.get("/", response_model=List[PumpEntry])
def get_pump_config(container: Container = Depends(get_container)):
    return container.pumps.get()


@router.put("/", response_model=List[PumpEntry])
def save_pump_config(
    entries: List[PumpEntry],
    container: Container = Depends(get_container),
):
    saved = container.pumps.save(entries)
    # new ingredients get a level right away
    container.levels.get_levels()
    return saved


@router.post("/{pump_id}/activate", response_model=PumpActionResult)
async def activate_pump(
    pump_id: int,
    req: PumpActivateRequest,
    machine: CocktailMachine = Depends(get_machine),
):
    """Prime, vent, clean or test a single pump."""
    pump = await machine.run_pump(pump_id, req.duration_ms, req.purpose)
    return PumpActionResult(
        pump_id=pump.id,
        duration_ms=req.duration_ms,
        purpose=req.purpose,
        flow_rate=pump.flow_rate,
    )


@router.post("/{pump_id}/calibrate", response_model=PumpActionResult)
def calibrate_pump(
    pump_id: int,
    req: PumpCalibrationRequest,
    machine: CocktailMachine = Depends(get_machine),
):
    """Store the flow rate measured after a timed `calibrate` activation."""
    pump = machine.calibrate_pump(pump_id, req.measured_ml, req.duration_ms)
    return PumpActionResult(
        pump_id=pump.id,
        duration_ms=req.duration_ms,
        purpose="calibrate",
        flow_rate=pump.flow_rate,
    )
