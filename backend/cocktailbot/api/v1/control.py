# cocktailbot/api/v1/control.py

from fastapi import APIRouter, Depends

from cocktailbot.api.deps import get_container, get_machine
from cocktailbot.core.container import Container
from cocktailbot.schemas.preparation import (
    MachineStatus,
    PrepareRequest,
    PreparationResult,
    ShotRequest,
)
from cocktailbot.services.machine_service import CocktailMachine

router = APIRouter(prefix="/control", tags=["control"])


@router.post("/prepare", response_model=PreparationResult)
async def prepare_cocktail(
    req: PrepareRequest,
    machine: CocktailMachine = Depends(get_machine),
):
    return await machine.prepare(req.cocktail_id, req.size_ml)


@router.post("/shot", response_model=PreparationResult)
async def prepare_shot(
    req: ShotRequest,
    container: Container = Depends(get_container),
):
    amount = req.amount_ml if req.amount_ml is not None else container.settings.DEFAULT_SHOT_ML
    return await container.machine.prepare_shot(req.ingredient_id, amount)


@router.get("/status", response_model=MachineStatus)
def get_status(machine: CocktailMachine = Depends(get_machine)):
    return machine.status()


@router.post("/cancel")
def cancel(machine: CocktailMachine = Depends(get_machine)):
    """Skips the steps that have not started; pulses already sent run to the end."""
    return {"cancelRequested": machine.cancel()}
