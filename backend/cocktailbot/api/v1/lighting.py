# cocktailbot/api/v1/lighting.py

from fastapi import APIRouter, Depends

from cocktailbot.api.deps import get_container
from cocktailbot.core.container import Container
from cocktailbot.schemas.lighting import LightingCommand, LightingConfig

router = APIRouter(prefix="/lighting", tags=["lighting"])


@router.get("/config", response_model=LightingConfig)
def get_lighting_config(container: Container = Depends(get_container)):
    return container.lighting_config.get()


@router.put("/config", response_model=LightingConfig)
async def save_lighting_config(
    config: LightingConfig,
    container: Container = Depends(get_container),
):
    """Persist the schemes and switch the strip to the new idle scheme."""
    return await container.lighting.apply_config(config)


@router.post("/control")
async def control_lighting(
    cmd: LightingCommand,
    container: Container = Depends(get_container),
):
    await container.lighting.signal(cmd.mode, brightness=cmd.brightness, color=cmd.color)
    return {"success": True, "mode": cmd.mode}
