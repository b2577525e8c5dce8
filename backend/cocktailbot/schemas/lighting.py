# cocktailbot/schemas/lighting.py

from typing import List, Literal, Optional

from pydantic import Field

from cocktailbot.schemas.base import CamelModel

LightingMode = Literal["busy", "ready", "idle", "off", "color"]


class PhaseLighting(CamelModel):
    color: str = "#ff0000"
    blinking: bool = False


class IdleLighting(CamelModel):
    # rainbow | static | off
    scheme: str = "rainbow"
    colors: List[str] = ["#ff0000", "#00ff00", "#0000ff"]


class LightingConfig(CamelModel):
    cocktail_preparation: PhaseLighting = Field(
        default_factory=lambda: PhaseLighting(color="#ff0000", blinking=True)
    )
    cocktail_finished: PhaseLighting = Field(
        default_factory=lambda: PhaseLighting(color="#00ff00", blinking=False)
    )
    idle_mode: IdleLighting = Field(default_factory=IdleLighting)


class LightingCommand(CamelModel):
    mode: LightingMode
    color: Optional[str] = Field(None, examples=["#ff8800"])
    brightness: Optional[int] = Field(None, ge=0, le=255)
