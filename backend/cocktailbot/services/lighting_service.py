# cocktailbot/services/lighting_service.py

from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from cocktailbot.core.errors import ValidationError
from cocktailbot.db.json_store import JsonDocument
from cocktailbot.hardware.drivers import LightingDriver
from cocktailbot.schemas.lighting import LightingConfig

log = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")

RAINBOW_INTERVAL_MS = 30

LIGHTING_MODES = ("busy", "ready", "idle", "off", "color")


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    match = _HEX_RE.match(color or "")
    if not match:
        raise ValidationError(f"Invalid hex color {color!r}")
    return tuple(int(part, 16) for part in match.groups())


def _color_tokens(color: str) -> List[str]:
    r, g, b = hex_to_rgb(color)
    return ["COLOR", str(r), str(g), str(b)]


class LightingConfigStore:
    def __init__(self, document: JsonDocument) -> None:
        self.document = document

    def get(self) -> LightingConfig:
        raw = self.document.read()
        if not raw:
            return LightingConfig()
        return LightingConfig.model_validate(raw)

    def save(self, config: LightingConfig) -> LightingConfig:
        # reject colours the controller could not render before persisting
        hex_to_rgb(config.cocktail_preparation.color)
        hex_to_rgb(config.cocktail_finished.color)
        for color in config.idle_mode.colors:
            hex_to_rgb(color)
        self.document.write(config.to_json_dict())
        return config


class LightingSignalClient:
    """Best-effort LED feedback. Never fails a pour."""

    def __init__(self, driver: LightingDriver, config: LightingConfigStore) -> None:
        self.driver = driver
        self.config = config

    def commands_for(
        self, mode: str, color: Optional[str] = None, config: Optional[LightingConfig] = None
    ) -> List[List[str]]:
        config = config or self.config.get()

        if mode == "busy":
            phase = config.cocktail_preparation
            if phase.blinking:
                return [["BUSY"]]
            return [_color_tokens(phase.color)]
        if mode == "ready":
            return [_color_tokens(config.cocktail_finished.color), ["READY"]]
        if mode == "off":
            return [["OFF"]]
        if mode == "color":
            if not color:
                raise ValidationError("color mode requires a color")
            return [_color_tokens(color)]
        if mode == "idle":
            idle = config.idle_mode
            if idle.scheme == "rainbow":
                return [["RAINBOW", str(RAINBOW_INTERVAL_MS)]]
            if idle.scheme == "off":
                return [["OFF"]]
            if idle.scheme == "static" and idle.colors:
                return [_color_tokens(idle.colors[0])]
            return [["IDLE"]]
        raise ValidationError(f"Unknown lighting mode {mode!r}")

    async def signal(
        self, mode: str, brightness: Optional[int] = None, color: Optional[str] = None
    ) -> None:
        # caller mistakes are raised, everything past this point is swallowed
        if mode not in LIGHTING_MODES:
            raise ValidationError(f"Unknown lighting mode {mode!r}")
        if mode == "color":
            _color_tokens(color or "")
        if brightness is not None and not 0 <= brightness <= 255:
            raise ValidationError("brightness must be within 0..255")

        try:
            commands = self.commands_for(mode, color=color)
        except Exception as e:
            log.warning("[LED] cannot build %s command from lighting config: %r", mode, e)
            return
        if brightness is not None:
            commands.insert(0, ["BRIGHT", str(int(brightness))])

        for tokens in commands:
            try:
                await self.driver.send(*tokens)
                log.debug("[LED] %s", " ".join(tokens))
            except Exception as e:
                log.warning("[LED] %s failed: %r", " ".join(tokens), e)

    async def apply_config(self, config: LightingConfig) -> LightingConfig:
        saved = self.config.save(config)
        await self.signal("idle")
        return saved
