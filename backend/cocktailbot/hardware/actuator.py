# cocktailbot/hardware/actuator.py

from __future__ import annotations

import logging
import math

from cocktailbot.core.errors import HardwareError, ValidationError
from cocktailbot.hardware.drivers import PumpDriver

log = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def pump_duration_ms(amount_ml: float, flow_rate: float) -> int:
    if not flow_rate > 0:
        raise ValidationError(f"Invalid flow rate {flow_rate!r}")
    return round_half_up(amount_ml / flow_rate * 1000)


class PumpActuator:
    def __init__(self, driver: PumpDriver) -> None:
        self.driver = driver

    async def activate(self, pin: int, duration_ms: int) -> None:
        if duration_ms <= 0:
            log.debug("[PUMP] pin %s: %d ms, nothing to do", pin, duration_ms)
            return

        log.info("[PUMP] pin %s on for %d ms", pin, duration_ms)
        try:
            await self.driver.pulse(pin, duration_ms)
        except Exception as e:
            log.error("[PUMP] pin %s failed: %r", pin, e)
            raise HardwareError(f"Pump on pin {pin} failed: {e}") from e
