# cocktailbot/hardware/drivers.py
"""
Capabilities the machine needs from the outside world.

The pumps and the LED strip are driven by small external scripts
(`pump_control.py`, `led_client.py`). The orchestrator only ever talks to
the two protocols below, so tests inject fakes and a bench setup without
hardware uses the simulated drivers.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Protocol, Sequence

log = logging.getLogger(__name__)


class DriverError(RuntimeError):
    pass


class PumpDriver(Protocol):
    async def pulse(self, pin: int, duration_ms: int) -> None:
        """Energise `pin` for `duration_ms` and return once it is off again."""


class LightingDriver(Protocol):
    async def send(self, *tokens: str) -> None:
        """Send one command (`BUSY`, `COLOR 255 0 0`, ...) to the LED controller."""


async def run_script(
    python_bin: str, script: Path, args: Sequence[str], timeout: float
) -> str:
    proc = await asyncio.create_subprocess_exec(
        python_bin,
        str(script),
        *args,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        proc.kill()
        await proc.wait()
        raise DriverError(f"{script.name} {' '.join(args)} timed out after {timeout:.1f}s")

    if proc.returncode != 0:
        detail = (stderr or stdout).decode("utf-8", errors="ignore").strip()
        raise DriverError(f"{script.name} {' '.join(args)} exited {proc.returncode}: {detail}")
    return stdout.decode("utf-8", errors="ignore").strip()


class ShellPumpDriver:
    def __init__(self, python_bin: str, script: Path, timeout_margin_s: float = 10.0) -> None:
        self.python_bin = python_bin
        self.script = Path(script)
        self.timeout_margin_s = timeout_margin_s

    async def pulse(self, pin: int, duration_ms: int) -> None:
        timeout = duration_ms / 1000.0 + self.timeout_margin_s
        await run_script(
            self.python_bin, self.script, ["activate", str(pin), str(duration_ms)], timeout
        )


class ShellLightingDriver:
    def __init__(self, python_bin: str, script: Path, timeout_s: float = 5.0) -> None:
        self.python_bin = python_bin
        self.script = Path(script)
        self.timeout_s = timeout_s

    async def send(self, *tokens: str) -> None:
        await run_script(self.python_bin, self.script, list(tokens), self.timeout_s)


class SimulatedPumpDriver:
    """Bench driver: logs the pulse and waits it out."""

    async def pulse(self, pin: int, duration_ms: int) -> None:
        log.info("[SIM] pin %s on for %d ms", pin, duration_ms)
        await asyncio.sleep(duration_ms / 1000.0)


class SimulatedLightingDriver:
    async def send(self, *tokens: str) -> None:
        log.info("[SIM] LED %s", " ".join(tokens))
