import asyncio
import time

import pytest

from cocktailbot.core.config import Settings
from cocktailbot.core.container import build_container
from cocktailbot.schemas.pump import PumpEntry
from cocktailbot.schemas.recipe import Cocktail, RecipeItem


class FakePumpDriver:
    """Records every pulse; `hold` keeps pulses running until released."""

    def __init__(self):
        self.calls = []
        self.log = []
        self.fail_pins = set()
        self.hold = None

    async def pulse(self, pin, duration_ms):
        self.calls.append((pin, duration_ms))
        self.log.append(("start", pin, time.monotonic()))
        if self.hold is not None:
            await self.hold.wait()
        else:
            await asyncio.sleep(0)
        self.log.append(("end", pin, time.monotonic()))
        if pin in self.fail_pins:
            raise RuntimeError(f"pin {pin} jammed")


class FakeLightingDriver:
    def __init__(self, fail=False):
        self.commands = []
        self.fail = fail

    async def send(self, *tokens):
        self.commands.append(" ".join(tokens))
        if self.fail:
            raise RuntimeError("serial link down")


TEST_PUMPS = [
    PumpEntry(id=1, ingredient="rum", pin=17, flow_rate=10),
    PumpEntry(id=2, ingredient="juice", pin=27, flow_rate=10),
    PumpEntry(id=3, ingredient="grenadine", pin=22, flow_rate=10),
    PumpEntry(id=4, ingredient="vodka", pin=23, flow_rate=20),
]

SUNRISE = Cocktail(
    id="test-sunrise",
    name="Test Sunrise",
    recipe=[
        RecipeItem(ingredient_id="rum", amount=50),
        RecipeItem(ingredient_id="juice", amount=200),
        RecipeItem(ingredient_id="grenadine", amount=20),
    ],
)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATA_DIR=tmp_path / "data",
        HARDWARE_BACKEND="simulated",
        SETTLE_DELAY_MS=20,
        DEFAULT_CAPACITY_ML=1000,
    )


@pytest.fixture
def pump_driver():
    return FakePumpDriver()


@pytest.fixture
def lighting_driver():
    return FakeLightingDriver()


@pytest.fixture
def container(settings, pump_driver, lighting_driver):
    c = build_container(settings, pump_driver=pump_driver, lighting_driver=lighting_driver)
    c.pumps.save(TEST_PUMPS)
    c.recipes.save(SUNRISE)
    return c


@pytest.fixture
def machine(container):
    return container.machine
