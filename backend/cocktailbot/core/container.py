# cocktailbot/core/container.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from cocktailbot.core.config import Settings
from cocktailbot.db.defaults import (
    DEFAULT_COCKTAILS,
    DEFAULT_INGREDIENTS,
    DEFAULT_PUMP_CONFIG,
)
from cocktailbot.db.json_store import JsonDocument
from cocktailbot.hardware.actuator import PumpActuator
from cocktailbot.hardware.drivers import (
    LightingDriver,
    PumpDriver,
    ShellLightingDriver,
    ShellPumpDriver,
    SimulatedLightingDriver,
    SimulatedPumpDriver,
)
from cocktailbot.mqtt.client import CocktailBotMqttClient, MqttLightingDriver, MqttPumpDriver
from cocktailbot.services.ingredients_service import IngredientCatalog
from cocktailbot.services.levels_service import IngredientLevelStore
from cocktailbot.services.lighting_service import LightingConfigStore, LightingSignalClient
from cocktailbot.services.machine_service import CocktailMachine, EventSink
from cocktailbot.services.pumps_service import PumpConfigStore
from cocktailbot.services.recipes_service import RecipeStore
from cocktailbot.services.stats_service import StatsStore

log = logging.getLogger(__name__)

# file names kept compatible with the touchscreen's data directory
LEVELS_FILE = "ingredient-levels.json"
PUMP_CONFIG_FILE = "pump-config.json"
CUSTOM_COCKTAILS_FILE = "custom-cocktails.json"
DELETED_COCKTAILS_FILE = "deleted-cocktails.json"
CUSTOM_INGREDIENTS_FILE = "custom-ingredients.json"
STATS_FILE = "cocktail-stats.json"
LIGHTING_FILE = "lighting-config.json"


@dataclass
class Container:
    settings: Settings
    pumps: PumpConfigStore
    levels: IngredientLevelStore
    catalog: IngredientCatalog
    recipes: RecipeStore
    stats: StatsStore
    lighting_config: LightingConfigStore
    lighting: LightingSignalClient
    actuator: PumpActuator
    machine: CocktailMachine
    mqtt_client: Optional[CocktailBotMqttClient] = None


def build_drivers(settings: Settings, on_event: Optional[Callable] = None):
    backend = settings.HARDWARE_BACKEND.lower()

    if backend == "shell":
        return (
            ShellPumpDriver(
                settings.PYTHON_BIN,
                Path(settings.PUMP_SCRIPT),
                timeout_margin_s=settings.PUMP_TIMEOUT_MARGIN_S,
            ),
            ShellLightingDriver(
                settings.PYTHON_BIN,
                Path(settings.LED_SCRIPT),
                timeout_s=settings.LED_TIMEOUT_S,
            ),
            None,
        )

    if backend == "mqtt":
        client = CocktailBotMqttClient(
            settings.MQTT_BROKER_HOST,
            settings.MQTT_BROKER_PORT,
            client_id=settings.MQTT_CLIENT_ID,
            topic_prefix=settings.MQTT_TOPIC_PREFIX,
            on_event=on_event,
        )
        return MqttPumpDriver(client), MqttLightingDriver(client), client

    if backend == "simulated":
        return SimulatedPumpDriver(), SimulatedLightingDriver(), None

    raise ValueError(f"Unknown HARDWARE_BACKEND {settings.HARDWARE_BACKEND!r}")


def build_container(
    settings: Settings,
    pump_driver: Optional[PumpDriver] = None,
    lighting_driver: Optional[LightingDriver] = None,
    events: Optional[EventSink] = None,
    controller_events: Optional[Callable] = None,
) -> Container:
    """Wire every store, driver and the machine once per process."""
    data_dir = Path(settings.DATA_DIR)

    mqtt_client = None
    if pump_driver is None or lighting_driver is None:
        default_pump, default_lighting, mqtt_client = build_drivers(settings, controller_events)
        pump_driver = pump_driver or default_pump
        lighting_driver = lighting_driver or default_lighting

    pumps = PumpConfigStore(JsonDocument(data_dir / PUMP_CONFIG_FILE, list), DEFAULT_PUMP_CONFIG)
    levels = IngredientLevelStore(
        JsonDocument(data_dir / LEVELS_FILE, list),
        pumps,
        default_capacity=settings.DEFAULT_CAPACITY_ML,
    )
    catalog = IngredientCatalog(
        JsonDocument(data_dir / CUSTOM_INGREDIENTS_FILE, list), DEFAULT_INGREDIENTS
    )
    recipes = RecipeStore(
        JsonDocument(data_dir / CUSTOM_COCKTAILS_FILE, list),
        JsonDocument(data_dir / DELETED_COCKTAILS_FILE, list),
        DEFAULT_COCKTAILS,
        name_of=catalog.name_of,
    )
    stats = StatsStore(JsonDocument(data_dir / STATS_FILE, list))
    lighting_config = LightingConfigStore(JsonDocument(data_dir / LIGHTING_FILE, dict))
    lighting = LightingSignalClient(lighting_driver, lighting_config)
    actuator = PumpActuator(pump_driver)

    machine = CocktailMachine(
        recipes=recipes,
        pumps=pumps,
        levels=levels,
        catalog=catalog,
        stats=stats,
        lighting=lighting,
        actuator=actuator,
        settle_delay_ms=settings.SETTLE_DELAY_MS,
        events=events,
    )
    log.info("[APP] data in %s, hardware backend %s", data_dir, settings.HARDWARE_BACKEND)

    return Container(
        settings=settings,
        pumps=pumps,
        levels=levels,
        catalog=catalog,
        recipes=recipes,
        stats=stats,
        lighting_config=lighting_config,
        lighting=lighting,
        actuator=actuator,
        machine=machine,
        mqtt_client=mqtt_client,
    )
