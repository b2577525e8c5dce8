# cocktailbot/core/config.py

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # .env first, then process environment
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    APP_NAME: str = "CocktailBot Backend"

    # JSON documents (levels, pumps, recipes, stats, lighting) live here
    DATA_DIR: Path = Path("data")

    BACKEND_CORS_ORIGINS: str = ""

    # shell | mqtt | simulated
    HARDWARE_BACKEND: str = "shell"

    PYTHON_BIN: str = "python3"
    PUMP_SCRIPT: str = "pump_control.py"
    LED_SCRIPT: str = "led_client.py"
    PUMP_TIMEOUT_MARGIN_S: float = 10.0
    LED_TIMEOUT_S: float = 5.0

    # settle time before the delayed group (dense syrups) is dispensed
    SETTLE_DELAY_MS: int = 2000

    DEFAULT_CAPACITY_ML: float = 1000.0
    LOW_LEVEL_THRESHOLD_ML: float = 100.0
    DEFAULT_SHOT_ML: float = 40.0

    MQTT_BROKER_HOST: str = "localhost"
    MQTT_BROKER_PORT: int = 1883
    MQTT_CLIENT_ID: str = "cocktailbot-backend"
    MQTT_TOPIC_PREFIX: str = "cocktailbot"

    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
