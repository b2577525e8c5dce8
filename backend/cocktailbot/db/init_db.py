# cocktailbot/db/init_db.py

import logging

from cocktailbot.core.config import get_settings
from cocktailbot.core.container import build_container
from cocktailbot.core.logging import setup_logging

log = logging.getLogger(__name__)


def init() -> None:
    """Write the default pump, level and lighting documents if missing."""
    settings = get_settings()
    container = build_container(settings)

    log.info("seeding %s ...", settings.DATA_DIR)
    container.pumps.get()
    container.levels.get_levels()
    if not container.lighting_config.document.exists():
        container.lighting_config.save(container.lighting_config.get())
    log.info("done.")


if __name__ == "__main__":
    setup_logging(get_settings().LOG_LEVEL)
    init()
