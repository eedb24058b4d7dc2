import logging
import os

from alembic import command
from alembic.config import Config

from shopping_list.config import settings

log = logging.getLogger("shopping_list.migrations")

ROOT = os.path.dirname(os.path.abspath(__file__))


def alembic_config() -> Config:
    cfg = Config(os.path.join(ROOT, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(ROOT, "alembic"))
    return cfg


def main(cfg: Config | None = None) -> bool:
    """Upgrade the shopping-list schema to head. False when RUN_MIGRATIONS is off."""
    # same flag the app startup honours, so prod deploys can switch both off
    if not settings.RUN_MIGRATIONS:
        log.info("RUN_MIGRATIONS is off, skipping alembic")
        return False

    command.upgrade(cfg or alembic_config(), "head")
    log.info("alembic upgrade head done")
    return True


if __name__ == "__main__":
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    main()
