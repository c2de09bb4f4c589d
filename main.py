import asyncio
import logging
import sys

import aiosqlite
from pydantic import ValidationError

from killbot.config import get_settings
from killbot.db import DatabaseError, setup_database


async def main() -> int:
    """Connect to the configured database and report the tracked corporations."""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
    )
    logger = logging.getLogger(__name__)

    try:
        db = setup_database(settings.db)
    except ValueError as e:
        logger.error("Database check failed: %s", e)
        return 1

    try:
        await db.connect()
        organizations = await db.load_all_organizations()
    except (DatabaseError, aiosqlite.Error, OSError, ValidationError) as e:
        logger.error("Database check failed: %s", e)
        return 1
    finally:
        await db.close()

    logger.info("Tracking %d corporations", len(organizations))
    for organization in organizations:
        logger.info(
            "#%d %s (corporation %d): last kill %d, last loss %d, %d ignored regions",
            organization.id,
            organization.name or "<unnamed>",
            organization.eve_corporation_id,
            organization.last_kill_id,
            organization.last_loss_id,
            len(organization.ignored_regions),
        )
    return 0


if __name__ == "__main__":
    try:
        exit_code = asyncio.run(main())
    except KeyboardInterrupt:
        logging.info("Database check stopped.")
        exit_code = 130
    sys.exit(exit_code)
