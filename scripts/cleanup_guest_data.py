"""
Delete expired guest registrations and guest notifications now.
Same sweep the scheduler runs nightly.

Usage:
  python scripts/cleanup_guest_data.py
"""

import sys
import asyncio
import logging
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from campushub.database import connect_db, disconnect_db
from campushub.deps import get_store
from campushub.logging_config import setup_logging
from campushub.services.retention_service import RetentionService

logger = logging.getLogger("cleanup_guest_data")


async def cleanup_guest_data():
    await connect_db()

    try:
        deleted = await RetentionService(get_store()).sweep()
        for collection, count in deleted.items():
            logger.info("%s: %s expired documents deleted", collection, count)
    finally:
        await disconnect_db()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(cleanup_guest_data())
