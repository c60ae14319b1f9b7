import logging

import pymongo

from folderconfig.db.mongodb import get_database

logger = logging.getLogger(__name__)


async def create_indexes(db):
    """Creates the indexes backing the uniqueness rules and common lookups."""
    logger.info("Creating database indexes...")

    # Teams
    await db["teams"].create_index("name", unique=True)

    # Users
    await db["users"].create_index("name")
    await db["users"].create_index("team_id")
    # Only users imported from GitHub carry a numeric github_id
    await db["users"].create_index(
        [("github_id", pymongo.ASCENDING)],
        unique=True,
        partialFilterExpression={"github_id": {"$type": "number"}},
    )

    logger.info("Database indexes created successfully.")


async def init_db():
    db = await get_database()

    await create_indexes(db)

    teams = await db["teams"].count_documents({})
    users = await db["users"].count_documents({})
    if teams == 0 and users == 0:
        logger.info("Database starts empty - no sample data inserted")
    else:
        logger.info(f"Database holds {teams} teams and {users} users")
