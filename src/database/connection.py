"""
Database connection management
"""

import logging
from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from config.settings import MONGODB_URI, MONGODB_DB_NAME, BOOKS_COLLECTION, MONGODB_TIMEOUT_MS
from utils.helpers import redact_uri

logger = logging.getLogger(__name__)

# Global client and database handles
db_client = None
db = None

async def init_database():
    """Connect to MongoDB and verify the server is reachable"""
    global db_client, db
    db_client = AsyncMongoClient(
        MONGODB_URI,
        serverSelectionTimeoutMS=MONGODB_TIMEOUT_MS,
        tz_aware=True
    )

    # Test connection
    try:
        await db_client.admin.command("ping")
    except PyMongoError as e:
        logger.error(f"MongoDB connection failed ({redact_uri(MONGODB_URI)}): {e}")
        await db_client.close()
        db_client = None
        raise

    db = db_client.get_default_database(default=MONGODB_DB_NAME)
    logger.info(f"MongoDB connected: {redact_uri(MONGODB_URI)} (database: {db.name})")


async def close_database():
    """Close the MongoDB client"""
    global db_client, db
    if db_client is not None:
        await db_client.close()
    db_client = None
    db = None
    logger.info("Database connections closed")

def get_database():
    """Get the database instance"""
    return db

def get_books_collection():
    """Get the books collection"""
    database = get_database()
    if database is None:
        raise RuntimeError("Database not initialized")
    return database[BOOKS_COLLECTION]
