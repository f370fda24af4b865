from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorClientSession, AsyncIOMotorDatabase

from houseledger.core.config import settings
from houseledger.core.logging_config import get_logger

logger = get_logger(__name__)


class MongoDatabase:
    """MongoDB connection manager."""
    
    client: AsyncIOMotorClient = None
    db: AsyncIOMotorDatabase = None

mongodb = MongoDatabase()

async def connect_to_mongo():
    """Connect to MongoDB."""
    mongodb.client = AsyncIOMotorClient(settings.MONGODB_URL, tz_aware=True)
    mongodb.db = mongodb.client[settings.DATABASE_NAME]
    
    # Create indexes
    await create_indexes()
    logger.info("mongo_connected", database=settings.DATABASE_NAME)

async def close_mongo_connection():
    """Disconnect from MongoDB."""
    if mongodb.client is not None:
        mongodb.client.close()
    logger.info("mongo_disconnected")

async def create_indexes():
    """Create database indexes."""
    # Invite codes are the join token, must be unique
    await mongodb.db["houses"].create_index("code", unique=True)
    
    # One house per user
    await mongodb.db["house_members"].create_index("user_id", unique=True)
    await mongodb.db["house_members"].create_index("house_id")
    
    # Expense ledger indexes
    await mongodb.db["expenses"].create_index([("house_id", 1), ("created_at", -1)])
    await mongodb.db["contributions"].create_index("expense_id")
    await mongodb.db["contributions"].create_index("house_id")
    await mongodb.db["contributions"].create_index("user_id")
    
    # Poll indexes
    await mongodb.db["poll_options"].create_index("poll_id")
    await mongodb.db["poll_votes"].create_index([("poll_id", 1), ("user_id", 1)])

def get_db() -> AsyncIOMotorDatabase:
    """Get database instance."""
    return mongodb.db

@asynccontextmanager
async def start_transaction(db: AsyncIOMotorDatabase) -> AsyncIterator[Optional[AsyncIOMotorClientSession]]:
    """
    Run a block of writes atomically.

    Yields the session to pass to each write. With USE_TRANSACTIONS off
    (standalone server) the block runs without a session.
    """
    if not settings.USE_TRANSACTIONS:
        yield None
        return

    async with await db.client.start_session() as session:
        async with session.start_transaction():
            yield session
