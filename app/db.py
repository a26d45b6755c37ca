"""MongoDB connection and Beanie document registration."""
from beanie import init_beanie
from motor.motor_asyncio import AsyncIOMotorClient

from app.config import settings
from app.models import AttendanceRecord, AttendanceSettings, StudentAlert, User


_client = None


async def db_startup():
    """Connect to MongoDB and initialize Beanie ODM."""
    global _client
    _client = AsyncIOMotorClient(settings.mongodb_url)
    await init_beanie(
        database=_client[settings.mongodb_db_name],
        document_models=[
            User,
            AttendanceRecord,
            AttendanceSettings,
            StudentAlert,
        ],
    )


async def db_shutdown():
    """Close MongoDB connection."""
    global _client
    if _client:
        _client.close()
        _client = None
