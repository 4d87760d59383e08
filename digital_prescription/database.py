"""MongoDB database connection manager."""

from motor.motor_asyncio import AsyncIOMotorClient
from beanie import init_beanie
from typing import Optional

from digital_prescription.config import settings
from digital_prescription.core.logging import logger


def document_models() -> list:
    """Every Beanie document the application persists."""
    from digital_prescription.features.auth.models import User
    from digital_prescription.features.messages.models import SymptomMessage
    from digital_prescription.features.prescriptions.models import Prescription, MedicationCourse
    from digital_prescription.features.reminders.models import ReminderRecord
    from digital_prescription.features.side_effects.models import SideEffectLog

    return [
        User,
        SymptomMessage,
        Prescription,
        MedicationCourse,
        ReminderRecord,
        SideEffectLog,
    ]


class Database:
    """MongoDB database connection manager."""

    client: Optional[AsyncIOMotorClient] = None

    @classmethod
    async def connect_db(cls):
        """Connect to MongoDB and initialize Beanie."""
        cls.client = AsyncIOMotorClient(settings.MONGODB_URL)

        await init_beanie(
            database=cls.client[settings.DATABASE_NAME],
            document_models=document_models(),
        )

        logger.info(f"Connected to MongoDB database: {settings.DATABASE_NAME}")

    @classmethod
    async def close_db(cls):
        """Close MongoDB connection."""
        if cls.client:
            cls.client.close()
            logger.info("Closed MongoDB connection")
