# API Router for Health Checks
from fastapi import APIRouter, Depends
import logging

from case_servicing_service.infrastructure.database.connection import get_db
from case_servicing_service.app.config import settings
from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)
router = APIRouter()

@router.get("/health", tags=["Monitoring"])
async def health_check(db: AsyncIOMotorDatabase = Depends(get_db)):
    mongodb_status = "connected"
    try:
        await db.command('ping')
    except Exception as e:
        logger.error(f"MongoDB health check ping failed: {e}")
        mongodb_status = "disconnected"
    return {
        "status": "ok",
        "components": {"mongodb": mongodb_status},
        "service_name": settings.SERVICE_NAME_API,
        "environment": settings.ENVIRONMENT_NAME,
    }
