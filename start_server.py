#!/usr/bin/env python3
"""
Startup script for the Linkup backend
"""
import uvicorn

from core.config import settings
from utils.logger import logger

if __name__ == "__main__":
    from main import app

    logger.info(f"Database: {settings.DATABASE_URL}")
    logger.info(f"Friendship required for messaging: {settings.REQUIRE_FRIENDSHIP_FOR_MESSAGING}")

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level=settings.LOG_LEVEL.lower()
    )
