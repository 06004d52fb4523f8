from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from sqlalchemy import text
import uvicorn
from contextlib import asynccontextmanager
import datetime

# Import core modules
from core.config import settings
from connect_db import Base, engine
from utils.logger import logger

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""

    logger.info(f"Starting {settings.APP_NAME}...")

    if settings.AUTO_CREATE_TABLES:
        # Register the mapped tables before creating them
        import models.models  # noqa: F401
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables ensured")

    if settings.REQUIRE_FRIENDSHIP_FOR_MESSAGING:
        logger.info("Messaging is restricted to friends")

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    engine.dispose()

# Create FastAPI app
app = FastAPI(
    title="Linkup - Friends and Direct Messages",
    description="Backend API for friend requests and one-to-one chat",
    version=settings.VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, replace with specific origins
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    max_age=600,
)

app.add_middleware(
    TrustedHostMiddleware,
    allowed_hosts=settings.ALLOWED_HOSTS
)

# Import routers after app creation to avoid circular imports
from api import auth, users, friends, chat

app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
app.include_router(friends.router, prefix="/api/v1/friends", tags=["Friends"])
app.include_router(chat.router, prefix="/api/v1/chat", tags=["Chat"])

@app.get("/")
async def root():
    """Root endpoint for health check."""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.VERSION,
        "status": "running"
    }

@app.get("/health")
async def health_check_endpoint():
    """Health check that also pings the database."""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "timestamp": datetime.datetime.utcnow().isoformat()
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        raise HTTPException(status_code=503, detail="Service temporarily unavailable")

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        server_header=False,
        proxy_headers=True
    )
