from connect_db import Base, engine
from models.models import User, FriendRequest, Friendship, Message  # noqa: F401
from utils.logger import logger

logger.info("Creating database tables...")
try:
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully")
except Exception as e:
    logger.error(f"Table creation failed: {e}")
    raise
