from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from core.exceptions import EmailAlreadyRegistered, InvalidArgument
from core.security import verify_password, get_password_hash
from models.models import User
from services.user_service import UserService
from utils.logger import logger
from utils.storage import storage_errors

class AuthService:
    """Signup and credential checks on top of the user directory."""

    def __init__(self, db: Session, users: UserService):
        self.db = db
        self.users = users

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """Return the user for valid credentials, otherwise None."""
        user = await self.users.get_user_by_email(email)
        if not user:
            return None

        if not verify_password(password, user.hashed_password):
            return None

        return user

    async def create_user(self, name: str, email: str, password: str) -> User:
        """Create a new user; the email must not be registered yet."""
        if not name or not name.strip():
            raise InvalidArgument("Name is required")
        if not password:
            raise InvalidArgument("Password is required")

        if await self.users.get_user_by_email(email):
            raise EmailAlreadyRegistered(email)

        user = User(
            name=name.strip(),
            email=email,
            hashed_password=get_password_hash(password)
        )
        with storage_errors(self.db, "User creation"):
            try:
                self.db.add(user)
                self.db.commit()
            except IntegrityError:
                # Lost a race with a concurrent signup for the same email
                self.db.rollback()
                raise EmailAlreadyRegistered(email)
            self.db.refresh(user)

        logger.info(f"Created user: {user.id}")
        return user
