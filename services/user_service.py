from typing import Dict, List, Optional
from sqlalchemy.orm import Session
from models.models import User, FriendRequest, Friendship
from core.exceptions import UserNotFound
from utils.storage import storage_errors

class UserService:
    """Directory of registered users: existence checks and summaries."""

    def __init__(self, db: Session):
        self.db = db

    async def exists(self, user_id: str) -> bool:
        with storage_errors(self.db, "User lookup"):
            return self.db.query(User.id).filter(User.id == user_id).first() is not None

    async def get_user(self, user_id: str) -> Optional[User]:
        with storage_errors(self.db, "User lookup"):
            return self.db.query(User).filter(User.id == user_id).first()

    async def get_user_by_email(self, email: str) -> Optional[User]:
        with storage_errors(self.db, "User lookup"):
            return self.db.query(User).filter(User.email == email).first()

    async def require_user(self, user_id: str) -> User:
        user = await self.get_user(user_id)
        if not user:
            raise UserNotFound(user_id)
        return user

    async def get_summary(self, user_id: str) -> Dict[str, str]:
        """Return {id, name, email} for a user; raises UserNotFound."""
        user = await self.require_user(user_id)
        return self._summary(user)

    async def get_summaries(self, user_ids: List[str]) -> List[Dict[str, str]]:
        """Summaries in the order of ``user_ids``; ids that no longer resolve are skipped."""
        if not user_ids:
            return []
        with storage_errors(self.db, "User lookup"):
            users = self.db.query(User).filter(User.id.in_(user_ids)).all()
        by_id = {user.id: user for user in users}
        return [self._summary(by_id[user_id]) for user_id in user_ids if user_id in by_id]

    async def list_users(self) -> List[User]:
        with storage_errors(self.db, "User listing"):
            return self.db.query(User).order_by(User.created_at, User.id).all()

    async def get_user_view(self, user_id: str) -> dict:
        """Public view of a user, including pending requester ids and friend ids."""
        user = await self.require_user(user_id)
        with storage_errors(self.db, "User lookup"):
            requests = (
                self.db.query(FriendRequest.requester_id)
                .filter(FriendRequest.receiver_id == user_id)
                .order_by(FriendRequest.id)
                .all()
            )
            friends = (
                self.db.query(Friendship.friend_id)
                .filter(Friendship.user_id == user_id)
                .order_by(Friendship.created_at, Friendship.friend_id)
                .all()
            )
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "friend_requests": [row.requester_id for row in requests],
            "friends": [row.friend_id for row in friends],
            "created_at": user.created_at,
        }

    @staticmethod
    def _summary(user: User) -> Dict[str, str]:
        return {"id": user.id, "name": user.name, "email": user.email}
