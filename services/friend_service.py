from typing import Dict, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from models.models import FriendRequest, Friendship
from core.exceptions import (
    AlreadyFriends,
    DuplicateRequest,
    InvalidArgument,
    RequestNotFound,
    UserNotFound,
)
from services.user_service import UserService
from utils.identifiers import validate_identifier
from utils.logger import logger
from utils.storage import storage_errors

class FriendService:
    """
    Service for the friend-request handshake.

    Each ordered (requester, receiver) pair moves NONE -> REQUESTED -> FRIENDS.
    FRIENDS is terminal: there is no decline or unfriend operation. Accepting
    requires a matching pending request; accepting without one raises
    RequestNotFound.

    Atomicity is delegated to the database. The unique constraint on
    friend_requests and the composite key on friendships act as add-if-absent
    primitives, and acceptance deletes the pending row, then writes both
    friendship rows, in a single transaction.
    """

    def __init__(self, db: Session, users: UserService):
        self.db = db
        self.users = users

    async def send_friend_request(self, sender_id: str, receiver_id: str) -> FriendRequest:
        """Record a pending request from sender to receiver."""
        validate_identifier(sender_id, "sender_id")
        validate_identifier(receiver_id, "receiver_id")
        if sender_id == receiver_id:
            raise InvalidArgument("Cannot send a friend request to yourself")

        await self._require_users(sender_id, receiver_id)

        if await self.are_friends(sender_id, receiver_id):
            logger.warning(f"Friend request rejected, already friends: {sender_id} -> {receiver_id}")
            raise AlreadyFriends(sender_id, receiver_id)

        if await self.pending_request_exists(sender_id, receiver_id):
            logger.warning(f"Duplicate friend request: {sender_id} -> {receiver_id}")
            raise DuplicateRequest(sender_id, receiver_id)

        request = FriendRequest(requester_id=sender_id, receiver_id=receiver_id)
        with storage_errors(self.db, "Send friend request"):
            try:
                self.db.add(request)
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                logger.warning(f"Duplicate friend request (concurrent): {sender_id} -> {receiver_id}")
                raise DuplicateRequest(sender_id, receiver_id)
            self.db.refresh(request)

        logger.info(f"Friend request sent: {sender_id} -> {receiver_id}")
        return request

    async def accept_friend_request(self, user_id: str, sender_id: str) -> None:
        """Accept the pending request that sender_id sent to user_id."""
        validate_identifier(user_id, "user_id")
        validate_identifier(sender_id, "sender_id")
        if user_id == sender_id:
            raise InvalidArgument("Cannot accept a friend request from yourself")

        await self._require_users(user_id, sender_id)

        with storage_errors(self.db, "Accept friend request"):
            try:
                removed = self._pending_query(sender_id, user_id).delete(synchronize_session=False)
                if removed == 0:
                    self.db.rollback()
                    logger.warning(f"No pending friend request to accept: {sender_id} -> {user_id}")
                    raise RequestNotFound(sender_id, user_id)

                # A crossing request in the other direction is settled by this accept
                self._pending_query(user_id, sender_id).delete(synchronize_session=False)
                self.db.add_all([
                    Friendship(user_id=user_id, friend_id=sender_id),
                    Friendship(user_id=sender_id, friend_id=user_id),
                ])
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                if not await self.are_friends(user_id, sender_id):
                    raise
                # A concurrent accept already wrote the friendship; clear what is left pending
                self._pending_query(sender_id, user_id).delete(synchronize_session=False)
                self._pending_query(user_id, sender_id).delete(synchronize_session=False)
                self.db.commit()

        logger.info(f"Friend request accepted: {sender_id} -> {user_id}")

    async def list_pending_requests(self, user_id: str) -> List[Dict[str, str]]:
        """Summaries of users with a pending request to user_id, oldest first."""
        validate_identifier(user_id, "user_id")
        if not await self.users.exists(user_id):
            raise UserNotFound(user_id)

        with storage_errors(self.db, "List friend requests"):
            rows = (
                self.db.query(FriendRequest.requester_id)
                .filter(FriendRequest.receiver_id == user_id)
                .order_by(FriendRequest.id)
                .all()
            )
        return await self.users.get_summaries([row.requester_id for row in rows])

    async def list_friends(self, user_id: str) -> List[Dict[str, str]]:
        """Summaries of accepted friends, in the order the friendships were made."""
        validate_identifier(user_id, "user_id")
        if not await self.users.exists(user_id):
            raise UserNotFound(user_id)

        with storage_errors(self.db, "List friends"):
            rows = (
                self.db.query(Friendship.friend_id)
                .filter(Friendship.user_id == user_id)
                .order_by(Friendship.created_at, Friendship.friend_id)
                .all()
            )
        return await self.users.get_summaries([row.friend_id for row in rows])

    async def are_friends(self, user_a: str, user_b: str) -> bool:
        with storage_errors(self.db, "Friendship lookup"):
            return self.db.query(Friendship).filter(
                Friendship.user_id == user_a,
                Friendship.friend_id == user_b
            ).first() is not None

    async def pending_request_exists(self, requester_id: str, receiver_id: str) -> bool:
        with storage_errors(self.db, "Friend request lookup"):
            return self._pending_query(requester_id, receiver_id).first() is not None

    def _pending_query(self, requester_id: str, receiver_id: str):
        return self.db.query(FriendRequest).filter(
            FriendRequest.requester_id == requester_id,
            FriendRequest.receiver_id == receiver_id
        )

    async def _require_users(self, *user_ids: str) -> None:
        for user_id in user_ids:
            if not await self.users.exists(user_id):
                raise UserNotFound(user_id)
