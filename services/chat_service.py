"""
Chat Service: the append-only message log between pairs of users.
Messages are immutable; a conversation is every message exchanged by an
unordered pair, oldest first.
"""

from datetime import datetime
from typing import Callable, List, Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.models import Message, Friendship
from core.config import settings
from core.exceptions import FriendshipRequired, InvalidArgument
from utils.identifiers import dyad_key, validate_identifier
from utils.logger import logger
from utils.storage import storage_errors

class ChatService:
    """Service for sending and reading direct messages."""

    def __init__(
        self,
        db: Session,
        require_friendship: Optional[bool] = None,
        max_message_length: Optional[int] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.db = db
        self.require_friendship = (
            settings.REQUIRE_FRIENDSHIP_FOR_MESSAGING if require_friendship is None else require_friendship
        )
        self.max_message_length = (
            settings.MAX_MESSAGE_LENGTH if max_message_length is None else max_message_length
        )
        self.clock = clock

    async def send_message(self, sender_id: str, receiver_id: str, text: Optional[str]) -> Message:
        """
        Append a message from sender to receiver.

        Participants only need to be well-formed identifiers unless the
        friendship requirement is enabled, in which case they must be friends.

        Returns:
            The persisted message with its assigned id and timestamp
        """
        validate_identifier(sender_id, "sender_id")
        validate_identifier(receiver_id, "receiver_id")
        self._validate_text(text)

        if self.require_friendship and not self._are_friends(sender_id, receiver_id):
            logger.warning(f"Message rejected, not friends: {sender_id} -> {receiver_id}")
            raise FriendshipRequired(sender_id, receiver_id)

        with storage_errors(self.db, "Send message"):
            message = Message(
                sender_id=sender_id,
                receiver_id=receiver_id,
                dyad_key=dyad_key(sender_id, receiver_id),
                text=text,
                created_at=self._next_timestamp(),
            )
            self.db.add(message)
            self.db.commit()
            self.db.refresh(message)

        logger.info(f"Message {message.id} sent: {sender_id} -> {receiver_id}")
        return message

    async def get_conversation(self, user_a: str, user_b: str) -> List[Message]:
        """All messages between user_a and user_b, oldest first. Empty if none."""
        validate_identifier(user_a, "user_a")
        validate_identifier(user_b, "user_b")

        with storage_errors(self.db, "Get conversation"):
            return (
                self.db.query(Message)
                .filter(Message.dyad_key == dyad_key(user_a, user_b))
                .order_by(Message.created_at.asc(), Message.id.asc())
                .all()
            )

    def _validate_text(self, text: Optional[str]) -> None:
        if not isinstance(text, str) or not text.strip():
            raise InvalidArgument("Message text is required")
        if len(text) > self.max_message_length:
            raise InvalidArgument(
                f"Message text exceeds {self.max_message_length} characters"
            )

    def _next_timestamp(self) -> datetime:
        # Never earlier than the newest stored message, so insertion order and time order agree
        now = self.clock()
        latest = self.db.query(func.max(Message.created_at)).scalar()
        if latest is not None and latest > now:
            return latest
        return now

    def _are_friends(self, sender_id: str, receiver_id: str) -> bool:
        with storage_errors(self.db, "Friendship lookup"):
            return self.db.query(Friendship).filter(
                Friendship.user_id == sender_id,
                Friendship.friend_id == receiver_id
            ).first() is not None
