"""
Error kinds raised by the relationship and conversation services.

Callers inspect the class to decide how to respond; the HTTP layer maps
each kind to a status code in api/errors.py.
"""


class LinkupError(Exception):
    """Base class for all domain errors."""


class NotFound(LinkupError):
    """A referenced record does not exist."""


class UserNotFound(NotFound):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class RequestNotFound(NotFound):
    def __init__(self, requester_id: str, receiver_id: str):
        self.requester_id = requester_id
        self.receiver_id = receiver_id
        super().__init__(f"No pending friend request from {requester_id} to {receiver_id}")


class DuplicateRequest(LinkupError):
    """A pending request already exists for this requester/receiver pair."""

    def __init__(self, requester_id: str, receiver_id: str, message: str = None):
        self.requester_id = requester_id
        self.receiver_id = receiver_id
        super().__init__(message or "Friend request already sent")


class AlreadyFriends(DuplicateRequest):
    def __init__(self, requester_id: str, receiver_id: str):
        super().__init__(requester_id, receiver_id, "Users are already friends")


class InvalidArgument(LinkupError):
    """Empty text, self-referential request or malformed identifier."""


class FriendshipRequired(InvalidArgument):
    def __init__(self, sender_id: str, receiver_id: str):
        self.sender_id = sender_id
        self.receiver_id = receiver_id
        super().__init__("Messaging is restricted to friends")


class StorageUnavailable(LinkupError):
    """The persistence layer failed; never used for missing records."""


class EmailAlreadyRegistered(LinkupError):
    def __init__(self, email: str):
        self.email = email
        super().__init__("User already exists")
