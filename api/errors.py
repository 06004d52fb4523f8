from fastapi import HTTPException, status
from core.exceptions import (
    AlreadyFriends,
    DuplicateRequest,
    EmailAlreadyRegistered,
    FriendshipRequired,
    InvalidArgument,
    LinkupError,
    NotFound,
    StorageUnavailable,
)

# Most specific kinds first
ERROR_STATUS = [
    (AlreadyFriends, status.HTTP_409_CONFLICT),
    (DuplicateRequest, status.HTTP_400_BAD_REQUEST),
    (EmailAlreadyRegistered, status.HTTP_409_CONFLICT),
    (FriendshipRequired, status.HTTP_403_FORBIDDEN),
    (InvalidArgument, status.HTTP_400_BAD_REQUEST),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (StorageUnavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
]

def to_http_exception(error: LinkupError) -> HTTPException:
    """Map a domain error to the HTTP response the client sees."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(error)
    )
