from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel
from typing import List
from core.dependencies import get_friend_service
from core.exceptions import LinkupError
from core.security import get_current_user_id
from services.friend_service import FriendService
from api.errors import to_http_exception
from utils.logger import logger

router = APIRouter()

class FriendRequestCreate(BaseModel):
    receiver_id: str

class UserSummary(BaseModel):
    id: str
    name: str
    email: str

class MessageResponse(BaseModel):
    message: str

@router.post("/requests", response_model=MessageResponse)
async def send_friend_request(
    request_data: FriendRequestCreate,
    current_user_id: str = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service)
):
    """Send a friend request."""
    try:
        await friend_service.send_friend_request(current_user_id, request_data.receiver_id)
        return MessageResponse(message="Friend request sent successfully!")

    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Send friend request error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error. Please try again."
        )

@router.post("/requests/{sender_id}/accept", response_model=MessageResponse)
async def accept_friend_request(
    sender_id: str,
    current_user_id: str = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service)
):
    """Accept a pending friend request from sender_id."""
    try:
        await friend_service.accept_friend_request(current_user_id, sender_id)
        return MessageResponse(message="Friend request accepted")

    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Accept friend request error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error. Please try again."
        )

@router.get("/requests", response_model=List[UserSummary])
async def get_friend_requests(
    current_user_id: str = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service)
):
    """Get the users who have sent the current user a pending request."""
    try:
        return await friend_service.list_pending_requests(current_user_id)

    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Get friend requests error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error. Please try again."
        )

@router.get("/", response_model=List[UserSummary])
async def get_friends(
    current_user_id: str = Depends(get_current_user_id),
    friend_service: FriendService = Depends(get_friend_service)
):
    """Get user's friends list."""
    try:
        return await friend_service.list_friends(current_user_id)

    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Get friends error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error. Please try again."
        )
