from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel
from typing import List
from datetime import datetime
from core.dependencies import get_user_service
from core.exceptions import LinkupError
from core.security import get_current_user_id
from services.user_service import UserService
from api.errors import to_http_exception
from utils.logger import logger

router = APIRouter()

class UserListItem(BaseModel):
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True

class UserDetailResponse(BaseModel):
    id: str
    name: str
    email: str
    friend_requests: List[str]
    friends: List[str]
    created_at: datetime

@router.get("/", response_model=List[UserListItem])
async def get_all_users(
    current_user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    """List every registered user so people can find each other."""
    try:
        return await user_service.list_users()

    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Get users error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error while fetching users"
        )

@router.get("/{user_id}", response_model=UserDetailResponse)
async def get_user(
    user_id: str,
    current_user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    """Get a user with their pending requester ids and friend ids."""
    try:
        return await user_service.get_user_view(user_id)

    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Get user error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server internal error"
        )
