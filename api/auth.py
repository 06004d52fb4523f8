from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime
from core.dependencies import get_auth_service, get_user_service
from core.exceptions import LinkupError
from core.security import create_access_token, get_current_user_id
from services.auth_service import AuthService
from services.user_service import UserService
from api.errors import to_http_exception
from utils.logger import logger

router = APIRouter()

# Pydantic models
class UserCreate(BaseModel):
    name: str
    email: EmailStr
    password: str

class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True

class TokenResponse(BaseModel):
    message: str
    user_id: str
    access_token: str
    token_type: str = "bearer"

@router.post("/signup", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Register a new user."""
    try:
        user = await auth_service.create_user(user_data.name, user_data.email, user_data.password)
        logger.info(f"New user registered with ID: {user.id}")
        return user

    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Registration error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server internal error"
        )

@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Exchange email and password for an access token."""
    if not credentials.email or not credentials.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="All fields are required"
        )

    try:
        user = await auth_service.authenticate_user(credentials.email, credentials.password)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password"
            )

        return TokenResponse(
            message="User logged in successfully",
            user_id=user.id,
            access_token=create_access_token(user.id)
        )

    except HTTPException:
        raise
    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Login error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server error, please try again later"
        )

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user_id: str = Depends(get_current_user_id),
    user_service: UserService = Depends(get_user_service)
):
    """Get current user information."""
    try:
        return await user_service.require_user(current_user_id)

    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Get current user error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server internal error"
        )
