from fastapi import APIRouter, HTTPException, Depends, status
from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime
from core.dependencies import get_chat_service
from core.exceptions import LinkupError
from core.security import get_current_user_id
from services.chat_service import ChatService
from api.errors import to_http_exception
from utils.logger import logger

router = APIRouter()

class MessageCreate(BaseModel):
    receiver_id: str
    message: Optional[str] = None

class ChatMessageResponse(BaseModel):
    id: int
    sender_id: str
    receiver_id: str
    text: str
    created_at: datetime

    class Config:
        from_attributes = True

@router.post("/send", response_model=ChatMessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    message_data: MessageCreate,
    current_user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service)
):
    """Send a message from the current user."""
    try:
        return await chat_service.send_message(
            current_user_id,
            message_data.receiver_id,
            message_data.message
        )

    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error sending message: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error sending message"
        )

@router.get("/{friend_id}", response_model=List[ChatMessageResponse])
async def get_conversation(
    friend_id: str,
    current_user_id: str = Depends(get_current_user_id),
    chat_service: ChatService = Depends(get_chat_service)
):
    """Get every message between the current user and friend_id, oldest first."""
    try:
        return await chat_service.get_conversation(current_user_id, friend_id)

    except LinkupError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error fetching messages: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error fetching messages"
        )
