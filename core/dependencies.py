from fastapi import Depends
from sqlalchemy.orm import Session
from connect_db import get_db
from services.auth_service import AuthService
from services.chat_service import ChatService
from services.friend_service import FriendService
from services.user_service import UserService

# Services are built per request around the request's session; nothing is held globally.

def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)

def get_auth_service(
    db: Session = Depends(get_db),
    users: UserService = Depends(get_user_service)
) -> AuthService:
    return AuthService(db, users)

def get_friend_service(
    db: Session = Depends(get_db),
    users: UserService = Depends(get_user_service)
) -> FriendService:
    return FriendService(db, users)

def get_chat_service(db: Session = Depends(get_db)) -> ChatService:
    """Returns a ChatService configured from settings."""
    return ChatService(db)
