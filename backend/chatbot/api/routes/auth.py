import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel, Field
from chatbot.core.errors import ChatbotError
from chatbot.core.security import extract_bearer_token
from chatbot.api.dependencies import (
    get_current_user_id,
    get_identity_store,
    get_session_store,
)
from chatbot.services.identity_store import IdentityStore
from chatbot.services.session_store import SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class UserCreate(BaseModel):
    # Fields are optional here so missing values surface as 400, not 422
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterResponse(BaseModel):
    user_id: int = Field(serialization_alias="userId")
    email: str


class Token(BaseModel):
    token: str
    user_id: int = Field(serialization_alias="userId")


class UserResponse(BaseModel):
    id: int
    email: str
    name: str


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, identity: IdentityStore = Depends(get_identity_store)):
    """Register a new user"""
    try:
        user_id = identity.register(user_data.email, user_data.password, user_data.name)
    except ChatbotError as e:
        raise e.to_http()

    user = identity.get(user_id)
    return {"user_id": user_id, "email": user.email}


@router.post("/login", response_model=Token)
def login(
    credentials: UserLogin,
    identity: IdentityStore = Depends(get_identity_store),
    sessions: SessionStore = Depends(get_session_store)
):
    """Login and get a bearer token"""
    if credentials.email is None or credentials.password is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="email and password required"
        )

    try:
        user_id = identity.verify_credentials(credentials.email, credentials.password)
    except ChatbotError as e:
        logger.info("Failed login attempt")
        raise e.to_http()

    token = sessions.issue(user_id)
    logger.info(f"User {user_id} logged in")
    return {"token": token, "user_id": user_id}


@router.post("/logout")
async def logout(
    authorization: Optional[str] = Header(None),
    sessions: SessionStore = Depends(get_session_store)
):
    """Revoke the presented token. Unknown or missing tokens are ignored."""
    sessions.revoke(extract_bearer_token(authorization))
    return {"ok": True}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user_id: int = Depends(get_current_user_id),
    identity: IdentityStore = Depends(get_identity_store)
):
    """Get current user information"""
    user = identity.get(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="user not found")
    return {"id": user.id, "email": user.email, "name": user.display_name}
