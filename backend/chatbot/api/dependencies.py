from typing import Optional
from fastapi import Depends, Header, HTTPException, Request, status
from chatbot.core.security import extract_bearer_token
from chatbot.services.identity_store import IdentityStore
from chatbot.services.project_store import ProjectStore
from chatbot.services.reply_composer import ReplyComposer
from chatbot.services.session_store import SessionStore

AUTH_REQUIRED_MESSAGE = "auth required"


# Stores are built once per app in create_app() and kept on app.state
def get_identity_store(request: Request) -> IdentityStore:
    return request.app.state.identity


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_project_store(request: Request) -> ProjectStore:
    return request.app.state.projects


def get_reply_composer(request: Request) -> ReplyComposer:
    return request.app.state.composer


def resolve_user_id(authorization: Optional[str], sessions: SessionStore) -> Optional[int]:
    """
    Resolve an Authorization header value to a user id.

    Returns None (unauthenticated) when the header is missing or the token
    is unknown. Never raises, so callers decide how to answer.
    """
    return sessions.resolve(extract_bearer_token(authorization))


async def get_current_user_id(
    authorization: Optional[str] = Header(None),
    sessions: SessionStore = Depends(get_session_store)
) -> int:
    """
    Get the authenticated user id for the request.

    This is a FastAPI dependency used in route handlers to require authentication.
    If the token is missing or does not resolve, raises 401 Unauthorized.
    """
    user_id = resolve_user_id(authorization, sessions)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=AUTH_REQUIRED_MESSAGE,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
