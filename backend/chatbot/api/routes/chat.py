from typing import Optional
from fastapi import APIRouter, Depends, Header, Query, Request, status
from fastapi.responses import PlainTextResponse
from chatbot.api.dependencies import (
    AUTH_REQUIRED_MESSAGE,
    get_current_user_id,
    get_reply_composer,
    get_session_store,
    resolve_user_id,
)
from chatbot.services.reply_composer import ReplyComposer
from chatbot.services.session_store import SessionStore

router = APIRouter(prefix="/chat", tags=["chat"])

DEFAULT_MESSAGE = "hello"


@router.get("", response_class=PlainTextResponse)
async def chat_get(
    project: Optional[int] = Query(None),
    msg: Optional[str] = Query(None),
    user_id: int = Depends(get_current_user_id),
    composer: ReplyComposer = Depends(get_reply_composer)
):
    """Quick browser-friendly chat: the message comes from the query string"""
    return composer.compose(user_id, project, msg if msg is not None else DEFAULT_MESSAGE)


@router.post("", response_class=PlainTextResponse)
async def chat_post(
    request: Request,
    # Parsed by hand after the auth check, so bad values never mask a 401
    project: Optional[str] = Query(None),
    authorization: Optional[str] = Header(None),
    sessions: SessionStore = Depends(get_session_store),
    composer: ReplyComposer = Depends(get_reply_composer)
):
    """Chat with a text/plain message body"""
    # Plain-text endpoint, so the auth error is plain text too
    user_id = resolve_user_id(authorization, sessions)
    if user_id is None:
        return PlainTextResponse(
            f"error: {AUTH_REQUIRED_MESSAGE}",
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        project_id = int(project) if project is not None else None
    except ValueError:
        return PlainTextResponse("error: invalid project id", status_code=status.HTTP_400_BAD_REQUEST)

    body = await request.body()
    message = body.decode("utf-8", errors="replace")
    return composer.compose(user_id, project_id, message)
