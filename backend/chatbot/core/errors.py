from fastapi import HTTPException, status


class ChatbotError(Exception):
    """
    Base class for domain errors raised by the in-memory stores.

    Each subclass carries the HTTP status it maps to, so route handlers can
    turn any store failure into a response with a single except clause.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_http(self) -> HTTPException:
        headers = {"WWW-Authenticate": "Bearer"} if self.status_code == status.HTTP_401_UNAUTHORIZED else None
        return HTTPException(status_code=self.status_code, detail=self.message, headers=headers)


class InvalidInput(ChatbotError):
    status_code = status.HTTP_400_BAD_REQUEST


class DuplicateEmail(ChatbotError):
    status_code = status.HTTP_409_CONFLICT


class InvalidCredentials(ChatbotError):
    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(ChatbotError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ChatbotError):
    status_code = status.HTTP_404_NOT_FOUND
