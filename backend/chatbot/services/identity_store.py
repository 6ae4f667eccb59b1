import itertools
import logging
import threading
from typing import Dict, Optional

from chatbot.core.errors import DuplicateEmail, InvalidCredentials, InvalidInput
from chatbot.core.security import get_password_hash, verify_password
from chatbot.models.user import User

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    """Emails are compared trimmed and case-insensitively"""
    return (email or "").strip().lower()


class IdentityStore:
    """
    In-memory user registry with an email -> id index.

    A single lock guards both maps and the id counter, so the duplicate check
    and the two inserts of a registration happen atomically.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._users: Dict[int, User] = {}
        self._email_index: Dict[str, int] = {}
        self._ids = itertools.count(1)

    def register(self, email: Optional[str], password: Optional[str], display_name: Optional[str] = None) -> int:
        """Register a new user and return its id"""
        normalized = normalize_email(email)
        if not normalized or not password:
            raise InvalidInput("email and password required")

        # Hash outside the lock - hashing is slow and needs no shared state
        password_hash = get_password_hash(password)

        with self._lock:
            if normalized in self._email_index:
                raise DuplicateEmail("email already exists")
            user_id = next(self._ids)
            self._users[user_id] = User(
                id=user_id,
                email=normalized,
                password_hash=password_hash,
                display_name=display_name or "",
            )
            self._email_index[normalized] = user_id

        logger.info(f"Registered user {user_id}")
        return user_id

    def verify_credentials(self, email: Optional[str], password: Optional[str]) -> int:
        """Return the user id for matching credentials"""
        user = self.get_by_email(email)
        # Same error for unknown email and wrong password (no email enumeration)
        if user is None or not password or not verify_password(password, user.password_hash):
            raise InvalidCredentials("invalid email or password")
        return user.id

    def get(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_by_email(self, email: Optional[str]) -> Optional[User]:
        normalized = normalize_email(email)
        with self._lock:
            user_id = self._email_index.get(normalized)
            return self._users.get(user_id) if user_id is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)
