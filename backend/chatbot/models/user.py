from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class User:
    """
    User record held by the identity store.

    Stores authentication credentials and profile information.
    Passwords are stored as hashes (never plaintext).
    Records are immutable once registered.
    """
    id: int
    # Email is normalized (trimmed, lower-cased) before it gets here
    email: str
    password_hash: str
    display_name: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
