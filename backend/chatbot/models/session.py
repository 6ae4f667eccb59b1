from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Session:
    """An active login: the bearer token and the user it belongs to."""
    token: str
    user_id: int
    created_at: datetime
