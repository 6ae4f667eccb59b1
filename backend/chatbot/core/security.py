from typing import Optional
from passlib.context import CryptContext

# CryptContext handles password hashing
# pbkdf2_sha256 salts every hash, so equal passwords produce different hashes
# 'deprecated="auto"' lets passlib flag hashes from older schemes for upgrade
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

BEARER_PREFIX = "Bearer "


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password"""
    return pwd_context.hash(password)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pull the session token out of an Authorization header value.

    Accepts "Bearer <token>" as well as a bare token. Returns None when the
    header is absent or carries no token.
    """
    if authorization is None:
        return None
    if authorization.startswith(BEARER_PREFIX):
        authorization = authorization[len(BEARER_PREFIX):]
    token = authorization.strip()
    return token or None
