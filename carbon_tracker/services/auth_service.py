import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..errors import invalid_input, unauthorized
from ..repositories import user_repository
from .security import create_access_token, decode_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def register(db: Session, username: Optional[str], password: Optional[str], email: Optional[str]) -> int:
    if _blank(username) or _blank(password) or _blank(email):
        raise invalid_input("Username, password, and email are required")

    if user_repository.find_user_by_username(db, username) is not None:
        raise invalid_input("Username already taken")

    user_id = user_repository.insert_user(db, username, get_password_hash(password), email)
    logger.info("New user registered: %s", username)
    return user_id


def login(db: Session, username: Optional[str], password: Optional[str]) -> str:
    if _blank(username) or _blank(password):
        raise invalid_input("Username and password are required")

    user = user_repository.find_user_by_username(db, username)
    if user is None:
        logger.warning("Login attempt with non-existent username: %s", username)
        raise unauthorized(INVALID_CREDENTIALS)

    if not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt for user: %s", username)
        raise unauthorized(INVALID_CREDENTIALS)

    logger.info("Successful login for user: %s", username)
    return create_access_token({"sub": str(user.id), "username": user.username})


def verify_token(token: str) -> int:
    """Return the user id carried by a valid token."""
    payload = decode_access_token(token)
    if payload is None:
        logger.warning("Token verification failed")
        raise unauthorized("Invalid or expired token")

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise unauthorized("Invalid or expired token")
