import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db.tables import User

logger = logging.getLogger(__name__)


def find_user_by_username(db: Session, username: str) -> Optional[User]:
    logger.info("Finding user by username: %s", username)
    return db.execute(select(User).where(User.username == username)).scalar_one_or_none()


def insert_user(db: Session, username: str, password_hash: str, email: str) -> int:
    logger.info("Creating new user: %s", username)
    user = User(username=username, password_hash=password_hash, email=email)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user.id
