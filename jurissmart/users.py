"""
User accounts for credential sign-in.

Signup retries transient connection-pool failures a fixed number of times
with a fixed delay, sequentially inside the request. Every other database
error is reported on the first attempt.
"""
from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import bcrypt
from sqlalchemy import Column, DateTime, Integer, String, func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from .config import BCRYPT_ROUNDS, SIGNUP_MAX_RETRIES, SIGNUP_RETRY_DELAY
from .db import Base

logger = logging.getLogger(__name__)


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(80), nullable=False)
    email = Column(String(120), unique=True, nullable=False)
    # null for accounts created through OAuth
    password = Column(String(128), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class DuplicateEmailError(ValueError):
    pass


class PoolExhaustedError(RuntimeError):
    """Signup gave up after repeated connection-pool failures."""

    def __init__(self, cause: Exception):
        super().__init__(str(cause))
        self.cause = cause


def _password_bytes(password: str) -> bytes:
    # bcrypt only looks at the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, hashed: Optional[str]) -> bool:
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
    except ValueError:
        # malformed stored hash
        return False


def is_pool_error(exc: BaseException) -> bool:
    return isinstance(exc, PoolTimeoutError) or "connection pool" in str(exc).lower()


def public_user(user: User) -> Dict[str, Any]:
    created = user.created_at.isoformat() if user.created_at is not None else None
    return {"id": user.id, "username": user.username, "email": user.email, "created_at": created}


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def create_user(db: Session, username: str, email: str, password: str) -> User:
    if find_user_by_email(db, email) is not None:
        raise DuplicateEmailError(email)
    user = User(username=username, email=email, password=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # lost a race with a concurrent signup for the same email
        db.rollback()
        raise DuplicateEmailError(email) from e
    db.refresh(user)
    return user


def register_user(db: Session, username: str, email: str, password: str) -> User:
    """
    Create a user, retrying on connection-pool errors.

    Raises DuplicateEmailError, PoolExhaustedError, or the SQLAlchemyError of
    the first non-pool failure.
    """
    attempt = 0
    while True:
        attempt += 1
        try:
            return create_user(db, username, email, password)
        except SQLAlchemyError as e:
            db.rollback()
            if not is_pool_error(e):
                logger.error("--- [Auth] user creation failed: %s ---", e)
                raise
            if attempt >= SIGNUP_MAX_RETRIES:
                logger.error("--- [Auth] connection pool still failing after %d attempts ---", attempt)
                raise PoolExhaustedError(e) from e
            logger.warning(
                "--- [Auth] connection pool error (attempt %d/%d), retrying in %.1fs ---",
                attempt, SIGNUP_MAX_RETRIES, SIGNUP_RETRY_DELAY,
            )
            time.sleep(SIGNUP_RETRY_DELAY)


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    user = db.query(User).filter(User.username == username).first()
    if user is None or not verify_password(password, user.password):
        return None
    return user
