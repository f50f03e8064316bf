"""
Password hashing and JWT helpers
Uses passlib (bcrypt) and python-jose
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError
from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import JWT_ALGORITHM, JWT_EXPIRES_DAYS, JWT_SECRET

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenExpiredError(Exception):
    """Raised when a JWT is well-formed but past its expiry"""


class InvalidTokenError(Exception):
    """Raised when a JWT cannot be decoded or verified"""


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password_bcrypt(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password_bcrypt(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# TOKEN GENERATION & VALIDATION
# ============================================================================


def create_jwt_token(data: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a JWT token

    Args:
        data: Claims to encode in the token
        expires_delta: Token lifetime (default JWT_EXPIRES_DAYS days)
    """
    to_encode = data.copy()
    if expires_delta is None:
        expires_delta = timedelta(days=JWT_EXPIRES_DAYS)

    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jose_jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def create_access_token(user_id: int) -> str:
    return create_jwt_token({"userId": user_id})


def decode_jwt_token(token: str) -> dict[str, Any]:
    """
    Verify and decode a JWT token

    Raises:
        TokenExpiredError: token signature is valid but it has expired
        InvalidTokenError: token is malformed or signed with another key
    """
    try:
        return jose_jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError as e:
        raise TokenExpiredError(str(e)) from e
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        raise InvalidTokenError(str(e)) from e
