"""Auth service - registration and login"""

import logging

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...models import User
from ...schemas import user_response
from ...security_utils import create_access_token, hash_password_bcrypt, verify_password_bcrypt
from .schemas import AuthPayload, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def register(self, data: RegisterRequest) -> AuthPayload:
        if self.db.query(User.id).filter(User.email == data.email).first():
            raise HTTPException(status_code=400, detail="Email already registered")

        user = User(
            email=data.email,
            password_hash=hash_password_bcrypt(data.password),
            first_name=data.firstName,
            last_name=data.lastName,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Email taken between the check and the insert
            self.db.rollback()
            raise HTTPException(status_code=400, detail="Email already registered") from e
        self.db.refresh(user)

        logger.info(f"🆕 New user registered: {user.email}")
        return AuthPayload(user=user_response(user), token=create_access_token(user.id))

    def login(self, data: LoginRequest) -> AuthPayload:
        user = self.db.query(User).filter(User.email == data.email).first()
        if not user or not verify_password_bcrypt(data.password, user.password_hash):
            logger.warning(f"⚠️ Failed login attempt for {data.email}")
            raise HTTPException(status_code=401, detail="Invalid credentials")

        logger.info(f"✅ User logged in: {user.email}")
        return AuthPayload(user=user_response(user), token=create_access_token(user.id))
