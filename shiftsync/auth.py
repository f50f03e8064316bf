import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import User
from .security_utils import InvalidTokenError, TokenExpiredError, decode_jwt_token

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as our own 401 message
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the user from the `Authorization: Bearer <jwt>` header"""

    if not credentials or not credentials.credentials:
        raise HTTPException(status_code=401, detail="No token provided")

    try:
        payload = decode_jwt_token(credentials.credentials)
    except TokenExpiredError as e:
        raise HTTPException(
            status_code=401, detail="Token expired", headers={"X-Token-Expired": "true"}
        ) from e
    except InvalidTokenError as e:
        raise HTTPException(status_code=401, detail="Invalid token") from e

    user_id = payload.get("userId")
    if not isinstance(user_id, int):
        logger.warning(f"⚠️ Token missing userId claim. Available claims: {list(payload.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning(f"⚠️ Token references unknown user {user_id}")
        raise HTTPException(status_code=401, detail="Invalid token")

    logger.debug(f"✅ User authenticated: {user.email}")
    return user
