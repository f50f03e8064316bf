"""Auth router - registration, login and the current user"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from ...rate_limiter import auth_limiter
from ...schemas import user_response
from .schemas import LoginRequest, RegisterRequest
from .service import AuthService

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(db)


@router.post("/register", status_code=201, dependencies=[Depends(auth_limiter)])
async def register(data: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    payload = service.register(data)
    return {"success": True, "message": "Registration successful", "data": payload}


@router.post("/login", dependencies=[Depends(auth_limiter)])
async def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    payload = service.login(data)
    return {"success": True, "message": "Login successful", "data": payload}


@router.get("/me")
async def me(current_user: User = Depends(get_current_user)):
    return {"success": True, "data": user_response(current_user)}
