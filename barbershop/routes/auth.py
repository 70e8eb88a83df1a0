import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..auth import Session, User, authenticate, create_session_token, get_current_user
from ..schemas import SuccessResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class LoginRequest(BaseModel):
    email: str
    password: str


@router.post("/login", response_model=Session)
async def login(data: LoginRequest):
    """Sign in with the administrator credentials"""
    user = authenticate(data.email, data.password)
    if user is None:
        logger.warning(f"⚠️ Failed login attempt for {data.email}")
        raise HTTPException(status_code=401, detail="Invalid credentials. Please try again.")

    logger.info(f"✅ User signed in: {user.email}")
    return create_session_token(user)


@router.get("/me", response_model=User)
async def me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/logout", response_model=SuccessResponse)
async def logout(current_user: User = Depends(get_current_user)):
    """Sessions are stateless; the client discards its token"""
    logger.info(f"User signed out: {current_user.email}")
    return SuccessResponse()
