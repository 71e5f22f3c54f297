"""
Authentication endpoints.

- POST /auth/token: Exchange username/password for a JWT
- POST /auth/register: Create a (non-admin) account and return a JWT
"""

import logging
from fastapi import APIRouter, Depends

from jobly.core.deps import get_users
from jobly.core.security import create_access_token
from jobly.crud import UserRepository
from jobly.schemas.user import TokenResponse, UserLoginRequest, UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(request: UserLoginRequest, users: UserRepository = Depends(get_users)):
    """
    Authenticate and receive a token.

    Responds 401 for an unknown user or a wrong password alike.
    """
    user = users.authenticate(request.username, request.password)
    return TokenResponse(token=create_access_token(user))


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(request: UserRegisterRequest, users: UserRepository = Depends(get_users)):
    """Register a new user. Self-registered users are never admins."""
    data = request.model_dump(by_alias=True)
    data["isAdmin"] = False
    user = users.register(data)
    logger.info(f"New user registered: {user['username']}")
    return TokenResponse(token=create_access_token(user))
