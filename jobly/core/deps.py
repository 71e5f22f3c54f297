"""
FastAPI dependencies for data access and authorization.

A bearer token is optional on every request; the ensure_* dependencies
reject requests whose token is missing, invalid or lacks permission.
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session
from typing import Optional

from jobly.core.database import SqlStore, get_db
from jobly.core.errors import UnauthorizedError
from jobly.core.security import decode_token
from jobly.crud import CompanyRepository, JobRepository, UserRepository

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


def get_store(db: Session = Depends(get_db)) -> SqlStore:
    return SqlStore(db)


def get_companies(store: SqlStore = Depends(get_store)) -> CompanyRepository:
    return CompanyRepository(store)


def get_jobs(store: SqlStore = Depends(get_store)) -> JobRepository:
    return JobRepository(store)


def get_users(store: SqlStore = Depends(get_store)) -> UserRepository:
    return UserRepository(store)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """
    Token payload ({username, isAdmin}) of the caller, or None.

    A missing or invalid token is not an error here; routes that need a
    user depend on one of the ensure_* functions below.
    """
    if credentials is None:
        return None
    try:
        return decode_token(credentials.credentials)
    except JWTError:
        return None


def ensure_logged_in(user: Optional[dict] = Depends(get_current_user)) -> dict:
    if not user:
        raise UnauthorizedError()
    return user


def ensure_admin(user: Optional[dict] = Depends(get_current_user)) -> dict:
    if not user or not user.get("isAdmin"):
        raise UnauthorizedError()
    return user


def ensure_admin_or_same_user(
    username: str,
    user: Optional[dict] = Depends(get_current_user),
) -> dict:
    """Allow admins, or the user named by the {username} path parameter."""
    if not user:
        raise UnauthorizedError()
    if not user.get("isAdmin") and user.get("username") != username:
        raise UnauthorizedError()
    return user
