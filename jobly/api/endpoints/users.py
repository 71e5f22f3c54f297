"""
User management endpoints.

Listing and creating users is admin only; a user may read, update, delete
and apply as themselves.
"""

from fastapi import APIRouter, Depends

from jobly.core.deps import ensure_admin, ensure_admin_or_same_user, get_users
from jobly.core.security import create_access_token
from jobly.crud import UserRepository
from jobly.schemas.company import DeletedResponse
from jobly.schemas.user import (
    ApplicationResponse,
    UserCreateRequest,
    UserCreateResponse,
    UserDetailEnvelope,
    UserEnvelope,
    UserListResponse,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/", status_code=201, response_model=UserCreateResponse, dependencies=[Depends(ensure_admin)])
def create_user(request: UserCreateRequest, users: UserRepository = Depends(get_users)):
    """
    Add a user, possibly an admin, and return a token for them.

    This is not self-registration (see POST /auth/register).
    """
    user = users.register(request.model_dump(by_alias=True))
    return {"user": user, "token": create_access_token(user)}


@router.get("/", response_model=UserListResponse, dependencies=[Depends(ensure_admin)])
def list_users(users: UserRepository = Depends(get_users)):
    return {"users": users.find_all()}


@router.get("/{username}", response_model=UserDetailEnvelope, dependencies=[Depends(ensure_admin_or_same_user)])
def get_user(username: str, users: UserRepository = Depends(get_users)):
    return {"user": users.get(username)}


@router.patch("/{username}", response_model=UserEnvelope, dependencies=[Depends(ensure_admin_or_same_user)])
def update_user(username: str, request: UserUpdateRequest, users: UserRepository = Depends(get_users)):
    """Partially update a user; a new password is hashed before storage."""
    return {"user": users.update(username, request.model_dump(exclude_unset=True, by_alias=True))}


@router.delete("/{username}", response_model=DeletedResponse, dependencies=[Depends(ensure_admin_or_same_user)])
def delete_user(username: str, users: UserRepository = Depends(get_users)):
    users.remove(username)
    return {"deleted": username}


@router.post(
    "/{username}/jobs/{job_id}",
    status_code=201,
    response_model=ApplicationResponse,
    dependencies=[Depends(ensure_admin_or_same_user)],
)
def apply_to_job(username: str, job_id: int, users: UserRepository = Depends(get_users)):
    """Record that a user applied to a job."""
    return users.apply_to_job(username, job_id)
