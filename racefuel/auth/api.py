# -*- coding: utf-8 -*-
"""Auth / users: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session

from ..db import get_db
from ..db_models import User
from .models import DirectoryResponse, DirectoryUser, SyncUserRequest, SyncUserResponse, UserPublic, UserResponse
from .security import get_claims_from_request, get_current_user
from .storage import list_directory, sync_user

router = APIRouter(prefix="/api/auth", tags=["Auth"])
users_router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("/sync-user", response_model=SyncUserResponse, summary="Create or refresh the caller's local user")
def sync_user_api(
    body: SyncUserRequest,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    claims = get_claims_from_request(request)
    user, created = sync_user(
        db,
        auth0_sub=str(claims["sub"]),
        first_name=body.first_name,
        last_name=body.last_name,
        email=body.email or claims.get("email"),
    )
    response.status_code = 201 if created else 200
    return SyncUserResponse(
        user=UserPublic.model_validate(user),
        message="User created successfully" if created else "User already exists",
    )


@users_router.get("", response_model=UserResponse, summary="Get the caller's user record")
def me(user: User = Depends(get_current_user)):
    return UserResponse(user=UserPublic.model_validate(user))


@users_router.get("/all", response_model=DirectoryResponse, summary="List other users with connection info")
def directory(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    items = list_directory(db, current_user_id=user.id)
    return DirectoryResponse(users=[DirectoryUser.model_validate(i) for i in items])
