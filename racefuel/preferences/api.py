# -*- coding: utf-8 -*-
"""Preferences: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..auth.security import get_current_user
from ..db import get_db
from ..db_models import User
from .models import (
    ColorOut,
    FoodCategoryOut,
    ReferenceDataResponse,
    UserColorOut,
    UserColorsRequest,
    UserColorsResponse,
    UserColorsSavedResponse,
    UserPreferencesOut,
    UserPreferencesResponse,
    UserPreferencesUpdateRequest,
)
from .storage import get_or_create_preferences, list_user_colors, reference_data, save_user_colors, update_preferences

router = APIRouter(prefix="/api/preferences", tags=["Preferences"])
user_preferences_router = APIRouter(prefix="/api/user-preferences", tags=["Preferences"])


@user_preferences_router.get("", response_model=UserPreferencesResponse, summary="The caller's preferences")
def get_preferences_api(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    prefs = get_or_create_preferences(db, user_id=user.id)
    return UserPreferencesResponse(preferences=UserPreferencesOut.model_validate(prefs))


@user_preferences_router.put("", response_model=UserPreferencesResponse, summary="Update the caller's preferences")
def update_preferences_api(
    request: UserPreferencesUpdateRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    prefs = update_preferences(db, user_id=user.id, dark_mode=request.dark_mode)
    return UserPreferencesResponse(
        preferences=UserPreferencesOut.model_validate(prefs),
        message="Preferences updated successfully",
    )


@router.get("/reference-data", response_model=ReferenceDataResponse, summary="Colors and food categories")
def reference_data_api(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    colors, categories = reference_data(db)
    return ReferenceDataResponse(
        colors=[ColorOut.model_validate(c) for c in colors],
        categories=[FoodCategoryOut.model_validate(c) for c in categories],
    )


@router.get("/user-colors", response_model=UserColorsResponse, summary="The caller's category colors")
def list_user_colors_api(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    rows = list_user_colors(db, user_id=user.id)
    return UserColorsResponse(preferences=[UserColorOut.model_validate(r) for r in rows])


@router.put("/user-colors", response_model=UserColorsSavedResponse, summary="Save category colors")
def save_user_colors_api(
    request: UserColorsRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    count = save_user_colors(db, user_id=user.id, preferences=request.preferences)
    return UserColorsSavedResponse(message="Color preferences saved successfully", count=count)
