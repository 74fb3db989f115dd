# -*- coding: utf-8 -*-
"""Preferences: DB storage helpers."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import transaction
from ..db_models import PreferenceUserColor, ReferenceColor, ReferenceFoodCategory, UserPreferences
from .models import UserColorIn

logger = logging.getLogger(__name__)


def get_or_create_preferences(db: Session, *, user_id: str) -> UserPreferences:
    prefs = db.scalar(select(UserPreferences).where(UserPreferences.user_id == user_id))
    if prefs:
        return prefs
    with transaction(db):
        prefs = UserPreferences(user_id=user_id, dark_mode=False)
        db.add(prefs)
    logger.info("Default preferences created for user %s", user_id)
    return prefs


def update_preferences(db: Session, *, user_id: str, dark_mode: Optional[bool]) -> UserPreferences:
    prefs = get_or_create_preferences(db, user_id=user_id)
    with transaction(db):
        if dark_mode is not None:
            prefs.dark_mode = dark_mode
    logger.info("Preferences updated for user %s dark_mode=%s", user_id, prefs.dark_mode)
    return prefs


def reference_data(db: Session) -> Tuple[List[ReferenceColor], List[ReferenceFoodCategory]]:
    colors = db.scalars(select(ReferenceColor).order_by(ReferenceColor.color_name)).all()
    categories = db.scalars(select(ReferenceFoodCategory).order_by(ReferenceFoodCategory.category_name)).all()
    return list(colors), list(categories)


def list_user_colors(db: Session, *, user_id: str) -> List[PreferenceUserColor]:
    rows = db.scalars(select(PreferenceUserColor).where(PreferenceUserColor.user_id == user_id)).all()
    return sorted(rows, key=lambda r: r.category.category_name)


def save_user_colors(db: Session, *, user_id: str, preferences: List[UserColorIn]) -> int:
    """Upsert one color per (user, food category)."""
    category_ids = {p.food_category_id for p in preferences}
    color_ids = {p.color_id for p in preferences}
    known_categories = set(
        db.scalars(select(ReferenceFoodCategory.id).where(ReferenceFoodCategory.id.in_(category_ids))).all()
    ) if category_ids else set()
    known_colors = set(
        db.scalars(select(ReferenceColor.id).where(ReferenceColor.id.in_(color_ids))).all()
    ) if color_ids else set()
    if category_ids - known_categories:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown food_category_id: {', '.join(sorted(category_ids - known_categories))}",
        )
    if color_ids - known_colors:
        raise HTTPException(status_code=400, detail=f"Unknown color_id: {', '.join(sorted(color_ids - known_colors))}")

    existing: Dict[str, PreferenceUserColor] = {
        row.food_category: row
        for row in db.scalars(select(PreferenceUserColor).where(PreferenceUserColor.user_id == user_id)).all()
    }
    with transaction(db):
        for pref in preferences:
            row = existing.get(pref.food_category_id)
            if row:
                row.color_id = pref.color_id
            else:
                db.add(PreferenceUserColor(user_id=user_id, food_category=pref.food_category_id, color_id=pref.color_id))
    logger.info("Color preferences saved for user %s: %s", user_id, len(preferences))
    return len(preferences)
