# -*- coding: utf-8 -*-
"""Nutrients: DB storage helpers."""

from __future__ import annotations

from typing import Iterable, List, Set

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db_models import Nutrient


def list_nutrients(db: Session) -> List[Nutrient]:
    return list(db.scalars(select(Nutrient).order_by(Nutrient.nutrient_name)).all())


def missing_nutrient_ids(db: Session, nutrient_ids: Iterable[str]) -> Set[str]:
    wanted = set(nutrient_ids)
    if not wanted:
        return set()
    found = set(db.scalars(select(Nutrient.id).where(Nutrient.id.in_(wanted))).all())
    return wanted - found
