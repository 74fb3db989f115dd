# -*- coding: utf-8 -*-
"""Nutrients: API endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db import get_db
from .models import NutrientListResponse, NutrientOut
from .storage import list_nutrients

router = APIRouter(prefix="/api/nutrients", tags=["Nutrients"])


@router.get("", response_model=NutrientListResponse, summary="List reference nutrients")
def list_nutrients_api(db: Session = Depends(get_db)):
    items = [NutrientOut.model_validate(n) for n in list_nutrients(db)]
    return NutrientListResponse(nutrients=items, count=len(items))
