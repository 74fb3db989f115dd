# -*- coding: utf-8 -*-
"""
Load reference data (colors, food categories, nutrients).

Usage:
    python -m racefuel.seed
    python -m racefuel.seed --database-url postgresql+psycopg2://...
    python -m racefuel.seed --only nutrients

Rows that already exist (matched by their natural name) are skipped, so the
command can be re-run safely.
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, List, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from .db import init_db, session_scope
from .db_models import FoodCategory, Nutrient, ReferenceColor, ReferenceFoodCategory

COLORS: List[Tuple[str, str]] = [
    ("Red", "#FF0000"),
    ("Green", "#00FF00"),
    ("Blue", "#0000FF"),
    ("Yellow", "#FFFF00"),
    ("Magenta", "#FF00FF"),
]

NUTRIENTS: List[Tuple[str, str]] = [
    ("Carbohydrates", "carbs"),
    ("Protein", "protein"),
    ("Fat", "fat"),
    ("Sodium", "Na"),
    ("Potassium", "K"),
    ("Caffeine", "caffeine"),
    ("Calories", "kcal"),
]


def seed_colors(db: Session) -> Tuple[int, int]:
    existing = set(db.scalars(select(ReferenceColor.hex)).all())
    created = 0
    for name, hex_value in COLORS:
        if hex_value in existing:
            continue
        db.add(ReferenceColor(color_name=name, hex=hex_value))
        created += 1
    return created, len(COLORS) - created


def seed_categories(db: Session) -> Tuple[int, int]:
    existing = set(db.scalars(select(ReferenceFoodCategory.category_name)).all())
    created = 0
    for category in FoodCategory:
        if category.value in existing:
            continue
        db.add(ReferenceFoodCategory(category_name=category.value))
        created += 1
    return created, len(FoodCategory) - created


def seed_nutrients(db: Session) -> Tuple[int, int]:
    existing = set(db.scalars(select(Nutrient.nutrient_name)).all())
    created = 0
    for name, abbreviation in NUTRIENTS:
        if name in existing:
            continue
        db.add(Nutrient(nutrient_name=name, nutrient_abbreviation=abbreviation))
        created += 1
    return created, len(NUTRIENTS) - created


SEEDERS = {
    "colors": seed_colors,
    "categories": seed_categories,
    "nutrients": seed_nutrients,
}


def run_seed(db: Session, only: List[str]) -> Dict[str, Tuple[int, int]]:
    """Run the selected seeders; returns {name: (created, skipped)}. Caller commits."""
    return {name: SEEDERS[name](db) for name in only}


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Load RaceFuel reference data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--database-url",
        help="SQLAlchemy URL (default: RACEFUEL_DATABASE_URL or the local SQLite file)",
    )
    parser.add_argument(
        "--only",
        action="append",
        choices=sorted(SEEDERS),
        help="Seed only this table group (repeatable)",
    )
    args = parser.parse_args()

    engine = init_db(args.database_url)
    print(f"Database: {engine.url.render_as_string(hide_password=True)}")

    with session_scope() as db:
        results = run_seed(db, args.only or list(SEEDERS))

    for name, (created, skipped) in results.items():
        print(f"{name}: created {created}, skipped {skipped}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
