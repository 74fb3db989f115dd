# -*- coding: utf-8 -*-
"""Nutrient arithmetic shared by the food-instance and event summary views.

All functions work on already-loaded ORM rows and return plain dicts, so they
never touch the session.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

SECONDS_PER_HOUR = 3600
# Events longer than this are summarised in hour windows, shorter ones in half hours.
LONG_EVENT_SECONDS = 3 * SECONDS_PER_HOUR


def _total_row(nutrient, quantity: float, unit: str) -> Dict[str, Any]:
    return {
        "nutrient_id": nutrient.id,
        "nutrient_name": nutrient.nutrient_name,
        "nutrient_abbreviation": nutrient.nutrient_abbreviation,
        "quantity": quantity,
        "unit": unit,
    }


def instance_totals(instance) -> List[Dict[str, Any]]:
    """Nutrients delivered by one food instance: per-serving quantity x servings."""
    servings = float(instance.servings)
    rows = [
        _total_row(row.nutrient, float(row.quantity) * servings, row.unit)
        for row in instance.food_item.nutrients
    ]
    rows.sort(key=lambda r: r["nutrient_name"])
    return rows


def sum_totals(groups: Iterable[Sequence[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Sum total rows by (nutrient, unit)."""
    acc: Dict[Tuple[str, str], Dict[str, Any]] = {}
    for rows in groups:
        for row in rows:
            key = (row["nutrient_id"], row["unit"])
            if key in acc:
                acc[key]["quantity"] += row["quantity"]
            else:
                acc[key] = dict(row)
    return sorted(acc.values(), key=lambda r: (r["nutrient_name"], r["unit"]))


def default_window_seconds(expected_duration: int) -> int:
    return SECONDS_PER_HOUR if expected_duration > LONG_EVENT_SECONDS else SECONDS_PER_HOUR // 2


def hour_count(expected_duration: int) -> int:
    """Number of (possibly partial) hours an event spans; hourly goals index into these."""
    return max(1, math.ceil(expected_duration / SECONDS_PER_HOUR))


def window_totals(instances: Sequence[Any], expected_duration: int, window_seconds: int) -> List[Dict[str, Any]]:
    windows: List[Dict[str, Any]] = []
    start = 0
    while start < expected_duration:
        end = min(start + window_seconds, expected_duration)
        windows.append({"start_seconds": start, "end_seconds": end, "instances": []})
        start = end

    for inst in instances:
        t = int(inst.time_elapsed_at_consumption)
        # t == expected_duration lands in the last window.
        idx = min(t // window_seconds, len(windows) - 1)
        windows[idx]["instances"].append(inst)

    return [
        {
            "start_seconds": w["start_seconds"],
            "end_seconds": w["end_seconds"],
            "food_instance_count": len(w["instances"]),
            "totals": sum_totals(instance_totals(i) for i in w["instances"]),
        }
        for w in windows
    ]


def goal_totals(expected_duration: int, base_goals: Sequence[Any], hourly_goals: Sequence[Any]) -> List[Dict[str, Any]]:
    """Goal per nutrient across the whole event.

    The base goal is per hour; an hourly goal replaces it for its hour. The last
    partial hour counts proportionally.
    """
    hours = hour_count(expected_duration)
    base_by_nutrient = {g.nutrient_id: g for g in base_goals}
    hourly_by_key = {(g.nutrient_id, int(g.hour)): g for g in hourly_goals}
    nutrients = {g.nutrient_id: g.nutrient for g in list(base_goals) + list(hourly_goals)}

    rows: List[Dict[str, Any]] = []
    for nutrient_id, nutrient in nutrients.items():
        base = base_by_nutrient.get(nutrient_id)
        unit: Optional[str] = base.unit if base else None
        total = 0.0
        for hour in range(hours):
            fraction = min(SECONDS_PER_HOUR, expected_duration - hour * SECONDS_PER_HOUR) / SECONDS_PER_HOUR
            override = hourly_by_key.get((nutrient_id, hour))
            if override:
                total += float(override.quantity) * fraction
                unit = unit or override.unit
            elif base:
                total += float(base.quantity) * fraction
        rows.append(_total_row(nutrient, total, unit or ""))
    rows.sort(key=lambda r: r["nutrient_name"])
    return rows
