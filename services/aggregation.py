"""
Macro aggregation over food entries.

Pure functions: nothing here touches a session. Entries can be ORM rows,
any object exposing ``calories/protein/carbs/fat/quantity`` attributes, or
plain mappings with those keys. Meals need ``id``, ``date`` and ``entries``.
"""

from __future__ import annotations

import math
from collections import defaultdict
from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional

MACRO_FIELDS = ("calories", "protein", "carbs", "fat")


@dataclass(frozen=True)
class MacroTotals:
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class MealSummary:
    meal_id: int
    date: datetime
    totals: MacroTotals

    @property
    def day(self) -> date:
        return self.date.date()


@dataclass(frozen=True)
class DailySummary:
    day: date
    meal_count: int
    totals: MacroTotals


@dataclass(frozen=True)
class GoalProgress:
    target: MacroTotals
    consumed: MacroTotals
    remaining: MacroTotals


def _read(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item[name]
    return getattr(item, name)


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def meal_day(value: datetime) -> date:
    """Calendar date (UTC) a meal timestamp falls on."""
    return as_utc(value).date()


def aggregate(entries: Iterable[Any]) -> MacroTotals:
    """Sum ``field * quantity`` for every macro field.

    ``math.fsum`` keeps the result exact for the given products, so the totals
    do not depend on entry order. An empty input gives all zeros.
    """
    scaled: Dict[str, List[float]] = {field: [] for field in MACRO_FIELDS}
    for entry in entries:
        quantity = int(_read(entry, "quantity"))
        for field in MACRO_FIELDS:
            scaled[field].append(float(_read(entry, field)) * quantity)
    return MacroTotals(**{field: math.fsum(values) for field, values in scaled.items()})


def summarize_meal(meal: Any) -> MealSummary:
    return MealSummary(
        meal_id=meal.id, date=as_utc(meal.date), totals=aggregate(meal.entries)
    )


def summarize_meals(meals: Iterable[Any]) -> List[MealSummary]:
    """Per-meal totals, newest meal first."""
    summaries = [summarize_meal(meal) for meal in meals]
    summaries.sort(key=lambda s: (s.date, s.meal_id), reverse=True)
    return summaries


def summarize_days(meals: Iterable[Any], day: Optional[date] = None) -> List[DailySummary]:
    """Group meals by calendar date and total every entry of each date.

    One row per date that has at least one meal, newest date first. With
    ``day`` set, only that date is considered (an empty list if it has no
    meals).
    """
    by_day: Dict[date, List[Any]] = defaultdict(list)
    for meal in meals:
        meal_date = meal_day(meal.date)
        if day is not None and meal_date != day:
            continue
        by_day[meal_date].append(meal)

    rows = []
    for meal_date in sorted(by_day, reverse=True):
        day_meals = by_day[meal_date]
        entries = [entry for meal in day_meals for entry in meal.entries]
        rows.append(
            DailySummary(
                day=meal_date, meal_count=len(day_meals), totals=aggregate(entries)
            )
        )
    return rows


def compare_to_goal(goal: Any, consumed: MacroTotals) -> GoalProgress:
    """Remaining = target - consumed per field; negative once a target is exceeded."""
    target = MacroTotals(**{field: float(_read(goal, field)) for field in MACRO_FIELDS})
    remaining = MacroTotals(
        **{
            field: getattr(target, field) - getattr(consumed, field)
            for field in MACRO_FIELDS
        }
    )
    return GoalProgress(target=target, consumed=consumed, remaining=remaining)
