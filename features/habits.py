"""Habit records and the pure commands that change them.

Every command takes the current list of habits and returns a Transition:
the new list plus the snapshot text to save, or None when nothing changed.
The input list and its habits are never mutated.
"""

import json
import logging
import math
import time
from collections import namedtuple
from typing import Optional

from app_utils.days import day_key, today

logger = logging.getLogger(__name__)

# quick-add buttons on the page
DEFAULT_HABITS = [
    "Walk 20+ min",
    "Sunlight 10 min",
    "Stretching 5 min",
    "Water 2L",
    "Read 10 min",
    "Meditation 5 min",
]

Transition = namedtuple("Transition", ["habits", "snapshot"])


class SnapshotError(ValueError):
    """Persisted habit data could not be turned back into habits."""


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def new_habit_id(habits) -> int:
    # Millisecond clock, bumped past any numeric id already in use.
    candidate = int(time.time() * 1000)
    numeric = [h["id"] for h in habits if _is_number(h["id"])]
    if numeric:
        candidate = max(candidate, math.floor(max(numeric)) + 1)
    return candidate


def find_habit(habits, habit_id) -> Optional[dict]:
    for habit in habits:
        if habit["id"] == habit_id:
            return habit
    return None


def resolve_selection(habits, selected_id) -> Optional[dict]:
    """Look up the habit the page has selected; None once it is gone."""
    if selected_id is None:
        return None
    return find_habit(habits, selected_id)


def add_habit(habits, name) -> Transition:
    name_norm = name.strip() if isinstance(name, str) else ""
    if not name_norm:
        logger.debug("Ignoring habit with empty name")
        return Transition(list(habits), None)

    habit = {"id": new_habit_id(habits), "name": name_norm, "completions": {}}
    updated = [*habits, habit]
    return Transition(updated, dump_snapshot(updated))


def toggle_completion(habits, habit_id, day=None) -> Transition:
    key = day_key(today() if day is None else day)
    if find_habit(habits, habit_id) is None:
        logger.debug("Toggle for unknown habit %r ignored", habit_id)
        return Transition(list(habits), None)

    updated = []
    for habit in habits:
        if habit["id"] == habit_id:
            completions = dict(habit["completions"])
            if key in completions:
                del completions[key]
            else:
                completions[key] = True
            habit = {**habit, "completions": completions}
        updated.append(habit)
    return Transition(updated, dump_snapshot(updated))


def delete_habit(habits, habit_id) -> Transition:
    updated = [h for h in habits if h["id"] != habit_id]
    if len(updated) == len(habits):
        logger.debug("Delete for unknown habit %r ignored", habit_id)
        return Transition(list(habits), None)
    return Transition(updated, dump_snapshot(updated))


def is_completed(habit, day=None) -> bool:
    return day_key(today() if day is None else day) in habit["completions"]


# =========================
# Snapshot (JSON)
# =========================
def dump_snapshot(habits) -> str:
    return json.dumps(
        [{"id": h["id"], "name": h["name"], "completions": dict(h["completions"])} for h in habits]
    )


def _load_habit(raw, seen_ids):
    if not isinstance(raw, dict):
        raise SnapshotError(f"habit entry is a {type(raw).__name__}, not an object")

    habit_id = raw.get("id")
    valid_number = _is_number(habit_id) and math.isfinite(habit_id)
    if not (isinstance(habit_id, str) or valid_number):
        raise SnapshotError(f"bad habit id: {habit_id!r}")
    if habit_id in seen_ids:
        raise SnapshotError(f"duplicate habit id: {habit_id!r}")

    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        raise SnapshotError(f"habit {habit_id!r} has no name")

    completions = raw.get("completions", {})
    if not isinstance(completions, dict):
        raise SnapshotError(f"habit {habit_id!r} completions is not an object")

    normalized = {}
    for key, marker in completions.items():
        if not marker:
            continue
        try:
            normalized[day_key(key)] = True
        except ValueError as e:
            raise SnapshotError(f"habit {habit_id!r} has a bad day key {key!r}") from e

    return {"id": habit_id, "name": name, "completions": normalized}


def load_snapshot(text: str) -> list:
    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError) as e:
        raise SnapshotError(f"snapshot is not JSON: {e}") from e
    if not isinstance(data, list):
        raise SnapshotError("snapshot is not a list of habits")

    habits = []
    seen_ids = set()
    for raw in data:
        habit = _load_habit(raw, seen_ids)
        seen_ids.add(habit["id"])
        habits.append(habit)
    return habits
