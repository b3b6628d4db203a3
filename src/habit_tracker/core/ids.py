# src/habit_tracker/core/ids.py

from __future__ import annotations

import uuid


def new_id() -> str:
    """Opaque unique entity id."""
    return uuid.uuid4().hex
