"""Websocket state helpers."""

from __future__ import annotations

from typing import Any

from .curriculum import TRACKED_EXERCISES
from .session import TrainingLogSession


def personal_bests_payload(session: TrainingLogSession) -> dict[str, Any]:
    bests = session.personal_bests()
    return {
        ex.key: {"label": ex.label, "unit": ex.unit, **bests[ex.key].as_dict()}
        for ex in TRACKED_EXERCISES
    }


def public_state(session: TrainingLogSession, *, week: int, runtime: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return a stable public payload for the UI."""
    return {
        "schema": 1,
        "profile_id": session.user_id or "",
        "rev": session.rev,
        "logs": session.log.as_dict(),
        "personal_bests": personal_bests_payload(session),
        "week": session.week_progress(week).as_dict(),
        "sync_warning": session.sync_warning,
        "pending_changes": session.has_pending_changes,
        "runtime": runtime or {},
    }
