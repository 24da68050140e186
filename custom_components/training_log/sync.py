"""Sync boundary: what the log needs from remote persistence."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol


class SyncFailure(RuntimeError):
    """Raised by adapters when a snapshot cannot be loaded or saved."""


@dataclass(frozen=True, slots=True)
class LogSnapshot:
    """Full log as persisted, plus the revision the adapter assigned to it."""

    entries: Mapping[str, Any] = field(default_factory=dict)
    rev: int = 0


SnapshotCallback = Callable[[LogSnapshot], None]


class SyncAdapter(Protocol):
    async def async_load(self, user_id: str) -> LogSnapshot | None:
        """Return the current snapshot, or None when nothing was saved yet."""

    async def async_save(self, user_id: str, entries: Mapping[str, Any]) -> LogSnapshot:
        """Overwrite the whole snapshot and return it with its new revision."""

    def async_subscribe(self, user_id: str, callback: SnapshotCallback) -> Callable[[], None]:
        """Call back on every saved snapshot (own saves included). Returns unsubscribe."""
