"""In-memory training log.

The log is a flat mapping of composite keys (see keys.py) to payloads:
bool for completion flags, the raw user-typed string for value entries.
A LogStore is immutable; every write returns a new store.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from .keys import Day, EntryKind, LogKey, decode_key, encode_key

Payload = bool | str


class LogStore(Mapping[str, Payload]):
    """Immutable snapshot of a user's whole training history."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, Any] | None = None) -> None:
        # Non-string keys cannot round-trip through storage; drop them.
        data = {k: v for k, v in (entries or {}).items() if isinstance(k, str)}
        self._entries: Mapping[str, Any] = MappingProxyType(data)

    @classmethod
    def empty(cls) -> LogStore:
        return cls()

    def __getitem__(self, key: str) -> Payload:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"LogStore({len(self._entries)} entries)"

    def _with(self, key: str, payload: Payload) -> LogStore:
        data = dict(self._entries)
        data[key] = payload
        return LogStore(data)

    # Completion flags

    def get_completion(self, week: int, day: Day | str, task_index: int) -> bool:
        """Return the completion flag; unset keys default to False."""
        key = encode_key(week, day, task_index, EntryKind.COMPLETION)
        return bool(self._entries.get(key, False))

    def set_completion(self, week: int, day: Day | str, task_index: int, completed: bool) -> LogStore:
        key = encode_key(week, day, task_index, EntryKind.COMPLETION)
        return self._with(key, bool(completed))

    def toggle_completion(self, week: int, day: Day | str, task_index: int) -> LogStore:
        return self.set_completion(week, day, task_index, not self.get_completion(week, day, task_index))

    # Value entries

    def get_value(self, week: int, day: Day | str, task_index: int) -> str:
        """Return the raw logged value; unset keys default to an empty string."""
        key = encode_key(week, day, task_index, EntryKind.VALUE)
        raw = self._entries.get(key)
        if raw is None or isinstance(raw, bool):
            return ""
        return str(raw)

    def set_value(self, week: int, day: Day | str, task_index: int, value: str) -> LogStore:
        key = encode_key(week, day, task_index, EntryKind.VALUE)
        return self._with(key, "" if value is None else str(value))

    # Whole-store operations

    def replace_all(self, snapshot: Mapping[str, Any] | None) -> LogStore:
        """Total replacement by an external snapshot; nothing of self survives."""
        return LogStore(snapshot)

    def reset(self) -> LogStore:
        return LogStore.empty()

    def as_dict(self) -> dict[str, Payload]:
        """Plain dict in the persisted snapshot format."""
        return dict(self._entries)

    def decoded(self) -> Iterator[tuple[LogKey, Any]]:
        """Yield (key, payload) for every decodable entry; bad keys are skipped."""
        for raw_key, payload in self._entries.items():
            key = decode_key(raw_key)
            if isinstance(key, LogKey):
                yield key, payload

    def entries_for_week(self, week: int) -> dict[LogKey, Any]:
        return {key: payload for key, payload in self.decoded() if key.week == week}
