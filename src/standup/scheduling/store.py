"""Trigger store with pluggable persistence."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Protocol

from standup.scheduling.types import TimeOfDay, Trigger

logger = logging.getLogger(__name__)


class TriggerPersistence(Protocol):
    """Durable storage for the whole trigger collection."""

    def load(self) -> list[Trigger]: ...

    def save(self, triggers: Sequence[Trigger]) -> None: ...


class MemoryTriggerPersistence:
    """In-process persistence, used for tests and dry runs."""

    def __init__(self, triggers: Iterable[Trigger] = ()) -> None:
        self._triggers = list(triggers)
        self.save_count = 0

    def load(self) -> list[Trigger]:
        return list(self._triggers)

    def save(self, triggers: Sequence[Trigger]) -> None:
        self._triggers = list(triggers)
        self.save_count += 1


class JsonlTriggerPersistence:
    """Persist triggers as JSON Lines, one trigger per line."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Trigger]:
        if not self._path.exists():
            return []

        triggers: list[Trigger] = []
        with self._path.open() as f:
            for line_no, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                try:
                    data = json.loads(line)
                except json.JSONDecodeError:
                    logger.warning(
                        "corrupt_jsonl_line",
                        extra={"file.line_no": line_no, "file.path": str(self._path)},
                    )
                    continue
                trigger = Trigger.from_dict(data) if isinstance(data, dict) else None
                if trigger is None:
                    logger.warning(
                        "invalid_trigger_line",
                        extra={"file.line_no": line_no, "file.path": str(self._path)},
                    )
                    continue
                triggers.append(trigger)
        return triggers

    def save(self, triggers: Sequence[Trigger]) -> None:
        """Write the collection atomically via tempfile + fsync + replace."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                for trigger in triggers:
                    f.write(json.dumps(trigger.to_dict()))
                    f.write("\n")
                f.flush()
                os.fsync(f.fileno())
            Path(tmp).replace(self._path)
        except BaseException:
            try:
                Path(tmp).unlink()
            except OSError:
                pass
            raise


class TriggerStore:
    """Holds registered triggers.

    Reads return an immutable snapshot; every mutation persists the whole
    new collection before it becomes visible, so callers never observe a
    partially applied change.
    """

    def __init__(self, persistence: TriggerPersistence | None = None) -> None:
        self._persistence = persistence or MemoryTriggerPersistence()
        self._lock = threading.Lock()
        self._triggers: tuple[Trigger, ...] = tuple(self._persistence.load())
        logger.debug(f"Loaded {len(self._triggers)} trigger(s)")

    @property
    def persistence(self) -> TriggerPersistence:
        return self._persistence

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def list_all(self) -> tuple[Trigger, ...]:
        return self._triggers

    def list_for(self, room: str) -> list[Trigger]:
        return [t for t in self.list_all() if t.room == room]

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def add(self, trigger: Trigger) -> None:
        self._mutate(lambda triggers: (*triggers, trigger))

    def remove_all_for(self, room: str) -> int:
        return self._remove(lambda t: t.room == room)

    def remove_one(self, room: str, time: TimeOfDay) -> int:
        """Remove every trigger matching both room and time.

        Duplicates are all removed; the count reflects how many were.
        """
        return self._remove(lambda t: t.room == room and t.time == time)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _remove(self, predicate: Callable[[Trigger], bool]) -> int:
        removed = 0

        def mutate(triggers: tuple[Trigger, ...]) -> tuple[Trigger, ...]:
            nonlocal removed
            kept = tuple(t for t in triggers if not predicate(t))
            removed = len(triggers) - len(kept)
            return kept

        self._mutate(mutate)
        return removed

    def _mutate(
        self, mutate: Callable[[tuple[Trigger, ...]], tuple[Trigger, ...]]
    ) -> None:
        with self._lock:
            updated = mutate(self._triggers)
            if updated == self._triggers:
                return
            self._persistence.save(updated)
            self._triggers = updated
