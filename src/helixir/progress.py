"""Tutorial progress persistence.

Progress (instance id, current lesson, completed lessons and the ids of
entities created by earlier lessons) lives behind a small load/save store so
callers never touch the filesystem directly and tests can use memory.
"""

import copy
import json
from pathlib import Path
from typing import Any, Optional, Protocol, Union

from loguru import logger

ENTITY_KINDS = ("continents", "countries", "cities")


def default_progress() -> dict[str, Any]:
    """A fresh progress document."""
    return {
        "instance_id": "",
        "current_lesson": 0,
        "completed_lessons": [],
        "created_entities": {kind: [] for kind in ENTITY_KINDS},
    }


class ProgressStore(Protocol):
    def load(self) -> dict[str, Any]: ...

    def save(self, data: dict[str, Any]) -> None: ...


class JsonProgressStore:
    """Progress stored as pretty-printed JSON, usually helixdb-cfg/instance.json."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load(self) -> dict[str, Any]:
        """Load progress; a missing or corrupt file yields the default document."""
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return default_progress()
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read progress file {self.path}: {e}")
            return default_progress()

        if not isinstance(data, dict):
            logger.warning(f"Progress file {self.path} is not a JSON object, starting fresh")
            return default_progress()
        return data

    def save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class MemoryProgressStore:
    """In-memory store for tests and embedding."""

    def __init__(self, data: Optional[dict[str, Any]] = None) -> None:
        self._data = copy.deepcopy(data) if data is not None else default_progress()

    def load(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def save(self, data: dict[str, Any]) -> None:
        self._data = copy.deepcopy(data)


class Progress:
    """Read/modify/write access to progress through a ProgressStore.

    Every mutation loads, updates and saves immediately, so separate Progress
    objects over the same store always agree.
    """

    def __init__(self, store: ProgressStore) -> None:
        self.store = store

    def _update(self, key: str, value: Any) -> None:
        data = self.store.load()
        data[key] = value
        self.store.save(data)

    # --- Instance ---

    @property
    def instance_id(self) -> str:
        value = self.store.load().get("instance_id")
        return value if isinstance(value, str) else ""

    @instance_id.setter
    def instance_id(self, value: str) -> None:
        self._update("instance_id", value)

    # --- Lessons ---

    @property
    def current_lesson(self) -> int:
        value = self.store.load().get("current_lesson", 0)
        return value if isinstance(value, int) and value >= 0 else 0

    @current_lesson.setter
    def current_lesson(self, lesson: int) -> None:
        self._update("current_lesson", lesson)

    def completed_lessons(self) -> list[int]:
        values = self.store.load().get("completed_lessons", [])
        if not isinstance(values, list):
            return []
        return sorted(v for v in values if isinstance(v, int))

    def mark_completed(self, lesson: int) -> None:
        completed = self.completed_lessons()
        if lesson in completed:
            return
        self._update("completed_lessons", sorted([*completed, lesson]))
        logger.info(f"Lesson {lesson} marked completed")

    def is_completed(self, lesson: int) -> bool:
        return lesson in self.completed_lessons()

    # --- Created entities ---

    def save_created_entity(self, kind: str, entity: dict[str, Any]) -> None:
        """Remember the entity a lesson created, replacing earlier ones of that kind.

        Raises:
            ValueError: If kind is not a known entity kind.
        """
        if kind not in ENTITY_KINDS:
            raise ValueError(f"Invalid entity type: {kind}")

        data = self.store.load()
        created = data.get("created_entities")
        if not isinstance(created, dict):
            created = {k: [] for k in ENTITY_KINDS}
        created[kind] = [entity]
        data["created_entities"] = created
        self.store.save(data)

    def latest_entity_id(self, kind: str) -> Optional[str]:
        created = self.store.load().get("created_entities", {})
        if not isinstance(created, dict):
            return None
        entities = created.get(kind)
        if not isinstance(entities, list) or not entities:
            return None
        latest = entities[-1]
        entity_id = latest.get("id") if isinstance(latest, dict) else None
        return entity_id if isinstance(entity_id, str) else None
