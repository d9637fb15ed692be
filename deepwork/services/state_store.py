"""StateStore - persistence of settings, stats, username and tasks.

Each key lives in its own YAML document under the data directory:

- data/settings.yaml
- data/stats.yaml
- data/username.yaml
- data/tasks.yaml

Keys are loaded independently: a missing or corrupt file only resets that
key to its default.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from deepwork.models.settings import Settings
from deepwork.models.stats import Stats
from deepwork.models.task import Task

logger = logging.getLogger(__name__)

SETTINGS_KEY = "settings"
STATS_KEY = "stats"
USERNAME_KEY = "username"
TASKS_KEY = "tasks"

KEYS = (SETTINGS_KEY, STATS_KEY, USERNAME_KEY, TASKS_KEY)


class StateStore:
    """Loads and saves the persisted keys as opaque YAML blobs."""

    def __init__(self, data_dir: str | Path = "data"):
        """Initialize the store.

        Args:
            data_dir: Directory for the key files.
        """
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        """Get the file path for a key."""
        return self.data_dir / f"{key}.yaml"

    # ── Raw blobs ───────────────────────────────────────────────────────────

    def load(self, key: str) -> Any | None:
        """Load the raw value stored under `key`.

        Returns:
            The stored value, or None if the key is absent or unreadable.
        """
        path = self.path_for(key)
        if not path.exists():
            return None

        try:
            with open(path, encoding="utf-8") as f:
                return yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read {key} from {path}: {e}")
            return None

    def save(self, key: str, value: Any) -> bool:
        """Store `value` under `key`.

        Returns:
            True if the write succeeded.
        """
        path = self.path_for(key)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                yaml.safe_dump(value, f, default_flow_style=False, sort_keys=False)
            logger.debug(f"Saved {key} to {path}")
            return True
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to save {key} to {path}: {e}")
            return False

    # ── Typed accessors ─────────────────────────────────────────────────────

    def load_settings(self) -> Settings:
        """Load settings, or defaults if absent or invalid."""
        raw = self.load(SETTINGS_KEY)
        if not isinstance(raw, dict):
            return self._default(SETTINGS_KEY, raw, Settings())
        try:
            return Settings(**raw)
        except ValidationError as e:
            logger.warning(f"Invalid {SETTINGS_KEY}: {e}, using defaults")
            return Settings()

    def load_stats(self) -> Stats:
        """Load stats, or zeroed stats if absent or invalid."""
        raw = self.load(STATS_KEY)
        if not isinstance(raw, dict):
            return self._default(STATS_KEY, raw, Stats())
        try:
            return Stats(**raw)
        except ValidationError as e:
            logger.warning(f"Invalid {STATS_KEY}: {e}, using defaults")
            return Stats()

    def load_username(self) -> str | None:
        """Load the username, or None if it was never set."""
        raw = self.load(USERNAME_KEY)
        if isinstance(raw, (str, int, float)) and not isinstance(raw, bool):
            name = str(raw).strip()
            return name or None
        return self._default(USERNAME_KEY, raw, None)

    def load_tasks(self) -> list[Task]:
        """Load the task list, skipping entries that fail validation."""
        raw = self.load(TASKS_KEY)
        if not isinstance(raw, list):
            return self._default(TASKS_KEY, raw, [])

        tasks = []
        for item in raw:
            try:
                tasks.append(Task(**item))
            except (TypeError, ValidationError) as e:
                logger.warning(f"Skipping invalid task {item!r}: {e}")
        return tasks

    def _default(self, key: str, raw: Any, default: Any) -> Any:
        if raw is not None:
            logger.warning(f"Unexpected {key} data of type {type(raw).__name__}, using defaults")
        return default
