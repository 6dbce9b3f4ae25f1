"""
Persistent storage for WiFi Manager.

LocalStorage is a small string key-value store kept in a TOML file.
UsageStore builds the connection counters and the set of networks whose
Keychain item has already been trusted on top of it.
"""

import json
from threading import Lock
from typing import Dict, Optional, Set

import toml

from . import config
from .logging_config import get_logger

logger = get_logger(__name__)


class LocalStorage:
    """String-valued key-value store persisted to a TOML file."""

    def __init__(self, path=None):
        self.path = path or config.STORAGE_FILE
        self._lock = Lock()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r") as f:
                return toml.load(f)
        except toml.TomlDecodeError as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}

    def _save(self, items: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            toml.dump(items, f)

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = self._load()
            items[key] = value
            self._save(items)


class UsageStore:
    """
    Connection counters and trusted-network bookkeeping.

    increment() is a read-modify-write and is not atomic against other
    processes writing the same file.
    """

    def __init__(self, storage=None):
        self.storage = storage or LocalStorage()

    def _read_json(self, key, default):
        raw = self.storage.get_item(key)
        if not raw:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Stored value for {key} is corrupt, starting over")
            return default

    def get_counts(self) -> Dict[str, int]:
        counts = self._read_json(config.USAGE_COUNTS_KEY, {})
        if not isinstance(counts, dict):
            logger.warning(f"Stored value for {config.USAGE_COUNTS_KEY} is not a mapping, starting over")
            return {}
        valid = {}
        for name, count in counts.items():
            if isinstance(count, int) and not isinstance(count, bool):
                valid[name] = count
            else:
                logger.warning(f"Dropping corrupt connection count for {name}: {count!r}")
        return valid

    def increment(self, name: str) -> int:
        counts = self.get_counts()
        counts[name] = counts.get(name, 0) + 1
        self.storage.set_item(config.USAGE_COUNTS_KEY, json.dumps(counts))
        logger.debug(f"Connection count for {name} is now {counts[name]}")
        return counts[name]

    def get_trusted(self) -> Set[str]:
        names = self._read_json(config.TRUSTED_NETWORKS_KEY, [])
        if not isinstance(names, list):
            logger.warning(f"Stored value for {config.TRUSTED_NETWORKS_KEY} is not a list, starting over")
            return set()
        return {name for name in names if isinstance(name, str)}

    def add_trusted(self, name: str) -> None:
        trusted = self.get_trusted()
        if name in trusted:
            return
        trusted.add(name)
        self.storage.set_item(config.TRUSTED_NETWORKS_KEY, json.dumps(sorted(trusted)))
