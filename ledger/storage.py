"""
Persistence adapters for transactions and the dark-mode preference.

Every public operation is best-effort: failures are logged and reported as a
default value, ``None`` or ``False``; nothing here raises to the caller.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ledger.domain import Transaction

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "dark_mode": "darkMode",
    "transactions": "transactions",
}

_MISSING = object()


class TransactionStore(ABC):
    """Key/value store holding the transaction list and one preference."""

    available = True

    @abstractmethod
    def _get(self, key: str) -> Any:
        """Return the stored value or ``_MISSING``; may raise OSError/ValueError."""

    @abstractmethod
    def _set(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    def _remove(self, keys: Iterable[str]) -> None:
        pass

    def _load(self, key: str, default: Any) -> Any:
        if not self.available:
            return default
        try:
            value = self._get(key)
        except (OSError, ValueError) as e:
            logger.error(f"Error loading {key} from storage: {e}", exc_info=True)
            return default
        return default if value is _MISSING else value

    def _save(self, key: str, value: Any) -> bool:
        if not self.available:
            logger.debug(f"Storage unavailable, {key} not saved")
            return False
        try:
            self._set(key, value)
        except (OSError, ValueError, TypeError) as e:
            logger.error(f"Error saving {key} to storage: {e}", exc_info=True)
            return False
        return True

    def load_transactions(self) -> Optional[List[dict]]:
        """Stored transaction records, or ``None`` when there are none to read."""
        records = self._load(STORAGE_KEYS["transactions"], None)
        if records is None:
            return None
        if not isinstance(records, list):
            logger.warning(f"Ignoring stored transactions of type {type(records).__name__}")
            return None
        return records

    def save_transactions(self, transactions: Iterable[Transaction]) -> bool:
        return self._save(STORAGE_KEYS["transactions"], [t.serialize() for t in transactions])

    def load_preference(self, key: str, default: Any) -> Any:
        return self._load(key, default)

    def save_preference(self, key: str, value: Any) -> bool:
        return self._save(key, value)

    def clear_all(self) -> bool:
        if not self.available:
            return False
        try:
            self._remove(STORAGE_KEYS.values())
        except (OSError, ValueError) as e:
            logger.error(f"Error clearing storage: {e}", exc_info=True)
            return False
        return True


class MemoryStore(TransactionStore):
    """Dict-backed store that lives for the current session only."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self.data: Dict[str, Any] = dict(data or {})

    def _get(self, key):
        return self.data.get(key, _MISSING)

    def _set(self, key, value):
        # round-trip through JSON so the memory store rejects what a file would
        self.data[key] = json.loads(json.dumps(value))

    def _remove(self, keys):
        for key in keys:
            self.data.pop(key, None)


class JsonFileStore(TransactionStore):
    """All keys in a single JSON document on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(data, ensure_ascii=False, indent=2)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(payload)
        tmp_path.replace(self.path)

    def _get(self, key):
        return self._read_all().get(key, _MISSING)

    def _set(self, key, value):
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def _remove(self, keys):
        if not self.path.exists():
            return
        data = self._read_all()
        for key in keys:
            data.pop(key, None)
        self._write_all(data)


class UnavailableStore(TransactionStore):
    """No storage medium: reads give defaults, writes are dropped."""

    available = False

    def _get(self, key):
        return _MISSING

    def _set(self, key, value):
        pass

    def _remove(self, keys):
        pass


def open_store(path: Optional[Union[str, Path]]) -> TransactionStore:
    if not path:
        logger.info("No storage path configured, running in memory only")
        return UnavailableStore()
    return JsonFileStore(path)


def load_dark_mode(store: TransactionStore) -> bool:
    value = store.load_preference(STORAGE_KEYS["dark_mode"], False)
    if not isinstance(value, bool):
        logger.warning(f"Ignoring non-boolean dark mode preference: {value!r}")
        return False
    return value


def save_dark_mode(store: TransactionStore, is_dark: bool) -> bool:
    return store.save_preference(STORAGE_KEYS["dark_mode"], bool(is_dark))
