"""Client-side key/value storage.

A small JSON file standing in for the browser's local storage. Values are
namespaced under a prefix so several storefront clients can share one file.
Reads are best effort: a missing or corrupt file reads as empty.
"""

import json
import threading
from pathlib import Path

from storefront.domain import logger

CART_KEY = "cart"
TOKEN_KEY = "token"
CATALOG_KEY = "catalog"


class LocalStorage:
    def __init__(self, path: str | Path | None = None, namespace: str = "storefront") -> None:
        self.path = Path(path) if path is not None else None
        self.namespace = namespace
        self._memory: dict = {}
        self._lock = threading.Lock()

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def _load(self) -> dict:
        if self.path is None:
            return self._memory
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning("client_storage_unreadable", path=str(self.path), error=str(exc))
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict) -> None:
        if self.path is None:
            self._memory = data
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, default=str), encoding="utf-8")

    def get(self, key: str, default=None):
        with self._lock:
            return self._load().get(self._key(key), default)

    def set(self, key: str, value) -> None:
        with self._lock:
            data = self._load()
            data[self._key(key)] = value
            self._save(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if data.pop(self._key(key), None) is not None:
                self._save(data)

    def clear(self) -> None:
        with self._lock:
            data = {k: v for k, v in self._load().items() if not k.startswith(f"{self.namespace}:")}
            self._save(data)
