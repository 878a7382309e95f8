import copy
import json
import logging
import os
import threading
from contextlib import contextmanager
from typing import Any, Iterator

log = logging.getLogger(__name__)

_lock = threading.RLock()


class JsonStore:
    """One JSON document on disk, read fresh on every access.

    A missing or unreadable file reads as ``default``. Writes go to a temp
    file first and are moved into place so a crash never leaves half a file.
    """

    def __init__(self, path: str, default: Any):
        self.path = path
        self.default = default

    def _ensure_dir(self) -> None:
        os.makedirs(os.path.dirname(self.path) or '.', exist_ok=True)

    def load(self) -> Any:
        if not os.path.exists(self.path):
            return copy.deepcopy(self.default)
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            log.warning("Unreadable JSON in %s, using default: %s", self.path, e)
            return copy.deepcopy(self.default)

    def save(self, data: Any) -> None:
        self._ensure_dir()
        d = os.path.dirname(self.path) or '.'
        tmp = os.path.join(d, f".tmp_{os.path.basename(self.path)}")
        with _lock:
            with open(tmp, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
            os.replace(tmp, self.path)

    @contextmanager
    def update(self) -> Iterator[Any]:
        """Read-modify-write. The yielded document is saved when the block exits cleanly."""
        with _lock:
            data = self.load()
            yield data
            self.save(data)
