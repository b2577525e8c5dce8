# cocktailbot/db/json_store.py

from __future__ import annotations

import json
import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Iterator

log = logging.getLogger(__name__)


class JsonDocument:
    """One JSON file on disk plus the lock that serialises its writers.

    Every store owns exactly one (or a few) of these. `transaction()` is the
    read-modify-write unit: the lock is held from the read until the new
    content has replaced the old file.
    """

    def __init__(self, path: Path | str, default_factory: Callable[[], Any]) -> None:
        self.path = Path(path)
        self._default_factory = default_factory
        self._lock = threading.RLock()

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Any:
        with self._lock:
            if not self.path.exists():
                return self._default_factory()
            text = self.path.read_text(encoding="utf-8")
            if not text.strip():
                return self._default_factory()
            return json.loads(text)

    def write(self, data: Any) -> None:
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_name(self.path.name + ".tmp")
            tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp, self.path)
            log.debug("[DB] wrote %s", self.path)

    @contextmanager
    def transaction(self) -> Iterator[Any]:
        with self._lock:
            data = self.read()
            yield data
            self.write(data)
