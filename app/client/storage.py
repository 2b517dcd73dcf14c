from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable


TOKEN_KEY = "token"


@dataclass(frozen=True)
class StorageEvent:
    key: str
    old_value: str | None
    new_value: str | None


Listener = Callable[[StorageEvent], None]


class TokenStorage(ABC):
    """Single named entry holding the raw token string.

    Listeners registered with an `owner` are not told about writes made by that
    same owner, the way a browser only fires `storage` events in other tabs.
    """
    key = TOKEN_KEY

    def __init__(self):
        self._listeners: list[tuple[Listener, Any]] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener, owner: Any = None) -> Callable[[], None]:
        entry = (listener, owner)
        self._listeners.append(entry)

        def _unsubscribe() -> None:
            if entry in self._listeners:
                self._listeners.remove(entry)

        return _unsubscribe

    def _notify(self, old_value: str | None, new_value: str | None, origin: Any = None) -> None:
        if old_value == new_value:
            return
        event = StorageEvent(key=self.key, old_value=old_value, new_value=new_value)
        for listener, owner in list(self._listeners):
            if origin is not None and owner is origin:
                continue
            listener(event)

    @abstractmethod
    def get(self) -> str | None:
        ...

    @abstractmethod
    def set(self, value: str, origin: Any = None) -> None:
        ...

    @abstractmethod
    def remove(self, origin: Any = None) -> None:
        ...


class MemoryTokenStorage(TokenStorage):
    """Process-local storage. Share one instance between sessions to model several tabs."""

    def __init__(self, value: str | None = None):
        super().__init__()
        self._value = value

    def get(self) -> str | None:
        return self._value

    def set(self, value: str, origin: Any = None) -> None:
        with self._lock:
            old, self._value = self._value, value
        self._notify(old, value, origin)

    def remove(self, origin: Any = None) -> None:
        with self._lock:
            old, self._value = self._value, None
        self._notify(old, None, origin)


class FileTokenStorage(TokenStorage):
    """Token kept in one file so it survives restarts and is visible to other processes.

    Changes made by another process are only noticed on `poll()`.
    """

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)
        self._last_seen = self._read()

    def _read(self) -> str | None:
        try:
            value = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return value or None

    def get(self) -> str | None:
        return self._read()

    def set(self, value: str, origin: Any = None) -> None:
        with self._lock:
            old = self._read()
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(value, encoding="utf-8")
            self._last_seen = value
        self._notify(old, value, origin)

    def remove(self, origin: Any = None) -> None:
        with self._lock:
            old = self._read()
            self.path.unlink(missing_ok=True)
            self._last_seen = None
        self._notify(old, None, origin)

    def poll(self) -> None:
        """Emit an event to every listener if the file changed behind our back."""
        with self._lock:
            old, current = self._last_seen, self._read()
            self._last_seen = current
        self._notify(old, current)
