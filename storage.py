# storage.py
from __future__ import annotations

from typing import MutableMapping, Optional, Protocol


class KeyValueStore(Protocol):
    """Minimal persistence interface for user preferences."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """
    Store over a mutable mapping, written through.

    The app passes ``st.session_state`` so each browser session keeps its own
    preferences; tests pass a plain dict or nothing.
    """

    def __init__(self, data: Optional[MutableMapping] = None):
        self._data = data if data is not None else {}

    def get(self, key: str) -> Optional[str]:
        value = self._data.get(key)
        return str(value) if value is not None else None

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
