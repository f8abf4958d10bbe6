"""
Case-insensitive mapping used for definition lookup.

Keys are normalized on insert and lookup; the spelling written last is the one
reported back by iteration, and iteration follows insertion order.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple


class CaseInsensitiveDict(MutableMapping):
    """Mapping whose string keys compare without regard to case."""

    def __init__(self, data: Optional[Mapping[str, Any]] = None, **kwargs: Any):
        self._store: Dict[str, Tuple[str, Any]] = {}
        if data is not None:
            self.update(data)
        if kwargs:
            self.update(kwargs)

    @staticmethod
    def _normalize(key: str) -> str:
        return key.lower() if isinstance(key, str) else key

    def __setitem__(self, key: str, value: Any) -> None:
        self._store[self._normalize(key)] = (key, value)

    def __getitem__(self, key: str) -> Any:
        return self._store[self._normalize(key)][1]

    def __delitem__(self, key: str) -> None:
        del self._store[self._normalize(key)]

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._store.values())

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        return self._normalize(key) in self._store

    def original_key(self, key: str) -> Optional[str]:
        """Return the stored spelling of ``key`` (or None when absent)."""
        entry = self._store.get(self._normalize(key))
        return entry[0] if entry else None

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            other = CaseInsensitiveDict(other)
        else:
            return NotImplemented
        return dict(self.lower_items()) == dict(other.lower_items())

    def lower_items(self) -> Iterator[Tuple[str, Any]]:
        return ((normalized, entry[1]) for normalized, entry in self._store.items())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"
