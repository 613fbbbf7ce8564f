"""Key/value stores used by a session to keep its high score."""

from typing import Any, Protocol


class ScoreStore(Protocol):
    """Opaque key/value storage with get-or-default semantics."""

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...


class MemoryStore:
    """
    Store keeping its values in a dictionary for the lifetime of the process.

    Parameters
    ----------
    initial : dict, optional
        Values the store starts with.
    """

    def __init__(self, initial: dict[str, Any] | None = None):
        self._values: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._values
