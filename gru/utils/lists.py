"""Small string list helpers."""

from __future__ import annotations

from collections.abc import Iterable


class List(list):
    """A list of strings with a membership helper."""

    def contains(self, x: str) -> bool:
        """Return True if the list holds the given string."""
        return x in self


class String:
    """A thin wrapper around a string value."""

    __slots__ = ("_value",)

    def __init__(self, value: str) -> None:
        self._value = value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"String({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, String):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def is_in_list(self, items: Iterable[str]) -> bool:
        """Return True if the string is contained in the given list."""
        if isinstance(items, List):
            return items.contains(self._value)
        return self._value in items


def new_list(*args: str) -> List:
    """Create a new list holding the given items."""
    return List(args)