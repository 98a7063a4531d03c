"""An ordered list of distinct, non-empty strings."""

from __future__ import annotations

import sys
from typing import Iterable, Iterator, TextIO


class StringList:
    """Ordered collection of unique non-empty strings."""

    def __init__(self, items: Iterable[str] | None = None) -> None:
        self._items: list[str] = []
        for text in items or ():
            self.add(text)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __contains__(self, text: object) -> bool:
        return text in self._items

    def __getitem__(self, index: int) -> str:
        return self._items[index]

    def __repr__(self) -> str:
        return f"StringList({self._items!r})"

    def clear(self) -> None:
        """Remove every string."""
        self._items.clear()

    def add(self, text: str) -> None:
        """Append a string; it must be non-empty and not already present."""
        if not text:
            raise ValueError("cannot add an empty string")
        if text in self._items:
            raise ValueError(f"cannot add string: [{text}] is already in the list")
        self._items.append(text)

    def remove(self, text: str) -> None:
        """Remove a string, raising ValueError if it is not present."""
        try:
            self._items.remove(text)
        except ValueError:
            raise ValueError(f"[{text}] is not in the list") from None

    def merge(self, sep: str) -> str:
        """Join all strings with the separator."""
        return sep.join(self._items)

    def split(self, text: str, sep: str) -> None:
        """Replace the contents with the non-empty pieces of text split on sep."""
        self.clear()
        for piece in text.split(sep):
            if piece:
                self.add(piece)

    def show(self, file: TextIO | None = None) -> None:
        """Print every string with its position."""
        out = sys.stdout if file is None else file
        if not self._items:
            print("list is empty", end="", file=out)
            return
        for pos, text in enumerate(self._items):
            print(f"item[{pos}]: [{text}]", file=out)