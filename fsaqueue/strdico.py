"""A dictionary of string keys and string values parsed from "k=v,k=v" text."""

from __future__ import annotations

import re
import sys
from typing import Optional, TextIO

_DELIMS = re.compile(r"[,;\t\n]")
_FIELD_MAX = 1023
_INT_RE = re.compile(r"\s*[+-]?\d+")
_S64_MIN = -(1 << 63)
_S64_MAX = (1 << 63) - 1


def _tokens(text: str) -> list[str]:
    return [tok for tok in _DELIMS.split(text) if tok]


class StringDict:
    """String-to-string mapping, optionally restricted to a set of keys.

    Used for option strings such as ``"id=0,dest=/dev/sda1,mkfs=reiserfs"``.
    """

    def __init__(self, valid_keys: Optional[str] = None) -> None:
        self._items: dict[str, str] = {}
        self.valid_keys = valid_keys

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def set_valid_keys(self, keys: str) -> None:
        """Restrict accepted keys to those listed in keys, separated by , ; tab or newline."""
        self.valid_keys = keys

    def parse(self, text: str) -> None:
        """Set every "key=value" pair found in text."""
        for token in _tokens(text):
            key, sep, value = token.partition("=")
            if not sep or len(key) > _FIELD_MAX:
                raise ValueError(
                    f'Incorrect syntax in "{token}" . Cannot find symbol \'=\' to separate '
                    'the key and the value. expected something like "name1=val1,name2=val2"'
                )
            self.set_value(key, value[:_FIELD_MAX])

    def set_value(self, key: str, value: str) -> None:
        """Set a value, checking the key against the valid keys if any."""
        if self.valid_keys is not None and key not in _tokens(self.valid_keys):
            raise ValueError(f'unexpected key "{key}". valid keys are "{self.valid_keys}"')
        self._items[key] = value

    def get_string(self, key: str) -> str:
        """Return the value of key, raising KeyError if it is not set."""
        return self._items[key]

    def get_int(self, key: str) -> int:
        """Return the value of key as a signed 64-bit decimal integer."""
        text = self.get_string(key)
        if not text:
            raise ValueError(f'key "{key}" has an empty value. expected a valid number')
        if not _INT_RE.fullmatch(text):
            raise ValueError(f'key "{key}" does not contain a valid number: "{text}"')
        number = int(text)
        if not _S64_MIN <= number <= _S64_MAX:
            raise ValueError(f'key "{key}" does not contain a valid number: "{text}"')
        return number

    def dump(self, file: Optional[TextIO] = None) -> None:
        """Print every pair, most recently added first."""
        out = sys.stdout if file is None else file
        for pos, (key, value) in enumerate(reversed(list(self._items.items()))):
            print(f"item[{pos}]: key=[{key}] value=[{value}]", file=out)