"""Item kinds, states and payloads carried by the block queue."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

MAGIC_SIZE = 4

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFFFFFF
_U64_MAX = 0xFFFFFFFFFFFFFFFF


class ItemStatus(enum.IntEnum):
    """Processing state of an item in the queue."""

    NULL = 0
    TODO = 1
    PROGRESS = 2
    DONE = 3


class ItemType(enum.IntEnum):
    """Kind of payload an item holds."""

    NULL = 0
    BLOCK = 1
    HEADER = 2


class QueueError(Exception):
    """Base class for queue failures."""


class EndOfQueue(QueueError):
    """The queue is empty and no more items will be added."""


class ItemNotFound(QueueError, LookupError):
    """No item matches the request."""


class WrongItemType(QueueError, TypeError):
    """The first item of the queue is not of the requested kind."""


def _check_range(name: str, value: int, maximum: int) -> None:
    if not 0 <= value <= maximum:
        raise ValueError(f"{name}={value} is out of range 0..{maximum}")


@dataclass
class BlockInfo:
    """A data block as it moves between the reader, the workers and the writer."""

    data: bytes = b""
    realsize: int = 0
    offset: int = 0
    arcsum: int = 0
    arsize: int = 0
    compalgo: int = 0
    compsize: int = 0
    cryptalgo: int = 0
    fsid: int = 0
    locked: bool = False

    def __post_init__(self) -> None:
        self.data = bytes(self.data)
        for name in ("realsize", "arcsum", "arsize", "compsize"):
            _check_range(name, getattr(self, name), _U32_MAX)
        _check_range("offset", self.offset, _U64_MAX)
        for name in ("compalgo", "cryptalgo", "fsid"):
            _check_range(name, getattr(self, name), _U16_MAX)


@dataclass
class HeaderInfo:
    """A header: its magic, the filesystem it belongs to and its dictionary."""

    magic: str = ""
    fsid: int = 0
    dico: Any = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.magic, (bytes, bytearray)):
            self.magic = bytes(self.magic).decode("latin-1")
        self.magic = self.magic[:MAGIC_SIZE]
        _check_range("fsid", self.fsid, _U16_MAX)