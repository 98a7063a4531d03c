"""Pack many small files into one shared data block, and unpack them again."""

from __future__ import annotations

from typing import MutableMapping, Optional, Tuple

from fsaqueue.items import BlockInfo, ItemStatus, QueueError
from fsaqueue.queue import BlockQueue

OBJECT_MAGIC = "ObJt"
SIZE_KEY = "size"
MULTIFILES_COUNT_KEY = "multifilescount"
MULTIFILES_OFFSET_KEY = "multifilesoffset"

Header = MutableMapping[str, int]


class RegMultiError(ValueError):
    """A small-files block cannot do what was asked."""


class RegMulti:
    """A block holding the data of several small files, with their headers.

    On the saving side files are added with :meth:`add_file` and then pushed
    to a queue with :meth:`enqueue`. On the restoring side the headers are
    added with :meth:`add_header`, the data with :meth:`set_data_block`, and
    each file is read back with :meth:`get_file`.

    A header is a mutable mapping; it must hold the file size under
    ``SIZE_KEY``. Enqueueing stores the number of packed files under
    ``MULTIFILES_COUNT_KEY`` and the file's position in the block under
    ``MULTIFILES_OFFSET_KEY``.
    """

    def __init__(self, max_block_size: int, max_items: Optional[int] = None) -> None:
        if max_block_size <= 0:
            raise ValueError("max_block_size must be positive")
        self.max_block_size = max_block_size
        # Worst case every file is one byte long.
        self.max_items = max_block_size if max_items is None else max_items
        if self.max_items <= 0:
            raise ValueError("max_items must be positive")
        self._headers: list[Header] = []
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._headers)

    @property
    def used_size(self) -> int:
        """Number of bytes of data held in the block."""
        return len(self._data)

    @property
    def data(self) -> bytes:
        """The data block as it currently is."""
        return bytes(self._data)

    def empty(self) -> None:
        """Forget every header and all data."""
        self._headers.clear()
        self._data.clear()

    def has_space_for(self, filesize: int) -> bool:
        """True if one more file of this size fits."""
        if len(self._headers) >= self.max_items:
            return False
        return len(self._data) + filesize <= self.max_block_size

    def add_file(self, header: Header, data: bytes) -> None:
        """Add a file's header and append its data to the block."""
        if len(self._headers) >= self.max_items:
            raise RegMultiError(f"regmulti is full: it contains {len(self._headers)} items")
        if len(self._data) + len(data) > self.max_block_size:
            raise RegMultiError("block is too small to store that new sub-block of data")
        self._headers.append(header)
        self._data += data

    def enqueue(self, queue: BlockQueue, fsid: int) -> None:
        """Add every header, then the shared data block, at the end of the queue."""
        if not self._headers:
            return
        offset = 0
        count = len(self._headers)
        for header in self._headers:
            try:
                filesize = header[SIZE_KEY]
            except KeyError:
                raise RegMultiError("cannot read the file size from the header") from None
            header[MULTIFILES_COUNT_KEY] = count
            header[MULTIFILES_OFFSET_KEY] = offset
            offset += filesize
            try:
                queue.add_header(header, OBJECT_MAGIC, fsid)
            except QueueError as exc:
                raise RegMultiError("cannot add a header to the queue") from exc
        blkinfo = BlockInfo(
            data=bytes(self._data),
            realsize=len(self._data),
            offset=0,
            fsid=fsid,
        )
        try:
            queue.add_block(blkinfo, ItemStatus.TODO)
        except QueueError as exc:
            raise RegMultiError("cannot add the data block to the queue") from exc

    def add_header(self, header: Header) -> None:
        """Add the header of a file whose data is in the block."""
        if len(self._headers) >= self.max_items:
            raise RegMultiError(f"regmulti is full: it contains {len(self._headers)} items")
        self._headers.append(header)

    def set_data_block(self, data: bytes) -> None:
        """Replace the data block."""
        if len(self._data) + len(data) > self.max_block_size:
            raise RegMultiError("block is too small to store that new sub-block of data")
        self._data = bytearray(data)

    def get_file(self, index: int) -> Tuple[Header, bytes]:
        """Return the header and the data of the file at this position."""
        if not 0 <= index < len(self._headers):
            raise RegMultiError(
                f"index={index} out of scope: the structure only contains "
                f"{len(self._headers)} items"
            )
        header = self._headers[index]
        try:
            filesize = header[SIZE_KEY]
            offset = header[MULTIFILES_OFFSET_KEY]
        except KeyError as exc:
            raise RegMultiError(f"header has no {exc.args[0]!r} entry") from None
        if offset < 0 or offset + filesize > len(self._data):
            raise RegMultiError("file data lies outside the data block")
        return header, bytes(self._data[offset:offset + filesize])