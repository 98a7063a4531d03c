"""Thread-safe queue of blocks and headers shared by reader, workers and writer."""

from __future__ import annotations

import threading
from collections import deque
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple, Union

from fsaqueue.items import (
    BlockInfo,
    EndOfQueue,
    HeaderInfo,
    ItemNotFound,
    ItemStatus,
    ItemType,
    WrongItemType,
)

_WAIT_TIMEOUT = 1.0

Payload = Union[BlockInfo, HeaderInfo]


@dataclass
class _Item:
    type: ItemType
    status: ItemStatus
    itemnum: int = 0
    block: Optional[BlockInfo] = None
    header: Optional[HeaderInfo] = None

    @property
    def payload(self) -> Payload:
        return self.block if self.type is ItemType.BLOCK else self.header


class BlockQueue:
    """Ordered queue of data blocks and headers.

    Blocks are added in the TODO state by a producer, picked up and processed
    by worker threads, and removed in order by a consumer once DONE. Headers
    are always DONE. Adding blocks waits while the queue holds more than
    ``blkmax`` blocks.
    """

    def __init__(self, blkmax: int) -> None:
        self.blkmax = blkmax
        self._items: deque[_Item] = deque()
        self._cond = threading.Condition()
        self._next_itemnum = 1
        self._blkcount = 0
        self._end = False

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    @property
    def block_count(self) -> int:
        """Number of block items currently in the queue."""
        with self._cond:
            return self._blkcount

    # ---- end of queue

    def _end_locked(self) -> bool:
        return not self._items and self._end

    def _wait(self) -> None:
        self._cond.wait(_WAIT_TIMEOUT)

    def set_end_of_queue(self, state: bool) -> None:
        """Mark whether more items will be added."""
        with self._cond:
            self._end = bool(state)
            self._cond.notify_all()

    def is_end_of_queue(self) -> bool:
        """True when the queue is empty and marked as finished."""
        with self._cond:
            return self._end_locked()

    # ---- information

    def count_status(self, status: int = ItemStatus.NULL) -> int:
        """Count items with the given status; NULL counts every item."""
        with self._cond:
            return sum(
                1
                for item in self._items
                if status == ItemStatus.NULL or item.status == status
            )

    def count_items_todo(self) -> int:
        """Count blocks that are not yet DONE."""
        with self._cond:
            return sum(
                1
                for item in self._items
                if item.type is ItemType.BLOCK and item.status != ItemStatus.DONE
            )

    # ---- modification

    def _append(self, item: _Item) -> int:
        """Append an item; the caller holds the lock."""
        if self._end:
            raise EndOfQueue("cannot add an item to a queue marked as finished")
        while self._blkcount > self.blkmax:
            self._wait()
        item.itemnum = self._next_itemnum
        self._next_itemnum += 1
        self._items.append(item)
        if item.type is ItemType.BLOCK:
            self._blkcount += 1
        self._cond.notify_all()
        return item.itemnum

    def add_block(self, blkinfo: BlockInfo, status: int) -> int:
        """Append a block and return its item number."""
        item = _Item(ItemType.BLOCK, ItemStatus(status), block=replace(blkinfo))
        with self._cond:
            return self._append(item)

    def add_header(self, dico: Any, magic: Union[str, bytes], fsid: int) -> int:
        """Append a header built from its parts and return its item number."""
        return self.add_header_info(HeaderInfo(magic=magic, fsid=fsid, dico=dico))

    def add_header_info(self, headinfo: HeaderInfo) -> int:
        """Append a header and return its item number."""
        item = _Item(ItemType.HEADER, ItemStatus.DONE, header=replace(headinfo))
        with self._cond:
            return self._append(item)

    def replace_block(self, itemnum: int, blkinfo: BlockInfo, newstatus: int) -> None:
        """Replace the block of an item and set its new status."""
        with self._cond:
            for item in self._items:
                if item.itemnum == itemnum:
                    item.status = ItemStatus(newstatus)
                    item.block = replace(blkinfo)
                    self._cond.notify_all()
                    return
        raise ItemNotFound(f"no item with number {itemnum} in the queue")

    def clear(self) -> None:
        """Remove every item."""
        with self._cond:
            self._items.clear()
            self._blkcount = 0
            self._cond.notify_all()

    # ---- retrieval

    def get_first_block_todo(self) -> Tuple[int, BlockInfo]:
        """Claim the first TODO block, marking it PROGRESS.

        Waits until one is available; raises EndOfQueue once the queue is
        empty and finished.
        """
        with self._cond:
            while not self._end_locked():
                for item in self._items:
                    if item.type is ItemType.BLOCK and item.status == ItemStatus.TODO:
                        item.status = ItemStatus.PROGRESS
                        self._cond.notify_all()
                        return item.itemnum, replace(item.block)
                self._wait()
        raise EndOfQueue("queue is empty and finished")

    def _pop_head(self) -> _Item:
        item = self._items.popleft()
        if item.type is ItemType.BLOCK:
            self._blkcount -= 1
        self._cond.notify_all()
        return item

    def dequeue_first(self) -> Tuple[int, ItemType, Payload]:
        """Remove the first item once it is DONE.

        Returns the item number, its type and its block or header.
        """
        with self._cond:
            while not self._end_locked():
                if self._items and self._items[0].status == ItemStatus.DONE:
                    item = self._pop_head()
                    return item.itemnum, item.type, item.payload
                self._wait()
        raise EndOfQueue("queue is empty and finished")

    def _wait_head_done(self) -> _Item:
        while (
            not self._items or self._items[0].status != ItemStatus.DONE
        ) and not self._end_locked():
            self._wait()
        if self._end_locked():
            raise EndOfQueue("queue is empty and finished")
        return self._items[0]

    def dequeue_block(self) -> Tuple[int, BlockInfo]:
        """Remove the first item, which must be a finished block."""
        with self._cond:
            head = self._wait_head_done()
            if head.type is not ItemType.BLOCK:
                self._cond.notify_all()
                raise WrongItemType("wanted a block, found a header")
            item = self._pop_head()
            return item.itemnum, item.block

    def dequeue_header(self) -> Tuple[int, HeaderInfo]:
        """Remove the first item, which must be a header."""
        with self._cond:
            head = self._wait_head_done()
            if head.type is not ItemType.HEADER:
                self._cond.notify_all()
                raise WrongItemType("expected a header and found a block")
            item = self._pop_head()
            return item.itemnum, item.header

    def check_next_item(self) -> Tuple[ItemType, str]:
        """Report the type and magic of the first ready item without removing it.

        The magic is empty for blocks.
        """
        with self._cond:
            head = self._wait_head_done()
            if head.status != ItemStatus.DONE:
                self._cond.notify_all()
                raise ItemNotFound("first item is not ready")
            if head.type is ItemType.HEADER:
                return head.type, head.header.magic
            return head.type, ""

    def destroy_first_item(self) -> None:
        """Discard the first item once no worker is processing it."""
        with self._cond:
            while (
                not self._items or self._items[0].status == ItemStatus.PROGRESS
            ) and not self._end_locked():
                self._wait()
            if self._end_locked():
                raise EndOfQueue("queue is empty and finished")
            self._pop_head()