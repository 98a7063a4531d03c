"""State shared between the archiving threads."""

from __future__ import annotations

import signal
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from fsaqueue.queue import BlockQueue


class SyncState:
    """The shared queue, the filesystem selection and the stop/abort flags.

    ``fsbitmap[fsid]`` is 1 for each filesystem whose data the reader must
    pass on and 0 for each it must skip.
    """

    def __init__(self, blkmax: int, max_filesystems: int) -> None:
        self.queue = BlockQueue(blkmax)
        self.fsbitmap = bytearray(max_filesystems)
        self._stop_fill = threading.Event()
        self._aborted = threading.Event()
        self._lock = threading.Lock()
        self._secthreads = 0

    def set_stop_fill_queue(self) -> None:
        """Ask the thread filling the queue to stop."""
        self._stop_fill.set()

    def stop_fill_queue(self) -> bool:
        """True once the queue filler has been asked to stop."""
        return self._stop_fill.is_set()

    def inc_secondary_threads(self) -> None:
        """Count one more running secondary thread."""
        with self._lock:
            self._secthreads += 1

    def dec_secondary_threads(self) -> None:
        """Count one fewer running secondary thread."""
        with self._lock:
            self._secthreads -= 1

    def secondary_threads(self) -> int:
        """Number of secondary threads running."""
        with self._lock:
            return self._secthreads

    def abort(self) -> None:
        """Mark the operation as aborted by the user."""
        self._aborted.set()

    def aborted(self) -> bool:
        """True once an abort was requested or SIGINT/SIGTERM received."""
        return self._aborted.is_set()

    def interrupted(self) -> bool:
        """True if aborted or if the queue filler was asked to stop."""
        return self.aborted() or self.stop_fill_queue()

    def install_signal_handlers(self) -> Dict[int, Any]:
        """Make SIGINT and SIGTERM abort; return the handlers they replace."""

        def _handler(signum: int, frame: Any) -> None:
            self.abort()

        previous = {}
        for signum in (signal.SIGINT, signal.SIGTERM):
            previous[signum] = signal.signal(signum, _handler)
        return previous

    @contextmanager
    def secondary_thread(self) -> Iterator["SyncState"]:
        """Count the enclosed block as a running secondary thread."""
        self.inc_secondary_threads()
        try:
            yield self
        finally:
            self.dec_secondary_threads()