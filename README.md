# fsaqueue

Building blocks for a multi-threaded archiving pipeline. A reader thread
fills a queue with file blocks and headers. Worker threads take blocks from
the queue, process them and put them back. A writer thread removes finished
items in their original order.

## Modules

- `fsaqueue.queue.BlockQueue(blkmax)` is a thread-safe queue of blocks and
  headers. Items keep their insertion order and each gets an item number,
  counting up from 1.
  - `add_block(blkinfo, status)`, `add_header(dico, magic, fsid)` and
    `add_header_info(headinfo)` append an item and return its number. Adding
    waits while the queue holds more than `blkmax` blocks. Adding to a queue
    marked as finished raises `EndOfQueue`.
  - `get_first_block_todo()` claims the first `TODO` block for a worker and
    marks it `PROGRESS`.
  - `replace_block(itemnum, blkinfo, newstatus)` stores the processed block.
    It raises `ItemNotFound` for an unknown number.
  - `dequeue_first()`, `dequeue_block()` and `dequeue_header()` remove the
    first item once it is `DONE`. The last two raise `WrongItemType` when the
    first item is of the other kind.
  - `check_next_item()` reports the type and magic of the first ready item
    without removing it.
  - `destroy_first_item()` discards the first item once no worker is
    processing it.
  - `set_end_of_queue(state)` and `is_end_of_queue()` manage the end flag.
    Once the flag is set and the queue is empty, waiting calls raise
    `EndOfQueue`.
  - `count_status(status)`, `count_items_todo()`, `len()`, `block_count` and
    `clear()` report on the queue or empty it.
- `fsaqueue.items` holds the `BlockInfo` and `HeaderInfo` records, the
  `ItemType` enum (`BLOCK`, `HEADER`), the `ItemStatus` enum (`TODO`,
  `PROGRESS`, `DONE`) and the exceptions `QueueError`, `EndOfQueue`,
  `ItemNotFound` and `WrongItemType`. `BlockInfo` and `HeaderInfo` reject
  numeric fields that are outside their unsigned ranges.
- `fsaqueue.regmulti.RegMulti(max_block_size, max_items=None)` packs the data
  of many small files into one block.
  - `add_file(header, data)` and `has_space_for(filesize)` build up the
    block.
  - `enqueue(queue, fsid)` writes the file count and each file's offset into
    its header. It then appends every header with magic `"ObJt"`, followed by
    the data block as a `TODO` block.
  - On restore, `add_header`, `set_data_block` and `get_file(index)` split
    the block back into files.
  - A header is a mutable mapping that holds the file size under `SIZE_KEY`.
  - Failures raise `RegMultiError`.
- `fsaqueue.strdico.StringDict(valid_keys=None)` parses option strings such
  as `"id=0,dest=/dev/sda1,mkfs=ext4"`. Pairs may be separated by `,`, `;`,
  tab or newline. It has these methods:
  - `set_valid_keys`
  - `parse`
  - `set_value`
  - `get_string`, which raises `KeyError` for a missing key
  - `get_int`, which accepts signed 64-bit decimal values only
  - `dump`
- `fsaqueue.strlist.StringList` is an ordered list of unique, non-empty
  strings. It has `add`, `remove`, `clear`, `split(text, sep)`, `merge(sep)`
  and `show`. It supports `len()`, iteration, indexing and `in`.
- `fsaqueue.syncthread.SyncState(blkmax, max_filesystems)` is the state the
  threads share:
  - a `BlockQueue` as `queue`
  - an `fsbitmap` that selects filesystems
  - a stop-filling flag
  - an abort flag, with `install_signal_handlers()` making SIGINT and SIGTERM
    set it
  - a counter of running secondary threads, which the `secondary_thread()`
    context manager also maintains

## Example

```python
from fsaqueue.items import BlockInfo, ItemStatus
from fsaqueue.queue import BlockQueue

queue = BlockQueue(blkmax=8)
queue.add_block(BlockInfo(data=b"hello", realsize=5), ItemStatus.TODO)

itemnum, block = queue.get_first_block_todo()   # worker thread
queue.replace_block(itemnum, block, ItemStatus.DONE)

queue.set_end_of_queue(True)                    # producer is finished
print(queue.dequeue_first())                    # writer thread
```

Parsing options:

```python
from fsaqueue.strdico import StringDict

opts = StringDict(valid_keys="id,dest,mkfs")
opts.parse("id=0,dest=/dev/sda1")
print(opts.get_int("id"), opts.get_string("dest"))
```

## What this package does not do

This package provides only the coordination pieces. It does not include:

- compression or encryption of blocks
- checksums
- reading or writing archive files or volumes
- scanning of filesystems
- a command-line program

The worker, reader and writer threads that use the queue are up to the
caller.

## Tests

```
pip install -e ".[test]"
pytest
```