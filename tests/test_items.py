import dataclasses

import pytest

from fsaqueue.items import (
    MAGIC_SIZE,
    BlockInfo,
    EndOfQueue,
    HeaderInfo,
    ItemNotFound,
    ItemStatus,
    ItemType,
    QueueError,
    WrongItemType,
)


def test_status_lookup_by_value():
    assert ItemStatus(3) is ItemStatus.DONE
    assert ItemStatus(0) is ItemStatus.NULL


def test_type_lookup_by_value():
    assert ItemType(1) is ItemType.BLOCK
    assert ItemType(2) is ItemType.HEADER


def test_block_defaults():
    blk = BlockInfo()
    assert blk.data == b""
    assert blk.realsize == 0
    assert blk.locked is False


def test_block_data_converted_to_bytes():
    blk = BlockInfo(data=bytearray(b"abc"), realsize=3)
    assert blk.data == b"abc"
    assert isinstance(blk.data, bytes)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"realsize": -1},
        {"arsize": 1 << 32},
        {"fsid": 1 << 16},
        {"compalgo": -5},
        {"offset": 1 << 64},
    ],
)
def test_block_rejects_out_of_range(kwargs):
    with pytest.raises(ValueError):
        BlockInfo(**kwargs)


def test_block_replace_copies_independently():
    blk = BlockInfo(data=b"xy", realsize=2, fsid=1)
    other = dataclasses.replace(blk, compsize=2)
    assert other.compsize == 2
    assert blk.compsize == 0
    assert other.data == blk.data


def test_header_magic_truncated():
    head = HeaderInfo(magic="ObJtXYZ", fsid=2)
    assert head.magic == "ObJt"
    assert len(head.magic) == MAGIC_SIZE


def test_header_magic_from_bytes():
    head = HeaderInfo(magic=b"ObJt")
    assert head.magic == "ObJt"


def test_header_rejects_bad_fsid():
    with pytest.raises(ValueError):
        HeaderInfo(magic="ObJt", fsid=-1)


def test_header_keeps_dico():
    marker = {"k": "v"}
    head = HeaderInfo(magic="ObJt", fsid=0, dico=marker)
    assert head.dico is marker


@pytest.mark.parametrize("exc", [EndOfQueue, ItemNotFound, WrongItemType])
def test_errors_are_caught_as_queue_errors(exc):
    err = exc("queue problem")
    with pytest.raises(QueueError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == "queue problem"


def test_not_found_is_caught_as_lookup_error():
    err = ItemNotFound("item 7 not found")
    with pytest.raises(LookupError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == "item 7 not found"