import io

import pytest

from fsaqueue.strlist import StringList


def test_add_keeps_order():
    sl = StringList()
    sl.add("one")
    sl.add("two")
    sl.add("three")
    assert list(sl) == ["one", "two", "three"]
    assert len(sl) == 3


def test_constructor_items():
    sl = StringList(["a", "b"])
    assert list(sl) == ["a", "b"]


def test_add_duplicate_rejected():
    sl = StringList(["a"])
    with pytest.raises(ValueError):
        sl.add("a")
    assert len(sl) == 1


def test_add_empty_rejected():
    sl = StringList()
    with pytest.raises(ValueError):
        sl.add("")
    assert len(sl) == 0


def test_contains():
    sl = StringList(["x", "y"])
    assert "x" in sl
    assert "z" not in sl


def test_getitem():
    sl = StringList(["a", "b", "c"])
    assert sl[0] == "a"
    assert sl[2] == "c"
    with pytest.raises(IndexError):
        sl[3]


@pytest.mark.parametrize("target", ["a", "b", "c"])
def test_remove_any_position(target):
    sl = StringList(["a", "b", "c"])
    sl.remove(target)
    assert target not in sl
    assert len(sl) == 2


def test_remove_missing():
    sl = StringList(["a"])
    with pytest.raises(ValueError):
        sl.remove("b")
    with pytest.raises(ValueError):
        StringList().remove("a")


def test_clear():
    sl = StringList(["a", "b"])
    sl.clear()
    assert len(sl) == 0
    assert list(sl) == []


def test_merge_and_split_round_trip():
    sl = StringList(["sda1", "sda2", "sdb1"])
    joined = sl.merge(",")
    other = StringList()
    other.split(joined, ",")
    assert list(other) == list(sl)


def test_merge_empty():
    assert StringList().merge(",") == ""


def test_split_skips_empty_tokens():
    sl = StringList(["old"])
    sl.split(",a,,b,", ",")
    assert list(sl) == ["a", "b"]


def test_split_duplicate_raises():
    sl = StringList()
    with pytest.raises(ValueError):
        sl.split("a:b:a", ":")


def test_show_items():
    buf = io.StringIO()
    StringList(["a", "b"]).show(buf)
    assert buf.getvalue() == "item[0]: [a]\nitem[1]: [b]\n"


def test_show_empty():
    buf = io.StringIO()
    StringList().show(buf)
    assert buf.getvalue() == "list is empty"


def test_show_defaults_to_stdout(capsys):
    StringList(["q"]).show()
    assert capsys.readouterr().out == "item[0]: [q]\n"