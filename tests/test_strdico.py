import io

import pytest

from fsaqueue.strdico import StringDict


def test_documented_example():
    d = StringDict()
    d.set_valid_keys("name,phone,fax")
    d.parse("name=john,phone=[phone],fax=")
    d.parse("phone=[phone2]")
    assert d.get_string("name") == "john"
    assert d.get_string("phone") == "[phone2]"
    assert d.get_string("fax") == ""


def test_other_delimiters_and_empty_tokens():
    d = StringDict()
    d.parse("a=1;b=2\tc=3\n,,d=4")
    assert [d.get_string(k) for k in "abcd"] == ["1", "2", "3", "4"]
    assert len(d) == 4


def test_value_may_contain_equals():
    d = StringDict()
    d.parse("dest=/dev/sda1=x")
    assert d.get_string("dest") == "/dev/sda1=x"


def test_missing_equals():
    d = StringDict()
    with pytest.raises(ValueError):
        d.parse("id=0,broken")
    assert d.get_string("id") == "0"


def test_key_too_long():
    d = StringDict()
    with pytest.raises(ValueError):
        d.parse("k" * 1024 + "=v")
    d.parse("k" * 1023 + "=v")
    assert d.get_string("k" * 1023) == "v"


def test_value_truncated():
    d = StringDict()
    d.parse("k=" + "v" * 2000)
    assert d.get_string("k") == "v" * 1023


def test_invalid_key_rejected():
    d = StringDict("id;dest")
    with pytest.raises(ValueError):
        d.set_value("mkfs", "ext4")
    assert "mkfs" not in d
    d.set_value("dest", "/dev/sda1")
    assert d.get_string("dest") == "/dev/sda1"


def test_constructor_valid_keys():
    d = StringDict("id")
    with pytest.raises(ValueError):
        d.parse("other=1")


def test_missing_key():
    with pytest.raises(KeyError):
        StringDict().get_string("nope")
    with pytest.raises(KeyError):
        StringDict().get_int("nope")


@pytest.mark.parametrize(
    "text, expected",
    [("42", 42), ("-7", -7), ("+3", 3), (" 5", 5), ("9223372036854775807", 9223372036854775807)],
)
def test_get_int_valid(text, expected):
    d = StringDict()
    d.set_value("n", text)
    assert d.get_int("n") == expected


@pytest.mark.parametrize(
    "text", ["", "abc", "5 ", "12x", "1_000", "9223372036854775808", "   "]
)
def test_get_int_invalid(text):
    d = StringDict()
    d.set_value("n", text)
    with pytest.raises(ValueError):
        d.get_int("n")


def test_dump_newest_first():
    d = StringDict()
    d.parse("a=1,b=2")
    d.set_value("a", "3")
    out = io.StringIO()
    d.dump(out)
    assert out.getvalue() == "item[0]: key=[b] value=[2]\nitem[1]: key=[a] value=[3]\n"