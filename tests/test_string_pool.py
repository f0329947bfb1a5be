import pytest

import axml_builder as ab
from axmlreader.cursor import ByteCursor
from axmlreader.errors import UnresolvedStringIndexError
from axmlreader.string_pool import StringBlock

STRINGS = ["android", "", "héllo", "日本語", "\U0001F600 smile", "manifest"]


def read_pool(chunk):
    return StringBlock.read(ByteCursor(chunk))


@pytest.mark.parametrize("reverse_layout", [False, True])
def test_every_index_returns_its_string(reverse_layout):
    sb = read_pool(ab.string_pool(STRINGS, reverse_layout=reverse_layout))
    assert len(sb) == len(STRINGS)
    for i, s in enumerate(STRINGS):
        assert sb[i] == s
    assert list(sb) == STRINGS


def test_utf8_pool():
    sb = read_pool(ab.string_pool(STRINGS, utf8=True))
    assert sb.m_isUTF8
    assert list(sb) == STRINGS


def test_long_string_uses_extended_length():
    long = "a" * 0x9000
    sb = read_pool(ab.string_pool(["x", long]))
    assert sb[1] == long


def test_pool_offset_relative_to_chunk():
    # the chunk does not start at offset 0 inside a real document
    chunk = ab.string_pool(["a", "b"])
    buff = ByteCursor(b"\xff" * 12 + chunk)
    buff.seek(12)
    assert list(StringBlock.read(buff)) == ["a", "b"]


def test_empty_pool():
    sb = read_pool(ab.string_pool([]))
    assert len(sb) == 0
    assert sb.get(-1) is None


def test_out_of_range_index():
    sb = read_pool(ab.string_pool(["a"]))
    assert sb.get(0) == "a"
    assert sb.get(-1) is None
    with pytest.raises(UnresolvedStringIndexError) as e:
        sb.get(1)
    assert e.value.index == 1
    assert e.value.size == 1
    with pytest.raises(UnresolvedStringIndexError):
        sb[-2]
