import struct

import pytest

from axmlreader.cursor import ByteCursor
from axmlreader.errors import OutOfBoundsError


def test_little_endian_reads():
    buff = ByteCursor(struct.pack("<HLlf", 0x1234, 0xDEADBEEF, -2, 1.5))
    assert buff.read_u16() == 0x1234
    assert buff.read_u32() == 0xDEADBEEF
    assert buff.read_i32() == -2
    assert buff.read_f32() == 1.5
    assert buff.remaining() == 0


def test_peek_does_not_consume():
    buff = ByteCursor(struct.pack("<LL", 0x00100102, 24))
    assert buff.peek_u32() == 0x00100102
    assert buff.tell() == 0
    assert buff.read_u32() == 0x00100102
    assert buff.tell() == 4


def test_read_past_end_keeps_position():
    buff = ByteCursor(b"\x01\x02\x03")
    buff.read_u16()
    with pytest.raises(OutOfBoundsError):
        buff.read_u32()
    assert buff.tell() == 2
    with pytest.raises(OutOfBoundsError):
        buff.read(2)


def test_seek_bounds():
    buff = ByteCursor(b"\x00" * 8)
    buff.seek(8)
    assert buff.remaining() == 0
    with pytest.raises(OutOfBoundsError):
        buff.seek(9)
    with pytest.raises(OutOfBoundsError):
        buff.seek(-1)
    assert buff.tell() == 8
