import struct

import pytest

from axmlreader.errors import UnsupportedDimensionUnitError
from axmlreader.internal_types import (
    TYPE_ATTRIBUTE,
    TYPE_DIMENSION,
    TYPE_FLOAT,
    TYPE_FRACTION,
    TYPE_INT_BOOLEAN,
    TYPE_INT_COLOR_ARGB8,
    TYPE_INT_COLOR_RGB8,
    TYPE_INT_DEC,
    TYPE_INT_HEX,
    TYPE_REFERENCE,
    TYPE_STRING,
)
from axmlreader.values import format_value


def f32(value):
    return struct.unpack("<L", struct.pack("<f", value))[0]


@pytest.mark.parametrize(
    "_type, data, expected",
    [
        (TYPE_REFERENCE, 0x7F030001, "@id/0x7F030001"),
        (TYPE_ATTRIBUTE, 0x01010000, "?id/0x01010000"),
        (TYPE_FLOAT, f32(1.5), "1.5"),
        (TYPE_FLOAT, f32(0.1), "0.1"),
        (TYPE_FLOAT, f32(2.0), "2.0"),
        (TYPE_FLOAT, f32(-0.25), "-0.25"),
        (TYPE_DIMENSION, 0x00012C01, "300dp"),
        (TYPE_DIMENSION, 0x00001000, "16px"),
        (TYPE_DIMENSION, 0x00000E02, "14sp"),
        (TYPE_DIMENSION, 0x00000105, "1mm"),
        (TYPE_DIMENSION, 0xFFFFFF01, "-1dp"),
        (TYPE_FRACTION, f32(0.5), "0.50%"),
        (TYPE_INT_DEC, 42, "42"),
        (TYPE_INT_DEC, 0xFFFFFFFF, "-1"),
        (TYPE_INT_HEX, 0x30, "0x00000030"),
        (TYPE_INT_BOOLEAN, 0x00000000, "false"),
        (TYPE_INT_BOOLEAN, 0x00000001, "true"),
        (TYPE_INT_BOOLEAN, 0xFFFFFFFF, "true"),
        (TYPE_INT_COLOR_ARGB8, 0xFF00FF00, "#FF00FF00"),
        (TYPE_INT_COLOR_RGB8, 0x00123456, "#00123456"),
    ],
)
def test_known_types(_type, data, expected):
    assert format_value(_type, data) == expected


def test_unknown_type_fallback():
    assert format_value(0x07000008, 0x10) == "<type:07000008>/0x00000010"
    assert format_value(0xFFFFFFFF, 0) == "<type:FFFFFFFF>/0x00000000"


def test_string_type():
    assert format_value(TYPE_STRING, 3) == "<type:03000008>/0x00000003"
    assert format_value(TYPE_STRING, 3, lambda ix: "s%d" % ix) == "s3"


def test_unknown_dimension_unit():
    with pytest.raises(UnsupportedDimensionUnitError) as e:
        format_value(TYPE_DIMENSION, 0x00010006)
    assert e.value.unit == 6


def test_float_special_values():
    assert format_value(TYPE_FLOAT, 0x7F800000) == "inf"
    assert format_value(TYPE_FLOAT, 0xFF800000) == "-inf"
    assert format_value(TYPE_FLOAT, 0x7FC00000) == "nan"
    # largest finite float32
    assert float(format_value(TYPE_FLOAT, 0x7F7FFFFF)) == pytest.approx(3.4028235e38)


def test_every_type_tag_gives_a_string():
    for data_type in range(0x100):
        for size in (0x00, 0x08, 0xFF):
            _type = (data_type << 24) | size
            for data in (0, 1, 0x7FFFFFFF, 0x80000000):
                if _type == TYPE_DIMENSION and data & 0xFF >= 6:
                    continue
                assert isinstance(format_value(_type, data), str)


@pytest.mark.parametrize(
    "value, expected",
    [
        (1e10, "10000000000.0"),
        (1e20, "1e+20"),
        (1e-5, "1e-05"),
        (-2.5e-7, "-2.5e-07"),
    ],
)
def test_float_exponent_range_uses_python_repr(value, expected):
    assert format_value(TYPE_FLOAT, f32(value)) == expected
