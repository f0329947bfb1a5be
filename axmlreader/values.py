from struct import pack, unpack
from typing import Callable, Optional

from loguru import logger

from .errors import UnsupportedDimensionUnitError
from .internal_types import (
    DIMENSION_UNITS,
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


def _fallback(_type: int, _data: int) -> str:
    return "<type:{:08X}>/0x{:08X}".format(_type, _data)


def _to_signed(x: int) -> int:
    return x - 0x100000000 if x > 0x7FFFFFFF else x


def _to_float(x: int) -> float:
    return unpack("<f", pack("<L", x))[0]


def format_float(x: int) -> str:
    """
    Render the 32 bit float stored in `x` with the fewest digits that still
    read back as the same float32, e.g. `0.1` instead of `0.10000000149011612`.
    """
    value = _to_float(x)
    if value != value or value in (float("inf"), float("-inf")):
        return repr(value)
    for precision in range(1, 10):
        text = "{:.{}g}".format(value, precision)
        try:
            packed = pack("<f", float(text))
        except OverflowError:
            continue
        if packed == pack("<L", x):
            return repr(float(text))
    return repr(value)


def format_dimension(x: int) -> str:
    unit = x & 0xFF
    if unit >= len(DIMENSION_UNITS):
        raise UnsupportedDimensionUnitError(unit)
    return "{}{}".format(_to_signed(x) >> 8, DIMENSION_UNITS[unit])


def format_value(
    _type: int, _data: int, lookup_string: Optional[Callable[[int], str]] = None
) -> str:
    """
    Format a value based on type and data.
    By default, no strings are looked up and string values are rendered
    like an unknown type.
    You need to define `lookup_string` in order to actually lookup strings from
    the string table.

    Unknown types never raise, they are rendered as `<type:TTTTTTTT>/0xDDDDDDDD`.
    The only failure is a dimension with an unknown unit.

    :param _type: The full 32 bit type tag of the value
    :param _data: The 32 bit data of the value
    :param lookup_string: A function how to resolve strings from integer IDs
    :raises UnsupportedDimensionUnitError: if a dimension has no known unit
    :returns: the formatted string
    """
    _type &= 0xFFFFFFFF
    _data &= 0xFFFFFFFF
    logger.debug(f"format_value: type=0x{_type:08x} data=0x{_data:08x}")

    if _type == TYPE_STRING:
        if lookup_string is None:
            return _fallback(_type, _data)
        return lookup_string(_data)

    elif _type == TYPE_REFERENCE:
        return "@id/0x{:08X}".format(_data)

    elif _type == TYPE_ATTRIBUTE:
        return "?id/0x{:08X}".format(_data)

    elif _type == TYPE_FLOAT:
        return format_float(_data)

    elif _type == TYPE_DIMENSION:
        return format_dimension(_data)

    elif _type == TYPE_FRACTION:
        return "%.2f%%" % _to_float(_data)

    elif _type == TYPE_INT_DEC:
        return "%d" % _to_signed(_data)

    elif _type == TYPE_INT_HEX:
        return "0x%08X" % _data

    elif _type == TYPE_INT_BOOLEAN:
        if _data == 0:
            return "false"
        return "true"

    elif _type in (TYPE_INT_COLOR_ARGB8, TYPE_INT_COLOR_RGB8):
        return "#%08X" % _data

    return _fallback(_type, _data)
