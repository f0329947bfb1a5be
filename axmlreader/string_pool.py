from typing import Iterator, Optional, Tuple

from loguru import logger

from .cursor import ByteCursor
from .errors import UnresolvedStringIndexError
from .internal_types import NO_INDEX, UTF8_FLAG


class StringBlock:
    """
    StringBlock is a CHUNK inside an AXML File: `ResStringPool_header`
    It contains all strings, which are used by referencing to ID's

    The strings are decoded once, when the block is created, and the block
    is read-only afterwards.

    See http://androidxref.com/9.0.0_r3/xref/frameworks/base/libs/androidfw/include/androidfw/ResourceTypes.h#436
    """

    def __init__(self, strings: Tuple[str, ...] = (), is_utf8: bool = False) -> None:
        self._strings = tuple(strings)
        self.m_isUTF8 = is_utf8

    @classmethod
    def read(cls, buff: ByteCursor) -> "StringBlock":
        """
        Decode a string pool chunk.

        :param buff: cursor set to the start of the chunk (its type field)
        :returns: the decoded StringBlock, the cursor stands somewhere inside
            the chunk afterwards
        """
        chunk_start = buff.tell()
        buff.read_u32()  # chunk type
        chunk_size = buff.read_u32()
        string_count = buff.read_u32()
        # Styles are not interpreted
        style_count = buff.read_u32()
        flags = buff.read_u32()
        # The string offset is counted from the beginning of the chunk
        strings_offset = buff.read_u32()
        styles_offset = buff.read_u32()
        is_utf8 = (flags & UTF8_FLAG) != 0

        logger.debug(
            "StringBlock: size={} stringCount={} styleCount={} flags=0x{:x} "
            "stringsOffset=0x{:x} stylesOffset=0x{:x}".format(
                chunk_size, string_count, style_count, flags,
                strings_offset, styles_offset,
            )
        )

        # Next, there is a list of offsets (4 byte each)
        offsets = [buff.read_u32() for _ in range(string_count)]

        decode = cls._decode8 if is_utf8 else cls._decode16
        strings = []
        for i, offset in enumerate(offsets):
            buff.seek(chunk_start + strings_offset + offset)
            strings.append(decode(buff))
            logger.debug(f"string[{i}]: {strings[-1]!r}")

        return cls(strings, is_utf8)

    def __repr__(self):
        return "<StringPool #strings={}, UTF8={}>".format(
            len(self._strings), self.m_isUTF8
        )

    def __getitem__(self, idx: int) -> str:
        """
        Returns the string at the index in the string table

        :raises UnresolvedStringIndexError: if there is no such string
        """
        if idx < 0 or idx >= len(self._strings):
            raise UnresolvedStringIndexError(idx, len(self._strings))
        return self._strings[idx]

    def __len__(self):
        return len(self._strings)

    def __iter__(self) -> Iterator[str]:
        return iter(self._strings)

    def get(self, idx: int) -> Optional[str]:
        """
        Like `pool[idx]`, but the "no string" index -1 gives None.

        :param idx: index in the string table, or -1
        :raises UnresolvedStringIndexError: for any other index outside the table
        """
        if idx == NO_INDEX:
            return None
        return self[idx]

    @staticmethod
    def _decode16(buff: ByteCursor) -> str:
        # The len is the string len in utf-16 units
        str_len = buff.read_u16()
        if str_len & 0x8000:
            str_len = ((str_len & 0x7FFF) << 16) | buff.read_u16()

        data = buff.read(str_len * 2)
        if buff.read_u16() != 0:
            logger.warning(
                "UTF-16 String is not null terminated! At offset=0x{:x}".format(
                    buff.tell() - 2
                )
            )
        return data.decode('utf-16-le', 'replace')

    @staticmethod
    def _decode8(buff: ByteCursor) -> str:
        # UTF-8 Strings contain two lengths, as they might differ:
        # 1) the UTF-16 length, 2) the utf-8 string length
        StringBlock._decode_length8(buff)
        encoded_bytes = StringBlock._decode_length8(buff)

        data = buff.read(encoded_bytes)
        if buff.read(1) != b"\x00":
            logger.warning(
                "UTF-8 String is not null terminated! At offset=0x{:x}".format(
                    buff.tell() - 1
                )
            )
        return data.decode('utf-8', 'replace')

    @staticmethod
    def _decode_length8(buff: ByteCursor) -> int:
        length = buff.read(1)[0]
        if length & 0x80:
            length = ((length & 0x7F) << 8) | buff.read(1)[0]
        return length
