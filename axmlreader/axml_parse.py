# Based on androguard's code https://androguard.readthedocs.io/en/latest/intro/axml.html

from struct import unpack
from typing import BinaryIO, Iterator, NamedTuple, Optional

from loguru import logger

from .cursor import ByteCursor
from .errors import (
    MalformedChunkError,
    MalformedHeaderError,
    OutOfBoundsError,
    UnknownChunkTypeError,
)
from .events import (
    Attribute,
    ContentHandler,
    EndElement,
    EndNamespace,
    Event,
    StartElement,
    StartNamespace,
    Text,
    replay,
)
from .internal_types import (
    ATTRIBUTE_SIZE,
    AXML_MAGIC,
    CHUNK_HEADER_SIZE,
    CHUNK_NAMES,
    RES_STRING_POOL_TYPE,
    RES_XML_CDATA_TYPE,
    RES_XML_END_ELEMENT_TYPE,
    RES_XML_END_NAMESPACE_TYPE,
    RES_XML_RESOURCE_MAP_TYPE,
    RES_XML_START_ELEMENT_TYPE,
    RES_XML_START_NAMESPACE_TYPE,
    TYPE_STRING,
)
from .namespaces import NamespaceTable
from .string_pool import StringBlock
from .values import format_value


class ChunkHeader(NamedTuple):
    """
    The generic header every chunk starts with: type and total size.

    The size includes the header itself, so the next chunk always starts at
    `start + size`, no matter how much of the chunk was understood.
    """

    start: int
    type: int
    size: int

    @property
    def end(self) -> int:
        return self.start + self.size

    @classmethod
    def peek(cls, buff: ByteCursor, limit: int) -> "ChunkHeader":
        """
        Read the header at the current position without consuming it.

        :param buff: the cursor, set to the start of a chunk
        :param limit: the offset where the document ends
        :raises MalformedChunkError: if the size can not even hold the header
        :raises OutOfBoundsError: if the chunk reaches past `limit`
        """
        start = buff.tell()
        buff.mark()
        try:
            chunk_type = buff.read_u32()
            size = buff.read_u32()
        finally:
            buff.reset()

        if size < CHUNK_HEADER_SIZE:
            raise MalformedChunkError(
                "declared chunk size {} is smaller than required size of {}! Offset=0x{:08x}".format(
                    size, CHUNK_HEADER_SIZE, start
                )
            )
        if start + size > limit:
            raise OutOfBoundsError(
                "chunk at 0x{:08x} with size {} ends after the document end 0x{:08x}".format(
                    start, size, limit
                )
            )
        return cls(start, chunk_type, size)

    def __repr__(self):
        return "<ChunkHeader idx='0x{:08x}' type='{}' size='{}'>".format(
            self.start, CHUNK_NAMES.get(self.type, "0x{:08x}".format(self.type)), self.size
        )


class AXMLParser:
    """
    `AXMLParser` reads through all chunks in the AXML file
    and produces one event per XML node, in document order.

    An AXML file is a file which contains multiple chunks of data.
    It starts with the magic `0x00080003` and the total file size, followed
    by the string pool, an optional resource map and the XML node chunks.

    The parser is an iterator: events are decoded lazily, one chunk at a time.
    It can not be restarted, create a new parser to read the document again.
    String pool, namespace table and cursor belong to this parser only.

    Any problem aborts the parse by raising a subclass of
    [ResParserError][axmlreader.errors.ResParserError].

    :param raw_buff: the complete document
    :param skip_unknown_chunks: skip chunks of unknown type by their declared
        size instead of failing with
        [UnknownChunkTypeError][axmlreader.errors.UnknownChunkTypeError]
    :raises MalformedHeaderError: if the magic is wrong
    :raises OutOfBoundsError: if the declared file size is larger than the buffer
    """

    def __init__(self, raw_buff: bytes, skip_unknown_chunks: bool = False) -> None:
        logger.debug("AXMLParser")

        self.skip_unknown_chunks = skip_unknown_chunks
        self.sb = StringBlock()
        self._sb_seen = False
        self.namespaces = NamespaceTable()
        # Stores resource ID mappings, if any
        self.resource_ids = []
        self.line_number = -1

        buff_size = len(raw_buff)
        if buff_size < CHUNK_HEADER_SIZE:
            raise MalformedHeaderError(
                "Filesize is too small to be a valid AXML file! Filesize: {}".format(
                    buff_size
                )
            )

        magic, self.filesize = unpack('<LL', bytes(raw_buff[:CHUNK_HEADER_SIZE]))
        logger.debug(f"magic: 0x{magic:08x}, filesize: {self.filesize}, buff_size: {buff_size}")
        if magic != AXML_MAGIC:
            raise MalformedHeaderError(
                "This does not look like an AXML file. Magic is 0x{:08x}, expected 0x{:08x}".format(
                    magic, AXML_MAGIC
                )
            )
        if self.filesize < CHUNK_HEADER_SIZE:
            raise MalformedHeaderError(
                "Declared filesize {} can not even hold the file header".format(
                    self.filesize
                )
            )
        if self.filesize > buff_size:
            raise OutOfBoundsError(
                "Declared filesize does not match real size: {} vs {}".format(
                    self.filesize, buff_size
                )
            )
        if self.filesize < buff_size:
            # The file can still be parsed up to the point where the chunk should end.
            logger.warning(
                "Declared filesize ({}) is smaller than total file size ({}). "
                "Was something appended to the file? Trying to parse it anyways.".format(
                    self.filesize, buff_size
                )
            )
            raw_buff = memoryview(raw_buff)[:self.filesize]

        self.buff = ByteCursor(raw_buff)
        self.buff.seek(CHUNK_HEADER_SIZE)

        self._decoders = {
            RES_STRING_POOL_TYPE: self._parse_string_pool,
            RES_XML_RESOURCE_MAP_TYPE: self._parse_resource_map,
            RES_XML_START_NAMESPACE_TYPE: self._parse_start_namespace,
            RES_XML_END_NAMESPACE_TYPE: self._parse_end_namespace,
            RES_XML_START_ELEMENT_TYPE: self._parse_start_element,
            RES_XML_END_ELEMENT_TYPE: self._parse_end_element,
            RES_XML_CDATA_TYPE: self._parse_text,
        }
        self._events = self._iter_events()

    @classmethod
    def from_stream(cls, fp: BinaryIO, **kwargs) -> "AXMLParser":
        """
        Read exactly one document from a binary stream and create a parser for it.

        The 8 byte file header is read first, then the rest of the declared
        file size. Nothing after the document is consumed.

        :param fp: the stream, e.g. an entry opened from the APK
        :raises MalformedHeaderError: if the magic is wrong or the header incomplete
        :raises OutOfBoundsError: if the stream ends before the declared size
        """
        header = fp.read(CHUNK_HEADER_SIZE)
        if len(header) < CHUNK_HEADER_SIZE:
            raise MalformedHeaderError(
                "Stream ended inside the file header after {} bytes".format(len(header))
            )
        magic, filesize = unpack('<LL', header)
        if magic != AXML_MAGIC:
            raise MalformedHeaderError(
                "This does not look like an AXML file. Magic is 0x{:08x}, expected 0x{:08x}".format(
                    magic, AXML_MAGIC
                )
            )
        body = fp.read(max(filesize - CHUNK_HEADER_SIZE, 0))
        return cls(header + body, **kwargs)

    def __repr__(self):
        return "<AXMLParser filesize={} pos=0x{:08x} {}>".format(
            self.filesize, self.buff.tell(), self.sb
        )

    @property
    def string_pool(self) -> StringBlock:
        return self.sb

    def __iter__(self) -> Iterator[Event]:
        return self

    def __next__(self) -> Event:
        return next(self._events)

    def _iter_events(self) -> Iterator[Event]:
        while self.buff.tell() < self.filesize:
            event = self.read_chunk()
            if event is not None:
                yield event
        if len(self.namespaces) > 0:
            logger.warning("Not all namespace mappings were closed! Malformed AXML?")

    def read_chunk(self) -> Optional[Event]:
        """
        Decode the chunk at the current position.

        Afterwards the cursor stands at the end of the chunk as declared by
        its size field, regardless of how many bytes the decoder consumed.

        :returns: the event of the chunk, or None for chunks without event
            (string pool, resource map, skipped chunks)
        """
        h = ChunkHeader.peek(self.buff, self.filesize)
        logger.debug("NEXT HEADER {}".format(h))

        decoder = self._decoders.get(h.type)
        if decoder is None:
            if not self.skip_unknown_chunks:
                raise UnknownChunkTypeError(h.type, h.start)
            logger.warning(
                "Unknown chunk type: 0x{:08x}, skipping {} bytes.".format(
                    h.type, h.size
                )
            )
            event = None
        else:
            event = decoder(h)

        self.buff.seek(h.end)
        return event

    def _read_node_header(self) -> None:
        # chunk type and size were already taken from the ChunkHeader
        self.buff.read_u32()
        self.buff.read_u32()
        # Line Number of the source file, only used as meta information
        self.line_number = self.buff.read_u32()
        # Comment_Index (usually 0xFFFFFFFF)
        self.buff.read_u32()

    def _string(self, idx: int) -> str:
        s = self.sb.get(idx)
        return '' if s is None else s

    def _parse_string_pool(self, h: ChunkHeader) -> None:
        if self._sb_seen:
            logger.warning(
                "Second string pool at 0x{:08x} ignored, the pool is only read once".format(
                    h.start
                )
            )
            return None
        self.sb = StringBlock.read(self.buff)
        self._sb_seen = True
        logger.debug("STRING_POOL {}".format(self.sb))
        return None

    def _parse_resource_map(self, h: ChunkHeader) -> None:
        # Special chunk: Resource Map. Maps string ids to system resource ids,
        # which are not resolved here.
        self.buff.read_u32()
        self.buff.read_u32()
        for _ in range((h.size - CHUNK_HEADER_SIZE) // 4):
            self.resource_ids.append(self.buff.read_u32())
        logger.debug(f"AXML contains a RESOURCE MAP with {len(self.resource_ids)} ids")
        return None

    def _parse_start_namespace(self, h: ChunkHeader) -> StartNamespace:
        self._read_node_header()
        prefix = self.sb.get(self.buff.read_i32())
        uri = self._string(self.buff.read_i32())

        logger.debug(
            "Start of Namespace mapping: prefix '{}' --> uri '{}'".format(prefix, uri)
        )
        self.namespaces.push(uri, prefix)
        return StartNamespace(prefix, uri)

    def _parse_end_namespace(self, h: ChunkHeader) -> EndNamespace:
        # END_PREFIX contains again prefix and uri field
        self._read_node_header()
        prefix = self.sb.get(self.buff.read_i32())
        uri = self._string(self.buff.read_i32())

        logger.debug(
            "End of Namespace mapping: prefix '{}' --> uri '{}'".format(prefix, uri)
        )
        self.namespaces.pop(uri, prefix)
        return EndNamespace(prefix)

    def _parse_start_element(self, h: ChunkHeader) -> StartElement:
        # The TAG consists of some fields:
        # * (chunk_size, line_number, comment_index - we read before)
        # * namespace_uri
        # * name
        # * flags
        # * attribute_count
        # * class_attribute
        # After that, there is the list of attributes, 20 bytes each
        self._read_node_header()
        uri = self._string(self.buff.read_i32())
        name = self._string(self.buff.read_i32())
        self.buff.read_u32()  # flags
        # The upper 16 bits hold the index of the id attribute
        attribute_count = self.buff.read_u32() & 0xFFFF
        self.buff.read_i32()  # class attribute
        logger.debug(f"START_TAG: uri='{uri}' name='{name}' attributes={attribute_count}")

        attributes = []
        for i in range(attribute_count):
            record = self.buff.tell()
            attributes.append(self._parse_attribute())
            self.buff.seek(record + ATTRIBUTE_SIZE)
            logger.debug(f"attribute[{i}]: {attributes[-1]}")

        return StartElement(
            uri, name, self.namespaces.qualified_name(uri, name), tuple(attributes)
        )

    def _parse_attribute(self) -> Attribute:
        # Each Attribute contains:
        # * Namespace URI (String ID)
        # * Name (String ID)
        # * Value (String ID, only used by string values)
        # * Type
        # * Data
        uri = self._string(self.buff.read_i32())
        name = self._string(self.buff.read_i32())
        raw_value = self.buff.read_i32()
        value_type = self.buff.read_u32()
        data = self.buff.read_u32()

        if value_type == TYPE_STRING:
            value = self._string(raw_value)
        else:
            value = format_value(value_type, data)
        return Attribute(
            uri, name, self.namespaces.qualified_name(uri, name), value, value_type, data
        )

    def _parse_end_element(self, h: ChunkHeader) -> EndElement:
        self._read_node_header()
        uri = self._string(self.buff.read_i32())
        name = self._string(self.buff.read_i32())
        logger.debug(f"END_TAG: uri='{uri}' name='{name}'")
        return EndElement(uri, name, self.namespaces.qualified_name(uri, name))

    def _parse_text(self, h: ChunkHeader) -> Text:
        # The CDATA field is like an attribute.
        # It contains an index into the String pool
        # as well as a typed value, which is ignored.
        self._read_node_header()
        text = self._string(self.buff.read_i32())
        self.buff.read_u32()
        self.buff.read_u32()
        logger.debug(f"found a CDATA Chunk: {text!r}")
        return Text(text)


def iter_events(raw_buff: bytes, **kwargs) -> AXMLParser:
    """
    Decode `raw_buff` lazily, see [AXMLParser][axmlreader.axml_parse.AXMLParser]
    """
    return AXMLParser(raw_buff, **kwargs)


def parse(raw_buff: bytes, handler: ContentHandler, **kwargs) -> None:
    """
    Decode `raw_buff` and push every event into `handler` as soon as it is decoded.
    """
    replay(AXMLParser(raw_buff, **kwargs), handler)
