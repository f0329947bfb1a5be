class ResParserError(Exception):
    """Exception for the parsers"""

    pass


class MalformedHeaderError(ResParserError):
    """The document does not start with the AXML magic"""

    pass


class MalformedChunkError(ResParserError):
    """A chunk declares a size smaller than its own header"""

    pass


class OutOfBoundsError(ResParserError):
    """A read or seek would leave the buffer"""

    pass


class UnknownChunkTypeError(ResParserError):
    """
    A chunk type which is neither an XML chunk nor the resource map.

    The layout of such a chunk is unknown, so it can not be decoded.
    """

    def __init__(self, chunk_type: int, offset: int) -> None:
        super().__init__(
            "Unknown chunk type 0x{:08x} at offset 0x{:08x}".format(
                chunk_type, offset
            )
        )
        self.chunk_type = chunk_type
        self.offset = offset


class UnresolvedNamespaceError(ResParserError):
    """A qualified name references a namespace URI with no prefix mapping"""

    def __init__(self, uri: str) -> None:
        super().__init__("No prefix registered for namespace '{}'".format(uri))
        self.uri = uri


class UnresolvedStringIndexError(ResParserError):
    """A string index points outside of the string pool"""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(
            "String index {} is outside of the string pool (size {})".format(
                index, size
            )
        )
        self.index = index
        self.size = size


class UnsupportedDimensionUnitError(ResParserError):
    """The unit index of a dimension value has no known unit"""

    def __init__(self, unit: int) -> None:
        super().__init__("Unsupported dimension unit index {}".format(unit))
        self.unit = unit


class ManifestNotFoundError(Exception):
    """The archive has no AndroidManifest.xml entry"""

    pass
