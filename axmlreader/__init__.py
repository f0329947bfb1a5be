"""
axmlreader - decode Android binary XML (compiled AndroidManifest.xml and
other resource XML) into a stream of XML events.

    >>> from axmlreader import iter_events, read_manifest
    >>> for event in iter_events(read_manifest("app.apk")):
    ...     print(event)

or push the events into a handler:

    >>> from axmlreader import ContentHandler, parse
    >>> parse(raw, MyHandler())
"""

from loguru import logger

from .apk import read_manifest
from .axml_parse import AXMLParser, iter_events, parse
from .errors import (
    MalformedChunkError,
    MalformedHeaderError,
    ManifestNotFoundError,
    OutOfBoundsError,
    ResParserError,
    UnknownChunkTypeError,
    UnresolvedNamespaceError,
    UnresolvedStringIndexError,
    UnsupportedDimensionUnitError,
)
from .events import (
    Attribute,
    ContentHandler,
    EndElement,
    EndNamespace,
    StartElement,
    StartNamespace,
    Text,
)
from .log import setup_logger
from .printer import AXMLPrinter
from .values import format_value

logger.disable("axmlreader")

__version__ = "0.1.0"

__all__ = [
    "AXMLParser",
    "AXMLPrinter",
    "iter_events",
    "parse",
    "read_manifest",
    "format_value",
    "setup_logger",
    "ContentHandler",
    "Attribute",
    "StartNamespace",
    "EndNamespace",
    "StartElement",
    "EndElement",
    "Text",
    "ResParserError",
    "MalformedHeaderError",
    "MalformedChunkError",
    "OutOfBoundsError",
    "UnknownChunkTypeError",
    "UnresolvedNamespaceError",
    "UnresolvedStringIndexError",
    "UnsupportedDimensionUnitError",
    "ManifestNotFoundError",
]
