# Constants for binary AndroidManifest.xml files.
# Every tag is read as one little-endian u32, so the chunk header size is
# folded into the upper half of the chunk type tags below.

AXML_MAGIC = 0x00080003

RES_STRING_POOL_TYPE = 0x001C0001
RES_XML_RESOURCE_MAP_TYPE = 0x00080180
RES_XML_START_NAMESPACE_TYPE = 0x00100100
RES_XML_END_NAMESPACE_TYPE = 0x00100101
RES_XML_START_ELEMENT_TYPE = 0x00100102
RES_XML_END_ELEMENT_TYPE = 0x00100103
RES_XML_CDATA_TYPE = 0x00100104

CHUNK_NAMES = {
    RES_STRING_POOL_TYPE: "RES_STRING_POOL_TYPE",
    RES_XML_RESOURCE_MAP_TYPE: "RES_XML_RESOURCE_MAP_TYPE",
    RES_XML_START_NAMESPACE_TYPE: "RES_XML_START_NAMESPACE_TYPE",
    RES_XML_END_NAMESPACE_TYPE: "RES_XML_END_NAMESPACE_TYPE",
    RES_XML_START_ELEMENT_TYPE: "RES_XML_START_ELEMENT_TYPE",
    RES_XML_END_ELEMENT_TYPE: "RES_XML_END_ELEMENT_TYPE",
    RES_XML_CDATA_TYPE: "RES_XML_CDATA_TYPE",
}

# Size of the generic chunk header: type + size
CHUNK_HEADER_SIZE = 4 + 4
# Size of one attribute record inside a start element chunk
ATTRIBUTE_SIZE = 5 * 4

# Flags in the STRING Section
UTF8_FLAG = 1 << 8

# Attribute value types. The low byte is the Res_value size (8),
# the high byte the data type.
TYPE_REFERENCE = 0x01000008
TYPE_ATTRIBUTE = 0x02000008
TYPE_STRING = 0x03000008
TYPE_FLOAT = 0x04000008
TYPE_DIMENSION = 0x05000008
TYPE_FRACTION = 0x06000008
TYPE_INT_DEC = 0x10000008
TYPE_INT_HEX = 0x11000008
TYPE_INT_BOOLEAN = 0x12000008
TYPE_INT_COLOR_ARGB8 = 0x1C000008
TYPE_INT_COLOR_RGB8 = 0x1D000008

DIMENSION_UNITS = ["px", "dp", "sp", "pt", "in", "mm"]

NO_INDEX = -1
