import re
from typing import Dict, List, Optional, Tuple

from loguru import logger
from lxml import etree

from .axml_parse import parse
from .events import Attribute, ContentHandler

# Char ::= #x9 | #xA | #xD | [#x20-#xD7FF] | [#xE000-#xFFFD] | [#x10000-#x10FFFF]
# See <https://www.w3.org/TR/xml/#charsets>
_INVALID_XML_CHAR = re.compile(
    '[^\u0020-\uD7FF\u0009\u000A\u000D\uE000-\uFFFD\U00010000-\U0010FFFF]'
)
_INVALID_NAME_CHAR = re.compile(r"[^a-zA-Z0-9._-]")


def _clark(uri: str, local_name: str) -> str:
    if uri:
        return "{{{}}}{}".format(uri, local_name)
    return local_name


class AXMLPrinter(ContentHandler):
    """
    Converter for AXML Files into a lxml ElementTree, which can easily be
    converted into XML.

    The printer is a [ContentHandler][axmlreader.events.ContentHandler], the
    document is decoded and the tree built while the object is created.
    Names and values lxml would refuse are repaired (see `_fix_name` and
    `_fix_value`) and `is_packed()` reports that this happened.

    A Reference Implementation can be found at http://androidxref.com/9.0.0_r3/xref/frameworks/base/tools/aapt/XMLNode.cpp
    """

    def __init__(self, raw_buff: Optional[bytes] = None, **kwargs) -> None:
        self.root = None
        self.packerwarning = False
        self._stack: List[etree._Element] = []
        self._pending_nsmap: Dict[str, str] = {}
        # prefix -> uris, innermost last
        self._scopes: Dict[str, List[str]] = {}
        self._done = False
        if raw_buff is not None:
            parse(raw_buff, self, **kwargs)

    def start_namespace(self, prefix: Optional[str], uri: str) -> None:
        # Empty prefixes and URIs are not included, as get_nsmap() of androguard
        if not prefix or not uri:
            logger.debug(
                "Namespace mapping '{}' -> '{}' not declared in the tree".format(prefix, uri)
            )
            return
        prefix = self._clean_name(prefix)
        self._scopes.setdefault(prefix, []).append(uri)
        # lxml takes the namespace declarations with the element
        self._pending_nsmap[prefix] = uri

    def end_namespace(self, prefix: Optional[str]) -> None:
        if not prefix:
            return
        uris = self._scopes.get(self._clean_name(prefix))
        if uris:
            uris.pop()

    def _current_nsmap(self) -> Dict[str, str]:
        return {prefix: uris[-1] for prefix, uris in self._scopes.items() if uris}

    def start_element(
        self, uri: str, local_name: str, qname: str, attributes: Tuple[Attribute, ...]
    ) -> None:
        if self._done:
            return
        uri, name = self._fix_name(uri, local_name)
        tag = _clark(uri, name)
        logger.debug("START_TAG: {}".format(tag))
        if self._stack:
            elem = etree.SubElement(self._stack[-1], tag, nsmap=self._pending_nsmap or None)
        elif self.root is None:
            elem = etree.Element(tag, nsmap=self._pending_nsmap or None)
            self.root = elem
        else:
            logger.error(
                "Second root element '{}' found! Is the XML malformed? "
                "Ignoring the rest of the document.".format(qname)
            )
            self._done = True
            return
        self._pending_nsmap = {}

        for attr in attributes:
            attr_uri, attr_name = self._fix_name(attr.uri, attr.local_name)
            name = _clark(attr_uri, attr_name)
            value = self._fix_value(attr.value)
            logger.debug("found an attribute: {}='{}'".format(name, value))
            if name in elem.attrib:
                logger.warning(
                    "Duplicate attribute '{}'! Will overwrite!".format(name)
                )
            elem.set(name, value)
        self._stack.append(elem)

    def end_element(self, uri: str, local_name: str, qname: str) -> None:
        if self._done:
            return
        if not self._stack:
            logger.error(
                "Too many END_TAG! No more elements available to attach to!"
            )
            return
        tag = _clark(*self._fix_name(uri, local_name))
        if self._stack[-1].tag != tag:
            logger.warning(
                "Closing tag '{}' does not match current stack! Is the XML malformed?".format(
                    qname
                )
            )
        self._stack.pop()

    def text(self, text: str) -> None:
        if self._done:
            return
        if not self._stack:
            logger.warning("Text outside of the root element dropped: {!r}".format(text))
            return
        text = self._fix_value(text)
        current = self._stack[-1]
        if len(current):
            current[-1].tail = (current[-1].tail or "") + text
        else:
            current.text = (current.text or "") + text

    def _clean_name(self, name: str) -> str:
        """
        Make `name` usable as an XML name without prefix.

        > Like element names, attribute names are case-sensitive and must start with a letter or underscore.
        > The rest of the name can contain letters, digits, hyphens, underscores, and periods.
        See: <https://msdn.microsoft.com/en-us/library/ms256152(v=vs.110).aspx>
        """
        if not name:
            logger.warning("Empty name found, using '_'")
            self.packerwarning = True
            return "_"
        if not name[0].isalpha() and name[0] != "_":
            logger.warning(
                "Invalid start for name '{}'. "
                "XML name must start with a letter.".format(name)
            )
            self.packerwarning = True
            name = "_{}".format(name)
        if _INVALID_NAME_CHAR.search(name):
            logger.warning(
                "Name '{}' contains invalid characters!".format(name)
            )
            self.packerwarning = True
            name = _INVALID_NAME_CHAR.sub("_", name)
        return name

    def _fix_name(self, uri: str, name: str) -> Tuple[str, str]:
        """
        Apply some fixes to element and attribute names.

        In some cases, the namespace prefix is inside the name and not in the
        namespace field, the name then looks like 'android:foobar'.
        If and only if the embedded prefix is a declared prefix and the
        namespace field is empty, the prefix is stripped from the name and its
        URI is returned instead.
        All remaining unwanted characters are replaced by underscores.

        :param uri: The namespace URI as found in the AXML chunk
        :param name: Name of the attribute or tag
        :return: a fixed version of uri and name
        """
        if ":" in name and uri == '':
            self.packerwarning = True
            embedded_prefix, new_name = name.split(":", 1)
            nsmap = self._current_nsmap()
            if embedded_prefix in nsmap:
                logger.info(
                    "Prefix '{}' is in namespace mapping, assume that it is a prefix.".format(
                        embedded_prefix
                    )
                )
                uri = nsmap[embedded_prefix]
                name = new_name
            else:
                logger.warning(
                    "Confused: name contains a unknown namespace prefix: '{}'. "
                    "This is either a broken AXML file or some attempt to break stuff.".format(
                        name
                    )
                )
        return uri, self._clean_name(name)

    def _fix_value(self, value: str) -> str:
        """
        Return a cleaned version of a value, which lxml accepts.

        The value is cut at the first null byte, the same as aapt does,
        and characters outside the XML character range are replaced by '_'.
        """
        if "\x00" in value:
            self.packerwarning = True
            logger.warning(
                "Null byte found in attribute value at position {}: "
                "Value: {!r}".format(value.find("\x00"), value)
            )
            value = value[: value.find("\x00")]

        if _INVALID_XML_CHAR.search(value):
            logger.warning(
                "Invalid character in value found. Replacing with '_'."
            )
            self.packerwarning = True
            value = _INVALID_XML_CHAR.sub('_', value)
        return value

    def is_packed(self) -> bool:
        """
        Returns True if names or values had to be repaired.

        Packers do some weird stuff to break parsers; files which are simply
        broken look the same.
        """
        return self.packerwarning

    def get_xml(self, pretty: bool = True) -> bytes:
        """
        Get the XML as an UTF-8 string

        :returns: bytes encoded as UTF-8
        """
        return etree.tostring(self.root, encoding="utf-8", pretty_print=pretty)

    def get_buff(self) -> bytes:
        """
        Returns the raw XML file without prettification applied.
        """
        return self.get_xml(pretty=False)

    def get_xml_obj(self) -> etree._Element:
        return self.root
