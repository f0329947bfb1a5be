from typing import Iterable, NamedTuple, Optional, Tuple, Union


class Attribute(NamedTuple):
    uri: str
    local_name: str
    qname: str
    value: str
    # raw type tag and data as found in the chunk
    value_type: int
    data: int


class StartNamespace(NamedTuple):
    prefix: Optional[str]
    uri: str


class EndNamespace(NamedTuple):
    prefix: Optional[str]


class StartElement(NamedTuple):
    uri: str
    local_name: str
    qname: str
    attributes: Tuple[Attribute, ...]


class EndElement(NamedTuple):
    uri: str
    local_name: str
    qname: str


class Text(NamedTuple):
    text: str


Event = Union[StartNamespace, EndNamespace, StartElement, EndElement, Text]


class ContentHandler:
    """
    Receiver of parse events, in document order.

    Override the methods you are interested in, the default implementations
    do nothing. Any exception raised here aborts the parse.
    """

    def start_namespace(self, prefix: Optional[str], uri: str) -> None:
        pass

    def end_namespace(self, prefix: Optional[str]) -> None:
        pass

    def start_element(
        self, uri: str, local_name: str, qname: str, attributes: Tuple[Attribute, ...]
    ) -> None:
        pass

    def end_element(self, uri: str, local_name: str, qname: str) -> None:
        pass

    def text(self, text: str) -> None:
        pass


_HANDLER_METHODS = {
    StartNamespace: "start_namespace",
    EndNamespace: "end_namespace",
    StartElement: "start_element",
    EndElement: "end_element",
    Text: "text",
}


def dispatch(event: Event, handler: ContentHandler) -> None:
    getattr(handler, _HANDLER_METHODS[type(event)])(*event)


def replay(events: Iterable[Event], handler: ContentHandler) -> None:
    """Push every event of `events` into `handler`, stopping at the first error"""
    for event in events:
        dispatch(event, handler)
