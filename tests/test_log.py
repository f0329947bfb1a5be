from loguru import logger

import axml_builder as ab
from axmlreader import iter_events, setup_logger


def test_silent_by_default(minimal_doc):
    messages = []
    handler_id = logger.add(messages.append, level="DEBUG")
    try:
        list(iter_events(minimal_doc + b"\x00" * 8))
    finally:
        logger.remove(handler_id)
    assert messages == []


def test_setup_logger_shows_warnings(minimal_doc):
    messages = []
    handler_id = setup_logger("WARNING", messages.append)
    try:
        list(iter_events(minimal_doc + b"\x00" * 8))
        list(iter_events(ab.document(ab.string_pool(["a"]), ab.end_namespace(-1, 0))))
    finally:
        logger.remove(handler_id)
        logger.disable("axmlreader")
    text = "".join(messages)
    assert "smaller than total file size" in text
    assert "NAMESPACE_END" in text
    assert "DEBUG" not in text
