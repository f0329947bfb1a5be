import pytest

import axml_builder as ab
from axml_builder import ANDROID_NS
from axmlreader.internal_types import (
    TYPE_DIMENSION,
    TYPE_INT_BOOLEAN,
    TYPE_INT_DEC,
    TYPE_STRING,
)

MANIFEST_STRINGS = [
    "android",
    ANDROID_NS,
    "manifest",
    "versionCode",
    "package",
    "com.example.app",
    "application",
    "enabled",
    "minHeight",
    "Hello",
]


@pytest.fixture
def minimal_doc():
    """header, pool, namespace, one empty element"""
    return ab.document(
        ab.string_pool(["android", ANDROID_NS, "manifest"]),
        ab.start_namespace(0, 1),
        ab.start_element(-1, 2),
        ab.end_element(-1, 2),
        ab.end_namespace(0, 1),
    )


@pytest.fixture
def manifest_doc():
    return ab.document(
        ab.string_pool(MANIFEST_STRINGS),
        ab.resource_map([0x0101021B, 0x0101000E]),
        ab.start_namespace(0, 1, line=2),
        ab.start_element(
            -1,
            2,
            [
                ab.attribute(1, 3, TYPE_INT_DEC, 7),
                ab.attribute(-1, 4, TYPE_STRING, 0, raw_value=5),
            ],
            line=2,
        ),
        ab.start_element(
            -1,
            6,
            [
                ab.attribute(1, 7, TYPE_INT_BOOLEAN, 1),
                ab.attribute(1, 8, TYPE_DIMENSION, 0x00012C01),
            ],
            line=5,
        ),
        ab.text(9, line=6),
        ab.end_element(-1, 6, line=7),
        ab.end_element(-1, 2, line=8),
        ab.end_namespace(0, 1, line=8),
    )
