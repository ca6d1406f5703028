from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from osskit.adapters.xml_codec import XmlDecodeError, XmlEncodeError, from_xml, to_xml


@dataclass
class Part:
    part_number: int = 0
    e_tag: str = field(default="", metadata={"xml": "ETag"})


@dataclass
class CompleteMultipartUpload:
    part: List[Part] = field(default_factory=list)


@dataclass
class ObjectSummary:
    key: str = ""
    size: int = 0
    is_latest: bool = False
    storage_class: Optional[str] = None


@dataclass
class RequiredKey:
    key: str


@dataclass
class Tagged:
    __xml_root__ = "Tagging"

    tag: List[str] = field(default_factory=list)


def test_from_xml_converts_scalar_fields() -> None:
    text = (
        "<Contents><Key>photos/2026/cat.jpg</Key><Size>10240</Size>"
        "<IsLatest>true</IsLatest><StorageClass>IA</StorageClass></Contents>"
    )

    result = from_xml(ObjectSummary, text)

    assert result == ObjectSummary(
        key="photos/2026/cat.jpg", size=10240, is_latest=True, storage_class="IA"
    )


def test_from_xml_uses_defaults_and_ignores_unknown_elements() -> None:
    result = from_xml(ObjectSummary, "<Contents><Owner>x</Owner></Contents>")

    assert result == ObjectSummary()


def test_from_xml_reads_repeated_elements_and_metadata_names() -> None:
    text = (
        "<CompleteMultipartUpload>"
        "<Part><PartNumber>1</PartNumber><ETag>\"a1\"</ETag></Part>"
        "<Part><PartNumber>2</PartNumber><ETag>\"b2\"</ETag></Part>"
        "</CompleteMultipartUpload>"
    )

    result = from_xml(CompleteMultipartUpload, text)

    assert result.part == [Part(1, '"a1"'), Part(2, '"b2"')]


def test_from_xml_missing_required_element() -> None:
    with pytest.raises(XmlDecodeError, match="missing required element <Key>"):
        from_xml(RequiredKey, "<Object><Size>1</Size></Object>")


def test_from_xml_rejects_bad_scalar_text() -> None:
    with pytest.raises(XmlDecodeError, match="expected int"):
        from_xml(ObjectSummary, "<Contents><Size>big</Size></Contents>")
    with pytest.raises(XmlDecodeError, match="true/false"):
        from_xml(ObjectSummary, "<Contents><IsLatest>yes</IsLatest></Contents>")


def test_from_xml_malformed_text_chains_parse_error() -> None:
    with pytest.raises(XmlDecodeError) as exc_info:
        from_xml(ObjectSummary, "<Contents>")

    assert exc_info.value.__cause__ is not None


def test_from_xml_rejects_non_dataclass_model() -> None:
    with pytest.raises(XmlDecodeError):
        from_xml(dict, "<Contents/>")


def test_to_xml_writes_nested_and_repeated_fields() -> None:
    body = CompleteMultipartUpload(part=[Part(1, "a1"), Part(2, "b2")])

    text = to_xml(body)

    assert text == (
        "<CompleteMultipartUpload>"
        "<Part><PartNumber>1</PartNumber><ETag>a1</ETag></Part>"
        "<Part><PartNumber>2</PartNumber><ETag>b2</ETag></Part>"
        "</CompleteMultipartUpload>"
    )
    assert from_xml(CompleteMultipartUpload, text) == body


def test_to_xml_omits_none_and_writes_booleans() -> None:
    text = to_xml(ObjectSummary(key="a&b", size=3, is_latest=True), root="Contents")

    assert text == (
        "<Contents><Key>a&amp;b</Key><Size>3</Size><IsLatest>true</IsLatest></Contents>"
    )


def test_to_xml_uses_declared_root() -> None:
    assert to_xml(Tagged(tag=["x"])) == "<Tagging><Tag>x</Tag></Tagging>"


def test_to_xml_rejects_unsupported_values() -> None:
    with pytest.raises(XmlEncodeError):
        to_xml(ObjectSummary(key=b"raw"))  # type: ignore[arg-type]
    with pytest.raises(XmlEncodeError):
        to_xml(ObjectSummary(key="bell\x07"))
    with pytest.raises(XmlEncodeError):
        to_xml(ObjectSummary(key="lone \ud800 surrogate"))
    with pytest.raises(XmlEncodeError):
        to_xml({"key": "value"})
