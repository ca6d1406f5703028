from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from osskit.adapters.xml_codec import XmlDecodeError, from_xml
from osskit.domain.models import EmptyAck, ErrorResponse


def test_error_response_reads_all_service_fields() -> None:
    text = (
        "<Error>"
        "<Code>NoSuchBucket</Code>"
        "<Message>The specified bucket does not exist.</Message>"
        "<RequestId>5C3D9175B6FC201293AD4890</RequestId>"
        "<HostId>missing.oss-cn-hangzhou.example.com</HostId>"
        "<Resource>missing</Resource>"
        "</Error>"
    )

    err = from_xml(ErrorResponse, text)

    assert err == ErrorResponse(
        message="The specified bucket does not exist.",
        code="NoSuchBucket",
        request_id="5C3D9175B6FC201293AD4890",
        host_id="missing.oss-cn-hangzhou.example.com",
        resource="missing",
    )


def test_error_response_requires_message() -> None:
    with pytest.raises(XmlDecodeError):
        from_xml(ErrorResponse, "<Error><Code>InternalError</Code></Error>")


def test_error_response_is_immutable() -> None:
    err = ErrorResponse(message="x")

    with pytest.raises(FrozenInstanceError):
        err.message = "y"  # type: ignore[misc]


def test_empty_ack_decodes_from_any_element() -> None:
    assert from_xml(EmptyAck, "<PutObjectResult><ETag>abc</ETag></PutObjectResult>") == EmptyAck()
