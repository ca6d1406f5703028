"""XML response models shared by the classifier and the HTTP session.

Operation-specific success models live with the callers; only the service
error body is owned here because every failure path decodes it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ErrorResponse:
    """Service error body, e.g. ``<Error><Code>AccessDenied</Code>...</Error>``.

    Fields:
    - message: human-readable reason from the service (required)
    - code: service error code such as ``NoSuchKey``
    - request_id / host_id: identifiers to quote when contacting support
    - resource: bucket or object the request targeted, when reported
    """
    __xml_root__ = "Error"

    message: str
    code: str = ""
    request_id: str = ""
    host_id: str = ""
    resource: str = ""


@dataclass(frozen=True)
class EmptyAck:
    """Success value for operations that answer with no body (PUT, DELETE)."""
