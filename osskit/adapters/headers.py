"""HTTP header validation for object-storage requests.

Header names and values are checked before they reach ``requests`` so the
two failure modes stay distinguishable: a bad name raises
``InvalidHeaderName`` and a bad value raises ``InvalidHeaderValue``. Both are
``requests.exceptions.InvalidHeader`` subclasses.

Call context:
    - ``osskit.adapters.http_client.OssSession.request`` validates every
      outgoing header mapping with ``build_headers``.
    - ``osskit.adapters.api_errors`` folds both exceptions into
      ``HeaderError`` and then ``HttpError``.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping

from requests import exceptions as req_exc

# RFC 7230 token characters.
_HEADER_NAME_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_HEADER_VALUE_RE = re.compile(r"([^\s\x00][^\r\n\x00]*)?")


class InvalidHeaderName(req_exc.InvalidHeader):
    """Header name is empty, not a string, or contains non-token characters."""

    def __init__(self, name: Any) -> None:
        super().__init__(f"Invalid header name: {name!r}")
        self.name = name


class InvalidHeaderValue(req_exc.InvalidHeader):
    """Header value contains CR/LF/NUL, leading whitespace, or is not text."""

    def __init__(self, name: str, value: Any) -> None:
        super().__init__(f"Invalid value for header {name!r}: {value!r}")
        self.name = name
        self.value = value


def validate_header_name(name: Any) -> str:
    if not isinstance(name, str) or not _HEADER_NAME_RE.fullmatch(name):
        raise InvalidHeaderName(name)
    return name


def validate_header_value(name: str, value: Any) -> str:
    if isinstance(value, bytes):
        value = value.decode("latin-1")
    if not isinstance(value, str) or not _HEADER_VALUE_RE.fullmatch(value):
        raise InvalidHeaderValue(name, value)
    return value


def build_headers(headers: Mapping[Any, Any]) -> Dict[str, str]:
    """Return a validated copy of ``headers``.

    Args:
        headers: Header mapping supplied by the caller. ``bytes`` values are
            decoded as latin-1 before validation.

    Returns:
        New dictionary with the same entries, all values as ``str``.

    Raises:
        InvalidHeaderName: If any key is not a valid header token.
        InvalidHeaderValue: If any value is not a single-line header value.
    """
    out: Dict[str, str] = {}
    for raw_name, raw_value in headers.items():
        name = validate_header_name(raw_name)
        out[name] = validate_header_value(name, raw_value)
    return out


__all__ = [
    "InvalidHeaderName",
    "InvalidHeaderValue",
    "build_headers",
    "validate_header_name",
    "validate_header_value",
]
