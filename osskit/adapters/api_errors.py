"""Unified error family for the object-storage SDK.

Every failure an SDK call can produce is one ``OssError`` subclass. Lower
level exceptions (I/O, byte decoding, ``requests`` transport failures, XML
encode/decode, header validation, signing-key checks) are converted once at
their origin with ``to_oss_error`` or inside ``translate_errors()`` and then
propagate unchanged. The original exception stays on ``err.cause`` and on
``err.__cause__``.
"""

from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from contextlib import contextmanager
from typing import Any, Iterator, Optional, Tuple, Type, Union

from requests import exceptions as req_exc

from .headers import InvalidHeaderName, InvalidHeaderValue
from .xml_codec import XmlDecodeError, XmlEncodeError


class InvalidKeyLength(ValueError):
    """Signing key has a length the HMAC signer cannot use."""


def require_key(key: Union[str, bytes]) -> bytes:
    """Return ``key`` as bytes, rejecting keys a signer cannot use."""
    raw = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    if not raw:
        raise InvalidKeyLength("Signing key must not be empty")
    return raw


class _SealedFields:
    """Blocks reassignment of the listed attributes once construction ends."""

    _sealed_fields: Tuple[str, ...] = ("cause", "status_code", "message", "summary")

    def _seal(self) -> None:
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._sealed_fields and getattr(self, "_sealed", False):
            raise AttributeError(f"{type(self).__name__}.{name} is read-only")
        super().__setattr__(name, value)


# ---- Header sub-taxonomy ----
class HeaderError(_SealedFields, ValueError):
    """Header construction failure, either a bad name or a bad value."""

    summary = "header error"
    cause_type: Tuple[Type[BaseException], ...] = (InvalidHeaderName, InvalidHeaderValue)

    def __init__(self, cause: Exception) -> None:
        if not isinstance(cause, self.cause_type):
            raise TypeError(
                f"{type(self).__name__} cannot wrap {type(cause).__name__}"
            )
        super().__init__(self.summary)
        self.cause = cause
        self.__cause__ = cause
        self._seal()

    @property
    def detail(self) -> str:
        return str(self.cause)

    @staticmethod
    def from_exception(exc: Exception) -> "HeaderError":
        if isinstance(exc, InvalidHeaderValue):
            return InvalidHeaderValueError(exc)
        if isinstance(exc, InvalidHeaderName):
            return InvalidHeaderNameError(exc)
        raise TypeError(f"No header error variant for {type(exc).__name__}")


class InvalidHeaderValueError(HeaderError):
    summary = "invalid head value"
    cause_type = (InvalidHeaderValue,)


class InvalidHeaderNameError(HeaderError):
    summary = "invalid head name"
    cause_type = (InvalidHeaderName,)


# ---- Unified error ----
class OssError(_SealedFields, RuntimeError):
    """Base class for every failure returned by the SDK.

    ``kind`` is a stable tag per variant and ``summary`` is the fixed text
    shown by ``str(err)``. Wrapping variants keep the original exception on
    ``cause``; ``detail`` exposes its message.
    """

    kind = "oss"
    summary = "oss error"
    cause_type: Tuple[Type[BaseException], ...] = ()

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        if self.cause_type and not isinstance(cause, self.cause_type):
            raise TypeError(
                f"{type(self).__name__} cannot wrap {type(cause).__name__}"
            )
        super().__init__(self.summary)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
        self._seal()

    @property
    def detail(self) -> Optional[str]:
        if self.cause is None:
            return None
        return str(self.cause)

    @classmethod
    def from_exception(cls, exc: BaseException) -> "OssError":
        return to_oss_error(exc)

    def __repr__(self) -> str:
        if self.cause is None:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({self.cause!r})"


class ObjectOperationError(OssError):
    """The service rejected the request with an XML error body."""

    kind = "object"

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        self.summary = (
            f"object operation is not valid, status:{int(status_code)}, "
            f"message:{json.dumps(message, ensure_ascii=False)}"
        )
        super().__init__()

    @property
    def detail(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"ObjectOperationError(status_code={int(self.status_code)}, "
            f"message={self.message!r})"
        )


class IoError(OssError):
    kind = "io"
    summary = "io error"
    cause_type = (OSError,)


class StringDecodeError(OssError):
    kind = "string"
    summary = "string error"
    cause_type = (UnicodeError,)


class TransportError(OssError):
    kind = "transport"
    summary = "reqwest error"
    cause_type = (req_exc.RequestException,)


class XmlWriteError(OssError):
    kind = "xml_write"
    summary = "qxml error"
    cause_type = (XmlEncodeError,)


class XmlParseError(OssError):
    kind = "xml_parse"
    summary = "parse xml error"
    cause_type = (XmlDecodeError, ET.ParseError)


class HttpError(OssError):
    """Header construction failed; ``cause`` is a ``HeaderError``."""

    kind = "http"
    summary = "http error"
    cause_type = (HeaderError,)

    @property
    def detail(self) -> str:
        return self.cause.detail


class SignError(OssError):
    kind = "sign"
    summary = "sign invalid length"
    cause_type = (InvalidKeyLength,)


class UnknownError(OssError):
    """Status code outside the recognised success and service-error sets."""

    kind = "unknown"
    summary = "unknown error"

    def __init__(self) -> None:
        super().__init__()


# Order matters: header failures are RequestExceptions, and every
# RequestException is also an OSError.
_CONVERSIONS: Tuple[Tuple[Tuple[Type[BaseException], ...], Type[OssError]], ...] = (
    ((req_exc.RequestException,), TransportError),
    ((UnicodeError,), StringDecodeError),
    ((XmlEncodeError,), XmlWriteError),
    ((XmlDecodeError, ET.ParseError), XmlParseError),
    ((InvalidKeyLength,), SignError),
    ((OSError,), IoError),
)

CONVERTIBLE_ERRORS: Tuple[Type[BaseException], ...] = (
    OssError,
    HeaderError,
    InvalidHeaderName,
    InvalidHeaderValue,
) + tuple(cause for types, _ in _CONVERSIONS for cause in types)


def to_oss_error(exc: BaseException) -> OssError:
    """Convert a supported lower-level exception into its ``OssError`` variant.

    Args:
        exc: Exception raised by I/O, decoding, ``requests``, the XML codec,
            header validation, or signing-key checks. An ``OssError`` is
            returned as-is.

    Returns:
        The matching ``OssError`` subclass instance wrapping ``exc``.

    Raises:
        TypeError: If ``exc`` has no variant in the taxonomy.
    """
    if isinstance(exc, OssError):
        return exc
    if isinstance(exc, HeaderError):
        return HttpError(exc)
    if isinstance(exc, (InvalidHeaderName, InvalidHeaderValue)):
        return HttpError(HeaderError.from_exception(exc))
    for cause_types, variant in _CONVERSIONS:
        if isinstance(exc, cause_types):
            return variant(exc)
    raise TypeError(f"No OssError variant for {type(exc).__name__}")


@contextmanager
def translate_errors() -> Iterator[None]:
    """Re-raise supported exceptions from the block as ``OssError`` variants.

    Exceptions with no variant propagate untouched.
    """
    try:
        yield
    except OssError:
        raise
    except CONVERTIBLE_ERRORS as exc:
        raise to_oss_error(exc) from exc


def error_kind(exc: Any) -> Optional[str]:
    """Return the variant tag for ``exc``, or ``None`` for non-SDK errors."""
    if isinstance(exc, OssError):
        return exc.kind
    return None


__all__ = [
    "CONVERTIBLE_ERRORS",
    "HeaderError",
    "HttpError",
    "InvalidHeaderNameError",
    "InvalidHeaderValueError",
    "InvalidKeyLength",
    "IoError",
    "ObjectOperationError",
    "OssError",
    "SignError",
    "StringDecodeError",
    "TransportError",
    "UnknownError",
    "XmlParseError",
    "XmlWriteError",
    "error_kind",
    "require_key",
    "to_oss_error",
    "translate_errors",
]
