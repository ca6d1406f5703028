"""Shared HTTP transport for object-storage operations.

This module provides a thin wrapper around ``requests.Session`` that sends one
request, decodes the body, and hands status and text to
``status_to_response``. Every lower-level failure on the way is converted into
an ``OssError`` variant, so callers never see raw ``requests``, codec, or I/O
exceptions.

Dependencies:
    - ``requests`` for network I/O.
    - ``osskit.adapters.headers`` for header validation.
    - ``osskit.adapters.xml_codec`` for dataclass request bodies.
    - ``osskit.adapters.responses`` for status classification.

Call context:
    - Constructed by bucket and object operation modules that own the URL
      layout and request signing.
    - Retries and backoff are the caller's concern; each call sends once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, is_dataclass
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import requests

from .api_errors import OssError, translate_errors
from .headers import build_headers
from .responses import status_to_response
from .xml_codec import to_xml

T = TypeVar("T")

log = logging.getLogger(__name__)

_XML_CONTENT_TYPE = "application/xml"


@dataclass
class HttpConfig:
    """Timeout and decoding configuration for SDK HTTP calls.

    Attributes:
        request_timeout_s: Timeout in seconds passed to ``requests``.
        encoding: Codec used to decode response bytes. Decoding is strict.
    """
    request_timeout_s: int = 10
    encoding: str = "utf-8"


class OssSession:
    """Single-shot ``requests`` wrapper that returns typed results.

    This class is intentionally transport-only. Callers provide absolute URLs,
    signed headers, and the success model each operation expects.
    """

    def __init__(
        self,
        cfg: Optional[HttpConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Create a session wrapper.

        Args:
            cfg: Timeout and decoding settings; defaults to ``HttpConfig()``.
            session: Existing ``requests.Session`` to reuse. A new one is
                created when omitted.
        """
        self.cfg = cfg or HttpConfig()
        self.session = session if session is not None else requests.Session()

    def request(
        self,
        method: str,
        url: str,
        model: Type[T],
        *,
        headers: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> T:
        """Send one request and classify the response.

        Args:
            method: HTTP verb.
            url: Absolute endpoint URL.
            model: Success type handed to ``status_to_response``.
            headers: Request headers; validated before sending.
            body: ``None``, ``str``, ``bytes``, a readable file object, or a
                dataclass serialized as XML.
            params: Optional query parameter mapping.

        Returns:
            Decoded success value of type ``model``.

        Raises:
            OssError: Any failure, as the matching variant.

        Call Chain:
            Operation modules -> ``OssSession.request`` ->
            ``requests.Session.request`` -> ``status_to_response``.
        """
        context = f"{method} {url}"
        try:
            with translate_errors():
                hdrs = build_headers(headers or {})
                data = self._encode_body(body, hdrs)
                log.debug("%s (%d headers)", context, len(hdrs))
                resp = self.session.request(
                    method,
                    url,
                    headers=hdrs,
                    data=data,
                    params=params,
                    timeout=self.cfg.request_timeout_s,
                )
                raw = resp.content or b""
                text = raw.decode(self.cfg.encoding)
            return status_to_response(resp.status_code, text, model)
        except OssError as exc:
            log.warning("%s failed: %r", context, exc)
            raise

    def get(self, url: str, model: Type[T], **kwargs: Any) -> T:
        return self.request("GET", url, model, **kwargs)

    def head(self, url: str, model: Type[T], **kwargs: Any) -> T:
        return self.request("HEAD", url, model, **kwargs)

    def put(self, url: str, model: Type[T], **kwargs: Any) -> T:
        return self.request("PUT", url, model, **kwargs)

    def post(self, url: str, model: Type[T], **kwargs: Any) -> T:
        return self.request("POST", url, model, **kwargs)

    def delete(self, url: str, model: Type[T], **kwargs: Any) -> T:
        return self.request("DELETE", url, model, **kwargs)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "OssSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @staticmethod
    def _encode_body(body: Any, headers: Dict[str, str]) -> Optional[bytes]:
        if body is None:
            return None
        if isinstance(body, bytes):
            return body
        if isinstance(body, str):
            return body.encode("utf-8")
        if hasattr(body, "read"):
            data = body.read()
            return data.encode("utf-8") if isinstance(data, str) else data
        if is_dataclass(body) and not isinstance(body, type):
            if not any(name.lower() == "content-type" for name in headers):
                headers["Content-Type"] = _XML_CONTENT_TYPE
            return to_xml(body).encode("utf-8")
        raise TypeError(f"Unsupported request body type: {type(body).__name__}")


__all__ = ["HttpConfig", "OssSession"]
