"""Turn an HTTP status code and body text into a typed result.

``status_to_response`` is the only place where service responses are
classified. Callers hand it the status and the already-decoded body and get
back the success model or a raised ``OssError``.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import FrozenSet, Type, TypeVar

from osskit.domain.models import ErrorResponse
from osskit.domain.ports import StatusCode, XmlModel

from .api_errors import ObjectOperationError, UnknownError, translate_errors
from .xml_codec import from_xml

T = TypeVar("T", bound=XmlModel)

log = logging.getLogger(__name__)

SUCCESS_STATUSES: FrozenSet[int] = frozenset(
    {
        HTTPStatus.OK,
        HTTPStatus.CREATED,
        HTTPStatus.ACCEPTED,
        HTTPStatus.NON_AUTHORITATIVE_INFORMATION,
        HTTPStatus.NO_CONTENT,
        HTTPStatus.RESET_CONTENT,
        HTTPStatus.PARTIAL_CONTENT,
        HTTPStatus.MULTI_STATUS,
        HTTPStatus.ALREADY_REPORTED,
    }
)

OBJECT_ERROR_STATUSES: FrozenSet[int] = frozenset(
    {
        HTTPStatus.BAD_REQUEST,
        HTTPStatus.FORBIDDEN,
        HTTPStatus.CONFLICT,
    }
)


def status_to_response(status: StatusCode, text: str, model: Type[T]) -> T:
    """Classify a response and decode its body.

    Args:
        status: HTTP status code of the response.
        text: Response body, already decoded to text.
        model: Success type. Built with no arguments when ``text`` is empty,
            decoded from XML otherwise.

    Returns:
        Instance of ``model`` for statuses in ``SUCCESS_STATUSES``.

    Raises:
        XmlParseError: If a success body or a service error body is not valid
            XML for its model.
        ObjectOperationError: For statuses in ``OBJECT_ERROR_STATUSES``; carries
            ``status`` unchanged and the ``<Message>`` text from the body.
        UnknownError: For every other status, including redirects and 5xx.
    """
    if status in SUCCESS_STATUSES:
        log.debug("HTTP %s classified as success (%d body chars)", int(status), len(text))
        if not text:
            return model()
        with translate_errors():
            return from_xml(model, text)

    if status in OBJECT_ERROR_STATUSES:
        log.debug("HTTP %s classified as object operation failure", int(status))
        with translate_errors():
            body = from_xml(ErrorResponse, text)
        raise ObjectOperationError(status_code=status, message=body.message)

    log.debug("HTTP %s is not a recognised status", int(status))
    raise UnknownError()


__all__ = ["OBJECT_ERROR_STATUSES", "SUCCESS_STATUSES", "status_to_response"]
