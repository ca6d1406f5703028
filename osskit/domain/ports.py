from __future__ import annotations
from typing import Any, ClassVar, Dict, Protocol, Union
from http import HTTPStatus

StatusCode = Union[int, HTTPStatus]


# ---- Response model contract ----
class XmlModel(Protocol):
    """Success type accepted by ``status_to_response``.

    Any dataclass whose fields all have defaults qualifies: it can be built
    with no arguments for empty bodies and decoded from XML otherwise.
    """

    __dataclass_fields__: ClassVar[Dict[str, Any]]

    def __init__(self) -> None: ...
