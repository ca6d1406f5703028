"""Domain package exports for response models and typing contracts."""

from .models import EmptyAck, ErrorResponse
from .ports import StatusCode, XmlModel

__all__ = [
    "EmptyAck",
    "ErrorResponse",
    "StatusCode",
    "XmlModel",
]
