"""Dataclass <-> XML mapping for object-storage request and response bodies.

Field ``request_id`` maps to element ``<RequestId>`` unless the field sets
``metadata={"xml": "..."}``. Namespaces on incoming documents are ignored so
both plain and ``xmlns``-qualified service responses decode the same way.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import MISSING, Field, fields, is_dataclass
from typing import Any, Dict, List, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints

T = TypeVar("T")

_SCALAR_TYPES = (str, int, float, bool)
# Characters XML 1.0 cannot carry, even escaped.
_INVALID_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class XmlDecodeError(ValueError):
    """Response text is not well-formed XML or does not fit the target model."""


class XmlEncodeError(ValueError):
    """Value cannot be written as an XML request body."""


def element_name(field: Field) -> str:
    explicit = field.metadata.get("xml") if field.metadata else None
    if explicit:
        return explicit
    return "".join(part[:1].upper() + part[1:] for part in field.name.split("_"))


def from_xml(model: Type[T], text: str) -> T:
    """Decode ``text`` into an instance of the dataclass ``model``.

    Args:
        model: Dataclass type whose fields describe the expected child elements.
        text: XML document text.

    Returns:
        Instance of ``model`` populated from the root element's children.

    Raises:
        XmlDecodeError: If the text is not well-formed, a required element is
            missing, or an element's text cannot be converted to the field type.
    """
    try:
        root = ET.fromstring(text)
    except ET.ParseError as exc:
        raise XmlDecodeError(f"Malformed XML: {exc}") from exc
    return from_element(model, root)


def from_element(model: Type[T], element: ET.Element) -> T:
    if not (is_dataclass(model) and isinstance(model, type)):
        raise XmlDecodeError(f"{model!r} is not an XML model")
    hints = get_type_hints(model)
    children = _children_by_name(element)
    kwargs: Dict[str, Any] = {}
    for field in fields(model):
        if not field.init:
            continue
        name = element_name(field)
        annotation = hints.get(field.name, str)
        found = children.get(name, [])
        item_type = _list_item_type(annotation)
        if item_type is not None:
            if found or not _has_default(field):
                kwargs[field.name] = [_decode_value(item_type, child) for child in found]
            continue
        if not found:
            if _has_default(field):
                continue
            raise XmlDecodeError(
                f"<{_local_name(element.tag)}> is missing required element <{name}>"
            )
        kwargs[field.name] = _decode_value(annotation, found[0])
    return model(**kwargs)


def to_xml(value: Any, root: Optional[str] = None) -> str:
    """Serialize a dataclass instance as an XML document string.

    The root tag is ``root`` if given, else the class attribute
    ``__xml_root__``, else the class name. ``None`` fields are omitted.

    Raises:
        XmlEncodeError: If ``value`` is not a dataclass instance or holds a
            value with no XML text form.
    """
    if not is_dataclass(value) or isinstance(value, type):
        raise XmlEncodeError(f"Cannot serialize {type(value).__name__} as XML")
    tag = root or getattr(value, "__xml_root__", None) or type(value).__name__
    return ET.tostring(_encode_element(tag, value), encoding="unicode")


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------
def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _children_by_name(element: ET.Element) -> Dict[str, List[ET.Element]]:
    grouped: Dict[str, List[ET.Element]] = {}
    for child in element:
        grouped.setdefault(_local_name(child.tag), []).append(child)
    return grouped


def _has_default(field: Field) -> bool:
    return field.default is not MISSING or field.default_factory is not MISSING


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) is Union:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _list_item_type(annotation: Any) -> Any:
    annotation = _unwrap_optional(annotation)
    if get_origin(annotation) in (list, List):
        args = get_args(annotation)
        return args[0] if args else str
    return None


def _decode_value(annotation: Any, element: ET.Element) -> Any:
    annotation = _unwrap_optional(annotation)
    if is_dataclass(annotation):
        return from_element(annotation, element)
    text = element.text or ""
    tag = _local_name(element.tag)
    if annotation is str or annotation is Any:
        return text
    if annotation is bool:
        lowered = text.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
        raise XmlDecodeError(f"<{tag}> expected true/false, got {text!r}")
    if annotation in (int, float):
        try:
            return annotation(text.strip())
        except ValueError as exc:
            raise XmlDecodeError(
                f"<{tag}> expected {annotation.__name__}, got {text!r}"
            ) from exc
    raise XmlDecodeError(f"<{tag}> has unsupported field type {annotation!r}")


def _encode_element(tag: str, value: Any) -> ET.Element:
    element = ET.Element(tag)
    for field in fields(value):
        item = getattr(value, field.name)
        if item is None:
            continue
        name = element_name(field)
        if isinstance(item, (list, tuple)):
            for entry in item:
                element.append(_encode_child(name, entry))
        else:
            element.append(_encode_child(name, item))
    return element


def _encode_child(tag: str, value: Any) -> ET.Element:
    if is_dataclass(value) and not isinstance(value, type):
        return _encode_element(tag, value)
    if not isinstance(value, _SCALAR_TYPES):
        raise XmlEncodeError(f"<{tag}> cannot hold a {type(value).__name__} value")
    if isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    if _INVALID_XML_CHARS.search(text):
        raise XmlEncodeError(f"<{tag}> contains characters not allowed in XML")
    child = ET.Element(tag)
    child.text = text
    return child


__all__ = [
    "XmlDecodeError",
    "XmlEncodeError",
    "element_name",
    "from_element",
    "from_xml",
    "to_xml",
]
