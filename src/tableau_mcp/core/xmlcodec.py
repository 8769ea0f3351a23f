"""
XML helpers for the Tableau REST schema.

Responses arrive as ``<tsResponse xmlns="http://tableau.com/api">`` documents.
They are flattened into plain dicts (attributes and child elements keyed by
local name) and validated by pydantic models. Requests go the other way:
a model is walked field by field and written out as ``<tsRequest>``.
"""

from __future__ import annotations

from typing import Any, Dict, List

from lxml import etree
from pydantic import BaseModel

TS_REQUEST = "tsRequest"
TS_RESPONSE = "tsResponse"

_PARSER = etree.XMLParser(
    resolve_entities=False, no_network=True, remove_comments=True
)


def local_name(tag: str) -> str:
    return etree.QName(tag).localname


def parse_xml(body: bytes) -> etree._Element:
    """Parse a response body; raises etree.XMLSyntaxError on bad input."""
    return etree.fromstring(body, parser=_PARSER)


def element_to_dict(el: etree._Element) -> Any:
    """
    Flatten an element into a dict.
    - Attributes and child elements are keyed by local name (namespace dropped).
    - Repeated child tags collapse into a list.
    - Text-only elements become their stripped text.
    - Mixed elements keep their text under "value".
    """
    attrs: Dict[str, Any] = {local_name(k): v for k, v in el.attrib.items()}
    children = [c for c in el if isinstance(c.tag, str)]
    text = (el.text or "").strip()

    if not attrs and not children:
        return text

    data: Dict[str, Any] = dict(attrs)
    repeated: set[str] = set()
    for child in children:
        key = local_name(child.tag)
        value = element_to_dict(child)
        if key in repeated:
            data[key].append(value)
        elif key in data:
            data[key] = [data[key], value]
            repeated.add(key)
        else:
            data[key] = value

    if text:
        data["value"] = text
    return data


def _attr_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def model_to_element(model: Any, tag: str | None = None) -> etree._Element:
    """
    Serialize an XmlModel: scalars become attributes, models become children,
    lists become a wrapper element, and a field aliased "value" becomes text.
    """
    el = etree.Element(tag or model.xml_tag)
    for name, field in type(model).model_fields.items():
        value = getattr(model, name)
        if value is None:
            continue
        key = field.alias or name
        if isinstance(value, BaseModel):
            el.append(model_to_element(value, key))
        elif isinstance(value, list):
            if not value:
                continue
            wrapper = etree.SubElement(el, key)
            for item in value:
                wrapper.append(model_to_element(item))
        elif key == "value":
            el.text = _attr_value(value)
        else:
            el.set(key, _attr_value(value))
    return el


def build_request(*payloads: Any) -> bytes:
    """Wrap one or more models in a <tsRequest> document."""
    root = etree.Element(TS_REQUEST)
    for payload in payloads:
        root.append(model_to_element(payload))
    return etree.tostring(root, encoding="UTF-8", xml_declaration=False)


def collection_items(value: Any, item_tag: str) -> List[Any]:
    """Normalize ``<items><item/>...</items>`` (already flattened) into a list."""
    if isinstance(value, dict):
        value = value.get(item_tag, [])
    if value is None or value == "":
        return []
    if isinstance(value, dict):
        return [value]
    return list(value)


__all__ = [
    "TS_REQUEST",
    "TS_RESPONSE",
    "local_name",
    "parse_xml",
    "element_to_dict",
    "model_to_element",
    "build_request",
    "collection_items",
]
