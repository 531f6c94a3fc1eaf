"""
Error document serialization.

Renders an ErrorResponseDocument as JSON (default) or as a standalone
XML document when the client asked for format=xml. Both renderings
carry the same members in the same order.
"""

import json
from typing import Optional
from xml.etree.ElementTree import Element, SubElement, tostring

from embedgate.shared.errors.schemas import ErrorResponseDocument

JSON_CONTENT_TYPE = "application/json"
XML_CONTENT_TYPE = "text/xml"
XML_FORMAT = "xml"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8" standalone="yes"?>'


def render_json(document: ErrorResponseDocument) -> bytes:
    """Serialize the document as compact UTF-8 JSON."""
    return json.dumps(
        document.to_dict(),
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")


def _append(parent: Element, tag: str, value) -> None:
    """Append ``value`` under ``parent``; lists become one child per item."""
    child = SubElement(parent, tag)
    if isinstance(value, dict):
        for key, item in value.items():
            _append(child, key, item)
    elif isinstance(value, list):
        item_tag = tag[:-1] if tag.endswith("s") else "item"
        for item in value:
            _append(child, item_tag, item)
    else:
        child.text = str(value)


def render_xml(document: ErrorResponseDocument) -> bytes:
    """Serialize the document as XML with a standalone declaration.

    Text content is escaped by ElementTree, so "<", ">" and "&" in
    messages never appear raw in the output.
    """
    body = document.to_dict()
    root_tag, members = next(iter(body.items()))
    root = Element(root_tag)
    for key, value in members.items():
        _append(root, key, value)
    return (XML_DECLARATION + tostring(root, encoding="unicode")).encode("utf-8")


def render_error_document(
    document: ErrorResponseDocument, fmt: Optional[str]
) -> tuple[bytes, str]:
    """Render the document in the requested format.

    Args:
        document: The error document to send.
        fmt: Value of the ``format`` query parameter, if any.

    Returns:
        The payload and its content type.
    """
    if fmt == XML_FORMAT:
        return render_xml(document), XML_CONTENT_TYPE
    return render_json(document), JSON_CONTENT_TYPE
