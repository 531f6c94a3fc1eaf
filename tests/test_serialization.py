"""
Tests for error document building and rendering.

Covers JSON and XML renderings and format selection.
"""

import json
from xml.etree.ElementTree import fromstring

from embedgate.shared.errors.schemas import build_error_document
from embedgate.shared.errors.serialization import (
    XML_DECLARATION,
    render_error_document,
    render_json,
    render_xml,
)


class TestErrorDocument:
    """Tests for build_error_document."""

    def test_messages_omitted_when_absent(self) -> None:
        """No sub-messages means no "messages" member at all."""
        document = build_error_document(500, "Server error")
        assert document.to_dict() == {
            "error": {"source": "iframely", "code": 500, "message": "Server error"}
        }

    def test_empty_messages_omitted(self) -> None:
        """An empty list is treated like no list."""
        assert "messages" not in build_error_document(404, "x", []).to_dict()["error"]


class TestJsonRendering:
    """Tests for render_json."""

    def test_exact_wire_format(self) -> None:
        """Members appear in source, code, message, messages order."""
        document = build_error_document(404, "Link not found", ["no provider matched"])
        assert render_json(document) == (
            b'{"error":{"source":"iframely","code":404,'
            b'"message":"Link not found","messages":["no provider matched"]}}'
        )

    def test_parses_back_to_same_values(self) -> None:
        """Parsing the output gives back the same members."""
        document = build_error_document(403, "Unauthorized", ["a", "b"])
        assert json.loads(render_json(document)) == document.to_dict()

    def test_non_ascii_kept_as_utf8(self) -> None:
        """Text is UTF-8 encoded, not escaped."""
        body = render_json(build_error_document(400, "Bad Request: café"))
        assert "café".encode("utf-8") in body


class TestXmlRendering:
    """Tests for render_xml."""

    def test_starts_with_standalone_declaration(self) -> None:
        """Output begins with the standalone XML declaration."""
        body = render_xml(build_error_document(408, "Timeout"))
        assert body.startswith(XML_DECLARATION.encode("utf-8"))
        assert b'standalone="yes"' in body

    def test_members_match_json(self) -> None:
        """The XML carries the same members as the JSON document."""
        body = render_xml(build_error_document(408, "Timeout"))
        root = fromstring(body)
        assert root.tag == "error"
        assert [child.tag for child in root] == ["source", "code", "message"]
        assert root.findtext("code") == "408"
        assert b"<message>Timeout</message>" in body

    def test_messages_become_children(self) -> None:
        """Each sub-message is its own <message> under <messages>."""
        root = fromstring(render_xml(build_error_document(404, "x", ["one", "two"])))
        assert [m.text for m in root.find("messages")] == ["one", "two"]
        assert [m.tag for m in root.find("messages")] == ["message", "message"]

    def test_reserved_characters_escaped(self) -> None:
        """Text containing <, > and & is escaped."""
        body = render_xml(build_error_document(415, "<b>a & b</b>"))
        text = body.decode("utf-8").split("?>", 1)[1]
        assert "&lt;b&gt;a &amp; b&lt;/b&gt;" in text
        assert "<b>" not in text
        assert fromstring(body).findtext("message") == "<b>a & b</b>"


class TestFormatSelection:
    """Tests for render_error_document."""

    def test_default_is_json(self) -> None:
        """Absent or unknown formats render JSON."""
        document = build_error_document(500, "Server error")
        for fmt in (None, "json", "html"):
            body, content_type = render_error_document(document, fmt)
            assert content_type == "application/json"
            assert json.loads(body)["error"]["code"] == 500

    def test_xml(self) -> None:
        """format=xml renders XML."""
        body, content_type = render_error_document(
            build_error_document(500, "Server error"), "xml"
        )
        assert content_type == "text/xml"
        assert body.startswith(b"<?xml")
