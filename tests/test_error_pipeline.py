"""
Tests for the error pipeline.

End-to-end through FastAPI with scripted resolvers, plus the
pipeline in isolation with a recording writer.
"""

import logging

import pytest
from starlette.requests import Request

from embedgate.core.config import Settings
from embedgate.domain.embeds.errors import GenericFailure, NotFoundFailure
from embedgate.shared.errors.classifier import TtlClass
from embedgate.shared.errors.handlers import ErrorPipeline, to_failure

URL = {"url": "https://example.com/page"}


class UpstreamError(Exception):
    """Foreign exception with status attributes, as a client library raises."""

    def __init__(self, message: str, code, messages=None) -> None:
        super().__init__(message)
        self.code = code
        self.messages = messages


class RecordingWriter:
    def __init__(self) -> None:
        self.calls = []

    def send_cached(self, request, content_type, body, *, code, ttl):
        self.calls.append(
            {"content_type": content_type, "body": body, "code": code, "ttl": ttl}
        )
        return None


def _request(query: bytes = b"") -> Request:
    return Request(
        {"type": "http", "method": "GET", "path": "/iframely", "query_string": query, "headers": []}
    )


class TestEndToEndScenarios:
    """The documented request/response scenarios."""

    def test_not_found_json(self, make_client, stub_resolver) -> None:
        """NotFoundFailure renders the exact JSON body with 404."""
        resolver = stub_resolver(
            failure=NotFoundFailure("Link not found", ["no provider matched"])
        )
        response = make_client(resolver).get("/iframely", params=URL)

        assert response.status_code == 404
        assert response.headers["content-type"] == "application/json"
        assert response.content == (
            b'{"error":{"source":"iframely","code":404,'
            b'"message":"Link not found","messages":["no provider matched"]}}'
        )

    def test_sniffed_timeout_xml(self, make_client, stub_resolver) -> None:
        """A 408 buried in the message becomes an XML timeout response."""
        resolver = stub_resolver(failure=GenericFailure("upstream timed out 408"))
        response = make_client(resolver).get("/iframely", params={**URL, "format": "xml"})

        assert response.status_code == 408
        assert response.headers["content-type"].startswith("text/xml")
        assert response.text.startswith("<?xml")
        assert "<message>Timeout</message>" in response.text
        assert "<code>408</code>" in response.text

    def test_unauthorized_rewritten(self, make_client, stub_resolver) -> None:
        """An explicit 401 is answered as 403 Unauthorized."""
        resolver = stub_resolver(failure=GenericFailure("", code=401))
        response = make_client(resolver).get("/iframely", params=URL)

        assert response.status_code == 403
        assert response.json()["error"] == {
            "source": "iframely",
            "code": 403,
            "message": "Unauthorized",
        }


class TestArbitraryFailures:
    """Failures that are not EmbedFailures are normalized first."""

    def test_plain_exception_is_server_error(self, make_client, stub_resolver) -> None:
        """Internal details never reach the client."""
        resolver = stub_resolver(failure=RuntimeError("secret connection string"))
        response = make_client(resolver).get("/iframely", params=URL)

        assert response.status_code == 500
        assert response.json()["error"]["message"] == "Server error"
        assert "secret" not in response.text

    def test_foreign_code_attribute(self, make_client, stub_resolver) -> None:
        """An integer ``code`` attribute is used as the explicit code."""
        resolver = stub_resolver(failure=UpstreamError("page removed", 410, ["x"]))
        body = make_client(resolver).get("/iframely", params=URL).json()
        assert body["error"]["code"] == 410
        assert body["error"]["message"] == "Gone"
        assert body["error"]["messages"] == ["x"]

    def test_string_code_attribute_ignored(self) -> None:
        """Non-integer codes (errno names) do not count as statuses."""
        failure = to_failure(UpstreamError("socket hang up", "ECONNRESET"))
        assert isinstance(failure, GenericFailure)
        assert failure.code is None

    def test_unknown_route(self, make_client) -> None:
        """Routing misses use the iframely error body."""
        response = make_client().get("/no/such/route")
        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Not found"

    def test_missing_url_is_bad_request(self, make_client, stub_resolver) -> None:
        """Validation errors become 400 with the problem in the message."""
        response = make_client(stub_resolver()).get("/iframely")
        assert response.status_code == 400
        assert response.json()["error"]["message"].startswith("Bad Request: ")
        assert "url" in response.json()["error"]["message"]

    def test_no_resolver_configured(self, make_client) -> None:
        """Without a resolver the embed route answers 501."""
        response = make_client().get("/iframely", params=URL)
        assert response.status_code == 501
        assert response.json()["error"]["message"] == "Server error"

    def test_product_header_on_errors(self, make_client, stub_resolver) -> None:
        """Error responses carry the product header."""
        resolver = stub_resolver(failure=GenericFailure("boom"))
        response = make_client(resolver).get("/iframely", params=URL)
        assert response.headers["x-powered-by"] == "Iframely"


class TestErrorPipeline:
    """ErrorPipeline in isolation."""

    @pytest.mark.parametrize(
        "failure, code, ttl",
        [
            (NotFoundFailure("x"), 404, 11),
            (GenericFailure("timed out 408"), 408, 22),
            (GenericFailure("", code=410), 410, 33),
        ],
    )
    def test_ttl_per_class(self, failure, code: int, ttl: int) -> None:
        """The writer receives the code and the TTL of its class."""
        settings = Settings(
            cache_ttl_page_404=11,
            cache_ttl_page_timeout=22,
            cache_ttl_page_other_error=33,
        )
        writer = RecordingWriter()
        ErrorPipeline(settings, writer).respond(_request(), failure)

        (call,) = writer.calls
        assert call["code"] == code
        assert call["ttl"] == ttl
        assert call["content_type"] == "application/json"

    def test_xml_selected_by_query(self) -> None:
        """format=xml switches the payload to XML."""
        writer = RecordingWriter()
        ErrorPipeline(Settings(), writer).respond(
            _request(b"format=xml"), NotFoundFailure("x")
        )
        assert writer.calls[0]["content_type"] == "text/xml"
        assert writer.calls[0]["body"].startswith(b"<?xml")

    def test_logs_message_only_by_default(self, caplog) -> None:
        """Without rich logging the record has no traceback."""
        caplog.set_level(logging.ERROR, logger="embedgate.shared.errors.handlers")
        ErrorPipeline(Settings(), RecordingWriter()).respond(
            _request(), GenericFailure("upstream refused")
        )
        (record,) = caplog.records
        assert record.getMessage() == "upstream refused"
        assert record.exc_info is None

    def test_rich_log_includes_traceback(self, caplog) -> None:
        """With rich logging the record carries exc_info."""
        caplog.set_level(logging.ERROR, logger="embedgate.shared.errors.handlers")
        try:
            raise GenericFailure("upstream refused")
        except GenericFailure as exc:
            failure = exc
        ErrorPipeline(Settings(rich_log_enabled=True), RecordingWriter()).respond(
            _request(), failure
        )
        (record,) = caplog.records
        assert record.exc_info is not None
        assert record.exc_info[1] is failure


class TestSettingsTtl:
    """Settings.ttl_for maps classes to configured durations."""

    def test_defaults(self) -> None:
        """Errors are cached for ten minutes, other errors for one."""
        settings = Settings()
        assert settings.ttl_for(TtlClass.PAGE_404) == 600
        assert settings.ttl_for(TtlClass.PAGE_TIMEOUT) == 600
        assert settings.ttl_for(TtlClass.PAGE_OTHER_ERROR) == 60
