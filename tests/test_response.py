import pytest

from httpipe import (
	ContentLength,
	ProtocolViolation,
	basicAuth,
	compose,
	contentLength,
	notFound,
	redirect,
	requireHttps,
	respondText,
	writeHeader,
	writeStatus,
)
from httpipe import bridge, interceptors
from httpipe.bridge import asBytes, process
from httpipe.http.model import HTTPResponse


def test_content_length_counts_bytes(make_request):
	app = contentLength(compose(writeStatus(200), respondText("héllo")))
	response = process(app, make_request("https://x.com/"))
	assert response.body == "héllo".encode("utf8")
	assert response.header("Content-Length") == "6"
	assert response.headers[-1] == ContentLength(6)


def test_content_length_of_absent_body(make_request):
	response = process(contentLength(redirect("/next")), make_request("https://x.com/"))
	assert response.body is None
	assert response.header("Content-Length") == "0"


def test_content_length_appends(make_request):
	app = contentLength(
		compose(writeStatus(200), writeHeader(ContentLength(99)), respondText("abc"))
	)
	response = process(app, make_request("https://x.com/"))
	assert response.headerValues("Content-Length") == ["99", "3"]


def test_content_length_wraps_interceptors(make_request):
	app = contentLength(basicAuth("alice", "secret")(compose(writeStatus(200), respondText("ok"))))
	response = process(app, make_request("https://x.com/"))
	assert response.status == 401
	assert response.header("Content-Length") == str(len(response.body))


def test_not_found(make_request):
	response = process(notFound(respondText("Nothing here")), make_request("https://x.com/nope"))
	assert response.status == 404
	assert response.body == b"Nothing here"


def test_as_bytes_keeps_header_order(make_request):
	app = contentLength(compose(writeStatus(200), writeHeader("X-First", "1"), respondText("Hi")))
	response = process(app, make_request("https://x.com/"))
	assert asBytes(response) == (
		b"HTTP/1.1 200 OK\r\n"
		b"X-First: 1\r\n"
		b"Content-Type: text/plain; charset=utf-8\r\n"
		b"Content-Length: 2\r\n"
		b"\r\n"
		b"Hi"
	)


def test_as_bytes_redirect(make_request):
	response = process(requireHttps([])(notFound(respondText("x"))), make_request("http://a.io/"))
	assert asBytes(response) == (
		b"HTTP/1.1 301 Moved Permanently\r\nLocation: https://a.io/\r\n\r\n"
	)


def test_as_bytes_requires_status():
	with pytest.raises(ValueError):
		asBytes(HTTPResponse())


def test_process_requires_ended_response(make_request):
	with pytest.raises(ProtocolViolation):
		process(writeStatus(200), make_request("https://x.com/"))


def test_as_bytes_escapes_non_ascii_header_values(make_request):
	app = compose(writeStatus(200), writeHeader("X-Name", "Zoë"), respondText("Hi"))
	response = process(app, make_request("https://x.com/"))
	assert response.header("X-Name") == "Zoë"
	assert b"\r\nX-Name: Zo%C3%AB\r\n" in asBytes(response)


def test_content_length_warns_when_already_set(make_request, monkeypatch):
	warnings = []
	monkeypatch.setattr(
		interceptors, "warning", lambda message, **context: warnings.append(context)
	)
	app = contentLength(
		compose(writeStatus(200), writeHeader(ContentLength(99)), respondText("abc"))
	)
	process(app, make_request("https://x.com/p"))
	assert warnings == [{"Method": "GET", "Path": "/p"}]
	process(contentLength(compose(writeStatus(200), respondText("abc"))), make_request("https://x.com/"))
	assert len(warnings) == 1


def test_unended_response_is_logged_as_error(make_request, monkeypatch):
	errors = []
	monkeypatch.setattr(
		bridge, "error", lambda message, code, **context: errors.append((code, context))
	)
	with pytest.raises(ProtocolViolation):
		process(writeStatus(200), make_request("https://x.com/"))
	assert errors == [
		(
			"HTTPIPE-UNENDED",
			{"State": "HeadersOpen", "Method": "GET", "URL": "https://x.com/"},
		)
	]


# EOF
