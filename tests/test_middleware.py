import pytest

from httpipe import (
	Conn,
	HTTPRequest,
	Location,
	ResponseEnded,
	closeHeaders,
	compose,
	end,
	mapData,
	pipe,
	redirect,
	respond,
	respondHTML,
	respondText,
	send,
	then,
	writeHeader,
	writeHeaders,
	writeStatus,
)


def fresh(data=None):
	return Conn.Create(HTTPRequest("GET", "https://x.com/"), data)


def test_then_applies_first_then_second():
	middleware = then(writeStatus(201), writeHeader("X-Id", "7"))
	conn = middleware(fresh())
	assert conn.response.status == 201
	assert conn.response.pairs == [("X-Id", "7")]


def test_then_is_associative():
	f = writeStatus(200)
	g = writeHeader("X-A", "a")
	h = compose(writeHeader("X-B", "b"), closeHeaders, send("body"), end)
	left = then(then(f, g), h)(fresh())
	right = then(f, then(g, h))(fresh())
	assert left.response == right.response
	assert left.state is right.state is ResponseEnded


def test_pipe_reads_left_to_right():
	conn = pipe(
		fresh(),
		writeStatus(200),
		writeHeaders([Location("/a")]),
		closeHeaders,
		send(b"x"),
		end,
	)
	assert conn.isEnded
	assert conn.response.header("Location") == "/a"
	assert pipe(3) == 3


def test_compose_requires_middleware():
	with pytest.raises(ValueError):
		compose()


def test_map_data():
	conn = mapData(lambda _: _ + 1)(fresh(1))
	assert conn.data == 2


def test_respond_text():
	conn = then(writeStatus(200), respondText("Hello"))(fresh())
	assert conn.isEnded
	assert conn.response.header("Content-Type") == "text/plain; charset=utf-8"
	assert conn.response.body == b"Hello"


def test_respond_html():
	conn = then(writeStatus(200), respondHTML("<p>Hi</p>"))(fresh())
	assert conn.response.header("Content-Type") == "text/html; charset=utf-8"
	assert conn.response.body == b"<p>Hi</p>"


def test_respond_without_content_has_no_body():
	conn = then(writeStatus(204), respond(None))(fresh())
	assert conn.isEnded
	assert conn.response.body is None
	assert conn.response.headers == ()


def test_redirect():
	conn = redirect("https://x.com/next")(fresh("payload"))
	assert conn.isEnded
	assert conn.response.status == 302
	assert conn.response.pairs == [("Location", "https://x.com/next")]
	assert conn.response.body is None
	assert conn.data is None


# EOF
