from typing import Callable

from .conn import A, B, Conn, ResponseEnded, StatusLineOpen, ProtocolViolation
from .http.model import HTTPRequest, HTTPResponse
from .utils.logging import error, event

# --
# == Bridge
#
# The boundary between a server and the pipeline: connections are created
# here from inbound requests, and ended connections are turned back into
# bytes for transmission.


def connection(request: HTTPRequest, data: A = None) -> Conn[StatusLineOpen, A]:
	return Conn.Create(request, data)


def process(
	middleware: Callable[[Conn[StatusLineOpen, A]], Conn[ResponseEnded, B]],
	request: HTTPRequest,
	data: A = None,
) -> HTTPResponse:
	"""Runs the middleware over a fresh connection for the request and
	returns the response, which must have been ended."""
	conn = middleware(connection(request, data))
	if not conn.isEnded:
		error(
			"Middleware did not end the response",
			"HTTPIPE-UNENDED",
			State=conn.state.__name__,
			Method=request.method,
			URL=request.url,
		)
		raise ProtocolViolation("transmit response", (ResponseEnded,), conn.state)
	event(
		"Response",
		conn.response.status,
		Method=request.method,
		URL=request.url,
	)
	return conn.response


def asBytes(response: HTTPResponse, protocol: str = "HTTP/1.1") -> bytes:
	"""Serializes the response as it is sent on the wire."""
	if response.status is None:
		raise ValueError("Response has no status line")
	return response.head(protocol) + (response.body or b"")


# EOF
