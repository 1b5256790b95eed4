from functools import reduce
from typing import Any, Callable, Iterable, TypeAlias, TypeVar

from .conn import (
	A,
	B,
	BodyClosed,
	Conn,
	HeadersOpen,
	ResponseEnded,
	StatusLineOpen,
)
from .http.model import ContentType, Location, THeader
from .http.status import FOUND

# --
# == Middleware
#
# A middleware turns a connection in one state into a connection in
# another state. Larger middleware are built by composing smaller ones,
# and interceptors wrap a middleware into another one with the same
# signature.

S1 = TypeVar("S1")
S2 = TypeVar("S2")
S3 = TypeVar("S3")
C = TypeVar("C")
T = TypeVar("T")

Middleware: TypeAlias = Callable[[Conn[Any, Any]], Conn[Any, Any]]
Interceptor: TypeAlias = Callable[[Middleware], Middleware]

# -----------------------------------------------------------------------------
#
# COMPOSITION
#
# -----------------------------------------------------------------------------


def then(
	first: Callable[[Conn[S1, A]], Conn[S2, B]],
	second: Callable[[Conn[S2, B]], Conn[S3, C]],
) -> Callable[[Conn[S1, A]], Conn[S3, C]]:
	"""Sequential composition: `then(f, g)(conn) == g(f(conn))`."""

	def composed(conn: Conn[S1, A]) -> Conn[S3, C]:
		return second(first(conn))

	return composed


def compose(*middleware: Middleware) -> Middleware:
	"""Chains the given middleware left to right."""
	if not middleware:
		raise ValueError("compose() requires at least one middleware")
	return reduce(then, middleware)


def pipe(value: T, *functions: Callable[[Any], Any]) -> Any:
	"""Applies the functions to the value, left to right, so that
	`pipe(conn, f, g)` reads in the order it runs."""
	for f in functions:
		value = f(value)
	return value


# -----------------------------------------------------------------------------
#
# WRITING
#
# -----------------------------------------------------------------------------


def writeStatus(status: int) -> Callable[[Conn[StatusLineOpen, A]], Conn[HeadersOpen, A]]:
	return lambda conn: conn.writeStatus(status)


def writeHeader(
	header: THeader | str, value: str | None = None
) -> Callable[[Conn[HeadersOpen, A]], Conn[HeadersOpen, A]]:
	return lambda conn: conn.writeHeader(header, value)


def writeHeaders(
	headers: Iterable[THeader],
) -> Callable[[Conn[HeadersOpen, A]], Conn[HeadersOpen, A]]:
	frozen = tuple(headers)
	return lambda conn: conn.writeHeaders(frozen)


def closeHeaders(conn: Conn[HeadersOpen, A]) -> Conn[BodyClosed, A]:
	return conn.closeHeaders()


def send(data: bytes | str) -> Callable[[Conn[BodyClosed, A]], Conn[BodyClosed, A]]:
	return lambda conn: conn.send(data)


def end(conn: Conn[BodyClosed, A]) -> Conn[ResponseEnded, A]:
	return conn.end()


def mapData(functor: Callable[[A], B]) -> Callable[[Conn[Any, A]], Conn[Any, B]]:
	return lambda conn: conn.map(functor)


# -----------------------------------------------------------------------------
#
# RESPONDING
#
# -----------------------------------------------------------------------------


def respond(
	content: bytes | str | None, contentType: str | None = None
) -> Callable[[Conn[HeadersOpen, A]], Conn[ResponseEnded, A]]:
	"""Completes a response whose status is written: adds the content type
	when given, closes the headers, writes the content and ends."""

	def middleware(conn: Conn[HeadersOpen, A]) -> Conn[ResponseEnded, A]:
		if contentType is not None:
			conn = conn.writeHeader(ContentType(contentType))
		body = conn.closeHeaders()
		if content is not None:
			body = body.send(content)
		return body.end()

	return middleware


def respondText(
	text: str,
) -> Callable[[Conn[HeadersOpen, A]], Conn[ResponseEnded, A]]:
	return respond(text, "text/plain; charset=utf-8")


def respondHTML(
	html: str,
) -> Callable[[Conn[HeadersOpen, A]], Conn[ResponseEnded, A]]:
	return respond(html, "text/html; charset=utf-8")


def redirect(
	to: str, status: int = FOUND, headers: Iterable[THeader] = ()
) -> Callable[[Conn[StatusLineOpen, A]], Conn[ResponseEnded, None]]:
	"""Responds with a redirect to the given URL, with an empty body."""
	extra = tuple(headers)

	def middleware(conn: Conn[StatusLineOpen, A]) -> Conn[ResponseEnded, None]:
		return (
			conn.writeStatus(status)
			.writeHeader(Location(to))
			.writeHeaders(extra)
			.withData(None)
			.closeHeaders()
			.end()
		)

	return middleware


# EOF
