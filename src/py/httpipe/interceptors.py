import binascii
from base64 import b64decode
from typing import Callable, Iterable

from .config import (
	AUTH_FAILURE_MESSAGE,
	AUTHORIZATION_HEADER,
	BASIC_PREFIX_LENGTH,
	DEFAULT_ENCODING,
	FORWARDED_PROTO_HEADER,
	SECURE_SCHEME,
)
from .conn import A, B, Conn, HeadersOpen, ResponseEnded, StatusLineOpen
from .http.model import ContentLength, HTTPRequest, WWWAuthenticate
from .http.status import MOVED_PERMANENTLY, NOT_FOUND, UNAUTHORIZED
from .middleware import redirect, respondText, then, writeHeader, writeStatus
from .utils.logging import debug, info, warning
from .utils.uri import URI

# --
# == Interceptors
#
# Interceptors wrap a middleware that writes a full response into another
# one with the same signature. Each either forwards the connection as-is
# to the wrapped middleware, or writes the whole response itself. None of
# them raises: malformed input degrades to forwarding.

TResponder = Callable[[Conn[StatusLineOpen, A]], Conn[ResponseEnded, B]]
TInterceptor = Callable[[TResponder], TResponder]
TFailure = Callable[[Conn[HeadersOpen, A]], Conn[ResponseEnded, B]]

# -----------------------------------------------------------------------------
#
# BASIC AUTH
#
# -----------------------------------------------------------------------------


def basicCredentials(request: HTTPRequest) -> list[str] | None:
	"""Returns the non-empty `:`-separated segments of the decoded
	`Authorization` header, or `None` when it cannot be decoded."""
	auth: str = request.header(AUTHORIZATION_HEADER) or ""
	try:
		text = b64decode(auth[BASIC_PREFIX_LENGTH:], validate=True).decode(
			DEFAULT_ENCODING
		)
	except (binascii.Error, ValueError) as e:
		# NOTE: `UnicodeDecodeError` is a `ValueError`
		debug("Undecodable basic auth credentials", Error=e.__class__.__name__)
		return None
	return [_ for _ in text.split(":") if _]


def validateBasicAuth(user: str, password: str, request: HTTPRequest) -> bool:
	"""Tells if the request carries the given credentials. The password is
	compared with the last segment only, so `user:a:secret` matches the
	password `secret`."""
	parts = basicCredentials(request)
	return bool(parts) and parts[0] == user and parts[-1] == password


def basicAuth(
	user: str,
	password: str,
	realm: str | None = None,
	failure: TFailure | None = None,
) -> TInterceptor:
	"""Gates the wrapped middleware behind a single static user and password.
	Rejected requests get a `401` with a `Basic` challenge, and `failure`
	completes the response (a plain text message by default)."""
	on_failure: TFailure = (
		respondText(AUTH_FAILURE_MESSAGE) if failure is None else failure
	)
	challenge = then(writeStatus(UNAUTHORIZED), writeHeader(WWWAuthenticate(realm)))

	def interceptor(middleware: TResponder) -> TResponder:
		def gated(conn: Conn[StatusLineOpen, A]) -> Conn[ResponseEnded, B]:
			if validateBasicAuth(user, password, conn.request):
				return middleware(conn)
			info(
				"Basic auth rejected",
				Realm=realm,
				Method=conn.request.method,
				Path=conn.request.path,
			)
			return on_failure(challenge(conn))

		return gated

	return interceptor


# -----------------------------------------------------------------------------
#
# REDIRECTS
#
# -----------------------------------------------------------------------------


def makeHttps(url: URI) -> str | None:
	"""Returns the absolute URL with its scheme made secure, or `None`
	when it can't be rebuilt."""
	try:
		return url.derive(scheme=SECURE_SCHEME).absolute()
	except ValueError as e:
		debug("Cannot rebuild URL as secure", URL=str(url), Error=str(e))
		return None


def makeCanonical(url: URI, host: str) -> str | None:
	try:
		return url.derive(host=host).absolute()
	except ValueError as e:
		debug("Cannot rebuild URL with canonical host", URL=str(url), Error=str(e))
		return None


def movedPermanently(conn: Conn[StatusLineOpen, A], location: str) -> Conn[ResponseEnded, None]:
	info(
		"Redirecting",
		Method=conn.request.method,
		From=conn.request.url,
		To=location,
	)
	return redirect(location, MOVED_PERMANENTLY)(conn)


def enforceHttps(
	allowedInsecureHosts: Iterable[str],
	scheme: Callable[[HTTPRequest, URI], str | None],
) -> TInterceptor:
	"""Redirects to the `https` version of the URL when the scheme given by
	`scheme` is not secure, unless the host is allowed to be insecure. IPv6
	hosts are listed without their brackets, as in `::1`."""
	allowed: frozenset[str] = frozenset(allowedInsecureHosts)

	def interceptor(middleware: TResponder) -> TResponder:
		def enforced(conn: Conn[StatusLineOpen, A]) -> Conn[ResponseEnded, B]:
			url = conn.request.uri
			if url is None:
				debug("Unparseable URL, forwarding", URL=conn.request.url)
				return middleware(conn)
			if (
				scheme(conn.request, url) == SECURE_SCHEME
				or (url.hostname or "") in allowed
			):
				return middleware(conn)
			location = makeHttps(url)
			if location is None:
				return middleware(conn)
			return movedPermanently(conn, location)

		return enforced

	return interceptor


def requireHttps(allowedInsecureHosts: Iterable[str]) -> TInterceptor:
	"""Redirects requests whose URL scheme is not `https`."""
	return enforceHttps(allowedInsecureHosts, lambda request, url: url.scheme)


def requireHerokuHttps(allowedInsecureHosts: Iterable[str]) -> TInterceptor:
	"""Redirects requests that did not reach the proxy over `https`. Behind
	a proxy the URL scheme is always `http`, so the scheme is read from the
	`X-Forwarded-Proto` header instead."""
	return enforceHttps(
		allowedInsecureHosts,
		lambda request, url: request.header(FORWARDED_PROTO_HEADER),
	)


def redirectUnrelatedHosts(
	allowedHosts: Iterable[str], canonicalHost: str
) -> TInterceptor:
	"""Redirects requests whose host is not allowed to the same URL on the
	canonical host, for instance `http://example.com` to
	`http://www.example.com`."""
	allowed: frozenset[str] = frozenset(allowedHosts)

	def interceptor(middleware: TResponder) -> TResponder:
		def canonicalized(conn: Conn[StatusLineOpen, A]) -> Conn[ResponseEnded, B]:
			url = conn.request.uri
			if url is None or not url.hostname or url.hostname in allowed:
				return middleware(conn)
			location = makeCanonical(url, canonicalHost)
			if location is None:
				return middleware(conn)
			return movedPermanently(conn, location)

		return canonicalized

	return interceptor


# -----------------------------------------------------------------------------
#
# RESPONSE
#
# -----------------------------------------------------------------------------


def contentLength(middleware: TResponder) -> TResponder:
	"""Appends a `Content-Length` header with the size of the body produced
	by the middleware. The middleware must not set it itself."""

	def measured(conn: Conn[StatusLineOpen, A]) -> Conn[ResponseEnded, B]:
		ended = middleware(conn)
		if ended.response.header("Content-Length") is not None:
			warning(
				"Response already has a Content-Length, appending another",
				Method=conn.request.method,
				Path=conn.request.path,
			)
		body = ended.response.body
		return ended.derive(
			ended.state,
			ended.response.withHeader(ContentLength(len(body) if body else 0)),
		)

	return measured


def notFound(
	middleware: TFailure,
) -> TResponder:
	"""Writes a `404` status and lets the middleware complete the response."""
	return then(writeStatus(NOT_FOUND), middleware)


# EOF
