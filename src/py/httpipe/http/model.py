from typing import Iterable, Mapping, NamedTuple, TypeAlias, Union

from ..config import DEFAULT_ENCODING
from ..utils.uri import URI, escape
from .status import HTTP_STATUS

# -----------------------------------------------------------------------------
#
# HEADERS
#
# -----------------------------------------------------------------------------
# Headers are tagged so that interceptors build them from typed values
# rather than by formatting strings.


class WWWAuthenticate(NamedTuple):
	"""A `Basic` authentication challenge, with an optional realm."""

	realm: str | None = None

	def asPair(self) -> tuple[str, str]:
		return (
			"WWW-Authenticate",
			"Basic" if self.realm is None else f'Basic realm="{self.realm}"',
		)


class Location(NamedTuple):
	url: str

	def asPair(self) -> tuple[str, str]:
		return ("Location", self.url)


class ContentLength(NamedTuple):
	length: int

	def asPair(self) -> tuple[str, str]:
		return ("Content-Length", str(self.length))


class ContentType(NamedTuple):
	value: str

	def asPair(self) -> tuple[str, str]:
		return ("Content-Type", self.value)


class Header(NamedTuple):
	"""An arbitrary header, for the kinds that have no dedicated type."""

	name: str
	value: str

	def asPair(self) -> tuple[str, str]:
		return (self.name, self.value)


THeader: TypeAlias = Union[WWWAuthenticate, Location, ContentLength, ContentType, Header]

THeaders: TypeAlias = Union[Mapping[str, str], Iterable[tuple[str, str]]]


def headerPairs(headers: THeaders | None) -> tuple[tuple[str, str], ...]:
	"""Normalizes a mapping or an iterable of pairs into a tuple of pairs,
	preserving order."""
	if headers is None:
		return ()
	items = headers.items() if isinstance(headers, Mapping) else headers
	res: list[tuple[str, str]] = []
	for k, v in items:
		if not isinstance(k, str) or not isinstance(v, str):
			raise ValueError(f"Header name and value must be strings, got: {k!r}={v!r}")
		res.append((k, v))
	return tuple(res)


# -----------------------------------------------------------------------------
#
# REQUEST
#
# -----------------------------------------------------------------------------


class HTTPRequest:
	"""An inbound request, as handed over by the boundary layer. Header keys
	are kept as received and looked up by first exact match."""

	__slots__ = ["method", "url", "headers", "body", "_uri", "_parsed"]

	def __init__(
		self,
		method: str,
		url: str,
		headers: THeaders | None = None,
		body: bytes | None = None,
	):
		if body is not None and not isinstance(body, bytes):
			raise ValueError(f"Request body must be bytes, got: {type(body)}")
		self.method: str = method
		self.url: str = url
		self.headers: tuple[tuple[str, str], ...] = headerPairs(headers)
		self.body: bytes | None = body
		self._uri: URI | None = None
		self._parsed: bool = False

	def header(self, name: str) -> str | None:
		for k, v in self.headers:
			if k == name:
				return v
		return None

	@property
	def uri(self) -> URI | None:
		"""The parsed URL, or `None` when it is malformed."""
		if not self._parsed:
			try:
				self._uri = URI.Parse(self.url)
			except ValueError:
				self._uri = None
			self._parsed = True
		return self._uri

	@property
	def host(self) -> str | None:
		return self.uri.host if self.uri else None

	@property
	def scheme(self) -> str | None:
		return self.uri.scheme if self.uri else None

	@property
	def path(self) -> str:
		return (self.uri.path or "/") if self.uri else self.url

	def __str__(self) -> str:
		return f"Request({self.method} {self.url} {self.headers})"


# -----------------------------------------------------------------------------
#
# RESPONSE
#
# -----------------------------------------------------------------------------


class HTTPResponse(NamedTuple):
	"""The response being assembled. Headers keep their insertion order and
	duplicates append."""

	status: int | None = None
	headers: tuple[THeader, ...] = ()
	body: bytes | None = None

	@property
	def message(self) -> str | None:
		return None if self.status is None else HTTP_STATUS.get(self.status, "Unknown status")

	@property
	def pairs(self) -> list[tuple[str, str]]:
		return [_.asPair() for _ in self.headers]

	def header(self, name: str) -> str | None:
		"""Returns the value of the first header with the given name,
		compared case-insensitively as header names are on the wire."""
		values = self.headerValues(name)
		return values[0] if values else None

	def headerValues(self, name: str) -> list[str]:
		key = name.lower()
		return [v for k, v in self.pairs if k.lower() == key]

	def withHeader(self, header: THeader) -> "HTTPResponse":
		return self._replace(headers=self.headers + (header,))

	def withBody(self, body: bytes | str | None) -> "HTTPResponse":
		if isinstance(body, str):
			body = body.encode(DEFAULT_ENCODING)
		elif body is not None and not isinstance(body, bytes):
			raise ValueError(f"Unsupported body {type(body)}:{body}")
		return self._replace(body=body)

	def head(self, protocol: str = "HTTP/1.1") -> bytes:
		"""Serializes the status line and headers."""
		lines: list[str] = [f"{k}: {escape(v)}" for k, v in self.pairs]
		lines.insert(0, f"{protocol} {self.status} {self.message}")
		lines.append("")
		lines.append("")
		# NOTE: Non-ASCII header values are percent-encoded, header names
		# are expected to be ASCII tokens.
		return "\r\n".join(lines).encode("ascii")

	def __str__(self) -> str:
		return f"Response({self.status} {self.message} {self.pairs} {self.body!r})"


# EOF
