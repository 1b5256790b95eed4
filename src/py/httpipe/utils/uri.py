from __future__ import annotations

from typing import Any
from urllib.parse import quote, urlsplit

# Printable ASCII is kept as-is when escaping, only the rest is
# percent-encoded as UTF-8.
PRINTABLE: str = "".join(chr(_) for _ in range(32, 127))


def escape(text: str) -> str:
	"""Percent-encodes the non-ASCII characters of `text`, leaving existing
	escapes and ASCII punctuation untouched."""
	return text if text.isascii() else quote(text, safe=PRINTABLE)


class URI:
	"""A decomposed URL that can be rebuilt with some of its components
	replaced. Parsing is strict: anything that would not survive a
	round-trip raises a `ValueError`."""

	__slots__ = (
		"scheme",
		"userinfo",
		"host",
		"port",
		"path",
		"query",
		"fragment",
	)

	@classmethod
	def Parse(cls, link: "URI|str") -> "URI":
		if isinstance(link, URI):
			return link
		if any(_.isspace() or ord(_) < 32 for _ in link):
			raise ValueError(f"URL contains whitespace or control characters: {link!r}")
		# NOTE: `urlsplit` raises `ValueError` on its own for unbalanced
		# IPv6 brackets.
		res = urlsplit(link)
		# `urlsplit` gives "" for both an absent and an empty query or
		# fragment, the delimiters tell them apart.
		before, hashsign, _ = link.partition("#")
		userinfo, at, hostport = res.netloc.rpartition("@")
		host, port = cls.ParseHostPort(hostport)
		return URI(
			scheme=res.scheme or None,
			userinfo=userinfo if at else None,
			host=host,
			port=port,
			path=res.path,
			query=res.query if "?" in before else None,
			fragment=res.fragment if hashsign else None,
		)

	@staticmethod
	def ParseHostPort(hostport: str) -> tuple[str | None, int | None]:
		if hostport.startswith("["):
			end = hostport.find("]")
			if end == -1:
				raise ValueError(f"Unterminated IPv6 host: {hostport!r}")
			host, rest = hostport[: end + 1], hostport[end + 1 :]
			if rest and not rest.startswith(":"):
				raise ValueError(f"Unexpected characters after IPv6 host: {hostport!r}")
			port = rest[1:]
		else:
			host, _, port = hostport.partition(":")
		if port and not (port.isdigit() and int(port) <= 65535):
			raise ValueError(f"Invalid port: {port!r}")
		return (host or None, int(port) if port else None)

	def __init__(
		self,
		*,
		path: str | None = None,
		scheme: str | None = None,
		userinfo: str | None = None,
		host: str | None = None,
		port: int | None = None,
		query: str | None = None,
		fragment: str | None = None,
	):
		self.path = path
		self.scheme = scheme
		self.userinfo = userinfo
		self.host = host
		self.port = port
		self.query = query
		self.fragment = fragment

	@property
	def hostname(self) -> str | None:
		"""The host without the brackets of an IPv6 literal."""
		host = self.host
		if host and host.startswith("[") and host.endswith("]"):
			return host[1:-1]
		return host

	@property
	def isAbsolute(self) -> bool:
		return bool(self.scheme and self.host)

	def derive(
		self,
		path: str | None = None,
		scheme: str | None = None,
		host: str | None = None,
		port: int | None = None,
		query: str | None = None,
		fragment: str | None = None,
	) -> "URI":
		"""Returns a copy of this URI with the given components replaced,
		`None` meaning unchanged."""
		return URI(
			path=self.path if path is None else path,
			scheme=self.scheme if scheme is None else scheme,
			userinfo=self.userinfo,
			host=self.host if host is None else host,
			port=self.port if port is None else port,
			query=self.query if query is None else query,
			fragment=self.fragment if fragment is None else fragment,
		)

	def absolute(self) -> str:
		"""Serializes the URI as ASCII, suitable for a `Location` header.
		Non-ASCII hosts are IDNA-encoded and other components are
		percent-encoded. Raises a `ValueError` when the URI lacks a scheme or
		a host, or when the host is not a valid IDNA name."""
		if not self.isAbsolute:
			raise ValueError(f"URI is not absolute: {self!r}")
		host = self.host or ""
		if not host.isascii():
			# NOTE: `UnicodeError` is a `ValueError`
			host = host.encode("idna").decode("ascii")
		return str(
			URI(
				scheme=self.scheme,
				userinfo=None if self.userinfo is None else escape(self.userinfo),
				host=host,
				port=self.port,
				path=None if self.path is None else escape(self.path),
				query=None if self.query is None else escape(self.query),
				fragment=None if self.fragment is None else escape(self.fragment),
			)
		)

	def asDict(self) -> dict[str, Any]:
		return {
			k: v
			for k, v in dict(
				scheme=self.scheme,
				userinfo=self.userinfo,
				host=self.host,
				port=self.port,
				path=self.path,
				query=self.query,
				fragment=self.fragment,
			).items()
			if v is not None
		}

	def __eq__(self, other: Any) -> bool:
		if isinstance(other, str):
			return str(self) == other
		elif isinstance(other, URI):
			return self.asDict() == other.asDict()
		else:
			return False

	def __repr__(self) -> str:
		return f"URI({' '.join(f'{k}={v}' for k, v in self.asDict().items() if v)})"

	def __str__(self) -> str:
		res: list[str] = []
		if self.scheme:
			res.append(self.scheme)
			res.append(":")
		if self.host is not None:
			res.append("//")
			if self.userinfo is not None:
				res.append(self.userinfo)
				res.append("@")
			res.append(self.host)
			if self.port is not None:
				res.append(f":{self.port}")
		if self.path:
			res.append(self.path)
		if self.query is not None:
			res.append("?")
			res.append(self.query)
		if self.fragment is not None:
			res.append("#")
			res.append(self.fragment)
		return "".join(res)


def uri(value: str | URI) -> URI:
	return value if isinstance(value, URI) else URI.Parse(value)


# EOF
