from typing import Any, Callable, Generic, Iterable, TypeVar, cast

from mypy_extensions import trait

from .config import DEFAULT_ENCODING
from .http.model import Header, HTTPRequest, HTTPResponse, THeader

# -----------------------------------------------------------------------------
#
# STATES
#
# -----------------------------------------------------------------------------
# The states are never instantiated: they tag `Conn` both as a generic
# parameter (so that a static checker rejects illegal sequences) and as
# a runtime value checked on every transition.


@trait
class State:
	"""Base of the response writing states."""


class StatusLineOpen(State):
	"""Nothing has been written yet, the status line is expected."""


class HeadersOpen(State):
	"""The status is written and headers may be appended."""


class BodyClosed(State):
	"""Headers are closed: the body may be written until the response
	ends."""


class ResponseEnded(State):
	"""The response is complete and can only be inspected."""


STATES: tuple[type[State], ...] = (StatusLineOpen, HeadersOpen, BodyClosed, ResponseEnded)

S = TypeVar("S", bound=State)
A = TypeVar("A")
B = TypeVar("B")

# -----------------------------------------------------------------------------
#
# ERRORS
#
# -----------------------------------------------------------------------------


class ProtocolViolation(RuntimeError):
	"""Raised when a writing operation is attempted on a connection that is
	not in the state the operation requires. This is a programming error."""

	def __init__(
		self, operation: str, expected: tuple[type[State], ...], actual: type[State]
	):
		names = " or ".join(_.__name__ for _ in expected) or "any open state"
		super().__init__(
			f"Cannot {operation}: connection is {actual.__name__}, expected {names}"
		)
		self.operation: str = operation
		self.expected: tuple[type[State], ...] = expected
		self.actual: type[State] = actual


# -----------------------------------------------------------------------------
#
# CONNECTION
#
# -----------------------------------------------------------------------------


class Conn(Generic[S, A]):
	"""An in-flight exchange: the request, the response being assembled
	and a payload carried alongside. Connections are never mutated, each
	operation returns a new connection in the resulting state."""

	__slots__ = ["_state", "_request", "_response", "_data"]

	@staticmethod
	def Create(request: HTTPRequest, data: A) -> "Conn[StatusLineOpen, A]":
		"""Creates the connection for an inbound request, ready for its
		status line to be written."""
		return Conn(StatusLineOpen, request, HTTPResponse(), data)

	def __init__(
		self,
		state: type[State],
		request: HTTPRequest,
		response: HTTPResponse,
		data: A,
	):
		self._state: type[State] = state
		self._request: HTTPRequest = request
		self._response: HTTPResponse = response
		self._data: A = data

	@property
	def state(self) -> type[State]:
		return self._state

	@property
	def request(self) -> HTTPRequest:
		return self._request

	@property
	def response(self) -> HTTPResponse:
		return self._response

	@property
	def data(self) -> A:
		return self._data

	@property
	def isEnded(self) -> bool:
		return self.state is ResponseEnded

	def expect(self, operation: str, *states: type[State]) -> None:
		if self.state not in states:
			raise ProtocolViolation(operation, states, self.state)

	def derive(
		self,
		state: type[State],
		response: HTTPResponse | None = None,
	) -> "Conn[Any, A]":
		return Conn(
			state,
			self.request,
			self.response if response is None else response,
			self.data,
		)

	# =========================================================================
	# STATUS LINE
	# =========================================================================

	def writeStatus(
		self: "Conn[StatusLineOpen, A]", status: int
	) -> "Conn[HeadersOpen, A]":
		self.expect("write status", StatusLineOpen)
		if not 100 <= status <= 999:
			raise ValueError(f"Status code must have three digits, got: {status}")
		return cast(
			"Conn[HeadersOpen, A]",
			self.derive(HeadersOpen, self.response._replace(status=status)),
		)

	# =========================================================================
	# HEADERS
	# =========================================================================

	def writeHeader(
		self: "Conn[HeadersOpen, A]",
		header: THeader | str,
		value: str | None = None,
	) -> "Conn[HeadersOpen, A]":
		"""Appends a header, given either as a typed header or as a name
		and a value."""
		self.expect("write header", HeadersOpen)
		if isinstance(header, str):
			if value is None:
				raise ValueError(f"Header '{header}' is given without a value")
			header = Header(header, value)
		return cast(
			"Conn[HeadersOpen, A]",
			self.derive(HeadersOpen, self.response.withHeader(header)),
		)

	def writeHeaders(
		self: "Conn[HeadersOpen, A]", headers: Iterable[THeader]
	) -> "Conn[HeadersOpen, A]":
		self.expect("write headers", HeadersOpen)
		res: Conn[HeadersOpen, A] = self
		for _ in headers:
			res = res.writeHeader(_)
		return res

	def closeHeaders(self: "Conn[HeadersOpen, A]") -> "Conn[BodyClosed, A]":
		self.expect("close headers", HeadersOpen)
		return cast("Conn[BodyClosed, A]", self.derive(BodyClosed))

	# =========================================================================
	# BODY
	# =========================================================================

	def send(self: "Conn[BodyClosed, A]", data: bytes | str) -> "Conn[BodyClosed, A]":
		"""Appends the given data to the response body."""
		self.expect("send body", BodyClosed)
		chunk: bytes = data.encode(DEFAULT_ENCODING) if isinstance(data, str) else data
		if not isinstance(chunk, bytes):
			raise ValueError(f"Body data must be bytes or str, got: {type(data)}")
		body: bytes = (self.response.body or b"") + chunk
		return cast(
			"Conn[BodyClosed, A]",
			self.derive(BodyClosed, self.response._replace(body=body)),
		)

	def end(self: "Conn[BodyClosed, A]") -> "Conn[ResponseEnded, A]":
		self.expect("end response", BodyClosed)
		return cast("Conn[ResponseEnded, A]", self.derive(ResponseEnded))

	# =========================================================================
	# PAYLOAD
	# =========================================================================

	def map(self, functor: Callable[[A], B]) -> "Conn[S, B]":
		"""Transforms the payload, leaving the state and response as they are."""
		self.expect("map data", StatusLineOpen, HeadersOpen, BodyClosed)
		return Conn(self.state, self.request, self.response, functor(self.data))

	def withData(self, value: B) -> "Conn[S, B]":
		return self.map(lambda _: value)

	def __str__(self) -> str:
		return f"Conn({self.state.__name__} {self.request} {self.response})"


# EOF
