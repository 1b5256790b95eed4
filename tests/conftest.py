"""
pytest configuration and fixtures.
"""

import sys
from pathlib import Path
from typing import Any, Callable

import pytest

# Add src/py to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src" / "py"))

from httpipe import Conn, HTTPRequest, compose, respondText, writeStatus  # NOQA: E402


class Recorder:
	"""A downstream middleware that remembers the connections it is given
	and responds with `200 OK`."""

	def __init__(self) -> None:
		self.calls: list[Conn[Any, Any]] = []
		self.respond = compose(writeStatus(200), respondText("OK"))

	def __call__(self, conn: Conn[Any, Any]) -> Conn[Any, Any]:
		self.calls.append(conn)
		return self.respond(conn)


@pytest.fixture
def recorder() -> Recorder:
	return Recorder()


@pytest.fixture
def make_request() -> Callable[..., HTTPRequest]:
	def factory(url: str, headers: Any = None, method: str = "GET") -> HTTPRequest:
		return HTTPRequest(method, url, headers)

	return factory


# EOF
