import io

from httpipe.utils import logging
from httpipe.utils.logging import LogLevel, LogType


def test_level_filtering():
	previous = logging.THRESHOLD[0]
	try:
		assert logging.setLevel("warning") is LogLevel.Warning
		assert not logging.logged(LogLevel.Info)
		assert logging.logged(LogLevel.Error)
		assert logging.setLevel("nonsense") is LogLevel.Warning
		assert logging.setLevel(LogLevel.Debug) is LogLevel.Debug
		assert logging.logged(LogLevel.Debug)
	finally:
		logging.setLevel(previous)


def test_entries_carry_context():
	entry = logging.info("Redirecting", To="https://x.com/")
	assert entry.level is LogLevel.Info
	assert entry.origin == "httpipe"
	assert entry.context == {"To": "https://x.com/"}
	response = logging.event("Response", 200, Method="GET")
	assert response.type is LogType.Event
	assert response.value == 200


def test_format_data():
	assert logging.formatData(None) == "◌"
	assert logging.formatData(True) == "✓"
	assert logging.formatData("two words") == "'two words'"
	assert logging.formatData(1.5) == "1.50"


def test_warning_and_error_entries(monkeypatch):
	out = io.StringIO()
	monkeypatch.setattr(logging, "ERR", out)
	monkeypatch.setattr(logging, "COLOR", False)
	monkeypatch.setattr(logging, "THRESHOLD", [LogLevel.Info])
	warned = logging.warning("Duplicate header", Name="Content-Length")
	assert warned.level is LogLevel.Warning
	assert warned.type is LogType.Message
	assert warned.context == {"Name": "Content-Length"}
	failed = logging.error("Middleware failed", "HTTPIPE-UNENDED", State="HeadersOpen")
	assert failed.level is LogLevel.Error
	assert failed.value == "HTTPIPE-UNENDED"
	assert failed.context == {"State": "HeadersOpen"}
	lines = out.getvalue().splitlines()
	assert len(lines) == 2
	assert "Duplicate header" in lines[0]
	assert "Middleware failed" in lines[1]


def test_errors_pass_a_high_threshold(monkeypatch):
	out = io.StringIO()
	monkeypatch.setattr(logging, "ERR", out)
	monkeypatch.setattr(logging, "THRESHOLD", [LogLevel.Error])
	logging.warning("Dropped")
	logging.error("Kept", 500)
	assert "Dropped" not in out.getvalue()
	assert "Kept" in out.getvalue()


# EOF
