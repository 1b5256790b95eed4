"""
Pipeline Example

Builds a small site out of interceptors and runs a few requests through
it, printing the responses as they would be sent.

Usage:
    python pipeline.py
"""

from base64 import b64encode

from httpipe import (
	HTTPRequest,
	basicAuth,
	compose,
	contentLength,
	notFound,
	redirectUnrelatedHosts,
	requireHerokuHttps,
	respondHTML,
	respondText,
	writeStatus,
)
from httpipe.bridge import asBytes, process

home = compose(writeStatus(200), respondHTML("<h1>Welcome</h1>"))
admin = basicAuth("admin", "hunter2", realm="Admin")(
	compose(writeStatus(200), respondText("Admin area"))
)
missing = notFound(respondText("Not Found"))


def router(conn):
	path = conn.request.path
	if path == "/":
		return home(conn)
	elif path.startswith("/admin"):
		return admin(conn)
	else:
		return missing(conn)


app = contentLength(
	requireHerokuHttps(allowedInsecureHosts=["localhost"])(
		redirectUnrelatedHosts(["www.example.com", "localhost"], "www.example.com")(
			router
		)
	)
)

SECURE = {"X-Forwarded-Proto": "https"}
TOKEN = "Basic " + b64encode(b"admin:hunter2").decode("ascii")

for request in [
	HTTPRequest("GET", "http://www.example.com/"),
	HTTPRequest("GET", "http://example.com/about", SECURE),
	HTTPRequest("GET", "http://www.example.com/", SECURE),
	HTTPRequest("GET", "http://www.example.com/admin", SECURE),
	HTTPRequest("GET", "http://www.example.com/admin", SECURE | {"Authorization": TOKEN}),
	HTTPRequest("GET", "http://localhost:8000/elsewhere"),
]:
	print(f"=== {request.method} {request.url}")
	print(asBytes(process(app, request)).decode("utf8"))
	print()

# EOF
