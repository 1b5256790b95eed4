from .http.model import (
	HTTPRequest,
	HTTPResponse,
	Header,
	WWWAuthenticate,
	Location,
	ContentLength,
	ContentType,
)  # NOQA: F401
from .conn import (
	Conn,
	ProtocolViolation,
	StatusLineOpen,
	HeadersOpen,
	BodyClosed,
	ResponseEnded,
)  # NOQA: F401
from .middleware import (
	Middleware,
	Interceptor,
	then,
	pipe,
	compose,
	writeStatus,
	writeHeader,
	writeHeaders,
	closeHeaders,
	send,
	end,
	mapData,
	respond,
	respondText,
	respondHTML,
	redirect,
)  # NOQA: F401
from .interceptors import (
	basicAuth,
	validateBasicAuth,
	requireHttps,
	requireHerokuHttps,
	redirectUnrelatedHosts,
	contentLength,
	notFound,
)  # NOQA: F401
from .bridge import connection, process, asBytes  # NOQA: F401


# EOF
