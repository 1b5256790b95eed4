# --
# Reason phrases for the status codes the pipeline writes, as listed in
# RFC 9110 §15.

OK: int = 200
CREATED: int = 201
NO_CONTENT: int = 204
MOVED_PERMANENTLY: int = 301
FOUND: int = 302
SEE_OTHER: int = 303
NOT_MODIFIED: int = 304
TEMPORARY_REDIRECT: int = 307
PERMANENT_REDIRECT: int = 308
BAD_REQUEST: int = 400
UNAUTHORIZED: int = 401
FORBIDDEN: int = 403
NOT_FOUND: int = 404
METHOD_NOT_ALLOWED: int = 405
INTERNAL_SERVER_ERROR: int = 500

HTTP_STATUS: dict[int, str] = {
	100: "Continue",
	101: "Switching Protocols",
	200: "OK",
	201: "Created",
	202: "Accepted",
	203: "Non-Authoritative Information",
	204: "No Content",
	205: "Reset Content",
	206: "Partial Content",
	300: "Multiple Choices",
	301: "Moved Permanently",
	302: "Found",
	303: "See Other",
	304: "Not Modified",
	307: "Temporary Redirect",
	308: "Permanent Redirect",
	400: "Bad Request",
	401: "Unauthorized",
	402: "Payment Required",
	403: "Forbidden",
	404: "Not Found",
	405: "Method Not Allowed",
	406: "Not Acceptable",
	408: "Request Timeout",
	409: "Conflict",
	410: "Gone",
	411: "Length Required",
	412: "Precondition Failed",
	413: "Content Too Large",
	414: "URI Too Long",
	415: "Unsupported Media Type",
	416: "Range Not Satisfiable",
	422: "Unprocessable Content",
	429: "Too Many Requests",
	500: "Internal Server Error",
	501: "Not Implemented",
	502: "Bad Gateway",
	503: "Service Unavailable",
	504: "Gateway Timeout",
}

# EOF
