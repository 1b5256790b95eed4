from os import getenv

DEFAULT_ENCODING: str = "utf8"

# One of `debug`, `info`, `warning`, `error`
LOG_LEVEL: str = getenv("HTTPIPE_LOG_LEVEL", "info")

# Rendered by the default basic auth failure middleware
AUTH_FAILURE_MESSAGE: str = getenv("HTTPIPE_AUTH_MESSAGE", "Please authenticate.")

SECURE_SCHEME: str = "https"
AUTHORIZATION_HEADER: str = "Authorization"
FORWARDED_PROTO_HEADER: str = "X-Forwarded-Proto"

# Length of the `Basic ` scheme token and its separator
BASIC_PREFIX_LENGTH: int = 6

# EOF
