"""Exception hierarchy for the logging middleware."""


class RequestLogError(Exception):
    """Base logging middleware error."""


class BodyDecodeError(RequestLogError, ValueError):
    """Raised when a JSON response body cannot be decoded for the log."""
