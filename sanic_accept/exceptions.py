from sanic.exceptions import SanicException

from sanic_accept.utils import http_status_message


class ParseError(ValueError):
    """Base class for errors raised while parsing an ``Accept`` header."""

    def __init__(self, token, message):
        super().__init__(message)
        self.token = token


class InvalidMediaType(ParseError):
    """A comma separated entry is not a valid media type."""

    def __init__(self, token):
        super().__init__(token, 'Invalid media type: %s' % token)


class InvalidWeight(ParseError):
    """The ``q`` parameter of an entry is not a number in [0.0, 1.0]."""

    def __init__(self, token, raw_q):
        super().__init__(
            token, 'Weight should be 0.0-1.0. Got %s in %s' % (raw_q, token))
        self.raw_q = raw_q


class NotAcceptable(SanicException):
    """None of the available representations is acceptable to the client."""
    status_code = 406
    quiet = True

    def __init__(self, message=None, **kwargs):
        super().__init__(message or http_status_message(406), **kwargs)
