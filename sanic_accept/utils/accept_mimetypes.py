import logging

from sanic.exceptions import BadRequest

from sanic_accept.accept import negotiate, parse
from sanic_accept.exceptions import ParseError

logger = logging.getLogger(__name__)


def get(request):
    """Return the raw ``Accept`` header of ``request``, or ``None``."""
    return request.headers.get('accept', None)


def best_match(request, representations, default=None):
    """Choose one of ``representations`` for ``request``.

    ``default`` is returned when the request carries no ``Accept`` header.
    Otherwise the header is negotiated against ``representations`` in
    their iteration order, and ``None`` means that none is acceptable.
    The result is the media type string exactly as it appears in
    ``representations``.
    :raises sanic.exceptions.BadRequest: if the header is malformed
    """
    accept_mimetypes = get(request)
    if accept_mimetypes is None:
        return default
    try:
        accept = parse(str(accept_mimetypes))
    except ParseError as e:
        raise BadRequest(str(e)) from e

    candidates = list(representations)
    chosen = negotiate(accept, candidates)
    if chosen is None:
        logger.debug('%r not acceptable for %s', accept_mimetypes,
                     ', '.join(candidates))
        return None
    for mediatype in candidates:
        if chosen == mediatype:
            return mediatype
