"""
Parsing of the ``Accept`` request header and content negotiation against
the media types a server is able to produce.

>>> accept = parse('text/html;q=0.9, application/json, */*;q=0.1')
>>> negotiate(accept, ['text/html', 'application/json'])
MimeType('application/json')
"""
import enum
import logging
from collections import namedtuple

from sanic_accept.exceptions import InvalidMediaType, InvalidWeight
from sanic_accept.mimetype import MimeType

__all__ = ('MediaType', 'Accept', 'MatchKind', 'Match', 'parse', 'match',
           'negotiate')

logger = logging.getLogger(__name__)


class MatchKind(enum.IntEnum):
    """How an accept entry matched an available media type. Higher is more
    specific and always beats a lower kind, whatever the weights.
    """
    WILDCARD = 1
    PARTIAL = 2
    EXACT = 3


class MediaType(namedtuple('MediaType', 'mime weight')):
    """One entry of an ``Accept`` header.
    :param mime: the :class:`~sanic_accept.mimetype.MimeType` accepted
    :param weight: the ``q`` value, or ``None`` when the entry had none
    """
    __slots__ = ()

    def __new__(cls, mime, weight=None):
        if weight is not None and not 0.0 <= weight <= 1.0:
            raise ValueError('weight should be 0.0-1.0, got %r' % weight)
        return super().__new__(cls, mime, weight)

    @classmethod
    def _make(cls, iterable):
        # _replace() builds through here; keep the weight check
        return cls(*iterable)

    @classmethod
    def parse(cls, token):
        """Parse a single ``type/subtype;param=value;q=0.5`` entry.
        The ``q`` parameter is taken out before the rest of the entry is
        handed to :meth:`MimeType.parse`.
        :raises InvalidMediaType: if the media type is malformed
        :raises InvalidWeight: if ``q`` is not a number in [0.0, 1.0]
        """
        token = token.strip()
        essence, *segments = [s.strip() for s in token.split(';')]
        raw_q = None
        params = []
        for segment in segments:
            if not segment:
                continue
            name, sep, value = segment.partition('=')
            name = name.strip()
            if name.lower() == 'q':
                raw_q = value.strip()
            elif not sep or not name:
                raise InvalidMediaType(token)
            else:
                params.append(segment)

        try:
            mime = MimeType.parse('; '.join([essence] + params))
        except ValueError as e:
            raise InvalidMediaType(token) from e

        if raw_q is None:
            return cls(mime)
        try:
            weight = float(raw_q)
        except ValueError as e:
            raise InvalidWeight(token, raw_q) from e
        # nan fails this comparison too
        if not 0.0 <= weight <= 1.0:
            raise InvalidWeight(token, raw_q)
        return cls(mime, weight)

    @classmethod
    def from_mime(cls, mime):
        if isinstance(mime, str):
            mime = MimeType.parse(mime)
        return cls(mime)

    @property
    def quality(self):
        return 1.0 if self.weight is None else self.weight

    def __lt__(self, other):
        return self.quality < other.quality

    def __gt__(self, other):
        return self.quality > other.quality

    def __le__(self, other):
        return self.quality <= other.quality

    def __ge__(self, other):
        return self.quality >= other.quality

    def __str__(self):
        if self.weight is None:
            return str(self.mime)
        return '%s;q=%g' % (self.mime, self.weight)


class Accept(namedtuple('Accept', 'wildcard types')):
    """A parsed ``Accept`` header.

    ``wildcard`` is the ``*/*`` entry, if there was one. ``types`` holds
    every other entry, partial wildcards such as ``text/*`` included, in
    the order they appeared in the header.
    """
    __slots__ = ()

    def __new__(cls, wildcard=None, types=()):
        return super().__new__(cls, wildcard, tuple(types))

    @classmethod
    def from_mime(cls, mime):
        return cls(None, [MediaType.from_mime(mime)])

    def negotiate(self, available):
        return negotiate(self, available)

    def __str__(self):
        entries = [str(t) for t in self.types]
        if self.wildcard is not None:
            entries.append(str(self.wildcard))
        return ', '.join(entries)


def parse(header_text):
    """Parse the value of an ``Accept`` header.

    Parsing is all or nothing: the first malformed entry aborts with
    :class:`~sanic_accept.exceptions.InvalidMediaType` or
    :class:`~sanic_accept.exceptions.InvalidWeight`. An empty header gives
    an empty :class:`Accept`. When ``*/*`` appears more than once the last
    one is kept.
    """
    wildcard = None
    types = []
    for part in header_text.split(','):
        if not part.strip():
            continue
        try:
            media_type = MediaType.parse(part)
        except (InvalidMediaType, InvalidWeight) as e:
            logger.debug('rejecting Accept header %r: %s', header_text, e)
            raise
        if media_type.mime.is_wildcard:
            wildcard = media_type
        else:
            types.append(media_type)
    return Accept(wildcard, types)


Match = namedtuple('Match', 'kind quality')


def _kind(entry, mime):
    if entry.mime.includes(mime):
        return MatchKind.EXACT
    if entry.mime.is_partial_wildcard and entry.mime.type == mime.type:
        return MatchKind.PARTIAL
    if entry.mime.type == '*':
        return MatchKind.WILDCARD
    return None


def match(accept, mime):
    """Find the most specific entry of ``accept`` covering ``mime``.
    Returns a ``Match(kind, quality)`` or ``None`` if no entry covers it.

    Entries are ranked by :class:`MatchKind`, then, for exact entries, by
    the number of parameters they name. Equal ranks go to the first entry,
    with the plain ``*/*`` ahead of ``*/*`` entries carrying parameters.
    """
    entries = list(accept.types)
    if accept.wildcard is not None:
        entries.insert(0, accept.wildcard)

    best = None
    best_rank = None
    for entry in entries:
        kind = _kind(entry, mime)
        if kind is None:
            continue
        params = len(entry.mime.params) if kind is MatchKind.EXACT else 0
        rank = (kind, params)
        if best_rank is None or rank > best_rank:
            best, best_rank = Match(kind, entry.quality), rank
    return best


def negotiate(accept, available):
    """Pick the best of the ``available`` media types for ``accept``.

    Each available type is matched against the most specific accept entry
    that covers it (exact, then ``type/*``, then ``*/*``); a weight of 0
    rejects it. The highest weight wins and ties go to the type listed
    first in ``available``. Returns ``None`` when nothing is acceptable.
    Strings in ``available`` that are not media types are skipped.

    :param accept: the parsed :class:`Accept` header
    :param available: media types the server can produce, most preferred
        first, as :class:`MimeType` instances or strings
    """
    available = list(available)
    best = None
    best_quality = 0.0
    for candidate in available:
        if isinstance(candidate, str):
            try:
                mime = MimeType.parse(candidate)
            except ValueError:
                logger.warning('skipping invalid media type %r', candidate)
                continue
        else:
            mime = candidate
        found = match(accept, mime)
        if found is not None and found.quality > best_quality:
            best, best_quality = mime, found.quality
    if best is None:
        logger.debug('no acceptable media type in %r for %s',
                     available, accept)
    return best
