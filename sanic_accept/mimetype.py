import re

from werkzeug.http import dump_options_header, parse_options_header

_token_re = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


class MimeType:
    """A ``type/subtype`` media type with its parameters.

    Type, subtype and parameter names are case-insensitive and stored
    lower-cased; parameter values are kept as given. Two values are equal
    when type, subtype and the set of parameters are equal, regardless of
    the order the parameters were written in.

    >>> MimeType.parse('Text/HTML; charset=utf-8')
    MimeType('text/html; charset=utf-8')
    """

    __slots__ = ('type', 'subtype', 'params')

    def __init__(self, type, subtype, params=None):
        type = type.strip().lower()
        subtype = subtype.strip().lower()
        if not _token_re.match(type) or not _token_re.match(subtype):
            raise ValueError('invalid media type %r' % '/'.join(
                (type, subtype)))
        if type == '*' and subtype != '*':
            raise ValueError('invalid media range %s/%s' % (type, subtype))
        object.__setattr__(self, 'type', type)
        object.__setattr__(self, 'subtype', subtype)
        object.__setattr__(self, 'params', tuple(
            (key.lower(), value) for key, value in (params or {}).items()))

    @classmethod
    def parse(cls, value):
        """Build a :class:`MimeType` from ``type/subtype;name=value`` text.
        :raises ValueError: when the text is not a media type
        """
        essence, options = parse_options_header(value)
        type, sep, subtype = essence.partition('/')
        if not sep:
            raise ValueError('invalid media type %r' % value)
        return cls(type, subtype, options)

    def __setattr__(self, name, value):
        raise AttributeError('MimeType is immutable')

    @property
    def essence(self):
        return '%s/%s' % (self.type, self.subtype)

    @property
    def parameters(self):
        return dict(self.params)

    @property
    def is_wildcard(self):
        return self.type == '*' and self.subtype == '*' and not self.params

    @property
    def is_partial_wildcard(self):
        return self.type != '*' and self.subtype == '*'

    def includes(self, other):
        """Whether this concrete type matches ``other``: same type and
        subtype, and every parameter set here is set to the same value on
        ``other``.
        """
        if self.subtype == '*':
            return False
        if (self.type, self.subtype) != (other.type, other.subtype):
            return False
        theirs = other.parameters
        return all(theirs.get(key) == value for key, value in self.params)

    def _key(self):
        return self.type, self.subtype, frozenset(self.params)

    def __eq__(self, other):
        if isinstance(other, str):
            try:
                other = MimeType.parse(other)
            except ValueError:
                return False
        if not isinstance(other, MimeType):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        return dump_options_header(self.essence, self.parameters)

    def __repr__(self):
        return '%s(%r)' % (type(self).__name__, str(self))


WILDCARD = MimeType('*', '*')
