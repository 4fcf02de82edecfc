import logging
from collections import OrderedDict
from functools import wraps

from sanic import Sanic
from sanic.response import HTTPResponse

from sanic_accept.__version__ import __version__
from sanic_accept.accept import (Accept, Match, MatchKind, MediaType, match,
                                 negotiate, parse)
from sanic_accept.exceptions import (InvalidMediaType, InvalidWeight,
                                     NotAcceptable, ParseError)
from sanic_accept.mimetype import MimeType
from sanic_accept.representations.json import DEFAULT_OPTIONS, output_json
from sanic_accept.utils import accept_mimetypes, unpack

__all__ = ('Negotiator', 'Accept', 'MediaType', 'MimeType', 'Match',
           'MatchKind', 'parse', 'match', 'negotiate', 'ParseError',
           'InvalidMediaType', 'InvalidWeight', 'NotAcceptable',
           '__version__')

logger = logging.getLogger(__name__)


class Negotiator:
    """
    Renders handler return values in the representation the client asks
    for in its ``Accept`` header. ::
    >>> app = Sanic(__name__)
    >>> negotiator = Negotiator(app)
    >>> @app.get('/')
    ... @negotiator.output
    ... async def index(request):
    ...     return {'hello': 'world'}
    Alternatively, you can use :meth:`init_app` to bind the Sanic
    application after the negotiator has been constructed.
    :param app: the Sanic application object
    :type app: sanic.Sanic
    :param default_mediatype: The media type used when the request has no
        ``Accept`` header. The ``ACCEPT_DEFAULT_MEDIATYPE`` config value
        takes precedence over it.
    :type default_mediatype: str
    """

    def __init__(self, app=None, default_mediatype="application/json"):
        self.representations = OrderedDict(
            [("application/json", self.output_json)])
        self.default_mediatype = default_mediatype
        self.app = None

        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Bind this negotiator to the given :class:`sanic.Sanic`
        application; its config is read on every response.
        :param app: the Sanic application object
        """
        if not isinstance(app, Sanic):
            raise TypeError("only support sanic object")
        self.app = app

    @property
    def config(self):
        return self.app.config if self.app is not None else {}

    def output(self, handler):
        """Wraps a sanic handler, for cases where the handler does not
        directly return a response object
        :param handler: The async handler function
        """
        @wraps(handler)
        async def wrapper(request, *args, **kwargs):
            resp = await handler(request, *args, **kwargs)
            if isinstance(resp, HTTPResponse):
                return resp
            data, code, headers = unpack(resp)
            return self.make_response(request, data, code, headers=headers)
        return wrapper

    def make_response(self, request, data, code=200, headers=None):
        """Looks up the representation transformer for the negotiated media
        type and invokes it to create a response object. If no registered
        representation is acceptable a 406 Not Acceptable is raised, as per
        RFC 7231 section 5.3.2.
        :param data: Python object containing response data to be transformed
        """
        default_mediatype = self.config.get('ACCEPT_DEFAULT_MEDIATYPE',
                                            None) or self.default_mediatype
        mediatype = accept_mimetypes.best_match(
            request, self.representations, default=default_mediatype)
        if mediatype not in self.representations:
            logger.debug('no representation for %r, answering 406',
                         accept_mimetypes.get(request))
            raise NotAcceptable()
        resp = self.representations[mediatype](data, code, headers)
        resp.headers["Content-Type"] = mediatype
        return resp

    def representation(self, mediatype):
        """Allows additional representation transformers to be declared.
        Transformers are functions decorated with this method, passing the
        mediatype the transformer represents. Three arguments are passed to
        the transformer:
        * The data to be represented in the response body
        * The http status code
        * A dictionary of headers
        The transformer should convert the data appropriately for the
        mediatype and return a Sanic response object.
        Ex::
            @negotiator.representation('application/xml')
            def xml(data, code, headers):
                resp = HTTPResponse(convert_data_to_xml(data), status=code)
                resp.headers.extend(headers)
                return resp
        Registration order is the server preference used to break ties.
        """

        def wrapper(func):
            self.representations[mediatype] = func
            return func

        return wrapper

    def json_options(self):
        return self.config.get('ACCEPT_JSON_OPTIONS', DEFAULT_OPTIONS)

    def output_json(self, data, code, headers=None):
        return output_json(data, code, headers, options=self.json_options())
