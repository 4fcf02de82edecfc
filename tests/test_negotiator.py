import asyncio
import unittest

import orjson
from sanic import Sanic
from sanic.exceptions import BadRequest
from sanic.response import HTTPResponse, text

from sanic_accept import Negotiator, NotAcceptable
from sanic_accept.utils import accept_mimetypes, unpack

Sanic.test_mode = True


class FakeRequest:
    def __init__(self, accept=None):
        self.headers = {}
        if accept is not None:
            self.headers['accept'] = accept


class BestMatchTestCase(unittest.TestCase):
    representations = ['application/json', 'text/plain; charset=utf-8']

    def test_missing_header_returns_default(self):
        self.assertEqual(
            accept_mimetypes.best_match(FakeRequest(), self.representations,
                                        default='application/json'),
            'application/json')

    def test_returns_registered_spelling(self):
        self.assertEqual(
            accept_mimetypes.best_match(FakeRequest('text/plain'),
                                        self.representations),
            'text/plain; charset=utf-8')

    def test_unacceptable(self):
        self.assertIsNone(
            accept_mimetypes.best_match(FakeRequest('image/png'),
                                        self.representations,
                                        default='application/json'))

    def test_malformed_header_is_a_bad_request(self):
        with self.assertRaises(BadRequest):
            accept_mimetypes.best_match(FakeRequest('text/html;q=2'),
                                        self.representations)


class UnpackTestCase(unittest.TestCase):
    def test_unpack(self):
        self.assertEqual(unpack({'a': 1}), ({'a': 1}, 200, {}))
        self.assertEqual(unpack(({'a': 1}, 201)), ({'a': 1}, 201, {}))
        self.assertEqual(unpack(({'a': 1}, 201, {'X-A': 'b'})),
                         ({'a': 1}, 201, {'X-A': 'b'}))


class NegotiatorTestCase(unittest.TestCase):
    def setUp(self):
        self.app = Sanic('negotiator_test')
        self.negotiator = Negotiator(self.app)

        @self.negotiator.representation('text/plain')
        def output_text(data, code, headers):
            resp = text(str(data), status=code)
            resp.headers.extend(headers or {})
            return resp

        @self.negotiator.output
        async def handler(request):
            return {'hello': 'world'}, 201, {'X-Test': 'yes'}

        self.handler = handler

    def call(self, accept=None):
        return asyncio.run(self.handler(FakeRequest(accept)))

    def test_default_json_representation(self):
        resp = self.call()
        self.assertEqual(resp.status, 201)
        self.assertEqual(resp.headers['Content-Type'], 'application/json')
        self.assertEqual(orjson.loads(resp.body), {'hello': 'world'})
        self.assertEqual(resp.headers['X-Test'], 'yes')

    def test_negotiated_text_representation(self):
        resp = self.call('text/plain, application/json;q=0.5')
        self.assertEqual(resp.headers['Content-Type'], 'text/plain')
        self.assertEqual(resp.body, b"{'hello': 'world'}")

    def test_server_order_for_wildcard(self):
        resp = self.call('*/*')
        self.assertEqual(resp.headers['Content-Type'], 'application/json')

    def test_not_acceptable(self):
        with self.assertRaises(NotAcceptable) as cm:
            self.call('image/png')
        self.assertEqual(cm.exception.status_code, 406)
        self.assertEqual(str(cm.exception), 'Not Acceptable')

    def test_rejected_by_zero_weight(self):
        with self.assertRaises(NotAcceptable):
            self.call('application/json;q=0, text/plain;q=0')

    def test_response_objects_pass_through(self):
        @self.negotiator.output
        async def raw(request):
            return HTTPResponse('raw', content_type='text/csv')

        resp = asyncio.run(raw(FakeRequest('image/png')))
        self.assertEqual(resp.content_type, 'text/csv')

    def test_default_mediatype_from_config(self):
        self.app.config.ACCEPT_DEFAULT_MEDIATYPE = 'text/plain'
        resp = self.call()
        self.assertEqual(resp.headers['Content-Type'], 'text/plain')

    def test_json_options_from_config(self):
        self.app.config.ACCEPT_JSON_OPTIONS = orjson.OPT_SORT_KEYS
        resp = self.negotiator.make_response(
            FakeRequest('application/json'), {'b': 1, 'a': 2})
        self.assertEqual(resp.body, b'{"a":2,"b":1}')

    def test_init_app_requires_sanic(self):
        with self.assertRaises(TypeError):
            Negotiator(object())
