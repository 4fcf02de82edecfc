import orjson
from sanic.response import HTTPResponse

DEFAULT_OPTIONS = orjson.OPT_APPEND_NEWLINE | orjson.OPT_NON_STR_KEYS


def output_json(data, code, headers=None, options=DEFAULT_OPTIONS):
    dumped = orjson.dumps(data, option=options)
    resp = HTTPResponse(
        dumped,
        status=code,
        content_type="application/json",
    )
    resp.headers.extend(headers or {})
    return resp
