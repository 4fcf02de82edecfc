from werkzeug.http import HTTP_STATUS_CODES


def http_status_message(code):
    """Maps an HTTP status code to the textual status"""
    return HTTP_STATUS_CODES.get(code, '')


def unpack(value):
    """Return a three tuple of data, code, and headers"""
    if not isinstance(value, tuple):
        return value, 200, {}

    if len(value) == 3:
        data, code, headers = value
        return data, code, headers or {}
    if len(value) == 2:
        data, code = value
        return data, code, {}

    return value, 200, {}
