"""Shared request validation and the success/error response envelope."""
import time
from enum import IntEnum

from flask import request, jsonify

MAX_PAGE_NAME_BYTES = 1024
MIN_PAGE_NAME_BYTES = 1


class ErrorCode(IntEnum):
    """Machine codes returned in ``{"success": false, "code": n}``.

    Clients depend on these values; never renumber them.
    """
    NAME_DUPLICATED = 1
    EMAIL_DUPLICATED = 2
    NAME_TOO_LONG = 3
    EMAIL_TOO_LONG = 4
    EMAIL_INVALID = 5
    COMMENT_TOO_LONG = 6
    TOKEN_INVALID = 7
    NAME_TOO_SHORT = 8
    COMMENT_TOO_SHORT = 9


class BadRequest(Exception):
    """Raised for malformed request bodies; rendered as a 400."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


def current_timestamp() -> int:
    """Milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


def byte_length(value: str) -> int:
    return len(value.encode('utf-8'))


def is_page_name(relative_path) -> bool:
    if not isinstance(relative_path, str):
        return False
    return MIN_PAGE_NAME_BYTES <= byte_length(relative_path) <= MAX_PAGE_NAME_BYTES


def json_payload():
    """Return the JSON object body, raising BadRequest when it is absent."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BadRequest('Request body is required')
    return data


def require_field(data, name, kind=str):
    value = data.get(name)
    # bool is an int subclass; a JSON true is never a valid id or rating
    if value is None or not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise BadRequest(f'{name} is required')
    return value


def optional_field(data, name, kind=str):
    value = data.get(name)
    if value is not None and not isinstance(value, kind):
        raise BadRequest(f'{name} must be a {kind.__name__}')
    return value


def simple_success():
    return jsonify({'success': True})


def error_response():
    return jsonify({'success': False})


def error_response_with_code(code: ErrorCode):
    return jsonify({'success': False, 'code': int(code)})


def forbidden():
    return '', 403


class APIResult:
    """Outcome of a service call: a success payload, an error code or forbidden."""

    SUCCESS = 'success'
    ERROR = 'error'
    FORBIDDEN = 'forbidden'

    def __init__(self, kind, value=None, code=None):
        self.kind = kind
        self.value = value or {}
        self.code = code

    @classmethod
    def success(cls, **value):
        return cls(cls.SUCCESS, value=value)

    @classmethod
    def error(cls, code: ErrorCode):
        return cls(cls.ERROR, code=code)

    @classmethod
    def forbidden(cls):
        return cls(cls.FORBIDDEN)

    @property
    def ok(self):
        return self.kind == self.SUCCESS

    def to_response(self):
        if self.kind == self.SUCCESS:
            return jsonify({'success': True, **self.value})
        if self.kind == self.ERROR:
            return error_response_with_code(self.code)
        return forbidden()
