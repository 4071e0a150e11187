import sys

import pytest

from core.domain.errors import JsonError, ParseError
from core.sanitizer import SENSITIVE_KEYS, sanitize, strip_sensitive_keys


def test_sensitive_keys_are_removed():
    raw = b'{"user":"x","password":"y","credentials":"z","data":[1,2,3]}'
    assert sanitize(raw) == {"data": [1, 2, 3]}


def test_document_without_sensitive_keys_is_unchanged():
    assert sanitize(b'{"data":[1,2,3]}') == {"data": [1, 2, 3]}


def test_only_top_level_keys_are_stripped():
    document = sanitize('{"data": {"user": "nested"}, "user": "top"}')
    assert document == {"data": {"user": "nested"}}


def test_strip_is_idempotent():
    document = {"user": "x", "version": "3.0"}
    strip_sensitive_keys(document)
    strip_sensitive_keys(document)
    assert document == {"version": "3.0"}
    assert set(SENSITIVE_KEYS) == {"user", "password", "credentials"}


def test_non_object_documents_pass_through():
    assert sanitize(b"[1, 2, 3]") == [1, 2, 3]
    assert sanitize(b'"user"') == "user"


def test_truncated_json_is_a_parse_error():
    with pytest.raises(ParseError) as exc_info:
        sanitize(b'{"data":')

    error = exc_info.value
    assert isinstance(error, JsonError)
    assert error.line == 1
    assert error.offset == 8
    assert error.column == 9
    assert "line 1" in str(error)


def test_error_position_on_later_line():
    with pytest.raises(ParseError) as exc_info:
        sanitize(b'{\n  "data": [1,\n  ]\n}')
    assert exc_info.value.line == 3


def test_empty_body_is_a_parse_error():
    with pytest.raises(ParseError):
        sanitize(b"")


def test_undecodable_bytes_are_a_parse_error():
    with pytest.raises(ParseError):
        sanitize(b'{"data": "\xff\xfe\xfa"}')


def test_excessive_nesting_is_a_parse_error():
    depth = 100_000
    with pytest.raises(ParseError) as exc_info:
        sanitize(b"[" * depth + b"]" * depth)
    assert isinstance(exc_info.value.__cause__, RecursionError)
    assert exc_info.value.offset == 0


@pytest.mark.skipif(
    not hasattr(sys, "get_int_max_str_digits"),
    reason="interpreter has no integer digit limit",
)
def test_integer_over_digit_limit_is_a_parse_error():
    digits = b"1" * (sys.get_int_max_str_digits() + 700)
    with pytest.raises(ParseError) as exc_info:
        sanitize(b'{"data": ' + digits + b"}")
    assert type(exc_info.value.__cause__) is ValueError
