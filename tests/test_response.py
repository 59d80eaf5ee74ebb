"""Tests for signalpost.response and the ServerError body handling."""

import pytest

from signalpost.errors import ProtocolError, ServerError, parse_error_body
from signalpost.models import Operation, PublishResult, SignalResult
from signalpost.response import RawResponse, interpret, parse_timetoken


def test_publish_success():
    result = interpret(Operation.PUBLISH, RawResponse(200, '[1,"Sent","14847319130820201"]'))
    assert result == PublishResult(14847319130820201)


def test_signal_success():
    result = interpret(Operation.SIGNAL, RawResponse(200, '[1,"Sent","15628652479932717"]'))
    assert isinstance(result, SignalResult)
    assert result.timetoken == 15628652479932717


def test_numeric_timetoken():
    assert interpret(Operation.SIGNAL, RawResponse(200, '[1,"Sent",123]')).timetoken == 123


def test_server_error_with_json_body():
    with pytest.raises(ServerError) as exc_info:
        interpret(Operation.PUBLISH, RawResponse(400, '[0,"Invalid Key"]'))
    exc = exc_info.value
    assert str(exc) == "Server responded with an error and the status code is 400"
    assert exc.status_code == 400
    assert exc.raw_body == '[0,"Invalid Key"]'
    assert exc.body[0] == 0
    assert exc.body[1] == "Invalid Key"


def test_server_error_with_text_body():
    with pytest.raises(ServerError) as exc_info:
        interpret(Operation.SIGNAL, RawResponse(502, "<html>Bad Gateway</html>"))
    assert exc_info.value.body == "<html>Bad Gateway</html>"
    assert exc_info.value.status_code == 502


def test_server_error_message_without_status():
    assert str(ServerError(None, "")) == "Server responded with an error"
    assert str(ServerError(0, "")) == "Server responded with an error"


def test_parse_error_body():
    assert parse_error_body('{"error": true}') == {"error": True}
    assert parse_error_body("") == ""
    assert parse_error_body("nope") == "nope"


@pytest.mark.parametrize(
    "body",
    ["not json", "{}", "[1]", '[1,"Sent"]', '[1,"Sent","abc"]', '[1,"Sent",null]', '[1,"Sent",true]'],
)
def test_malformed_success_body(body):
    with pytest.raises(ProtocolError):
        interpret(Operation.PUBLISH, RawResponse(200, body))


def test_protocol_error_is_not_server_error():
    with pytest.raises(ProtocolError) as exc_info:
        interpret(Operation.PUBLISH, RawResponse(200, "[]"))
    assert not isinstance(exc_info.value, ServerError)


def test_parse_timetoken():
    assert parse_timetoken("15") == 15
    assert parse_timetoken(15) == 15
    assert parse_timetoken("1.5") == 1
    for value in ("abc", "nan", "inf", float("inf"), None, True, [1]):
        with pytest.raises(ProtocolError):
            parse_timetoken(value)


def test_float_timetoken():
    result = interpret(Operation.PUBLISH, RawResponse(200, '[1,"Sent",1.5628652479932717e16]'))
    assert result == PublishResult(int(1.5628652479932717e16))


def test_exponent_string_timetoken():
    result = interpret(Operation.SIGNAL, RawResponse(200, '[1,"Sent","1.5e16"]'))
    assert result.timetoken == 15000000000000000


def test_non_finite_timetoken():
    with pytest.raises(ProtocolError):
        interpret(Operation.SIGNAL, RawResponse(200, '[1,"Sent",Infinity]'))
