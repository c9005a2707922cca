import pytest
from requests.cookies import RequestsCookieJar, create_cookie

from mcc_serviceability.errors import ValidationError
from mcc_serviceability.state import decode_state, encode_state, parse_state

ENDPOINT = "https://mcc.com/svc"


def test_encode_state_empty_jar() -> None:
    assert encode_state(RequestsCookieJar(), ENDPOINT) == ""


def test_encode_state_only_includes_cookies_for_endpoint() -> None:
    jar = RequestsCookieJar()
    jar.set_cookie(create_cookie("key", "value", domain="mcc.com"))
    jar.set_cookie(create_cookie("other", "x", domain="example.org"))
    assert encode_state(jar, ENDPOINT) == "key=value"


def test_parse_state_splits_and_trims() -> None:
    assert parse_state(" key1=value1 ;key2 = value2; ") == [("key1", "value1"), ("key2", "value2")]


def test_parse_state_keeps_equals_in_values() -> None:
    assert parse_state("token=abc==; empty=") == [("token", "abc=="), ("empty", "")]


@pytest.mark.parametrize("value", [None, "", " \t ", 1])
def test_parse_state_rejects_bad_values(value: object) -> None:
    with pytest.raises(ValidationError):
        parse_state(value)  # type: ignore[arg-type]


@pytest.mark.parametrize("value", ["key1=value1; garbage", "=value"])
def test_parse_state_rejects_malformed_segments(value: str) -> None:
    with pytest.raises(ValidationError, match="Malformed"):
        parse_state(value)


def test_decode_state_round_trip() -> None:
    jar = RequestsCookieJar()
    assert decode_state(jar, ENDPOINT, "key1=value1; key2=value2") == ["key1", "key2"]
    assert encode_state(jar, ENDPOINT) == "key1=value1; key2=value2"


def test_decode_state_overwrites_existing_cookie() -> None:
    jar = RequestsCookieJar()
    decode_state(jar, ENDPOINT, "key1=old; key2=value2")
    decode_state(jar, ENDPOINT, "key1=new")
    assert encode_state(jar, ENDPOINT) == "key1=new; key2=value2"


def test_decode_state_leaves_jar_untouched_on_malformed_input() -> None:
    jar = RequestsCookieJar()
    decode_state(jar, ENDPOINT, "key=value")
    with pytest.raises(ValidationError):
        decode_state(jar, ENDPOINT, "fresh=1; broken")
    assert encode_state(jar, ENDPOINT) == "key=value"


def test_decode_state_supports_localhost_endpoint() -> None:
    jar = RequestsCookieJar()
    decode_state(jar, "http://localhost:8080/svc", "key=value")
    assert encode_state(jar, "http://localhost:8080/svc") == "key=value"


def test_decode_state_requires_endpoint_host() -> None:
    with pytest.raises(ValidationError, match="host"):
        decode_state(RequestsCookieJar(), "not-a-url", "key=value")


def test_encode_state_gives_valueless_cookie_an_empty_value() -> None:
    jar = RequestsCookieJar()
    jar.set_cookie(create_cookie("flag", None, domain="mcc.com"))
    jar.set_cookie(create_cookie("key", "value", domain="mcc.com"))
    state = encode_state(jar, ENDPOINT)
    assert state == "flag=; key=value"

    restored = RequestsCookieJar()
    decode_state(restored, ENDPOINT, state)
    assert encode_state(restored, ENDPOINT) == "flag=; key=value"
