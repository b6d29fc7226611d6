import io

import pytest

from rvkernkit.ulib import atoi, gets, strcmp


@pytest.mark.parametrize("s, expected", [("123", 123), ("123abc", 123), ("", 0), ("abc", 0), ("0", 0)])
def test_atoi(s, expected):
    assert atoi(s) == expected


def test_atoi_takes_no_sign_or_whitespace():
    assert atoi("-5") == 0
    assert atoi(" 7") == 0


def test_strcmp_equal():
    assert strcmp("abc", "abc") == 0


def test_strcmp_ordering():
    assert strcmp("abc", "abd") < 0
    assert strcmp("abd", "abc") > 0
    assert strcmp("abd", "abc") == -strcmp("abc", "abd")


def test_strcmp_prefix():
    assert strcmp("a", "") == ord("a")
    assert strcmp("", "a") == -ord("a")


def test_strcmp_stops_at_nul():
    assert strcmp("ab\0x", "ab\0y") == 0


def test_strcmp_bytes():
    assert strcmp(b"\xff", b"\x01") == 0xFF - 0x01


def test_gets_reads_lines():
    stream = io.StringIO("hello\nworld")
    assert gets(stream, 100) == "hello\n"
    assert gets(stream, 100) == "world"
    assert gets(stream, 100) == ""


def test_gets_respects_limit():
    stream = io.StringIO("abcdef")
    assert gets(stream, 4) == "abc"
    assert gets(stream, 4) == "def"


def test_gets_stops_at_carriage_return():
    assert gets(io.StringIO("ab\rcd"), 10) == "ab\r"


def test_gets_binary_stream():
    assert gets(io.BytesIO(b"xy\nz"), 10) == b"xy\n"