import io

import pytest

from rvkernkit.printf import fprintf, printf, sprintf


@pytest.mark.parametrize("n", [0, 1, 7, 42, -1, -42, 123456, 2**31 - 1, -(2**31)])
def test_decimal_round_trip(n):
    assert int(sprintf("%d", n)) == n


@pytest.mark.parametrize("n", [0, 9, 10, 255, 4096, 0x7FFFFFFF])
def test_hex_round_trip(n):
    assert int(sprintf("%x", n), 16) == n


def test_hex_is_uppercase():
    assert sprintf("%x", 255) == "FF"


def test_hex_of_negative_is_unsigned_32bit():
    assert int(sprintf("%x", -1), 16) == 0xFFFFFFFF


def test_long_truncates_to_32_bits():
    assert sprintf("%l", (1 << 32) + 5) == "5"


def test_pointer_is_zero_padded_sixteen_digits():
    s = sprintf("%p", 0x80000000)
    assert s.startswith("0x")
    assert len(s) == 18
    assert int(s, 16) == 0x80000000


def test_string_and_null():
    assert sprintf("[%s]", "hi") == "[hi]"
    assert sprintf("%s", None) == "(null)"


def test_string_stops_at_nul():
    assert sprintf("%s", "ab\0cd") == "ab"


def test_char_and_percent():
    assert sprintf("%c%%", ord("Z")) == "Z%"


def test_unknown_sequence_printed_verbatim():
    assert sprintf("a%qb", 1) == "a%qb"


def test_trailing_percent_dropped():
    assert sprintf("abc%") == "abc"


def test_missing_argument_raises():
    with pytest.raises(TypeError):
        sprintf("%d %d", 1)


def test_fprintf_writes_to_stream():
    buf = io.StringIO()
    fprintf(buf, "%s=%d\n", "x", 3)
    assert buf.getvalue() == "x=3\n"


def test_printf_writes_stdout(capsys):
    printf("%s %d\n", "value", 10)
    assert capsys.readouterr().out == "value 10\n"