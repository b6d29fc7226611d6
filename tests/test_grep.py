import io

import pytest

from rvkernkit.grep import grep, main, match, matchhere, matchstar


@pytest.mark.parametrize(
    "re, text, expected",
    [
        ("^ab", "abc", True),
        ("^ab", "cab", False),
        ("b$", "ab", True),
        ("b$", "ba", False),
        ("a.c", "xabcx", True),
        ("a.c", "ac", False),
        ("a*", "", True),
        ("x*y", "xxxy", True),
        ("ab*c", "ac", True),
        ("ab*c", "abbbc", True),
        (".*", "anything", True),
        ("$", "abc", True),
        ("", "", True),
        ("z", "abc", False),
    ],
)
def test_match(re, text, expected):
    assert match(re, text) is expected


def test_matchhere_anchored():
    assert matchhere("ab", "abc") is True
    assert matchhere("bc", "abc") is False


def test_matchstar():
    assert matchstar("a", "b", "aab") is True
    assert matchstar("a", "b", "acb") is False
    assert matchstar(".", "c", "xyzc") is True


def test_grep_prints_matching_lines():
    out = io.StringIO()
    grep("an", io.StringIO("apple\nbanana\ncherry\n"), out)
    assert out.getvalue() == "banana\n"


def test_grep_ignores_unterminated_last_line():
    out = io.StringIO()
    grep("foo", io.StringIO("foo\nfoo"), out)
    assert out.getvalue() == "foo\n"


def test_grep_stops_on_overlong_line():
    out = io.StringIO()
    grep("x", io.StringIO("x" * 2000 + "\nx\n"), out)
    assert out.getvalue() == ""


def test_grep_many_lines_across_reads():
    lines = [f"line{i}\n" for i in range(500)]
    out = io.StringIO()
    grep("^line4", io.StringIO("".join(lines)), out)
    assert out.getvalue() == "".join(l for l in lines if l.startswith("line4"))


def test_main_usage(capsys):
    assert main([]) == 1
    assert "usage: grep pattern [file ...]" in capsys.readouterr().err


def test_main_file(tmp_path, capsys):
    path = tmp_path / "data.txt"
    path.write_text("one\ntwo\nthree\n")
    assert main(["^t", str(path)]) == 0
    assert capsys.readouterr().out == "two\nthree\n"


def test_main_missing_file(tmp_path, capsys):
    missing = str(tmp_path / "nope")
    assert main(["a", missing]) == 1
    assert capsys.readouterr().out == f"grep: cannot open {missing}\n"


def test_main_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("hay\nneedle\n"))
    assert main(["ee"]) == 0
    assert capsys.readouterr().out == "needle\n"