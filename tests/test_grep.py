import io

import pytest

from rvuser.grep import grep, main, match


@pytest.mark.parametrize(
    "re, text, expected",
    [
        ("abc", "xxabcxx", True),
        ("abd", "xxabcxx", False),
        ("^abc", "abcx", True),
        ("^abc", "xabc", False),
        ("a.c", "abc", True),
        ("ab*c", "ac", True),
        ("ab*c", "abbbc", True),
        ("ab*c", "abxc", False),
        ("abc$", "xabc", True),
        ("abc$", "abcx", False),
        ("", "", True),
        (".*", "", True),
        ("^$", "", True),
        ("^$", "a", False),
        ("^.*z$", "abcz", True),
    ],
)
def test_match(re, text, expected):
    assert match(re, text) is expected


def test_match_long_text_does_not_overflow():
    assert match("b", "a" * 5000 + "b") is True
    assert match("^a*$", "a" * 5000) is True


def test_grep_filters_lines():
    out = io.StringIO()
    grep("o", io.StringIO("one\ntwo\nthree\nfour\n"), out)
    assert out.getvalue() == "one\ntwo\nfour\n"


def test_grep_ignores_unterminated_last_line():
    out = io.StringIO()
    grep("x", io.StringIO("x1\nx2"), out)
    assert out.getvalue() == "x1\n"


def test_grep_stops_on_line_filling_buffer():
    out = io.StringIO()
    grep("a", io.StringIO("x" * 2000 + "\na\n"), out)
    assert out.getvalue() == ""


def test_grep_lines_across_reads():
    lines = [f"line{i}" for i in range(500)]
    text = "\n".join(lines) + "\n"
    out = io.StringIO()
    grep("9$", io.StringIO(text), out)
    assert out.getvalue().splitlines() == [s for s in lines if s.endswith("9")]


def test_main_usage(capsys):
    assert main([]) == 1
    assert capsys.readouterr().err == "usage: grep pattern [file ...]\n"


def test_main_cannot_open(tmp_path, capsys):
    missing = str(tmp_path / "missing")
    assert main(["a", missing]) == 1
    assert capsys.readouterr().out == f"grep: cannot open {missing}\n"


def test_main_files(tmp_path, capsys):
    f = tmp_path / "f.txt"
    f.write_text("apple\nberry\navocado\n")
    assert main(["^a", str(f)]) == 0
    assert capsys.readouterr().out == "apple\navocado\n"


def test_main_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("cat\ndog\n"))
    assert main(["d"]) == 0
    assert capsys.readouterr().out == "dog\n"