from rvuser.echo import echo, main


def test_echo_joins_with_spaces():
    assert echo(["hello", "world"]) == "hello world\n"


def test_echo_single():
    assert echo(["OK"]) == "OK\n"


def test_echo_nothing_prints_nothing():
    assert echo([]) == ""


def test_echo_accepts_generator():
    assert echo(w for w in ("a", "b")) == "a b\n"


def test_main(capsys):
    assert main(["echo", "hi"]) == 0
    assert capsys.readouterr().out == "echo hi\n"