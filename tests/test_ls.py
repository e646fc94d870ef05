import io

from rvuser.layout import FileType
from rvuser.ls import DIRSIZ, fmtname, ls, main


def test_fmtname_pads_short_name():
    name = fmtname("some/dir/name")
    assert len(name) == DIRSIZ
    assert name.rstrip() == "name"


def test_fmtname_long_name_unpadded():
    long_name = "a" * 20
    assert fmtname("x/" + long_name) == long_name


def test_fmtname_without_slash():
    assert fmtname("README").rstrip() == "README"


def test_ls_file(tmp_path):
    f = tmp_path / "data"
    f.write_bytes(b"12345")
    out = io.StringIO()
    ls(str(f), out)
    fields = out.getvalue().split()
    assert fields[0] == "data"
    assert int(fields[1]) == FileType.FILE
    assert int(fields[3]) == f.stat().st_size


def test_ls_directory(tmp_path):
    (tmp_path / "a").write_text("x")
    (tmp_path / "sub").mkdir()
    out = io.StringIO()
    ls(str(tmp_path), out)
    rows = [line.split() for line in out.getvalue().splitlines()]
    names = [row[0] for row in rows]
    assert names == [".", "..", "a", "sub"]
    types = {row[0]: int(row[1]) for row in rows}
    assert types["a"] == FileType.FILE
    assert types["sub"] == FileType.DIR
    assert types["."] == FileType.DIR


def test_ls_path_too_long(tmp_path):
    out = io.StringIO()
    long_path = str(tmp_path) + "/." * 260
    ls(long_path, out)
    assert out.getvalue() == "ls: path too long\n"


def test_ls_missing(tmp_path, capsys):
    missing = str(tmp_path / "nothing")
    ls(missing, io.StringIO())
    assert capsys.readouterr().err == f"ls: cannot open {missing}\n"


def test_main_lists_each_argument(tmp_path, capsys):
    f = tmp_path / "one"
    f.write_text("")
    assert main([str(f), str(f)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.split()[0] for line in lines] == ["one", "one"]