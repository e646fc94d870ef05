import multiprocessing
import time

from rvuser.fileops import kill_main, ln_main, mkdir_main, rm_main


def test_kill_usage(capsys):
    assert kill_main([]) == 1
    assert capsys.readouterr().err == "usage: kill pid...\n"


def test_kill_ignores_bad_pid():
    assert kill_main(["0", "notapid"]) == 0


def test_kill_terminates_process():
    proc = multiprocessing.Process(target=time.sleep, args=(60,))
    proc.start()
    try:
        assert kill_main([str(proc.pid)]) == 0
        proc.join(10)
        assert not proc.is_alive()
    finally:
        if proc.is_alive():
            proc.terminate()
            proc.join()


def test_ln_usage(capsys):
    assert ln_main(["only"]) == 1
    assert capsys.readouterr().err == "Usage: ln old new\n"


def test_ln_creates_link(tmp_path):
    old = tmp_path / "old"
    new = tmp_path / "new"
    old.write_text("shared")
    assert ln_main([str(old), str(new)]) == 0
    assert new.read_text() == "shared"
    assert old.stat().st_nlink == 2


def test_ln_failure_reported(tmp_path, capsys):
    old = str(tmp_path / "absent")
    new = str(tmp_path / "new")
    assert ln_main([old, new]) == 0
    assert capsys.readouterr().err == f"link {old} {new}: failed\n"


def test_mkdir_usage(capsys):
    assert mkdir_main([]) == 1
    assert capsys.readouterr().err == "Usage: mkdir files...\n"


def test_mkdir_creates(tmp_path):
    a, b = tmp_path / "a", tmp_path / "b"
    assert mkdir_main([str(a), str(b)]) == 0
    assert a.is_dir() and b.is_dir()


def test_mkdir_stops_at_failure(tmp_path, capsys):
    a, b = tmp_path / "a", tmp_path / "b"
    a.mkdir()
    assert mkdir_main([str(a), str(b)]) == 0
    assert not b.exists()
    assert capsys.readouterr().err == f"mkdir: {a} failed to create\n"


def test_rm_usage(capsys):
    assert rm_main([]) == 1
    assert capsys.readouterr().err == "Usage: rm files...\n"


def test_rm_removes_file_and_empty_dir(tmp_path):
    f = tmp_path / "f"
    d = tmp_path / "d"
    f.write_text("x")
    d.mkdir()
    assert rm_main([str(f), str(d)]) == 0
    assert not f.exists() and not d.exists()


def test_rm_stops_at_failure(tmp_path, capsys):
    missing = tmp_path / "missing"
    kept = tmp_path / "kept"
    kept.write_text("x")
    assert rm_main([str(missing), str(kept)]) == 0
    assert kept.exists()
    assert capsys.readouterr().err == f"rm: {missing} failed to delete\n"


def test_rm_refuses_non_empty_dir(tmp_path):
    d = tmp_path / "d"
    d.mkdir()
    (d / "inner").write_text("x")
    rm_main([str(d)])
    assert d.is_dir()