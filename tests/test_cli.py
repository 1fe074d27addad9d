import io

import pytest

from currystep.cli import EXIT_NO_NORMAL_FORM, EXIT_PARSE_ERROR, main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("CURRYSTEP_MAX_STEPS", "CURRYSTEP_ORIGINS", "CURRYSTEP_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


def test_trace(capsys):
    assert main(["(#x -> x) y"]) == 0
    out = capsys.readouterr().out
    assert out.splitlines() == ["eval: (#v0<x> -> v0<x>) y", "eval: y", "y"]


def test_quiet(capsys):
    assert main(["-q", "a b"]) == 0
    assert capsys.readouterr().out == "a b\n"


def test_plain(capsys):
    assert main(["--plain", "-q", "#x -> x"]) == 0
    assert capsys.readouterr().out == "#v0 -> v0\n"


def test_origins_from_env(capsys, monkeypatch):
    monkeypatch.setenv("CURRYSTEP_ORIGINS", "off")
    assert main(["-q", "#x -> x"]) == 0
    assert capsys.readouterr().out == "#v0 -> v0\n"


def test_stdin(capsys, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("(#t -> t (#a -> #b -> a)) (#t -> t x y)\n"))
    assert main(["-q", "-"]) == 0
    assert capsys.readouterr().out == "x\n"


def test_parse_error(capsys):
    assert main(["(a"]) == EXIT_PARSE_ERROR
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("error: expected ')'")


def test_max_steps(capsys):
    assert main(["-q", "-n", "3", "(#x -> x x) (#x -> x x)"]) == EXIT_NO_NORMAL_FORM
    captured = capsys.readouterr()
    assert "no normal form after 3 steps" in captured.err
    assert len(captured.out.splitlines()) == 1


def test_max_steps_from_env(capsys, monkeypatch):
    monkeypatch.setenv("CURRYSTEP_MAX_STEPS", "2")
    assert main(["(#x -> x x) (#x -> x x)"]) == EXIT_NO_NORMAL_FORM
    assert len(capsys.readouterr().out.splitlines()) == 4


def test_invalid_env(monkeypatch):
    monkeypatch.setenv("CURRYSTEP_MAX_STEPS", "many")
    with pytest.raises(SystemExit):
        main(["x"])


def test_table(capsys):
    assert main(["--table", "(#x -> x) y"]) == 0
    out = capsys.readouterr().out
    assert "eval:" not in out
    assert "expr" in out
    assert "(#v0<x> -> v0<x>) y" in out
    assert out.splitlines()[-1] == "y"


def test_svg(tmp_path, capsys):
    path = tmp_path / "result.svg"
    assert main(["-q", "--svg", str(path), "(#x -> x) (#y -> y)"]) == 0
    assert path.read_text().startswith("<svg")
    assert capsys.readouterr().out == "#v0<y> -> v0<y>\n"
