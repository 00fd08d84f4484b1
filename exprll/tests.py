from __future__ import annotations
import pytest

from .exprllc import main


def test_check_yes(capsys):
    assert main(["check", "12+(3*4)-5/6"]) == 0
    assert capsys.readouterr().out == "Yes\n"


def test_check_no(capsys):
    assert main(["check", "1+*2"]) == 1
    out, err = capsys.readouterr()
    assert out == "No\n"
    assert err == ""


def test_check_empty_program_is_no(capsys):
    assert main(["check", ""]) == 1
    assert capsys.readouterr().out == "No\n"


def test_check_debug_reports_mismatch(capsys):
    assert main(["check", "-D", "(1+2"]) == 1
    out, err = capsys.readouterr()
    assert out == "No\n"
    assert "[TRACE] E  @0 la='('" in err
    assert "[SYNTAX ERROR] in )" in err
    assert "Parse error at EOF: expected one of {)}\n(1+2\n    ^" in err


def test_check_zero_policy_flag(capsys):
    assert main(["check", "01+2"]) == 1
    assert main(["check", "--zero", "allow", "01+2"]) == 0
    assert main(["check", "--zero", "nonzero", "0"]) == 1
    assert capsys.readouterr().out == "No\nYes\nNo\n"


def test_check_deeply_nested_program(capsys):
    depth = 2000
    assert main(["check", "(" * depth + "1" + ")" * depth]) == 0
    assert main(["check", "(" * depth + "1" + ")" * (depth - 1)]) == 1
    assert capsys.readouterr().out == "Yes\nNo\n"


def test_check_from_file(tmp_path, capsys):
    p = tmp_path / "prog.txt"
    p.write_text("(3+4)*2\n", encoding="utf-8")
    assert main(["check", "--input", str(p)]) == 0
    assert capsys.readouterr().out == "Yes\n"


def test_check_missing_file(tmp_path, capsys):
    assert main(["check", "--input", str(tmp_path / "nope.txt")]) == 2
    assert "[ERROR] FileNotFoundError" in capsys.readouterr().err


@pytest.mark.parametrize("argv", [
    ["check"],
    ["check", "1", "2"],
    ["check", "1", "--input", "x.txt"],
    ["check", "--zero", "bogus", "1"],
    [],
])
def test_usage_errors_exit_2(argv):
    with pytest.raises(SystemExit) as ei:
        main(argv)
    assert ei.value.code == 2


def test_table(capsys):
    assert main(["table", "-D"]) == 0
    out, err = capsys.readouterr()
    assert "E' -> ε" in out
    assert "Conflicts: 0" in out
    assert "[FOLLOW]" in err
    assert "F : {$, ), *, +, -, /}" in err
