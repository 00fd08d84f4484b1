from __future__ import annotations
import itertools

import pytest

from ..grammar.bnf import expr_bnf, parse_bnf
from ..lex import ZeroPolicy
from .first_follow import compute_nullable_first_follow
from .runtime import (
    EXPECT_E, EXPECT_E_PRIME, EXPECT_F, EXPECT_T, EXPECT_T_PRIME,
    Mismatch, check, parse_string, recognize,
)
from .table import build_ll1_table

OK_INPUTS = [
    "3+4*2",
    "(3+4)*2",
    "12+(3*4)-5/6",
    "42",
    "0",
    "10",
    "1+2+3",
    "((7))",
    "1*2+3",
    "8/4/2-1",
    "(1)*(2)/(3)",
]

BAD_INPUTS = [
    "",
    "3+",
    "()",
    "1+*2",
    "+1",
    "1+",
    "1**2",
    "(1+2",
    "1+2)",
    "01+2",
    "1 + 2",
    "1$",
    "2a",
    ")",
    "(",
    "1(2)",
    "(1)2",
    "-1",
]


# ---------- verdicts ----------

@pytest.mark.parametrize("text", OK_INPUTS)
def test_valid_sentences(text):
    assert recognize(text) is True


@pytest.mark.parametrize("text", BAD_INPUTS)
def test_invalid_sentences(text):
    assert recognize(text) is False


@pytest.mark.parametrize("text", ["1", "9", "123", "1000000", "9087654321"])
def test_bare_numbers(text):
    assert recognize(text)


def test_closure_under_productions():
    seeds = ["7", "(1-2)", "3*40", "5/6+7"]
    for s1, s2 in itertools.product(seeds, repeat=2):
        for op in "+-*/":
            assert recognize(s1 + op + s2), s1 + op + s2
        assert recognize("(" + s1 + ")")


def test_long_flat_expression_does_not_recurse():
    text = "+".join(["12*3"] * 5000)
    assert recognize(text)


# ---------- 선행 0 규칙 ----------

def test_zero_policy_single_is_default():
    assert recognize("0")
    assert recognize("0+0*0")
    assert not recognize("01+2")
    assert not recognize("00")


def test_zero_policy_allow():
    assert recognize("01+2", zero=ZeroPolicy.ALLOW)
    assert recognize("007", zero="allow")
    assert recognize("0", zero=ZeroPolicy.ALLOW)


def test_zero_policy_nonzero():
    assert not recognize("0", zero=ZeroPolicy.NONZERO)
    assert not recognize("1+0", zero=ZeroPolicy.NONZERO)
    assert recognize("10", zero=ZeroPolicy.NONZERO)


# ---------- 깊은 괄호 중첩 ----------

def test_deep_nesting_is_accepted():
    depth = 5000
    assert recognize("(" * depth + "1" + ")" * depth)
    assert recognize("(" * depth + "1" + ")" * depth + "*" + "(" * depth + "2" + ")" * depth)


def test_deep_nesting_closure():
    s = "1+2"
    for _ in range(3000):
        s = "(" + s + ")"
    assert recognize(s)
    assert recognize(s + "*" + s)


def test_deep_unbalanced_nesting_fails_at_end():
    depth = 5000
    err = check("(" * depth + "1" + ")" * (depth - 1)).error
    assert err.found is None
    assert err.expected == frozenset({")"})
    assert err.pos == 2 * depth


# ---------- 불일치 정보 ----------

def test_verdict_ok_has_no_error():
    v = check("1+2")
    assert v.ok and bool(v)
    assert v.error is None


def test_mismatch_on_unexpected_character():
    v = check("1+*2")
    assert not v
    assert v.error == Mismatch(pos=2, line=1, col=3, found="*",
                               expected=EXPECT_T, rule="T")


def test_mismatch_at_end_of_input():
    err = check("(1+2").error
    assert err.found is None
    assert err.pos == 4
    assert err.expected == frozenset({")"})
    assert err.rule == ")"


def test_mismatch_on_trailing_input():
    err = check("1+2)").error
    assert err.found == ")"
    assert err.pos == 3
    assert err.expected == frozenset({"$"})


def test_mismatch_in_term_continuation():
    err = check("01").error
    assert err.rule == "T'"
    assert err.found == "1"
    assert err.expected == EXPECT_T_PRIME


def test_mismatch_on_empty_input():
    err = check("").error
    assert err.rule == "E"
    assert err.found is None
    assert err.expected == EXPECT_E


def test_mismatch_line_col_on_multiline_input():
    err = check("1+\n*2").error
    assert (err.line, err.col) == (1, 3)
    # 개행도 문법 밖의 문자
    err = check("12\n").error
    assert (err.line, err.col, err.found) == (1, 3, "\n")


def test_parse_string_raises_with_caret():
    assert parse_string("(3+4)*2") is True
    with pytest.raises(SyntaxError) as ei:
        parse_string("3+4*")
    assert str(ei.value) == (
        "Parse error at EOF: expected one of {(, NUMBER}\n"
        "3+4*\n"
        "    ^"
    )
    with pytest.raises(SyntaxError) as ei:
        parse_string("1+x")
    assert str(ei.value).startswith("Parse error at 1:3: unexpected 'x', expected one of {(, NUMBER}")


def test_failure_stops_all_pending_procedures():
    lines = []
    check("(1+*2)+3", trace=lines.append)
    assert lines[-1] == "fail in T @3: found '*'"
    # 실패 이후에는 어떤 비단말도 다시 진입하지 않는다
    assert sum(1 for l in lines if l.startswith("fail")) == 1


def test_trace_lists_procedure_entries():
    lines = []
    assert check("1", trace=lines.append)
    assert lines == ["E  @0 la='1'", "T  @0 la='1'", "F  @0 la='1'",
                     "T' @1 la=$", "E' @1 la=$"]


# ---------- FIRST/FOLLOW, 예측 테이블 ----------

def test_first_follow_of_expr_grammar():
    ff = compute_nullable_first_follow(expr_bnf())
    assert ff.nullable == {"E'", "T'"}
    for A in ("E", "T", "F"):
        assert ff.first[A] == {"NUMBER", "("}
    assert ff.first["E'"] == {"+", "-"}
    assert ff.first["T'"] == {"*", "/"}
    assert ff.follow["E"] == {")", "$"}
    assert ff.follow["E'"] == {")", "$"}
    assert ff.follow["T"] == {"+", "-", ")", "$"}
    assert ff.follow["T'"] == {"+", "-", ")", "$"}
    assert ff.follow["F"] == {"+", "-", "*", "/", ")", "$"}


def test_expr_grammar_is_ll1():
    tbl = build_ll1_table(expr_bnf())
    assert tbl.is_ll1
    assert tbl.pretty_conflicts() == "(no conflicts)"
    assert tbl.lookup("F", "(") == 9
    assert tbl.lookup("T'", "+") == 7   # T' -> ε
    assert ("E", "+") not in tbl.cells


def test_runtime_dispatch_matches_predict_table():
    tbl = build_ll1_table(expr_bnf())
    assert tbl.expected("E") == EXPECT_E
    assert tbl.expected("E'") == EXPECT_E_PRIME
    assert tbl.expected("T") == EXPECT_T
    assert tbl.expected("T'") == EXPECT_T_PRIME
    assert tbl.expected("F") == EXPECT_F


def test_pretty_table_rows():
    text = build_ll1_table(expr_bnf()).pretty()
    lines = text.splitlines()
    assert len(lines) == 6
    assert lines[0].split() == ["|", "+", "|", "-", "|", "*", "|", "/", "|", "(", "|", ")", "|", "NUMBER", "|", "$"]
    assert lines[5].startswith("F ")
    assert "( E )" in lines[5]


def test_conflicts_are_reported():
    bnf = parse_bnf('S : "a" S | "a" ;')
    tbl = build_ll1_table(bnf)
    assert not tbl.is_ll1
    assert tbl.conflicts == [("S", "a", (0, 1))]
    assert tbl.pretty_conflicts() == "S, on a: S -> a S / S -> a"
