from __future__ import annotations
from . import CharCursor, ZeroPolicy, is_digit


def test_peek_does_not_consume():
    cur = CharCursor("12")
    assert cur.peek() == "1"
    assert cur.peek() == "1"
    assert cur.pos == 0


def test_next_advances_then_reports_end():
    cur = CharCursor("(1")
    assert cur.next() == "("
    assert cur.next() == "1"
    assert cur.at_end
    assert cur.peek() is None
    # 소진 후에는 None, 위치 고정
    assert cur.next() is None
    assert cur.next() is None
    assert cur.pos == 2


def test_literal_dollar_is_not_end_marker():
    cur = CharCursor("$")
    assert cur.peek() == "$"
    assert not cur.at_end


def test_line_col():
    cur = CharCursor("1+\n(2")
    assert cur.line_col(0) == (1, 1)
    assert cur.line_col(2) == (1, 3)
    assert cur.line_col(3) == (2, 1)
    assert cur.line_col(5) == (2, 3)


def test_is_digit_ascii_only():
    assert is_digit("0") and is_digit("9")
    assert not is_digit(None)
    assert not is_digit("a")
    assert not is_digit("٣")   # ARABIC-INDIC DIGIT THREE


def test_zero_policy_rules():
    assert "0" in ZeroPolicy.SINGLE.leading_digits()
    assert not ZeroPolicy.SINGLE.continues_after("0")
    assert ZeroPolicy.SINGLE.continues_after("1")
    assert ZeroPolicy.ALLOW.continues_after("0")
    assert "0" not in ZeroPolicy.NONZERO.leading_digits()
    assert ZeroPolicy("allow") is ZeroPolicy.ALLOW
