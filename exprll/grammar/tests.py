from __future__ import annotations
import pytest

from .bnf import EXPR_GRAMMAR, expr_bnf, parse_bnf
from .loader import load_program_text


def _format(bnf):
    return [str(p) for p in bnf.prods]


def test_expr_grammar_productions():
    bnf = expr_bnf()
    assert bnf.start == "E"
    assert bnf.nonterms == ["E", "E'", "T", "T'", "F"]
    assert set(bnf.terms) == {"+", "-", "*", "/", "(", ")", "NUMBER"}
    assert _format(bnf) == [
        "E -> T E'",
        "E' -> + T E'",
        "E' -> - T E'",
        "E' -> ε",
        "T -> F T'",
        "T' -> * F T'",
        "T' -> / F T'",
        "T' -> ε",
        "F -> NUMBER",
        "F -> ( E )",
    ]


def test_prods_of():
    bnf = parse_bnf(EXPR_GRAMMAR)
    assert [i for i, _ in bnf.prods_of("F")] == [8, 9]


def test_comments_and_layout_are_ignored():
    bnf = parse_bnf("""
        // list of ids
        S : ID S' ;   // head
        S' : "," ID S'
           | ;
    """)
    assert _format(bnf) == ["S -> ID S'", "S' -> , ID S'", "S' -> ε"]
    assert bnf.terms == [",", "ID"]


def test_missing_semicolon_reports_position():
    with pytest.raises(SyntaxError) as ei:
        parse_bnf('S : "a"\nT : "b" ;')
    msg = str(ei.value)
    assert "Expected SEMI" in msg
    assert "2:3" in msg
    assert msg.endswith('T : "b" ;\n  ^')


def test_unexpected_character():
    with pytest.raises(SyntaxError, match="Unexpected char '#' at 1:5"):
        parse_bnf("S : # ;")


def test_undefined_nonterminal():
    with pytest.raises(SyntaxError, match="Undefined nonterminal 'x'"):
        parse_bnf("S : x ;")


def test_string_escapes_are_decoded():
    bnf = parse_bnf(r'S : "\"" S | "\\" | "×" ;')
    assert bnf.terms == ['"', "\\", "×"]
    assert _format(bnf)[0] == 'S -> " S'


def test_bad_string_escape():
    with pytest.raises(SyntaxError, match=r"Bad string literal .* at 1:5"):
        parse_bnf(r'S : "\x" ;')


def test_end_marker_is_reserved():
    with pytest.raises(SyntaxError, match="reserved"):
        parse_bnf('S : "$" ;')


def test_empty_grammar():
    with pytest.raises(SyntaxError, match="Empty grammar"):
        parse_bnf("// nothing\n")


def test_load_program_text_normalizes_newlines(tmp_path):
    p = tmp_path / "prog.txt"
    p.write_bytes(b"(1+2)\r\n*3\r\n")
    assert load_program_text(str(p)) == "(1+2)\n*3"
