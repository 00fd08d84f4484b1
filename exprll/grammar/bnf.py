# exprll/grammar/bnf.py
"""간단한 BNF 규칙 텍스트 → Production 리스트

문법 텍스트 형식(MVP)
--------------------
    // 주석
    Name : Sym Sym ... | ... | ;     // 빈 대안 = ε
- 비단말: IDENT (끝에 ' 허용, 예: E')
- 단말  : "리터럴" 또는 규칙이 없는 대문자 토큰명(예: NUMBER)
- 규칙은 반드시 세미콜론(;)으로 끝난다
- 첫 규칙의 좌변이 시작 기호
"""

from __future__ import annotations
import regex as re
import ast as _pyast
from dataclasses import dataclass
from typing import List, Tuple

from ..lex import EOF_NAME

EXPR_GRAMMAR = r"""
// 좌재귀를 제거한 사칙연산 문법
E  : T E' ;
E' : "+" T E' | "-" T E' | ;
T  : F T' ;
T' : "*" F T' | "/" F T' | ;
F  : NUMBER | "(" E ")" ;
"""

_TOKEN_SPEC = [
    ("WS",      r"[ \t\f\r]+"),
    ("NEWLINE", r"\n"),
    ("COMMENT", r"//[^\n]*"),
    ("COLON",   r":"),
    ("SEMI",    r";"),
    ("OR",      r"\|"),
    ("STRING",  r'"(?:\\.|[^"\\\n])+"'),
    ("IDENT",   r"[\p{L}_][\p{L}\d_]*'*"),
]
MASTER_RE = re.compile("|".join(f"(?P<{n}>{p})" for n, p in _TOKEN_SPEC))


@dataclass
class Tok:
    kind: str
    lexeme: str
    start: int
    line: int
    col: int


@dataclass
class Production:
    """
    BNF 프로덕션 1개.
    - lhs: 좌변 비단말 이름
    - rhs: 우변 심볼 이름 리스트(터미널/비단말)
    """
    lhs: str
    rhs: List[str]      # ε는 빈 리스트([])로 표현

    def __str__(self) -> str:
        return f"{self.lhs} -> {' '.join(self.rhs) if self.rhs else 'ε'}"


@dataclass
class BNF:
    start: str
    prods: List[Production]
    terms: List[str]
    nonterms: List[str]

    def prods_of(self, lhs: str) -> List[Tuple[int, Production]]:
        return [(i, p) for i, p in enumerate(self.prods) if p.lhs == lhs]


def _caret(src: str, pos: int) -> str:
    start = src.rfind("\n", 0, pos) + 1
    end = src.find("\n", pos)
    if end == -1:
        end = len(src)
    return f"{src[start:end]}\n{' ' * (pos - start)}^"


def _unquote(src: str, tok: Tok) -> str:
    """문자열 리터럴 토큰 → 실제 단말 문자열(이스케이프 해석)."""
    try:
        return _pyast.literal_eval(tok.lexeme)
    except (ValueError, SyntaxError) as e:
        raise SyntaxError(f"Bad string literal {tok.lexeme} at {tok.line}:{tok.col}: {e}\n"
                          + _caret(src, tok.start))


def _scan(src: str) -> List[Tok]:
    """개행/공백/주석은 줄·칼럼 갱신만 하고 토큰스트림에는 넣지 않는다."""
    toks: List[Tok] = []
    line = col = 1
    i = 0
    while i < len(src):
        m = MASTER_RE.match(src, i)
        if not m:
            raise SyntaxError(f"Unexpected char {src[i]!r} at {line}:{col}\n" + _caret(src, i))
        kind = m.lastgroup or ""
        lex = m.group(0)
        if kind not in ("WS", "NEWLINE", "COMMENT"):
            toks.append(Tok(kind, lex, i, line, col))
        if kind == "NEWLINE":
            line += 1
            col = 1
        else:
            col += len(lex)
        i = m.end()
    toks.append(Tok("EOF", "", len(src), line, col))
    return toks


def parse_bnf(src: str) -> BNF:
    """규칙 텍스트를 파싱해 BNF를 만든다. 형식 오류는 SyntaxError."""
    toks = _scan(src)
    i = 0

    def want(kind: str) -> Tok:
        nonlocal i
        tok = toks[i]
        if tok.kind != kind:
            got = "EOF" if tok.kind == "EOF" else repr(tok.lexeme)
            raise SyntaxError(f"Expected {kind} but got {got} at {tok.line}:{tok.col}\n"
                              + _caret(src, tok.start))
        i += 1
        return tok

    prods: List[Production] = []
    terms: List[str] = []
    nonterms: List[str] = []

    def note(lst: List[str], name: str) -> None:
        if name not in lst:
            lst.append(name)

    while toks[i].kind != "EOF":
        lhs = want("IDENT").lexeme
        note(nonterms, lhs)
        want("COLON")
        rhs: List[str] = []
        while True:
            tok = toks[i]
            if tok.kind == "STRING":
                name = _unquote(src, tok)
                note(terms, name)
                rhs.append(name)
                i += 1
            elif tok.kind == "IDENT":
                rhs.append(tok.lexeme)
                i += 1
            elif tok.kind in ("OR", "SEMI"):
                prods.append(Production(lhs, rhs))
                rhs = []
                i += 1
                if tok.kind == "SEMI":
                    break
            else:
                want("SEMI")

    if not prods:
        raise SyntaxError("Empty grammar: no rules")

    # 규칙이 없는 이름: 전부 대문자면 토큰명(단말), 아니면 정의되지 않은 비단말
    for p in prods:
        for X in p.rhs:
            if X in terms or X in nonterms:
                continue
            if X.isupper():
                note(terms, X)
            else:
                raise SyntaxError(f"Undefined nonterminal {X!r} in rule {p}")
    if EOF_NAME in terms:
        raise SyntaxError(f"{EOF_NAME!r} is reserved for end of input")

    return BNF(start=prods[0].lhs, prods=prods, terms=terms, nonterms=nonterms)


def expr_bnf() -> BNF:
    """사칙연산 문법의 BNF."""
    return parse_bnf(EXPR_GRAMMAR)
