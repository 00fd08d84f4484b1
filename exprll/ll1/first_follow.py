from __future__ import annotations
from typing import Dict, Set, List, Tuple
from dataclasses import dataclass
from ..grammar.bnf import BNF
from ..lex import EOF_NAME


@dataclass
class FFResult:
    """
    FFResult
    ========
    FIRST/FOLLOW/NULLABLE 계산 결과를 담는 단순 컨테이너입니다.

    - nullable: ε-생산 가능한 비단말 집합
    - first: 각 심볼 이름 → FIRST 집합(단말 이름들의 집합)
      * 단말 a: FIRST(a) = { a }
    - follow: 각 비단말 이름 → FOLLOW 집합
      * 시작 기호 S 에는 항상 '$'가 포함됩니다.
    """
    nullable: Set[str]
    first: Dict[str, Set[str]]
    follow: Dict[str, Set[str]]

    def first_of_sequence(self, seq: List[str]) -> Tuple[Set[str], bool]:
        """
        심볼 시퀀스 seq의 FIRST 집합과 'seq 자체가 nullable인지' 여부.
        ε는 별도 기호로 넣지 않고 두 번째 값이 대변합니다.
        """
        out: Set[str] = set()
        for X in seq:
            out |= self.first[X]
            if X not in self.nullable:
                return out, False
        return out, True


def compute_nullable_first_follow(bnf: BNF) -> FFResult:
    """
    compute_nullable_first_follow
    =============================
    BNF 문법에 대해 NULLABLE/FIRST/FOLLOW 집합을 고정점 반복으로 계산합니다.

    1) NULLABLE: A -> ε 이거나 A -> X1..Xn 의 모든 Xi가 nullable이면 A도 nullable
    2) FIRST: 모든 프로덕션 A -> α 에 대해 FIRST(α)를 FIRST(A)에 합침
    3) FOLLOW: FOLLOW(start) ∋ '$'. A -> X1..Xn 을 오른쪽부터 훑으며
       trailer(처음엔 FOLLOW(A))를 비단말 Xi의 FOLLOW에 더하고,
       trailer := FIRST(Xi) ∪ (Xi가 nullable이면 trailer)
    """
    terms = set(bnf.terms)
    nonterms = set(bnf.nonterms)

    nullable: Set[str] = set()
    first: Dict[str, Set[str]] = {t: {t} for t in terms}
    for A in nonterms:
        first[A] = set()
    ff = FFResult(nullable=nullable, first=first, follow={})

    # ---------- 1) NULLABLE 고정점 ----------
    changed = True
    while changed:
        changed = False
        for p in bnf.prods:
            if p.lhs in nullable:
                continue
            if all(X in nullable for X in p.rhs):
                nullable.add(p.lhs)
                changed = True

    # ---------- 2) FIRST 고정점 ----------
    changed = True
    while changed:
        changed = False
        for p in bnf.prods:
            f_alpha, _ = ff.first_of_sequence(p.rhs)
            before = len(first[p.lhs])
            first[p.lhs] |= f_alpha
            if len(first[p.lhs]) != before:
                changed = True

    # ---------- 3) FOLLOW 고정점 ----------
    follow: Dict[str, Set[str]] = {A: set() for A in nonterms}
    follow[bnf.start].add(EOF_NAME)

    changed = True
    while changed:
        changed = False
        for p in bnf.prods:
            trailer: Set[str] = set(follow[p.lhs])
            for X in reversed(p.rhs):
                if X in nonterms:
                    before = len(follow[X])
                    follow[X] |= trailer
                    if len(follow[X]) != before:
                        changed = True
                    trailer = set(first[X]) | (trailer if X in nullable else set())
                else:
                    trailer = {X}

    ff.follow = follow
    return ff
