# table.py
"""LL(1) 예측 테이블(predict table) 생성과 충돌 보고."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from ..grammar.bnf import BNF
from ..lex import EOF_NAME
from .first_follow import FFResult, compute_nullable_first_follow


@dataclass
class PredictTable:
    """
    PredictTable
    ============
    - cells: (nonterm, term) -> 프로덕션 인덱스(bnf.prods 기준)
      * 충돌 시 먼저 들어온 프로덕션이 남는다
    - conflicts: (nonterm, term, (prod_idx1, prod_idx2))
    - terms: 열 순서('$' 포함)

    사용
    ----
    - expected(A): A 에서 어떤 프로덕션이든 고를 수 있는 단말 집합
      → 런타임 에러 메시지의 expected set 과 같다.
    """
    bnf: BNF
    cells: Dict[Tuple[str, str], int]
    terms: List[str]
    conflicts: List[Tuple[str, str, Tuple[int, int]]] = field(default_factory=list)

    @property
    def is_ll1(self) -> bool:
        return not self.conflicts

    def lookup(self, nonterm: str, term: str) -> int:
        return self.cells[(nonterm, term)]

    def expected(self, nonterm: str) -> Set[str]:
        return {t for (A, t) in self.cells if A == nonterm}

    def pretty(self) -> str:
        """행=비단말, 열=단말. 칸에는 프로덕션 우변(ε 포함)."""
        rows = [[""] + self.terms]
        for A in self.bnf.nonterms:
            row = [A]
            for t in self.terms:
                idx = self.cells.get((A, t))
                if idx is None:
                    row.append("")
                else:
                    rhs = self.bnf.prods[idx].rhs
                    row.append(" ".join(rhs) if rhs else "ε")
            rows.append(row)
        widths = [max(len(r[c]) for r in rows) for c in range(len(rows[0]))]
        return "\n".join(
            " | ".join(cell.ljust(w) for cell, w in zip(r, widths)).rstrip()
            for r in rows
        )

    def pretty_conflicts(self) -> str:
        if not self.conflicts:
            return "(no conflicts)"
        lines: List[str] = []
        for A, t, (i, j) in self.conflicts:
            lines.append(f"{A}, on {t}: {self.bnf.prods[i]} / {self.bnf.prods[j]}")
        return "\n".join(lines)


def build_ll1_table(bnf: BNF, ff: Optional[FFResult] = None) -> PredictTable:
    """
    프로덕션 A -> α 의 predict set:
      FIRST(α) ∪ (α가 nullable이면 FOLLOW(A))
    같은 칸에 두 프로덕션이 들어가면 충돌로 기록한다.
    """
    if ff is None:
        ff = compute_nullable_first_follow(bnf)
    cells: Dict[Tuple[str, str], int] = {}
    conflicts: List[Tuple[str, str, Tuple[int, int]]] = []

    for idx, p in enumerate(bnf.prods):
        predict, alpha_nullable = ff.first_of_sequence(p.rhs)
        if alpha_nullable:
            predict = predict | ff.follow[p.lhs]
        for t in sorted(predict):
            key = (p.lhs, t)
            prev = cells.get(key)
            if prev is None:
                cells[key] = idx
            elif prev != idx:
                conflicts.append((p.lhs, t, (prev, idx)))

    return PredictTable(bnf=bnf, cells=cells, terms=list(bnf.terms) + [EOF_NAME],
                        conflicts=conflicts)
