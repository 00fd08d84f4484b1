# exprll/ll1/runtime.py
"""LL(1) 재귀 하강 인식기(런타임).

문법
----
    E   -> T E'
    E'  -> "+" T E' | "-" T E' | ε
    T   -> F T'
    T'  -> "*" F T' | "/" F T' | ε
    F   -> NUMBER | "(" E ")"

- 비단말 하나당 메서드 하나(E, E', T, T', F). 각 메서드는 lookahead 한 글자를
  보고 프로덕션을 고른다(분기 집합은 서로소 → 백트래킹 없음).
- 실패는 예외가 아니라 `Mismatch` **값**으로 돌아온다.
  구동 루프는 실패를 받는 즉시 멈추므로 대기 중인 심볼은 처리되지 않는다.
- 입력 전체(끝 표지 전까지)를 소비해야 accept.

공개 API
--------
- `recognize(text) -> bool`
- `check(text) -> Verdict`        # 실패 시 위치/expected 정보 포함
- `parse_string(text) -> bool`    # 실패 시 캐럿 스니펫이 달린 SyntaxError
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

from ..lex import EOF_NAME, CharCursor, ZeroPolicy, is_digit

NUMBER = "NUMBER"

# 각 비단말이 받아들이는 lookahead(표시 이름). 실패 시 expected set 으로 쓰인다.
EXPECT_E: FrozenSet[str] = frozenset({NUMBER, "("})
EXPECT_E_PRIME: FrozenSet[str] = frozenset({"+", "-", ")", EOF_NAME})
EXPECT_T: FrozenSet[str] = EXPECT_E
EXPECT_T_PRIME: FrozenSet[str] = frozenset({"+", "-", "*", "/", ")", EOF_NAME})
EXPECT_F: FrozenSet[str] = EXPECT_E

Trace = Callable[[str], None]


@dataclass(frozen=True)
class Mismatch:
    """
    구문 불일치 1건.
    - pos: 불일치가 난 절대 오프셋(0-based). 끝에서 실패하면 len(text)
    - line/col: 1-based
    - found: 문제의 글자. 끝 표지면 None
    - expected: 그 자리에서 허용되던 단말 이름들
    - rule: 매칭 중이던 비단말(또는 단말) 이름
    """
    pos: int
    line: int
    col: int
    found: Optional[str]
    expected: FrozenSet[str]
    rule: str

    def message(self) -> str:
        exp = ", ".join(sorted(self.expected))
        if self.found is None:
            return f"Parse error at EOF: expected one of {{{exp}}}"
        return (f"Parse error at {self.line}:{self.col}: unexpected {self.found!r}, "
                f"expected one of {{{exp}}}")


@dataclass(frozen=True)
class Verdict:
    ok: bool
    error: Optional[Mismatch] = None

    def __bool__(self) -> bool:
        return self.ok


def _line_bounds(src: str, pos: int) -> Tuple[int, int]:
    """pos가 속한 라인의 [start, end) 범위를 반환."""
    start = src.rfind("\n", 0, pos)
    start = 0 if start < 0 else start + 1
    end = src.find("\n", pos)
    end = len(src) if end < 0 else end
    return start, end


def _caret_snippet(src: str, pos: int) -> str:
    """해당 절대 오프셋 pos에 캐럿(^)을 찍은 스니펫을 생성."""
    start, end = _line_bounds(src, pos)
    line = src[start:end]
    caret = " " * (pos - start) + "^"
    return f"{line}\n{caret}"


def format_mismatch(text: str, err: Mismatch) -> str:
    return err.message() + "\n" + _caret_snippet(text, err.pos)


def _show(ch: Optional[str]) -> str:
    return EOF_NAME if ch is None else repr(ch)


class _Recognizer:
    """
    인식 1회분의 상태(커서, 정책, 대기 스택).

    프로시저는 서로를 직접 호출하지 않고, 남은 우변 심볼을 **역순으로**
    대기 스택에 쌓는다. `run()`이 스택 꼭대기를 꺼내 비단말이면 해당
    프로시저를, 단말이면 `expect`를 부른다. 호출 순서는 재귀 하강과 같지만
    괄호 중첩이 아무리 깊어도 파이썬 호출 스택은 일정하다.
    """

    def __init__(self, text: str, zero: ZeroPolicy, trace: Optional[Trace]):
        self.cur = CharCursor(text)
        self.zero = zero
        self.trace = trace
        self.pending: List[str] = []
        self._procs: Dict[str, Callable[[], Optional[Mismatch]]] = {
            "E": self.e, "E'": self.e_prime, "T": self.t, "T'": self.t_prime, "F": self.f,
        }

    # ---- 진입점 ----
    def run(self) -> Optional[Mismatch]:
        self.pending.append("E")
        while self.pending:
            sym = self.pending.pop()
            proc = self._procs.get(sym)
            err = proc() if proc is not None else self.expect(sym)
            if err is not None:
                # 첫 불일치에서 중단: 대기 중인 나머지 심볼은 버린다
                return err
        # 완결된 E 뒤에는 끝 표지만 올 수 있다(")" 등 잔여 문자 거부)
        if not self.cur.at_end:
            return self.fail("E", [EOF_NAME])
        return None

    def expand(self, *rhs: str) -> None:
        """우변 심볼들을 왼쪽 것이 먼저 나오도록 대기 스택에 쌓는다."""
        self.pending.extend(reversed(rhs))

    # ---- 실패/소비 프리미티브 ----
    def fail(self, rule: str, expected: Iterable[str],
             found: Optional[str] = None, pos: Optional[int] = None) -> Mismatch:
        if pos is None:
            pos = self.cur.pos
            found = self.cur.peek()
        line, col = self.cur.line_col(pos)
        err = Mismatch(pos=pos, line=line, col=col, found=found,
                       expected=frozenset(expected), rule=rule)
        if self.trace is not None:
            self.trace(f"fail in {rule} @{pos}: found {_show(found)}")
        return err

    def expect(self, term: str) -> Optional[Mismatch]:
        """단말 하나를 소비. NUMBER면 숫자들을 탐욕적으로 먹는다."""
        pos = self.cur.pos
        ch = self.cur.next()
        if term == NUMBER:
            if ch is None or ch not in self.zero.leading_digits():
                return self.fail(NUMBER, [NUMBER], found=ch, pos=pos)
            if self.zero.continues_after(ch):
                while is_digit(self.cur.peek()):
                    self.cur.next()
            return None
        if ch != term:
            return self.fail(term, [term], found=ch, pos=pos)
        return None

    def _look(self, rule: str) -> Optional[str]:
        la = self.cur.peek()
        if self.trace is not None:
            self.trace(f"{rule:<2} @{self.cur.pos} la={_show(la)}")
        return la

    # ---- 프로덕션 ----
    def e(self) -> Optional[Mismatch]:
        la = self._look("E")
        if not (is_digit(la) or la == "("):
            return self.fail("E", EXPECT_E)
        self.expand("T", "E'")
        return None

    def e_prime(self) -> Optional[Mismatch]:
        la = self._look("E'")
        if la is None or la == ")":
            return None
        if la not in ("+", "-"):
            return self.fail("E'", EXPECT_E_PRIME)
        err = self.expect(la)
        if err is not None:
            return err
        self.expand("T", "E'")
        return None

    def t(self) -> Optional[Mismatch]:
        la = self._look("T")
        if not (is_digit(la) or la == "("):
            return self.fail("T", EXPECT_T)
        self.expand("F", "T'")
        return None

    def t_prime(self) -> Optional[Mismatch]:
        la = self._look("T'")
        if la is None or la in ("+", "-", ")"):
            return None
        if la not in ("*", "/"):
            return self.fail("T'", EXPECT_T_PRIME)
        err = self.expect(la)
        if err is not None:
            return err
        self.expand("F", "T'")
        return None

    def f(self) -> Optional[Mismatch]:
        la = self._look("F")
        if is_digit(la):
            return self.expect(NUMBER)
        if la != "(":
            return self.fail("F", EXPECT_F)
        err = self.expect("(")
        if err is not None:
            return err
        self.expand("E", ")")
        return None


def check(text: str, *,
          zero: ZeroPolicy = ZeroPolicy.SINGLE,
          trace: Optional[Trace] = None) -> Verdict:
    """입력 전체가 E 문장인지 판정하고, 실패 시 첫 불일치를 담아 돌려준다.

    Parameters
    ----------
    text : str
        검사할 프로그램 원문. 끝 표지는 내부에서 가상으로 붙는다.
    zero : ZeroPolicy
        숫자 리터럴의 선행 0 규칙.
    trace : Optional[Callable[[str], None]]
        비단말 진입/실패마다 한 줄씩 받는 콜백(디버그용).
    """
    err = _Recognizer(text, ZeroPolicy(zero), trace).run()
    if err is None:
        return Verdict(True)
    return Verdict(False, err)


def recognize(text: str, *, zero: ZeroPolicy = ZeroPolicy.SINGLE) -> bool:
    """입력이 문법의 문장이면 True."""
    return check(text, zero=zero).ok


def parse_string(text: str, *,
                 zero: ZeroPolicy = ZeroPolicy.SINGLE,
                 trace: Optional[Trace] = None) -> bool:
    """성공 시 True. 실패 시 expected set과 캐럿 스니펫을 담은 `SyntaxError`."""
    verdict = check(text, zero=zero, trace=trace)
    if not verdict.ok:
        raise SyntaxError(format_mismatch(text, verdict.error))
    return True
