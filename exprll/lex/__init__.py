# exprll/lex/__init__.py
"""exprll 문자 커서 — 별도 렉서 단계 없이 **한 글자 lookahead**로 동작.

특징
----
- 입력 문자열은 불변(immutable)으로 두고 정수 인덱스만 앞으로 전진
- 끝 표지('$')는 **가상**: 인덱스가 끝에 닿으면 `peek()`가 None을 돌려준다
  - 입력 속의 리터럴 '$'는 평범한 문자일 뿐, 끝 표지로 오인되지 않음
  - 끝 표지는 결코 단말로 소비되지 않는다
- 소진된 커서에서 `next()`는 None(= "문자 없음")을 돌려주고 전진하지 않는다

API
---
- `CharCursor(text)` — `peek()`, `next()`, `pos`, `at_end`, `line_col(pos)`
- `DIGITS`, `is_digit(ch)` — ASCII 0-9 만 숫자로 인정
- `ZeroPolicy` — 숫자 리터럴의 선행 0 허용 규칙
"""

from __future__ import annotations
from enum import Enum
from typing import FrozenSet, Optional, Tuple

EOF_NAME = "$"   # 끝 표지의 표시 이름(메시지/테이블용)

DIGITS: FrozenSet[str] = frozenset("0123456789")
NONZERO_DIGITS: FrozenSet[str] = DIGITS - {"0"}


def is_digit(ch: Optional[str]) -> bool:
    """ASCII 숫자 판정. None(끝)은 숫자가 아니다."""
    return ch is not None and ch in DIGITS


class ZeroPolicy(str, Enum):
    """
    숫자 리터럴의 첫 글자 규칙.

    - SINGLE : '0' 단독은 리터럴, 여러 자리 리터럴은 0으로 시작할 수 없음 (기본)
    - ALLOW  : 어떤 숫자든 첫 글자가 될 수 있음 ("01" 허용)
    - NONZERO: 첫 글자는 1-9 만 허용 ("0" 자체도 거부)
    """
    SINGLE = "single"
    ALLOW = "allow"
    NONZERO = "nonzero"

    def leading_digits(self) -> FrozenSet[str]:
        return NONZERO_DIGITS if self is ZeroPolicy.NONZERO else DIGITS

    def continues_after(self, first: str) -> bool:
        """첫 글자 `first` 뒤에 숫자를 더 붙일 수 있는지."""
        return not (self is ZeroPolicy.SINGLE and first == "0")


class CharCursor:
    """
    CharCursor
    ==========
    재귀 하강 인식기가 소유하는 입력 버퍼.
    인식 1회당 새 커서를 만들어 쓴다(재진입 불가).
    """

    __slots__ = ("_text", "_i")

    def __init__(self, text: str):
        self._text = text
        self._i = 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def pos(self) -> int:
        return self._i

    @property
    def at_end(self) -> bool:
        return self._i >= len(self._text)

    def peek(self) -> Optional[str]:
        """앞 글자를 소비 없이 본다. 끝이면 None(끝 표지)."""
        if self._i >= len(self._text):
            return None
        return self._text[self._i]

    def next(self) -> Optional[str]:
        """앞 글자를 하나 소비한다. 소진된 경우 None, 위치는 그대로."""
        if self._i >= len(self._text):
            return None
        ch = self._text[self._i]
        self._i += 1
        return ch

    def line_col(self, pos: Optional[int] = None) -> Tuple[int, int]:
        """절대 오프셋 → (line, col), 둘 다 1-based."""
        if pos is None:
            pos = self._i
        line = self._text.count("\n", 0, pos) + 1
        start = self._text.rfind("\n", 0, pos) + 1
        return line, (pos - start) + 1

    def __repr__(self) -> str:
        la = self.peek()
        la_s = EOF_NAME if la is None else repr(la)
        return f"CharCursor(pos={self._i}, la={la_s})"
