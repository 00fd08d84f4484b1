# exprll/__init__.py
"""exprll — 사칙연산 식 문법용 LL(1) 재귀 하강 구문 검사기.

    >>> from exprll import recognize
    >>> recognize("12+(3*4)-5/6")
    True
    >>> recognize("1+*2")
    False
"""

from .lex import ZeroPolicy
from .ll1.runtime import Mismatch, Verdict, check, format_mismatch, parse_string, recognize

__all__ = [
    "ZeroPolicy",
    "Mismatch",
    "Verdict",
    "check",
    "format_mismatch",
    "parse_string",
    "recognize",
]
