"""문법 선언(BNF 텍스트)과 프로그램 파일 로딩."""

from .bnf import BNF, EXPR_GRAMMAR, Production, expr_bnf, parse_bnf
from .loader import load_program_text
