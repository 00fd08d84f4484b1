# exprll/exprllc.py
"""exprllc – exprll CLI

사용 예)
    $ python -m exprll.exprllc check "12+(3*4)-5/6"
    $ python -m exprll.exprllc check --input prog.txt --zero allow -D
    $ python -m exprll.exprllc table -D

기능
----
- check : 프로그램 하나를 읽어 문법의 문장인지 판정하고 Yes/No 출력
- table : 문법의 BNF, NULLABLE/FIRST/FOLLOW, LL(1) 예측 테이블 출력

종료 코드
---------
- 0 : Yes (table: 충돌 없음)
- 1 : No
- 2 : 호출 오류(사용법, 입력 파일 읽기 실패) / table 충돌 존재

디버그 모드(-D/--debug)를 켜면 비단말 추적과 불일치 위치(캐럿)를 stderr로 출력합니다.
"""

from __future__ import annotations
import argparse
import sys
from typing import Optional

from .lex import ZeroPolicy
from .ll1.runtime import check, format_mismatch

# ------------------------------
# 헬퍼
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _trace(line: str) -> None:
    _eprint("[TRACE] " + line)


# ------------------------------
# 커맨드 구현
# ------------------------------

def cmd_check(args) -> int:
    if args.input is not None:
        from .grammar.loader import load_program_text
        try:
            text = load_program_text(args.input)
        except (OSError, UnicodeDecodeError) as e:
            _eprint("[ERROR]", type(e).__name__, str(e))
            return 2
    else:
        text = args.code

    zero = ZeroPolicy(args.zero)
    if args.debug:
        _eprint(f"[DEBUG] input={text!r} zero={zero.value}")

    verdict = check(text, zero=zero, trace=_trace if args.debug else None)

    if verdict.ok:
        print("Yes")
        return 0

    if args.debug:
        _eprint("[SYNTAX ERROR] in " + verdict.error.rule)
        _eprint(format_mismatch(text, verdict.error))
    print("No")
    return 1


def cmd_table(args) -> int:
    from .grammar.bnf import expr_bnf
    from .ll1.first_follow import compute_nullable_first_follow
    from .ll1.table import build_ll1_table

    try:
        bnf = expr_bnf()
    except SyntaxError as e:
        _eprint("[SYNTAX ERROR]")
        _eprint(str(e))
        return 2

    ff = compute_nullable_first_follow(bnf)
    tbl = build_ll1_table(bnf, ff)

    print("[BNF]")
    print(f"Start: {bnf.start}")
    for p in bnf.prods:
        print(f"  {p}")

    if args.debug:
        _eprint("\n[NULLABLE]")
        _eprint("  " + (", ".join(n for n in bnf.nonterms if n in ff.nullable) or "(none)"))
        _eprint("\n[FIRST]")
        for A in bnf.nonterms:
            _eprint(f"  {A:>3} : {{{', '.join(sorted(ff.first[A]))}}}")
        _eprint("\n[FOLLOW]")
        for A in bnf.nonterms:
            _eprint(f"  {A:>3} : {{{', '.join(sorted(ff.follow[A]))}}}")

    print("\n[LL(1) Table]")
    print(tbl.pretty())
    print(f"\nConflicts: {len(tbl.conflicts)}")
    if tbl.conflicts:
        _eprint(tbl.pretty_conflicts())
        return 2
    return 0

# ------------------------------
# 엔트리포인트
# ------------------------------

def main(argv: Optional[list[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="exprllc", description="exprll LL(1) syntax checker CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="프로그램이 문법의 문장인지 판정합니다 (Yes/No)")
    src_group = p_check.add_mutually_exclusive_group(required=True)
    src_group.add_argument("code", nargs="?", help="검사할 프로그램 원문")
    src_group.add_argument("--input", help="프로그램 파일 경로")
    p_check.add_argument("--zero", choices=[z.value for z in ZeroPolicy],
                         default=ZeroPolicy.SINGLE.value, help="숫자 리터럴 선행 0 규칙")
    p_check.add_argument("-D", "--debug", action="store_true", help="디버그 정보를 상세 출력")
    p_check.set_defaults(func=cmd_check)

    p_table = sub.add_parser("table", help="문법의 FIRST/FOLLOW와 LL(1) 예측 테이블을 출력합니다")
    p_table.add_argument("-D", "--debug", action="store_true", help="NULLABLE/FIRST/FOLLOW 출력")
    p_table.set_defaults(func=cmd_table)

    args = ap.parse_args(argv)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
