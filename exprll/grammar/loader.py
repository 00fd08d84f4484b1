"""(MVP) 프로그램 파일 로더"""

from __future__ import annotations
from pathlib    import Path


def load_program_text(path: str) -> str:
    """
    파일에서 프로그램 원문을 읽는다.
    개행을 \\n 으로 정규화하고, 파일 끝의 개행 한 개는 떼어낸다
    (에디터가 붙인 개행 때문에 판정이 바뀌지 않도록).
    """
    text = Path(path).read_text(encoding="utf-8")
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    if text.endswith("\n"):
        text = text[:-1]
    return text
