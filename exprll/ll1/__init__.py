"""LL(1) 분석(FIRST/FOLLOW, 예측 테이블)과 재귀 하강 인식기 런타임."""

from .first_follow import FFResult, compute_nullable_first_follow
from .table import PredictTable, build_ll1_table
from .runtime import Mismatch, Verdict, check, parse_string, recognize
