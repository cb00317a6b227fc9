# =========================
# file: hlalign/scoring/similarity.py
# =========================
from __future__ import annotations

# RapidFuzz (C++) cho Levenshtein cổ điển: chi phí 1 cho insert/delete/substitute,
# tính trên Unicode code point nên dùng được cho tiếng Việt, tiếng Ukraina...
from rapidfuzz.distance import Levenshtein


def levenshtein(a: str, b: str) -> int:
    return Levenshtein.distance(a, b, weights=(1, 1, 1))


def similarity(a: str, b: str) -> float:
    """
    Độ tương đồng chuẩn hóa trong [0, 1]:
        (max(len a, len b) - levenshtein(a, b)) / max(len a, len b)
    Hai chuỗi rỗng -> 1.0.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - levenshtein(a, b)) / longest


def similarity_at_least(a: str, b: str, threshold: float) -> float:
    """
    Như `similarity` nhưng dừng sớm khi chắc chắn < threshold (trả 0.0).
    Dùng cho cửa sổ trượt của fuzzy strategy.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    max_dist = max(0, int((1.0 - threshold) * longest + 1e-9))
    d = Levenshtein.distance(a, b, weights=(1, 1, 1), score_cutoff=max_dist)
    if d > max_dist:
        return 0.0
    return (longest - d) / longest
