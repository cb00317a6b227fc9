# =========================
# file: hlalign/alignment/chain.py
# =========================
from __future__ import annotations
from dataclasses import replace
from typing import List, Optional, Sequence

from hlalign.alignment.config import MatcherConfig
from hlalign.alignment.strategies import (
    CaseInsensitiveStrategy,
    ContextStrategy,
    ExactStrategy,
    FlexibleStrategy,
    FuzzyStrategy,
    KeywordStrategy,
    MatchStrategy,
    NormalizedStrategy,
)
from hlalign.types import HighlightRecord, MatchCandidate

# Thứ tự cố định: từ tin cậy nhất đến lỏng nhất.
DEFAULT_STRATEGIES = (
    ExactStrategy,
    NormalizedStrategy,
    CaseInsensitiveStrategy,
    ContextStrategy,
    FlexibleStrategy,
    FuzzyStrategy,
    KeywordStrategy,
)


class StrategyChain:
    """
    Chạy các strategy theo thứ tự, dừng ở strategy đầu tiên trả về >= 1 candidate
    (cho từng record riêng lẻ).
    """

    def __init__(self, strategies: Optional[Sequence[MatchStrategy]] = None,
                 cfg: Optional[MatcherConfig] = None):
        if strategies is None:
            cfg = cfg or MatcherConfig()
            strategies = [cls(cfg) for cls in DEFAULT_STRATEGIES]
        self.strategies: List[MatchStrategy] = list(strategies)

    def match(self, source: str, record: HighlightRecord, order: int = 0) -> List[MatchCandidate]:
        if not record.text or not record.text.strip():
            return []
        for strategy in self.strategies:
            found = strategy(source, record)
            if found:
                return [replace(c, order=order) for c in found]
        return []

    def match_all(self, source: str, records: Sequence[HighlightRecord]) -> List[MatchCandidate]:
        out: List[MatchCandidate] = []
        for i, rec in enumerate(records):
            out.extend(self.match(source, rec, order=i))
        return out
