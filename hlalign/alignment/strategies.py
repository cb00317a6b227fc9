# =========================
# file: hlalign/alignment/strategies.py
# =========================
"""
Các chiến lược định vị snippet trong văn bản nguồn.

Mỗi strategy là một object độc lập với cùng interface:
    strategy(source, record) -> List[MatchCandidate]
Thứ tự chạy và việc dừng sớm do `hlalign.alignment.chain.StrategyChain` quyết định.
Mọi offset trả về đều là offset trên `source` gốc (chưa chuẩn hóa).
"""
from __future__ import annotations
import logging
import time
from typing import List, Optional, Tuple

from hlalign.alignment.config import MatcherConfig
from hlalign.alignment.patterns import EscapedPattern, compile_word_pattern
from hlalign.candidate.span_mapper import map_span_to_orig
from hlalign.preprocess.normalize import (
    WORD_RE,
    clean_punctuation,
    clean_with_map,
    collapse_whitespace,
    collapse_whitespace_with_map,
    find_all,
    lower_chars,
    lower_with_map,
)
from hlalign.scoring.similarity import similarity_at_least
from hlalign.types import HighlightRecord, MatchCandidate, MatchType

logger = logging.getLogger(__name__)

# (start, end, similarity)
Span = Tuple[int, int, Optional[float]]


class MatchStrategy:
    match_type: MatchType
    priority: int

    def __init__(self, cfg: Optional[MatcherConfig] = None):
        self.cfg = cfg or MatcherConfig()

    @property
    def name(self) -> str:
        return self.match_type.value

    def spans(self, source: str, snippet: str) -> List[Span]:
        raise NotImplementedError

    def __call__(self, source: str, record: HighlightRecord) -> List[MatchCandidate]:
        out: List[MatchCandidate] = []
        for s, e, sim in self.spans(source, record.text):
            if 0 <= s < e <= len(source):
                out.append(MatchCandidate(
                    start=s, end=e, record_id=record.id,
                    match_type=self.match_type, priority=self.priority, similarity=sim,
                ))
        return out

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority})"


def _search_mapped(haystack: str, cmap: List[int], needle: str) -> List[Span]:
    return [(*map_span_to_orig((i, i + len(needle)), cmap), None) for i in find_all(haystack, needle)]


class ExactStrategy(MatchStrategy):
    match_type = MatchType.EXACT
    priority = 1

    def spans(self, source: str, snippet: str) -> List[Span]:
        n = len(snippet)
        return [(i, i + n, None) for i in find_all(source, snippet)]


class NormalizedStrategy(MatchStrategy):
    """Khác biệt khoảng trắng: offset đi qua cmap, không dùng thẳng offset chuẩn hóa."""
    match_type = MatchType.NORMALIZED
    priority = 2

    def spans(self, source: str, snippet: str) -> List[Span]:
        needle = collapse_whitespace(snippet)
        if not needle:
            return []
        norm, cmap = collapse_whitespace_with_map(source)
        return _search_mapped(norm, cmap, needle)


class CaseInsensitiveStrategy(MatchStrategy):
    match_type = MatchType.CASE_INSENSITIVE
    priority = 3

    def spans(self, source: str, snippet: str) -> List[Span]:
        needle = lower_chars(snippet)
        if not needle:
            return []
        low, cmap = lower_with_map(source)
        return _search_mapped(low, cmap, needle)


class ContextStrategy(MatchStrategy):
    """
    Tìm từng từ của snippet (nguyên từ), mở cửa sổ ngữ cảnh quanh mỗi lần xuất hiện
    và tìm snippet (không phân biệt hoa thường) trong cửa sổ đó.
    """
    match_type = MatchType.CONTEXT_BASED
    priority = 4

    def _forms(self, snippet: str) -> List[str]:
        norm = collapse_whitespace(snippet)
        forms: List[str] = []
        for f in (snippet, snippet.lower(), norm, norm.lower()):
            low = lower_chars(f)
            if low and low not in forms:
                forms.append(low)
        return forms

    def spans(self, source: str, snippet: str) -> List[Span]:
        words = [w for w in WORD_RE.findall(snippet) if len(w) >= self.cfg.context_min_word_chars]
        if not words:
            return []
        radius = max(2 * len(snippet), self.cfg.context_min_radius)
        forms = self._forms(snippet)
        out: List[Span] = []
        for word in words:
            pattern = compile_word_pattern(EscapedPattern.of(word))
            for m in pattern.finditer(source):
                ws = max(0, m.start() - radius)
                we = min(len(source), m.end() + radius)
                window, cmap = lower_with_map(source[ws:we])
                for form in forms:
                    idx = window.find(form)
                    if idx == -1:
                        continue
                    s, e = map_span_to_orig((idx, idx + len(form)), cmap, base=ws)
                    if not any(abs(s - prev) <= self.cfg.context_dedup_chars for prev, _, _ in out):
                        out.append((s, e, None))
                    break
        return out


class FlexibleStrategy(MatchStrategy):
    """Bỏ qua dấu câu: so khớp trên bản đã làm sạch, map ngược về nguồn gốc."""
    match_type = MatchType.FLEXIBLE
    priority = 4

    def spans(self, source: str, snippet: str) -> List[Span]:
        needle = clean_punctuation(snippet)
        if not needle or needle == snippet:
            return []
        cleaned, cmap = clean_with_map(source)
        return _search_mapped(cleaned, cmap, needle)


class FuzzyStrategy(MatchStrategy):
    """
    Cửa sổ trượt (bước `fuzzy_step`) dài bằng snippet, giữ mọi cửa sổ có
    similarity >= `fuzzy_threshold`.

    Có hai giới hạn chống treo: `fuzzy_max_cells` (số ký tự phải so sánh)
    và `fuzzy_time_budget_s` (tùy chọn). Vượt giới hạn -> không có candidate.
    """
    match_type = MatchType.FUZZY
    priority = 6

    def spans(self, source: str, snippet: str) -> List[Span]:
        n = len(snippet)
        if n < self.cfg.fuzzy_min_snippet_chars or len(source) < n:
            return []
        positions = range(0, len(source) - n + 1, self.cfg.fuzzy_step)
        if len(positions) * n > self.cfg.fuzzy_max_cells:
            logger.debug("fuzzy skipped: %d windows x %d chars over budget", len(positions), n)
            return []

        deadline = None
        if self.cfg.fuzzy_time_budget_s is not None:
            deadline = time.monotonic() + self.cfg.fuzzy_time_budget_s

        needle = snippet.lower()
        threshold = self.cfg.fuzzy_threshold
        out: List[Span] = []
        for i in positions:
            if deadline is not None and time.monotonic() > deadline:
                logger.debug("fuzzy skipped: time budget exhausted at offset %d", i)
                return []
            sim = similarity_at_least(needle, source[i:i + n].lower(), threshold)
            if sim >= threshold:
                out.append((i, i + n, sim))
        return out


class KeywordStrategy(MatchStrategy):
    """Phương án cuối: hộp bao lỏng quanh từ dài nhất của snippet."""
    match_type = MatchType.KEYWORD_EXPANDED
    priority = 7

    def spans(self, source: str, snippet: str) -> List[Span]:
        words = [w for w in WORD_RE.findall(snippet) if len(w) >= self.cfg.keyword_min_word_chars]
        if not words:
            return []
        word = max(words, key=len)
        n = len(snippet)
        pattern = compile_word_pattern(EscapedPattern.of(word))
        return [
            (max(0, m.start() - n), min(len(source), m.start() + len(word) + n), None)
            for m in pattern.finditer(source)
        ]
