# =========================
# file: hlalign/alignment/config.py
# =========================
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class MatcherConfig:
    # context-based
    context_min_word_chars: int = 3
    context_min_radius: int = 100
    context_dedup_chars: int = 5
    # fuzzy
    fuzzy_min_snippet_chars: int = 11
    fuzzy_step: int = 5
    fuzzy_threshold: float = 0.75
    fuzzy_max_cells: int = 20_000_000
    fuzzy_time_budget_s: Optional[float] = None
    # keyword-expanded
    keyword_min_word_chars: int = 4


def get_matcher_config(cfg: Optional[Dict[str, Any]]) -> MatcherConfig:
    """Trích xuất tham số matcher từ config dict (mục `matching`)."""
    m = (cfg or {}).get("matching", {}) or {}
    ctx = m.get("context", {}) or {}
    fz = m.get("fuzzy", {}) or {}
    kw = m.get("keyword", {}) or {}
    d = MatcherConfig()
    budget = fz.get("time_budget_s", d.fuzzy_time_budget_s)
    return MatcherConfig(
        context_min_word_chars=int(ctx.get("min_word_chars", d.context_min_word_chars)),
        context_min_radius=int(ctx.get("min_radius", d.context_min_radius)),
        context_dedup_chars=int(ctx.get("dedup_chars", d.context_dedup_chars)),
        fuzzy_min_snippet_chars=int(fz.get("min_snippet_chars", d.fuzzy_min_snippet_chars)),
        fuzzy_step=max(1, int(fz.get("step", d.fuzzy_step))),
        fuzzy_threshold=float(fz.get("threshold", d.fuzzy_threshold)),
        fuzzy_max_cells=int(fz.get("max_cells", d.fuzzy_max_cells)),
        fuzzy_time_budget_s=float(budget) if budget is not None else None,
        keyword_min_word_chars=int(kw.get("min_word_chars", d.keyword_min_word_chars)),
    )
