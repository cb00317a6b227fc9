# =========================
# file: hlalign/types.py
# =========================
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    MANIPULATION = "manipulation"
    COGNITIVE_BIAS = "cognitive_bias"
    RHETORICAL_FALLACY = "rhetorical_fallacy"
    LOGICAL_FALLACY = "logical_fallacy"


# Older analysis payloads spell it this way.
_CATEGORY_ALIASES = {"rhetological_fallacy": Category.RHETORICAL_FALLACY}

_DEFAULT_LABEL = "Manipulation"


class MatchType(str, Enum):
    EXACT = "exact"
    NORMALIZED = "normalized"
    CASE_INSENSITIVE = "case_insensitive"
    CONTEXT_BASED = "context_based"
    FLEXIBLE = "flexible"
    FUZZY = "fuzzy"
    KEYWORD_EXPANDED = "keyword_expanded"


def _safe_str(value: Any, fallback: str = "") -> str:
    if value is None:
        return fallback
    return value if isinstance(value, str) else str(value)


def _unique_strings(values: Any, limit: int) -> Tuple[str, ...]:
    if not isinstance(values, (list, tuple)):
        return ()
    out: List[str] = []
    for v in values:
        s = _safe_str(v).strip()
        if s and s not in out:
            out.append(s)
    return tuple(out[:limit])


class HighlightRecord(BaseModel):
    """Một highlight do dịch vụ phân tích bên ngoài trả về (read-only)."""
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    category: Category = Category.MANIPULATION
    severity: int = Field(default=1, ge=1, le=3)
    label: str = _DEFAULT_LABEL
    explanation: str = ""
    suggestion: Optional[str] = None
    labels: Tuple[str, ...] = ()
    counter_strategy: Optional[str] = None
    confidence: Optional[Literal["high", "medium", "low"]] = None

    @classmethod
    def from_raw(cls, raw: Any, index: int = 0) -> Optional["HighlightRecord"]:
        """
        Chuẩn hóa một record thô (dict từ JSON/NDJSON).
        Trả về None nếu input không phải dict.
        """
        if not isinstance(raw, dict):
            return None

        category_raw = _safe_str(raw.get("category")).strip().lower()
        category = _CATEGORY_ALIASES.get(category_raw)
        if category is None:
            try:
                category = Category(category_raw)
            except ValueError:
                category = Category.MANIPULATION

        try:
            severity = int(float(raw.get("severity", 1)))
        except (TypeError, ValueError):
            severity = 1
        severity = max(1, min(3, severity))

        labels = _unique_strings(raw.get("labels"), 6)
        label = _safe_str(raw.get("label")).strip() or (labels[0] if labels else _DEFAULT_LABEL)
        if not labels:
            labels = (label,)

        confidence = _safe_str(raw.get("confidence")).lower()
        counter = raw.get("counter_strategy")
        suggestion = raw.get("suggestion")

        return cls(
            id=_safe_str(raw.get("id")).strip() or f"hl-{index}",
            text=_safe_str(raw.get("text"))[:2000],
            category=category,
            severity=severity,
            label=label[:160],
            explanation=_safe_str(raw.get("explanation"))[:2000],
            suggestion=_safe_str(suggestion) if suggestion else None,
            labels=labels,
            counter_strategy=_safe_str(counter)[:600] if counter else None,
            confidence=confidence if confidence in ("high", "medium", "low") else None,
        )


@dataclass(frozen=True)
class MatchCandidate:
    start: int
    end: int
    record_id: str
    match_type: MatchType
    priority: int
    similarity: Optional[float] = None
    order: int = 0  # vị trí record trong batch, tie-break cuối cùng

    def overlaps(self, other: "MatchCandidate") -> bool:
        return self.start < other.end and other.start < self.end

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "start": self.start,
            "end": self.end,
            "record_id": self.record_id,
            "match_type": self.match_type.value,
            "priority": self.priority,
        }
        if self.similarity is not None:
            d["similarity"] = round(self.similarity, 4)
        return d


@dataclass(frozen=True)
class AcceptedSpan(MatchCandidate):
    """Candidate đã qua overlap resolver."""

    @classmethod
    def promote(cls, c: MatchCandidate) -> "AcceptedSpan":
        return cls(
            start=c.start, end=c.end, record_id=c.record_id,
            match_type=c.match_type, priority=c.priority,
            similarity=c.similarity, order=c.order,
        )
