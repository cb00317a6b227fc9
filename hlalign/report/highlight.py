# file: hlalign/report/highlight.py
# =========================
# Render accepted spans thành inline HTML an toàn
# =========================
from __future__ import annotations
from dataclasses import dataclass, field
from html import escape
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Union

from hlalign.types import AcceptedSpan, Category, HighlightRecord, MatchType

CATEGORY_CLASSES = {
    Category.MANIPULATION: "manipulation",
    Category.COGNITIVE_BIAS: "cognitive_bias",
    Category.RHETORICAL_FALLACY: "fallacy",
    Category.LOGICAL_FALLACY: "fallacy",
}
DEFAULT_CLASS = "manipulation"


def category_class(category: Optional[Category]) -> str:
    return CATEGORY_CLASSES.get(category, DEFAULT_CLASS)


def tooltip_of(record: HighlightRecord) -> str:
    return record.explanation or record.label or ""


@dataclass(frozen=True)
class TextSegment:
    text: str

    def to_html(self) -> str:
        return escape(self.text, quote=False)


@dataclass(frozen=True)
class HighlightNode:
    text: str  # lát cắt nguyên văn từ source, không phải snippet
    start: int
    end: int
    record_id: str
    css_class: str
    tooltip: str
    severity: int
    match_type: MatchType

    def to_html(self) -> str:
        return (
            f'<span class="text-highlight {self.css_class}"'
            f' data-id="{escape(self.record_id)}"'
            f' data-severity="{self.severity}"'
            f' data-tooltip="{escape(self.tooltip)}">'
            f"{escape(self.text, quote=False)}</span>"
        )


Node = Union[TextSegment, HighlightNode]


@dataclass(frozen=True)
class AnnotatedOutput:
    nodes: List[Node] = field(default_factory=list)
    unmatched_ids: FrozenSet[str] = frozenset()

    @property
    def highlights(self) -> List[HighlightNode]:
        return [n for n in self.nodes if isinstance(n, HighlightNode)]

    def plain_text(self) -> str:
        """Nối lại toàn bộ node; luôn bằng source gốc."""
        return "".join(n.text for n in self.nodes)

    def to_html(self) -> str:
        return "".join(n.to_html() for n in self.nodes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "spans": [
                {
                    "record_id": h.record_id,
                    "start": h.start,
                    "end": h.end,
                    "text": h.text,
                    "class": h.css_class,
                    "match_type": h.match_type.value,
                }
                for h in self.highlights
            ],
            "unmatched_ids": sorted(self.unmatched_ids),
        }


def render(source: str, spans: Sequence[AcceptedSpan], records: Sequence[HighlightRecord]) -> AnnotatedOutput:
    """
    Duyệt span theo start tăng dần: phần gap -> TextSegment, span -> HighlightNode.
    `spans` phải không chồng lấn (output của overlap resolver).
    Record của span được tra theo vị trí (`order`), id chỉ dùng để đối chiếu.
    """
    first_pos: Dict[str, int] = {}
    for i, r in enumerate(records):
        first_pos.setdefault(r.id, i)

    def _position(sp: AcceptedSpan) -> Optional[int]:
        if 0 <= sp.order < len(records) and records[sp.order].id == sp.record_id:
            return sp.order
        return first_pos.get(sp.record_id)

    nodes: List[Node] = []
    cur = 0
    matched = set()
    for sp in sorted(spans, key=lambda x: x.start):
        s = max(cur, min(len(source), sp.start))
        e = max(s, min(len(source), sp.end))
        if e <= s:
            continue
        if cur < s:
            nodes.append(TextSegment(source[cur:s]))
        pos = _position(sp)
        rec = records[pos] if pos is not None else None
        nodes.append(HighlightNode(
            text=source[s:e],
            start=s,
            end=e,
            record_id=sp.record_id,
            css_class=category_class(rec.category if rec else None),
            tooltip=tooltip_of(rec) if rec else "",
            severity=rec.severity if rec else 1,
            match_type=sp.match_type,
        ))
        if pos is not None:
            matched.add(pos)
        cur = e

    if cur < len(source):
        nodes.append(TextSegment(source[cur:]))

    unmatched = frozenset(r.id for i, r in enumerate(records) if i not in matched)
    return AnnotatedOutput(nodes=nodes, unmatched_ids=unmatched)


def make_snippets(source: str, output: AnnotatedOutput, ctx: int = 40) -> List[Dict[str, Any]]:
    """Snippet có context hai bên cho từng highlight (dùng trong report)."""
    snips = []
    for h in output.highlights:
        s0 = max(0, h.start - ctx)
        e0 = min(len(source), h.end + ctx)
        snips.append({
            "record_id": h.record_id,
            "before": source[s0:h.start],
            "hit": h.text,
            "after": source[h.end:e0],
            "offset": [h.start, h.end],
        })
    return snips
