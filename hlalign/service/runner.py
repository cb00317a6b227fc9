# file: hlalign/service/runner.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set, Union

from hlalign.alignment.chain import StrategyChain
from hlalign.alignment.config import MatcherConfig, get_matcher_config
from hlalign.alignment.overlap import resolve
from hlalign.io.records_reader import normalize_records
from hlalign.report.aggregate import aggregate_stats
from hlalign.report.highlight import AnnotatedOutput, render
from hlalign.types import AcceptedSpan, HighlightRecord, MatchCandidate
from hlalign.utils.common import load_yaml
from hlalign.utils.timing import Timer

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).resolve().parents[2] / "configs" / "default.yaml"

RecordLike = Union[HighlightRecord, Dict[str, Any]]


@dataclass
class AlignmentResult:
    source: str
    records: List[HighlightRecord]
    candidates: List[MatchCandidate]
    spans: List[AcceptedSpan]
    output: AnnotatedOutput
    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def unmatched_ids(self):
        return self.output.unmatched_ids

    def to_dict(self) -> Dict[str, Any]:
        d = self.output.to_dict()
        d["summary"] = self.summary
        d["html"] = self.output.to_html()
        return d


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Config YAML; không truyền path thì dùng configs/default.yaml nếu có."""
    if path:
        return load_yaml(path)
    if DEFAULT_CONFIG.exists():
        return load_yaml(DEFAULT_CONFIG)
    return {}


def _finish(source: str, records: List[HighlightRecord], candidates: List[MatchCandidate],
            timer: Timer) -> AlignmentResult:
    with timer.section("resolve"):
        spans = resolve(candidates)
    with timer.section("render"):
        output = render(source, spans, records)
        summary = aggregate_stats(output, records)
    return AlignmentResult(source, records, candidates, spans, output, summary)


def align_highlights(source: str, records: Sequence[RecordLike],
                     cfg: Optional[Dict[str, Any]] = None, timer: Optional[Timer] = None) -> AlignmentResult:
    """
    Pipeline đầy đủ: match -> resolve -> render.
    Hàm thuần: cùng input luôn cho cùng output, không giữ state giữa các lần gọi.
    """
    timer = timer or Timer()
    recs = normalize_records(records)
    chain = StrategyChain(cfg=get_matcher_config(cfg))
    with timer.section("match"):
        candidates = chain.match_all(source, recs)
    return _finish(source, recs, candidates, timer)


class HighlightSession:
    """
    Dùng khi record đến dần (stream từ dịch vụ phân tích).
    Candidate của từng record chỉ phụ thuộc (source, record) nên được cache;
    mỗi lần `result()` resolve lại toàn bộ prefix đã nhận.
    """

    def __init__(self, source: str, cfg: Optional[Dict[str, Any]] = None,
                 matcher_cfg: Optional[MatcherConfig] = None):
        self.source = source
        self.chain = StrategyChain(cfg=matcher_cfg or get_matcher_config(cfg))
        self.records: List[HighlightRecord] = []
        self._ids: Set[str] = set()
        self._candidates: List[List[MatchCandidate]] = []

    def add(self, record: RecordLike) -> List[MatchCandidate]:
        # cùng quy tắc đánh id với batch: vị trí trong các record đã nhận
        recs = normalize_records([record], start=len(self.records), taken=self._ids)
        if not recs:
            return []
        rec = recs[0]
        found = self.chain.match(self.source, rec, order=len(self.records))
        self.records.append(rec)
        self._candidates.append(found)
        if not found:
            logger.debug(f"No candidates for record {rec.id}")
        return found

    def extend(self, records: Sequence[RecordLike]) -> None:
        for r in records:
            self.add(r)

    def result(self) -> AlignmentResult:
        candidates = [c for group in self._candidates for c in group]
        return _finish(self.source, list(self.records), candidates, Timer())
