# =========================
# file: hlalign/report/aggregate.py
# =========================
from typing import Any, Dict, Sequence

from hlalign.report.highlight import AnnotatedOutput
from hlalign.types import Category, HighlightRecord, MatchType


def aggregate_stats(output: AnnotatedOutput, records: Sequence[HighlightRecord]) -> Dict[str, Any]:
    by_id = {r.id: r for r in reversed(records)}
    counts = {c.value: 0 for c in Category}
    match_types = {m.value: 0 for m in MatchType}
    for h in output.highlights:
        rec = by_id.get(h.record_id)
        if rec is not None:
            counts[rec.category.value] += 1
        match_types[h.match_type.value] += 1
    return {
        "records": len(records),
        "matched": len(output.highlights),
        "unmatched": len(output.unmatched_ids),
        "counts_by_category": counts,
        "match_types": match_types,
    }
