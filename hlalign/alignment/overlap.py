# file: hlalign/alignment/overlap.py
from __future__ import annotations
from typing import List, Set, Tuple

from hlalign.types import AcceptedSpan, MatchCandidate


def resolution_key(c: MatchCandidate) -> Tuple[int, int, int, int]:
    # priority thấp thắng; cùng priority -> start nhỏ thắng; sau đó thứ tự record, end.
    return (c.priority, c.start, c.order, c.end)


def resolve(candidates: List[MatchCandidate]) -> List[AcceptedSpan]:
    """
    Greedy: duyệt candidate theo `resolution_key`, nhận candidate nếu không giao
    với span nào đã nhận và record của nó chưa có span. Kết quả sắp theo start.

    Record được nhận diện bằng (order, record_id): hai record trùng id nhưng khác
    vị trí trong batch vẫn là hai record.
    """
    accepted: List[AcceptedSpan] = []
    seen: Set[Tuple[int, str]] = set()
    for c in sorted(candidates, key=resolution_key):
        key = (c.order, c.record_id)
        if key in seen:
            continue
        if any(c.overlaps(a) for a in accepted):
            continue
        accepted.append(AcceptedSpan.promote(c))
        seen.add(key)
    accepted.sort(key=lambda a: (a.start, a.end))
    return accepted
