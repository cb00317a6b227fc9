# =========================
# file: hlalign/io/records_reader.py
# =========================
"""
Đọc highlight record từ file hoặc payload của dịch vụ phân tích.

Hỗ trợ:
  - JSON array các record;
  - JSON object có khóa "highlights";
  - NDJSON (mỗi dòng một object), như khi dịch vụ stream kết quả.
    Dòng có "type" khác "highlight" (summary, bias_cluster, ...) bị bỏ qua.
"""
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Set, Union

from hlalign.types import HighlightRecord

logger = logging.getLogger(__name__)


def _is_highlight(obj: Any) -> bool:
    return isinstance(obj, dict) and obj.get("type", "highlight") == "highlight"


def _unique_id(rec: HighlightRecord, taken: Set[str]) -> HighlightRecord:
    # id trùng -> thêm hậu tố "-2", "-3", ... để mỗi record có id riêng.
    if rec.id not in taken:
        return rec
    k = 2
    while f"{rec.id}-{k}" in taken:
        k += 1
    return rec.model_copy(update={"id": f"{rec.id}-{k}"})


def normalize_records(raw_items: Iterable[Any], start: int = 0,
                      taken: Optional[Set[str]] = None) -> List[HighlightRecord]:
    """
    Chuẩn hóa và đánh id: record thiếu id nhận `hl-<i>` với i là vị trí trong
    danh sách record đã nhận (item bị bỏ qua không được tính), bắt đầu từ `start`.
    `taken` là tập id đã dùng, được cập nhật tại chỗ.
    """
    taken = set() if taken is None else taken
    out: List[HighlightRecord] = []
    for i, raw in enumerate(raw_items):
        if isinstance(raw, HighlightRecord):
            rec = raw
        elif not _is_highlight(raw):
            continue
        else:
            rec = HighlightRecord.from_raw(raw, index=start + len(out))
            if rec is None:
                logger.warning(f"Skipping invalid record #{i}")
                continue
        rec = _unique_id(rec, taken)
        taken.add(rec.id)
        out.append(rec)
    return out


def parse_ndjson(text: str) -> List[Any]:
    items = []
    for line_no, line in enumerate(text.splitlines(), 1):
        line = line.strip()
        if not line:
            continue
        try:
            items.append(json.loads(line))
        except json.JSONDecodeError:
            logger.warning(f"Malformed NDJSON line {line_no}: {line[:80]}")
    return items


def parse_records(text: str) -> List[HighlightRecord]:
    stripped = text.strip()
    if not stripped:
        return []
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        return normalize_records(parse_ndjson(stripped))
    if isinstance(data, dict):
        data = data.get("highlights", [data])
    if not isinstance(data, list):
        logger.warning("Records payload is neither a list nor an object")
        return []
    return normalize_records(data)


def read_records(path: Union[str, Path]) -> List[HighlightRecord]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Records file not found: {p}")
    return parse_records(p.read_text(encoding="utf-8"))
