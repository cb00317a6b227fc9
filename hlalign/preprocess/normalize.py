# =========================
# file: hlalign/preprocess/normalize.py
# =========================
"""
Các phép chuẩn hóa văn bản kèm bảng ánh xạ vị trí.

Mỗi hàm trả về (chuỗi_đã_chuẩn_hóa, cmap) với len(cmap) == len(chuỗi_đã_chuẩn_hóa):
cmap[i] là index của ký tự tương ứng trong chuỗi gốc. Dùng cmap cùng
`hlalign.candidate.span_mapper.map_span_to_orig` để trả offset về văn bản gốc.
"""
import re
from typing import List, Tuple

_WS_RE = re.compile(r"\s+")
_NON_WORD_RE = re.compile(r"[^\w\s]")
WORD_RE = re.compile(r"\w+")


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


def lower_chars(text: str) -> str:
    return lower_with_map(text)[0]


def clean_punctuation(text: str) -> str:
    # Why: so khớp không phụ thuộc dấu câu (strategy "flexible").
    return clean_with_map(text)[0]


def collapse_whitespace_with_map(text: str) -> Tuple[str, List[int]]:
    """Gộp mọi chuỗi khoảng trắng thành 1 dấu cách và bỏ khoảng trắng hai đầu."""
    out: List[str] = []
    cmap: List[int] = []
    pending_ws = -1
    for i, ch in enumerate(text):
        if ch.isspace():
            if pending_ws < 0:
                pending_ws = i
            continue
        if pending_ws >= 0 and out:
            out.append(" ")
            cmap.append(pending_ws)
        pending_ws = -1
        out.append(ch)
        cmap.append(i)
    return "".join(out), cmap


def lower_with_map(text: str) -> Tuple[str, List[int]]:
    # str.lower() có thể đổi độ dài (vd: "İ" -> "i̇"), nên hạ từng ký tự.
    out: List[str] = []
    cmap: List[int] = []
    for i, ch in enumerate(text):
        low = ch.lower()
        out.append(low)
        cmap.extend([i] * len(low))
    return "".join(out), cmap


def clean_with_map(text: str) -> Tuple[str, List[int]]:
    """Bỏ dấu câu, gộp khoảng trắng, hạ chữ thường; giữ cmap về chuỗi gốc."""
    kept: List[str] = []
    kept_idx: List[int] = []
    for i, ch in enumerate(text):
        if not _NON_WORD_RE.match(ch):
            kept.append(ch)
            kept_idx.append(i)
    collapsed, cmap_collapsed = collapse_whitespace_with_map("".join(kept))
    lowered, cmap_lower = lower_with_map(collapsed)
    cmap = [kept_idx[cmap_collapsed[j]] for j in cmap_lower]
    return lowered, cmap


def find_all(haystack: str, needle: str) -> List[int]:
    """
    Mọi vị trí xuất hiện không chồng lấn của `needle`, quét tiến từ trái sang.
    Trả [] nếu needle rỗng.
    """
    if not needle:
        return []
    out: List[int] = []
    last_end = 0
    idx = haystack.find(needle)
    while idx != -1:
        if idx >= last_end:
            out.append(idx)
            last_end = idx + len(needle)
        idx = haystack.find(needle, idx + 1)
    return out
