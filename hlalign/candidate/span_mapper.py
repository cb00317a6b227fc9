# file: hlalign/candidate/span_mapper.py
from __future__ import annotations
from typing import List, Tuple


def map_span_to_orig(span_norm: Tuple[int, int], cmap: List[int], base: int = 0) -> Tuple[int, int]:
    """
    Đổi span [s, e) trên chuỗi đã chuẩn hóa về span trên chuỗi gốc.
    cmap: mảng same-length với chuỗi chuẩn hóa, sinh ra trong bước normalize.
    base: offset của chuỗi gốc trong văn bản lớn hơn (vd: context window).
    Ký tự cuối của span được lấy trọn, nên khoảng trắng/dấu câu nằm giữa
    hai đầu span vẫn thuộc span gốc.
    """
    s, e = span_norm
    s = max(0, min(s, len(cmap) - 1))
    e = max(s + 1, min(e, len(cmap)))
    return base + cmap[s], base + cmap[e - 1] + 1
