# =========================
# file: hlalign/alignment/patterns.py
# =========================
import re
from dataclasses import dataclass


@dataclass(frozen=True)
class EscapedPattern:
    """
    Regex fragment đã escape toàn bộ ký tự đặc biệt.
    Luôn tạo qua `EscapedPattern.of(text)`; text lấy từ snippet là untrusted.
    """
    value: str

    @classmethod
    def of(cls, text: str) -> "EscapedPattern":
        return cls(re.escape(text))


def compile_word_pattern(pattern: EscapedPattern, flags: int = re.IGNORECASE) -> "re.Pattern[str]":
    """Pattern khớp nguyên từ (\\b...\\b, Unicode-aware)."""
    if not isinstance(pattern, EscapedPattern):
        raise TypeError(f"expected EscapedPattern, got {type(pattern).__name__}")
    return re.compile(rf"\b{pattern.value}\b", flags)
