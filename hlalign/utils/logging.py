# =========================
# file: hlalign/utils/logging.py
# =========================
import json
from pathlib import Path
from typing import Any, Dict, Union


class JsonLogger:
    """Ghi event dạng JSONL (một object mỗi dòng), dùng cho log của một lần chạy."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.f = open(self.path, "a", encoding="utf-8")

    def log(self, obj: Dict[str, Any]):
        self.f.write(json.dumps(obj, ensure_ascii=False) + "\n")
        self.f.flush()

    def close(self):
        if not self.f.closed:
            self.f.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
