# =========================
# file: hlalign/utils/timing.py
# =========================
import time
from contextlib import contextmanager
from typing import Dict


class Timer:
    def __init__(self, logger=None):
        self.logger = logger
        self.sections: Dict[str, float] = {}

    @contextmanager
    def section(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            dt = round(time.perf_counter() - t0, 4)
            self.sections[name] = dt
            if self.logger:
                self.logger.log({"event": "timing", "section": name, "seconds": dt})
