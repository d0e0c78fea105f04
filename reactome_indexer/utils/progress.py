"""Textual progress bar printed while documents are indexed."""
from __future__ import annotations

import sys
from typing import Optional, TextIO


class ProgressBar:
    """Render ``done / total`` as a fixed-width bar on a single terminal line.

    The bar is advisory only. ``total`` may be reassigned between phases, in which
    case the rendered percentage restarts from the new denominator.
    """

    width = 55
    rotators = ("|", "/", "-", "\\")

    def __init__(self, total: int = 0, stream: Optional[TextIO] = None):
        self.total = total
        self._stream = stream or sys.stdout

    def render(self, done: int) -> str:
        percent = done / self.total if self.total else 0.0
        percent = max(0.0, min(percent, 1.0))
        filled = int(percent * self.width)
        bar = "=" * filled + " " * (self.width - filled)
        rotator = self.rotators[((max(done, 1) - 1) % (len(self.rotators) * 100)) // 100]
        return f"\r{int(percent * 100):3d}% |{bar}| {rotator}"

    def update(self, done: int) -> None:
        self._stream.write(self.render(done))
        self._stream.flush()

    def finish(self) -> None:
        self._stream.write("\n")
        self._stream.flush()
