"""Progress counters for long-running import jobs."""

from __future__ import annotations

import math
import sys
import threading
import time
from dataclasses import dataclass, field
from typing import TextIO

DEFAULT_PRINT_EVERY = 100


def _percent(progress: int, total: int) -> float:
    if total:
        return progress * 100 / total
    if progress == 0:
        return math.nan
    return math.copysign(math.inf, progress)


def _format_counts(counts: dict[str, int]) -> str:
    body = " ".join(f"{key}:{counts[key]}" for key in sorted(counts))
    return f"map[{body}]"


@dataclass
class ImporterStat:
    """Counts upserted, skipped, failed and warned items and reports progress."""

    total: int = 0
    print_every: int = DEFAULT_PRINT_EVERY
    stream: TextIO | None = field(default=None, repr=False)

    upserted: int = field(default=0, init=False)
    skipped: int = field(default=0, init=False)
    failed: int = field(default=0, init=False)
    warned: int = field(default=0, init=False)
    warnings: dict[str, int] = field(default_factory=dict, init=False)
    last: str = field(default="", init=False)

    _started: float | None = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @property
    def progress(self) -> int:
        return self.upserted + self.skipped + self.failed

    def report(self, final: bool = False) -> str | None:
        """Write a progress line when due (always when final); return what was written."""
        progress = self.progress
        if self._started is None:
            self._started = time.monotonic()
        if not self.print_every:
            self.print_every = DEFAULT_PRINT_EVERY
        if not final and progress % self.print_every != 0:
            return None

        elapsed = time.monotonic() - self._started
        text = (
            f"\r    Upserted: {self.upserted}, Skipped: {self.skipped}, "
            f"Warn: {self.warned}, Failed: {self.failed} | "
            f"{_percent(progress, self.total):.2f}% | {elapsed:.1f}s | Last {self.last}"
        )
        if final:
            text += "\n"
            if self.warnings:
                text += f"    Warnings: {_format_counts(self.warnings)}\n"

        out = self.stream if self.stream is not None else sys.stdout
        out.write(text)
        out.flush()
        return text

    def skip(self) -> None:
        self.skipped += 1

    def ok(self, success: bool) -> None:
        if success:
            self.upserted += 1
        else:
            self.failed += 1

    def fail(self, msg: str) -> None:
        self.failed += 1
        self.warn(msg)

    def warn(self, msg: str) -> None:
        with self._lock:
            self.warned += 1
            self.warnings[msg] = self.warnings.get(msg, 0) + 1

    def set_last(self, item: str) -> None:
        self.last = item