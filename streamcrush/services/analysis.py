from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set

import numpy as np

from .source import StreamSource

SAMPLE_SIZE = 1 << 16
DISTRIBUTION_BUCKETS = 4096
WORD_BITS = 64
BLOCK_SIZE = 4096

_BIT_SHIFTS = np.arange(WORD_BITS, dtype=np.uint64)


@dataclass
class Report:
    sample_size: int
    # Index of the first draw equal to the anchor; None when it never recurred
    cycle_length: Optional[int] = None
    collisions: int = 0
    dependency_matrix: np.ndarray = field(
        default_factory=lambda: np.zeros((WORD_BITS, WORD_BITS), dtype=np.int64)
    )
    distribution: np.ndarray = field(
        default_factory=lambda: np.zeros(DISTRIBUTION_BUCKETS, dtype=np.int64)
    )

    def summary(self) -> Dict[str, Any]:
        return {
            "sample_size": self.sample_size,
            "cycle_length": self.cycle_length,
            "collisions": self.collisions,
            "dependency_min": int(self.dependency_matrix.min()),
            "dependency_max": int(self.dependency_matrix.max()),
            "distribution_min": int(self.distribution.min()),
            "distribution_max": int(self.distribution.max()),
        }


def _bits_matrix(values: List[int]) -> np.ndarray:
    arr = np.array(values, dtype=np.uint64)
    return ((arr[:, None] >> _BIT_SHIFTS) & np.uint64(1)).astype(np.float64)


class ReportBuilder:
    """Cell (x, y) counts draws where bit x is set or bit y is clear."""

    def __init__(self, anchor: int, sample_size: int = SAMPLE_SIZE):
        self.anchor = anchor
        self.report = Report(sample_size=sample_size)
        self.index = 0
        self._seen: Set[int] = set()
        self._pending: List[int] = []

    def add(self, value: int) -> None:
        report = self.report
        if report.cycle_length is None and value == self.anchor:
            report.cycle_length = self.index
        if value in self._seen:
            report.collisions += 1
        else:
            self._seen.add(value)
        self._pending.append(value)
        self.index += 1
        if len(self._pending) >= BLOCK_SIZE:
            self._flush()

    def _flush(self) -> None:
        if not self._pending:
            return
        bits = _bits_matrix(self._pending)
        clear = 1 - bits
        fails = (clear.T @ bits).astype(np.int64)
        self.report.dependency_matrix += len(self._pending) - fails
        buckets = np.array(self._pending, dtype=np.uint64) % np.uint64(DISTRIBUTION_BUCKETS)
        self.report.distribution += np.bincount(
            buckets.astype(np.int64), minlength=DISTRIBUTION_BUCKETS
        )
        self._pending = []

    def finish(self) -> Report:
        self._flush()
        return self.report


def build_report(source: StreamSource, sample_size: int = SAMPLE_SIZE) -> Report:
    builder = ReportBuilder(source.next(), sample_size)
    for _ in range(sample_size):
        builder.add(source.next())
    return builder.finish()
