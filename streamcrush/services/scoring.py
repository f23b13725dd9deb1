from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from .analysis import DISTRIBUTION_BUCKETS, SAMPLE_SIZE, Report

log = logging.getLogger("streamcrush.scoring")

# Ordered (inclusive upper bound on deviation, points); first match wins
ScoringTable = Tuple[Tuple[int, int], ...]

DEPENDENCY_BELOW: ScoringTable = ((4, 127), (6, 126), (16, 120), (32, 90), (64, 50), (80, 20))
DEPENDENCY_ABOVE: ScoringTable = ((4, 128),) + DEPENDENCY_BELOW[1:]

DISTRIBUTION_BELOW: ScoringTable = (
    (4, 127), (6, 126), (10, 110), (15, 70), (18, 50), (20, 30), (32, 20),
)
DISTRIBUTION_ABOVE: ScoringTable = ((4, 128),) + DISTRIBUTION_BELOW[1:]

CYCLE_POINTS = 255
COLLISION_POINTS: Dict[int, int] = {0: 255, 1: 20}

# Legacy bucket ideal; SAMPLE_SIZE // DISTRIBUTION_BUCKETS is 16
REFERENCE_DISTRIBUTION_IDEAL = 32


def lookup(table: ScoringTable, deviation: int) -> int:
    if deviation < 0:
        return 0
    for bound, points in table:
        if deviation <= bound:
            return points
    return 0


@dataclass(frozen=True)
class ScoringConfig:
    sample_size: int = SAMPLE_SIZE
    distribution_ideal: Optional[int] = None
    dependency_below: ScoringTable = field(default=DEPENDENCY_BELOW)
    dependency_above: ScoringTable = field(default=DEPENDENCY_ABOVE)
    distribution_below: ScoringTable = field(default=DISTRIBUTION_BELOW)
    distribution_above: ScoringTable = field(default=DISTRIBUTION_ABOVE)

    @property
    def dependency_ideal(self) -> int:
        return self.sample_size

    @property
    def derived_distribution_ideal(self) -> int:
        return self.sample_size // DISTRIBUTION_BUCKETS

    @property
    def bucket_ideal(self) -> int:
        if self.distribution_ideal is None:
            return self.derived_distribution_ideal
        return self.distribution_ideal

    def for_sample(self, sample_size: int) -> "ScoringConfig":
        if sample_size == self.sample_size:
            return self
        return replace(self, sample_size=sample_size)

    def warn_if_mismatched(self) -> None:
        if self.bucket_ideal != self.derived_distribution_ideal:
            log.warning(
                "distribution ideal %d differs from sample_size / buckets = %d",
                self.bucket_ideal,
                self.derived_distribution_ideal,
            )


@dataclass(frozen=True)
class Score:
    cycle: int
    collision: int
    bit_dependency: int
    distribution: int

    @property
    def total(self) -> int:
        return self.cycle + self.collision + self.bit_dependency + self.distribution

    def as_dict(self) -> Dict[str, int]:
        return {
            "cycle": self.cycle,
            "collision": self.collision,
            "bit_dependency": self.bit_dependency,
            "distribution": self.distribution,
            "total": self.total,
        }


def cycle_score(report: Report) -> int:
    return CYCLE_POINTS if report.cycle_length is None else 0


def collision_score(report: Report) -> int:
    return COLLISION_POINTS.get(report.collisions, 0)


def dependency_score(report: Report, config: ScoringConfig) -> int:
    low = int(report.dependency_matrix.min())
    ideal = config.dependency_ideal
    return lookup(config.dependency_below, ideal - low) + lookup(config.dependency_above, low - ideal)


def distribution_score(report: Report, config: ScoringConfig) -> int:
    low = int(report.distribution.min())
    high = int(report.distribution.max())
    ideal = config.bucket_ideal
    return lookup(config.distribution_below, ideal - low) + lookup(config.distribution_above, high - ideal)


def score_report(report: Report, config: Optional[ScoringConfig] = None) -> Score:
    config = (config or ScoringConfig()).for_sample(report.sample_size)
    return Score(
        cycle=cycle_score(report),
        collision=collision_score(report),
        bit_dependency=dependency_score(report, config),
        distribution=distribution_score(report, config),
    )
