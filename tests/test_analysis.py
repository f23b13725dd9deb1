from collections import Counter

import numpy as np

from streamcrush.services.analysis import (
    BLOCK_SIZE,
    DISTRIBUTION_BUCKETS,
    SAMPLE_SIZE,
    ReportBuilder,
    build_report,
)
from streamcrush.services.source import ConstantSource, CounterSource, LcgSource


def _brute_force_matrix(values):
    matrix = np.zeros((64, 64), dtype=np.int64)
    for v in values:
        for x in range(64):
            x_set = (v >> x) & 1
            for y in range(64):
                if x_set or not (v >> y) & 1:
                    matrix[x][y] += 1
    return matrix


def test_constant_zero_stream():
    report = build_report(ConstantSource(0))
    assert report.sample_size == SAMPLE_SIZE
    # first sampled draw already equals the anchor
    assert report.cycle_length == 0
    # every draw after the first collides; the counter must not wrap
    assert report.collisions == SAMPLE_SIZE - 1
    assert (report.dependency_matrix == SAMPLE_SIZE).all()
    assert report.distribution[0] == SAMPLE_SIZE
    assert report.distribution.sum() == SAMPLE_SIZE


def test_constant_one_breaks_the_column_of_bit_zero():
    report = build_report(ConstantSource(1))
    # bit x clear and bit 0 set: the implication fails on every draw
    assert report.dependency_matrix[1][0] == 0
    assert report.dependency_matrix[63][0] == 0
    assert report.dependency_matrix[0][0] == SAMPLE_SIZE
    assert report.dependency_matrix[0][1] == SAMPLE_SIZE
    assert report.distribution[1] == SAMPLE_SIZE


def test_counter_has_no_cycle_and_flat_distribution():
    report = build_report(CounterSource())
    assert report.cycle_length is None
    assert report.collisions == 0
    assert report.distribution.min() == report.distribution.max() == SAMPLE_SIZE // DISTRIBUTION_BUCKETS


def test_cycle_length_is_the_index_of_the_anchor_repeat(list_source):
    values = [7] + [100 + i for i in range(64)]
    values[1 + 10] = 7
    report = build_report(list_source(values), sample_size=64)
    assert report.cycle_length == 10


def test_cycle_beyond_the_window_is_not_reported(list_source):
    values = [7] + [100 + i for i in range(64)] + [7]
    src = list_source(values)
    report = build_report(src, sample_size=64)
    assert report.cycle_length is None
    # anchor + sample, nothing more
    assert src.index == 65


def test_report_consumes_anchor_plus_sample():
    src = CounterSource()
    build_report(src, sample_size=100)
    assert src.state == 101


def test_matrix_matches_brute_force():
    src = LcgSource(17)
    values = [src.next() for _ in range(51)]
    report = build_report(LcgSource(17), sample_size=50)
    assert (report.dependency_matrix == _brute_force_matrix(values[1:])).all()


def test_diagonal_always_holds():
    report = build_report(LcgSource(3), sample_size=300)
    assert (np.diag(report.dependency_matrix) == 300).all()
    assert report.dependency_matrix.max() == 300


def test_partial_blocks_are_flushed():
    size = BLOCK_SIZE + 3
    src = LcgSource(9)
    src.next()
    values = [src.next() for _ in range(size)]
    report = build_report(LcgSource(9), sample_size=size)
    expected = Counter(v % DISTRIBUTION_BUCKETS for v in values)
    assert report.distribution.sum() == size
    for bucket, count in expected.items():
        assert report.distribution[bucket] == count


def test_collisions_count_repeats(list_source):
    values = [0, 5, 6, 5, 5, 9, 6]
    report = build_report(list_source(values), sample_size=6)
    assert report.collisions == 3


def test_builder_summary():
    builder = ReportBuilder(anchor=3, sample_size=4)
    for v in (1, 2, 3, 3):
        builder.add(v)
    summary = builder.finish().summary()
    assert summary["cycle_length"] == 2
    assert summary["collisions"] == 1
    assert summary["distribution_max"] == 2
    assert summary["distribution_min"] == 0
