import pytest

from streamcrush.services.source import MASK64, CounterSource, LcgSource
from streamcrush.services.transform import (
    TRANSFORM_BATTERY,
    Add,
    Concatenate32,
    Hamming,
    LastBit,
    ModularDivideByThree,
    Multiply,
    MultiplyByThree,
    ParitySkip,
    Rol7,
    SkipOne,
    SkipTwo,
    Xor,
)


def test_battery_is_the_fixed_twelve_in_order():
    assert list(TRANSFORM_BATTERY) == [
        "SkipOne",
        "SkipTwo",
        "Concatenate32",
        "Xor",
        "Add",
        "Multiply",
        "LastBit",
        "MultiplyByThree",
        "ModularDivideByThree",
        "Hamming",
        "ParitySkip",
        "Rol7",
    ]
    assert max(cls.max_draws for cls in TRANSFORM_BATTERY.values()) == 3


def test_skips():
    skip_one = SkipOne(CounterSource())
    assert [skip_one.next() for _ in range(3)] == [1, 3, 5]
    skip_two = SkipTwo(CounterSource())
    assert [skip_two.next() for _ in range(3)] == [2, 5, 8]


def test_xor_pairs_successive_draws():
    reference = LcgSource(5)
    draws = [reference.next() for _ in range(40)]
    xor = Xor(LcgSource(5))
    assert [xor.next() for _ in range(20)] == [draws[2 * i] ^ draws[2 * i + 1] for i in range(20)]


def test_concatenate_low_halves(list_source):
    src = list_source([0xAAAABBBB00000001, 0xCCCCDDDD00000002])
    assert Concatenate32(src).next() == 0x0000000100000002


def test_wrapping_arithmetic(list_source):
    assert Add(list_source([MASK64, 2])).next() == 1
    assert Multiply(list_source([1 << 63, 2])).next() == 0
    assert Multiply(list_source([3, 5])).next() == 15
    assert MultiplyByThree(list_source([(1 << 63) + 1])).next() == (1 << 63) + 3
    assert ModularDivideByThree(list_source([10])).next() == 3
    assert ModularDivideByThree(list_source([MASK64])).next() == MASK64 // 3


def test_bit_transforms(list_source):
    assert LastBit(list_source([0b1011])).next() == 1
    assert LastBit(list_source([0b1010])).next() == 0
    assert Hamming(list_source([MASK64])).next() == 64
    assert Hamming(list_source([0b1011])).next() == 3
    assert Rol7(list_source([1 << 57])).next() == 1
    assert Rol7(list_source([1])).next() == 1 << 7
    assert Rol7(list_source([MASK64])).next() == MASK64


def test_parity_skip(list_source):
    src = ParitySkip(list_source([3, 100, 7, 4, 9]))
    # 3 is odd: 100 is skipped and 7 returned
    assert src.next() == 7
    # 4 is even: 9 follows directly
    assert src.next() == 9


@pytest.mark.parametrize("cls", list(TRANSFORM_BATTERY.values()))
def test_duplicate_continues_independently(cls):
    transform = cls(LcgSource(11))
    transform.next()
    dup = transform.duplicate()
    assert isinstance(dup, cls)
    first = [transform.next() for _ in range(8)]
    assert [dup.next() for _ in range(8)] == first


@pytest.mark.parametrize("cls", list(TRANSFORM_BATTERY.values()))
def test_outputs_stay_within_64_bits(cls):
    transform = cls(LcgSource(7))
    assert all(0 <= transform.next() <= MASK64 for _ in range(64))


@pytest.mark.parametrize("cls", list(TRANSFORM_BATTERY.values()))
def test_max_draws_bounds_consumption(cls):
    inner = CounterSource()
    transform = cls(inner)
    for _ in range(32):
        before = inner.state
        transform.next()
        assert 1 <= inner.state - before <= cls.max_draws
