from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Optional

import numpy as np

from streamcrush.core.errors import SourceExhausted, UnknownSource

MASK64 = (1 << 64) - 1


class StreamSource(ABC):
    """Unsigned 64-bit values; duplicates advance independently."""

    @abstractmethod
    def next(self) -> int:
        ...

    @abstractmethod
    def duplicate(self) -> "StreamSource":
        ...

    def __iter__(self):
        return self

    def __next__(self) -> int:
        return self.next()


class ConstantSource(StreamSource):
    def __init__(self, value: int = 0):
        self.value = value & MASK64

    def next(self) -> int:
        return self.value

    def duplicate(self) -> "ConstantSource":
        return ConstantSource(self.value)


class CounterSource(StreamSource):
    def __init__(self, start: int = 0, step: int = 1):
        self.state = start & MASK64
        self.step = step & MASK64

    def next(self) -> int:
        value = self.state
        self.state = (self.state + self.step) & MASK64
        return value

    def duplicate(self) -> "CounterSource":
        return CounterSource(self.state, self.step)


class LcgSource(StreamSource):
    MULTIPLIER = 6364136223846793005
    INCREMENT = 1442695040888963407

    def __init__(self, seed: int = 0):
        self.state = seed & MASK64

    def next(self) -> int:
        self.state = (self.state * self.MULTIPLIER + self.INCREMENT) & MASK64
        return self.state

    def duplicate(self) -> "LcgSource":
        return LcgSource(self.state)


class XorShiftSource(StreamSource):
    """Marsaglia xorshift64 with the (13, 7, 17) triple."""

    # xorshift never leaves the zero state
    ZERO_SEED_REPLACEMENT = 0x9E3779B97F4A7C15

    def __init__(self, seed: int = 0):
        self.state = (seed & MASK64) or self.ZERO_SEED_REPLACEMENT

    def next(self) -> int:
        x = self.state
        x ^= (x << 13) & MASK64
        x ^= x >> 7
        x ^= (x << 17) & MASK64
        self.state = x
        return x

    def duplicate(self) -> "XorShiftSource":
        dup = XorShiftSource()
        dup.state = self.state
        return dup


class Pcg64Source(StreamSource):
    def __init__(self, seed: Optional[int] = None):
        self.bit_generator = np.random.PCG64(seed)

    def next(self) -> int:
        return int(self.bit_generator.random_raw())

    def duplicate(self) -> "Pcg64Source":
        dup = Pcg64Source.__new__(Pcg64Source)
        dup.bit_generator = np.random.PCG64()
        dup.bit_generator.state = self.bit_generator.state
        return dup


class ByteStreamSource(StreamSource):
    # duplicates share the buffer and copy the cursor
    def __init__(self, data: bytes, offset: int = 0):
        self.data = bytes(data)
        self.offset = offset

    def next(self) -> int:
        end = self.offset + 8
        if end > len(self.data):
            raise SourceExhausted(end, len(self.data))
        value = int.from_bytes(self.data[self.offset:end], "big")
        self.offset = end
        return value

    def duplicate(self) -> "ByteStreamSource":
        return ByteStreamSource(self.data, self.offset)

    def remaining(self) -> int:
        return (len(self.data) - self.offset) // 8


SOURCE_KINDS: Dict[str, str] = {
    "constant": "Постоянное значение (value)",
    "counter": "Счётчик с шагом 1 от seed",
    "lcg": "64-битный линейный конгруэнтный генератор (MMIX)",
    "xorshift64": "xorshift64 (13, 7, 17)",
    "pcg64": "numpy PCG64",
    "bytes": "Загруженный поток байт (big-endian)",
    "url": "Байты, загруженные по URL",
}


def build_source(
    kind: str,
    seed: Optional[int] = None,
    value: Optional[int] = None,
    data: Optional[bytes] = None,
) -> StreamSource:
    if kind == "constant":
        return ConstantSource(value or 0)
    if kind == "counter":
        return CounterSource(seed or 0)
    if kind == "lcg":
        return LcgSource(seed or 0)
    if kind == "xorshift64":
        return XorShiftSource(seed or 0)
    if kind == "pcg64":
        return Pcg64Source(seed)
    if kind in ("bytes", "url"):
        return ByteStreamSource(data or b"")
    raise UnknownSource(kind)
