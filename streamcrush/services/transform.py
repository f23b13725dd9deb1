from __future__ import annotations

from typing import Dict, Type

from .source import MASK64, StreamSource


class Transform(StreamSource):
    """A stream derived from draws of a wrapped source.

    Subclasses only implement ``next``; they keep no state besides the
    wrapped source, so duplicating one means re-wrapping a duplicate of it.
    """

    name: str = "Transform"
    # Upper bound on inner draws consumed per output value
    max_draws: int = 1

    def __init__(self, source: StreamSource):
        self.source = source

    def duplicate(self) -> "Transform":
        return type(self)(self.source.duplicate())

    def __repr__(self) -> str:
        return f"{self.name}({self.source!r})"


class SkipOne(Transform):
    name = "SkipOne"
    max_draws = 2

    def next(self) -> int:
        self.source.next()
        return self.source.next()


class SkipTwo(Transform):
    name = "SkipTwo"
    max_draws = 3

    def next(self) -> int:
        self.source.next()
        self.source.next()
        return self.source.next()


class Concatenate32(Transform):
    name = "Concatenate32"
    max_draws = 2

    def next(self) -> int:
        high = self.source.next() & 0xFFFFFFFF
        low = self.source.next() & 0xFFFFFFFF
        return (high << 32) | low


class Xor(Transform):
    name = "Xor"
    max_draws = 2

    def next(self) -> int:
        return self.source.next() ^ self.source.next()


class Add(Transform):
    name = "Add"
    max_draws = 2

    def next(self) -> int:
        return (self.source.next() + self.source.next()) & MASK64


class Multiply(Transform):
    name = "Multiply"
    max_draws = 2

    def next(self) -> int:
        return (self.source.next() * self.source.next()) & MASK64


class LastBit(Transform):
    name = "LastBit"

    def next(self) -> int:
        return self.source.next() & 1


class MultiplyByThree(Transform):
    name = "MultiplyByThree"

    def next(self) -> int:
        return (self.source.next() * 3) & MASK64


class ModularDivideByThree(Transform):
    name = "ModularDivideByThree"

    def next(self) -> int:
        return self.source.next() // 3


class Hamming(Transform):
    name = "Hamming"

    def next(self) -> int:
        return self.source.next().bit_count()


class ParitySkip(Transform):
    """Odd draws cost one extra skipped value before the returned one."""

    name = "ParitySkip"
    max_draws = 3

    def next(self) -> int:
        if self.source.next() & 1:
            self.source.next()
        return self.source.next()


class Rol7(Transform):
    name = "Rol7"

    def next(self) -> int:
        x = self.source.next()
        return ((x << 7) | (x >> 57)) & MASK64


TRANSFORM_BATTERY: Dict[str, Type[Transform]] = {
    cls.name: cls
    for cls in (
        SkipOne,
        SkipTwo,
        Concatenate32,
        Xor,
        Add,
        Multiply,
        LastBit,
        MultiplyByThree,
        ModularDivideByThree,
        Hamming,
        ParitySkip,
        Rol7,
    )
}
