"""Bit-packed memory whose slots can sit in superposition.

This module provides :class:`QuantumMemory`, a 64 slot register that keeps
two parallel masks: ``state`` holds the collapsed value of every slot and
``superposition`` flags the slots whose value is still undecided.  Measuring
a superposed slot draws a random outcome, writes it into ``state`` and clears
the superposition flag so the slot stays collapsed.
"""
from __future__ import annotations

import enum
import logging
import os
import sys
from typing import List, Optional, Protocol, TextIO, Union

import numpy as np

logger = logging.getLogger(__name__)

NUM_BITS = 64
FULL_MASK = (1 << NUM_BITS) - 1
DEFAULT_PROBABILITY = 0.5
SEED_ENV = "QMEM_SEED"


class BitValue(enum.Enum):
    """Value written into a slot by :meth:`QuantumMemory.set_bit`."""

    FALSE = 0
    TRUE = 1
    SUPERPOSED = 2

    @classmethod
    def coerce(cls, value: "BitLike") -> "BitValue":
        """Map ``True``/``False``/``None`` onto the matching member."""

        if isinstance(value, cls):
            return value
        if value is None:
            return cls.SUPERPOSED
        if isinstance(value, (bool, np.bool_)):
            return cls.TRUE if value else cls.FALSE
        raise ValueError(f"Unknown bit value: {value!r}")


BitLike = Union[BitValue, bool, None]


class IndexOutOfRange(IndexError):
    """Raised when a slot index falls outside ``[0, NUM_BITS)``."""

    def __init__(self, index: int) -> None:
        super().__init__(f"slot index {index} out of range [0, {NUM_BITS})")
        self.index = index


class RandomSource(Protocol):
    """Anything yielding uniform floats in ``[0, 1)``."""

    def random(self) -> float:
        ...


def format_bits(mask: int) -> str:
    """Render ``mask`` as ``NUM_BITS`` characters, slot 0 leftmost."""

    return "".join("1" if (mask >> i) & 1 else "0" for i in range(NUM_BITS))


def _default_seed() -> Optional[int]:
    raw = os.getenv(SEED_ENV)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{SEED_ENV} must be an integer, got {raw!r}") from None


def check_index(index: int) -> int:
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise TypeError(f"slot index must be an int, got {type(index).__name__}")
    index = int(index)
    if not 0 <= index < NUM_BITS:
        raise IndexOutOfRange(index)
    return index


class QuantumMemory:
    """64 slot register with per-slot superposition and random collapse.

    Every slot starts superposed.  ``rng`` may be any :class:`RandomSource`;
    when omitted a numpy generator is built from ``seed`` (or from the
    ``QMEM_SEED`` environment variable when ``seed`` is also omitted).
    """

    def __init__(
        self, rng: RandomSource | None = None, seed: int | None = None
    ) -> None:
        if rng is None:
            rng = np.random.default_rng(seed if seed is not None else _default_seed())
        self.rng = rng
        self.state = 0
        self.superposition = FULL_MASK
        self.probability: List[float] = [DEFAULT_PROBABILITY] * NUM_BITS

    # ------------------------------------------------------------------
    def set_bit(
        self, index: int, value: BitLike, probability: float | None = None
    ) -> None:
        """Write ``value`` into slot ``index``.

        Definite values clear the superposition flag and reset the slot's
        collapse probability to the default.  ``SUPERPOSED`` (or
        ``None``) raises the flag, zeroes the state bit and records the
        chance of collapsing to 1, which defaults to one half.
        """

        index = check_index(index)
        bit = BitValue.coerce(value)
        mask = 1 << index

        if bit is BitValue.SUPERPOSED:
            if probability is None:
                probability = DEFAULT_PROBABILITY
            if not 0.0 <= probability <= 1.0:
                raise ValueError(f"probability must be within [0, 1], got {probability}")
            self.superposition |= mask
            self.state &= ~mask & FULL_MASK
            self.probability[index] = float(probability)
            return

        if bit is BitValue.TRUE:
            self.state |= mask
        else:
            self.state &= ~mask & FULL_MASK
        self.superposition &= ~mask & FULL_MASK
        self.probability[index] = DEFAULT_PROBABILITY

    def measure(self, index: int) -> bool:
        """Return the value of slot ``index``, collapsing it if superposed."""

        index = check_index(index)
        mask = 1 << index
        if not self.superposition & mask:
            return bool(self.state & mask)

        outcome = bool(self.rng.random() < self.probability[index])
        self.set_bit(index, outcome)
        logger.debug("Slot %d collapsed to %d", index, outcome)
        return outcome

    def measure_all(self) -> int:
        """Measure every slot in index order and return the collapsed state."""

        for index in range(NUM_BITS):
            self.measure(index)
        return self.state

    # ------------------------------------------------------------------
    def is_superposed(self, index: int) -> bool:
        return bool(self.superposition >> check_index(index) & 1)

    def get_probability(self, index: int) -> float:
        """Chance that slot ``index`` collapses to 1 when measured."""

        return self.probability[check_index(index)]

    def get_state(self) -> int:
        return self.state

    def get_superposition(self) -> int:
        return self.superposition

    def print(self, file: TextIO | None = None) -> None:
        """Dump both masks, one line each, slot 0 first."""

        out = file if file is not None else sys.stdout
        print(f"State: {format_bits(self.state)}", file=out)
        print(f"Superposition: {format_bits(self.superposition)}", file=out)

    # ------------------------------------------------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuantumMemory):
            return NotImplemented
        return (
            self.state == other.state
            and self.superposition == other.superposition
            and self.probability == other.probability
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"QuantumMemory(state=0x{self.state:016x}, "
            f"superposition=0x{self.superposition:016x})"
        )
