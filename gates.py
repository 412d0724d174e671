"""Toy gates acting on :class:`quantum_memory.QuantumMemory` slots.

The register has no amplitudes, so these gates work by measurement: any
superposed operand is collapsed first and the gate then rewrites definite
values.  Only :func:`hadamard` leaves a slot superposed.
"""

from __future__ import annotations

import logging
from typing import Tuple

from quantum_memory import BitValue, QuantumMemory, check_index

logger = logging.getLogger(__name__)


def hadamard(mem: QuantumMemory, index: int) -> None:
    """Put slot ``index`` into an even superposition."""
    mem.set_bit(index, BitValue.SUPERPOSED)


def pauli_x(mem: QuantumMemory, index: int) -> None:
    """Flip slot ``index`` (collapsing it first if needed)."""
    mem.set_bit(index, not mem.measure(index))


def swap(mem: QuantumMemory, a: int, b: int) -> None:
    """Exchange the measured values of slots ``a`` and ``b``."""
    if check_index(a) == check_index(b):
        return
    value_a = mem.measure(a)
    value_b = mem.measure(b)
    mem.set_bit(a, value_b)
    mem.set_bit(b, value_a)


def cnot(mem: QuantumMemory, control: int, target: int) -> None:
    """Flip ``target`` when ``control`` measures as 1."""
    if mem.measure(control):
        pauli_x(mem, target)


def bells_test(mem: QuantumMemory, a: int, b: int) -> Tuple[bool, bool, bool]:
    """Measure ``a`` and ``b`` and report whether the outcomes agree.

    Returns ``(value_a, value_b, correlated)``.
    """

    value_a = mem.measure(a)
    value_b = mem.measure(b)
    correlated = value_a == value_b
    logger.info(
        "Bell test on slots %d and %d: %d, %d (%s)",
        a,
        b,
        value_a,
        value_b,
        "correlated" if correlated else "not correlated",
    )
    return value_a, value_b, correlated
