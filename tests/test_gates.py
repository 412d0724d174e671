import logging

import pytest

from gates import bells_test, cnot, hadamard, pauli_x, swap
from quantum_memory import IndexOutOfRange, QuantumMemory


def test_hadamard_resuperposes():
    mem = QuantumMemory(seed=0)
    mem.set_bit(4, True)
    hadamard(mem, 4)
    assert mem.is_superposed(4)
    assert mem.get_probability(4) == 0.5


def test_pauli_x_flips_definite_values():
    mem = QuantumMemory(seed=0)
    mem.set_bit(0, True)
    mem.set_bit(1, False)
    pauli_x(mem, 0)
    pauli_x(mem, 1)
    assert mem.measure(0) is False
    assert mem.measure(1) is True


def test_pauli_x_collapses_then_flips():
    mem = QuantumMemory(seed=0)
    mem.set_bit(2, None, probability=1.0)
    pauli_x(mem, 2)
    assert not mem.is_superposed(2)
    assert mem.measure(2) is False


def test_swap_exchanges_values():
    mem = QuantumMemory(seed=0)
    mem.set_bit(0, True)
    mem.set_bit(63, False)
    swap(mem, 0, 63)
    assert mem.measure(0) is False
    assert mem.measure(63) is True


def test_swap_same_slot_is_noop():
    mem = QuantumMemory(seed=0)
    swap(mem, 7, 7)
    assert mem.is_superposed(7)
    with pytest.raises(IndexOutOfRange):
        swap(mem, 64, 64)


@pytest.mark.parametrize("control, expected", [(True, True), (False, False)])
def test_cnot(control, expected):
    mem = QuantumMemory(seed=0)
    mem.set_bit(0, control)
    mem.set_bit(1, False)
    cnot(mem, 0, 1)
    assert mem.measure(1) is expected
    assert mem.measure(0) is control


def test_bells_test_reports_correlation(caplog):
    mem = QuantumMemory(seed=0)
    mem.set_bit(0, True)
    mem.set_bit(1, True)
    mem.set_bit(2, False)
    with caplog.at_level(logging.INFO, logger="gates"):
        assert bells_test(mem, 0, 1) == (True, True, True)
        assert bells_test(mem, 0, 2) == (True, False, False)
    assert "not correlated" in caplog.text


def test_gates_propagate_bounds_errors():
    mem = QuantumMemory(seed=0)
    with pytest.raises(IndexOutOfRange):
        pauli_x(mem, 64)
    mem.set_bit(0, True)
    with pytest.raises(IndexOutOfRange):
        cnot(mem, 0, 99)
