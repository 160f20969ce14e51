"""
Intcode VM - Memory and Operand Resolution Tests

Covers the growable store (zero-default reads, zero-filled growth,
negative-address faults) and the three addressing modes.
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from intcode_vm.mem.memory import Memory
from intcode_vm.cpu.decoder import Mode
from intcode_vm.cpu.addressing import resolve_value, resolve_address
from intcode_vm.errors import LoadError, OperandError


class TestMemory:
    def test_reads_back_image(self):
        mem = Memory([1, 2, 3])
        assert [mem.read(i) for i in range(3)] == [1, 2, 3]
        assert len(mem) == 3

    def test_read_past_end_is_zero_and_does_not_grow(self):
        mem = Memory([1, 2, 3])
        assert mem.read(3) == 0
        assert mem.read(10_000) == 0
        assert len(mem) == 3

    def test_write_past_end_grows_with_zeros(self):
        mem = Memory([7])
        mem.write(500, 42)
        assert len(mem) == 501
        assert mem.read(500) == 42
        assert mem.read(0) == 7
        assert all(mem.read(i) == 0 for i in range(1, 500))

    def test_length_never_decreases(self):
        mem = Memory([1, 2, 3, 4])
        mem.write(0, 9)
        mem.write(1, 0)
        assert len(mem) == 4

    def test_negative_read_faults(self):
        with pytest.raises(OperandError) as exc:
            Memory([1]).read(-1)
        assert exc.value.address == -1

    def test_negative_write_faults(self):
        mem = Memory([1])
        with pytest.raises(OperandError):
            mem.write(-5, 1)
        assert mem.snapshot() == [1]

    def test_copy_is_independent(self):
        mem = Memory([1, 2])
        clone = mem.copy()
        clone.write(0, 99)
        clone.write(10, 1)
        assert mem.snapshot() == [1, 2]
        assert len(clone) == 11

    def test_snapshot_is_a_copy(self):
        mem = Memory([1, 2])
        snap = mem.snapshot()
        snap[0] = 100
        assert mem.read(0) == 1

    def test_does_not_alias_source_list(self):
        image = [1, 2, 3]
        mem = Memory(image)
        mem.write(0, 50)
        assert image == [1, 2, 3]

    @pytest.mark.parametrize("image", [[1.5], ["7"], [1, None], [True]])
    def test_rejects_non_integer_cells(self, image):
        """Cells are stored as given, never coerced (1.5 must not become 1)."""
        with pytest.raises(LoadError):
            Memory(image)


class TestAddressing:
    """Mode semantics: position / immediate / relative."""

    def setup_method(self):
        self.mem = Memory([10, 20, 30, 40, 50])

    def test_immediate_value_is_literal(self):
        assert resolve_value(Mode.IMMEDIATE, 3, self.mem, 0) == 3
        assert resolve_value(Mode.IMMEDIATE, -7, self.mem, 100) == -7

    def test_position_value_reads_memory(self):
        assert resolve_value(Mode.POSITION, 3, self.mem, 0) == 40

    def test_relative_value_uses_base(self):
        assert resolve_value(Mode.RELATIVE, 1, self.mem, 2) == 40
        assert resolve_value(Mode.RELATIVE, -2, self.mem, 3) == 20

    def test_values_past_end_are_zero(self):
        assert resolve_value(Mode.POSITION, 99, self.mem, 0) == 0
        assert resolve_value(Mode.RELATIVE, 90, self.mem, 9) == 0

    def test_negative_relative_read_faults(self):
        with pytest.raises(OperandError):
            resolve_value(Mode.RELATIVE, -4, self.mem, 3)

    def test_write_addresses(self):
        assert resolve_address(Mode.POSITION, 7, 100) == 7
        assert resolve_address(Mode.RELATIVE, 7, 100) == 107
        assert resolve_address(Mode.RELATIVE, -7, 10) == 3

    def test_immediate_write_target_faults(self):
        with pytest.raises(OperandError):
            resolve_address(Mode.IMMEDIATE, 1, 0)

    def test_negative_write_address_faults(self):
        with pytest.raises(OperandError) as exc:
            resolve_address(Mode.RELATIVE, -1, 0)
        assert exc.value.address == -1
        with pytest.raises(OperandError):
            resolve_address(Mode.POSITION, -3, 0)
