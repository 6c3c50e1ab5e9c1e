import unittest

from ls8emu.arch.ls8.state import Ls8CpuState
from ls8emu.arch.ls8.alu import alu, compare
from ls8emu.core.errors import ArithmeticFault, RegisterIndexError

class TestLs8Alu(unittest.TestCase):
    def setUp(self):
        self.state = Ls8CpuState()

    def _set(self, a, b):
        self.state.reg[0] = a
        self.state.reg[1] = b

    def test_add(self):
        self._set(0x10, 0x20)
        alu(self.state, "ADD", 0, 1)
        self.assertEqual(self.state.reg[0], 0x30)
        self.assertEqual(self.state.reg[1], 0x20) # regB is not modified

    def test_add_truncates_to_8_bits(self):
        self._set(0xF0, 0x20)
        alu(self.state, "ADD", 0, 1)
        self.assertEqual(self.state.reg[0], 0x10)

    def test_sub_wraps_below_zero(self):
        self._set(0x05, 0x10)
        alu(self.state, "SUB", 0, 1)
        self.assertEqual(self.state.reg[0], 0xF5)

    def test_mul(self):
        self._set(8, 9)
        alu(self.state, "MUL", 0, 1)
        self.assertEqual(self.state.reg[0], 72)

        self._set(16, 17)
        alu(self.state, "MUL", 0, 1)
        self.assertEqual(self.state.reg[0], (16 * 17) & 0xFF)

    def test_div_and_mod(self):
        self._set(17, 5)
        alu(self.state, "DIV", 0, 1)
        self.assertEqual(self.state.reg[0], 3)

        self._set(17, 5)
        alu(self.state, "MOD", 0, 1)
        self.assertEqual(self.state.reg[0], 2)

    def test_div_by_zero_raises(self):
        self._set(10, 0)
        with self.assertRaises(ArithmeticFault) as ctx:
            alu(self.state, "DIV", 0, 1)
        self.assertEqual(ctx.exception.divisor, 0)
        self.assertEqual(ctx.exception.register, 1)
        self.assertEqual(self.state.reg[0], 10)

    def test_mod_by_zero_raises(self):
        self._set(10, 0)
        with self.assertRaises(ArithmeticFault) as ctx:
            alu(self.state, "MOD", 0, 1)
        self.assertIn("Modulo by zero", str(ctx.exception))

    def test_bitwise(self):
        self._set(0b11001100, 0b10101010)
        alu(self.state, "AND", 0, 1)
        self.assertEqual(self.state.reg[0], 0b10001000)

        self._set(0b11001100, 0b10101010)
        alu(self.state, "OR", 0, 1)
        self.assertEqual(self.state.reg[0], 0b11101110)

        self._set(0b11001100, 0b10101010)
        alu(self.state, "XOR", 0, 1)
        self.assertEqual(self.state.reg[0], 0b01100110)

    def test_not_truncates(self):
        self.state.reg[2] = 0b00001111
        alu(self.state, "NOT", 2)
        self.assertEqual(self.state.reg[2], 0b11110000)

    def test_inc_dec_wrap(self):
        self.state.reg[0] = 0xFF
        alu(self.state, "INC", 0)
        self.assertEqual(self.state.reg[0], 0x00)
        alu(self.state, "DEC", 0)
        self.assertEqual(self.state.reg[0], 0xFF)

    def test_inc_then_dec_is_identity(self):
        for value in (0, 1, 0x7F, 0x80, 0xFE, 0xFF):
            self.state.reg[3] = value
            alu(self.state, "INC", 3)
            alu(self.state, "DEC", 3)
            self.assertEqual(self.state.reg[3], value)
            alu(self.state, "DEC", 3)
            alu(self.state, "INC", 3)
            self.assertEqual(self.state.reg[3], value)

    def test_add_then_sub_is_identity(self):
        for a, b in ((0, 0), (1, 255), (200, 100), (255, 255)):
            self._set(a, b)
            alu(self.state, "ADD", 0, 1)
            alu(self.state, "SUB", 0, 1)
            self.assertEqual(self.state.reg[0], a)

    def test_xor_twice_is_identity(self):
        self._set(0x5A, 0xC3)
        alu(self.state, "XOR", 0, 1)
        alu(self.state, "XOR", 0, 1)
        self.assertEqual(self.state.reg[0], 0x5A)

    def test_not_twice_is_identity(self):
        self.state.reg[0] = 0x5A
        alu(self.state, "NOT", 0)
        alu(self.state, "NOT", 0)
        self.assertEqual(self.state.reg[0], 0x5A)

    def test_invalid_register_index(self):
        with self.assertRaises(RegisterIndexError):
            alu(self.state, "ADD", 0, 9)

    def test_unsupported_operation(self):
        with self.assertRaises(ValueError):
            alu(self.state, "SHL", 0, 1)

class TestLs8Compare(unittest.TestCase):
    def setUp(self):
        self.state = Ls8CpuState()

    def test_equal_sets_only_e(self):
        self.state.reg[0] = 5
        self.state.reg[1] = 5
        compare(self.state, 0, 1)
        self.assertEqual(self.state.fl, 0b001)

    def test_greater_sets_only_g(self):
        self.state.reg[0] = 6
        self.state.reg[1] = 5
        compare(self.state, 0, 1)
        self.assertEqual(self.state.fl, 0b010)

    def test_less_sets_only_l(self):
        self.state.reg[0] = 4
        self.state.reg[1] = 5
        compare(self.state, 0, 1)
        self.assertEqual(self.state.fl, 0b100)

    def test_flags_persist_across_other_operations(self):
        self.state.reg[0] = 5
        self.state.reg[1] = 5
        compare(self.state, 0, 1)
        alu(self.state, "ADD", 0, 1)
        alu(self.state, "INC", 1)
        self.assertTrue(self.state.flag_e)

    def test_flags_accumulate(self):
        self.state.reg[0] = 5
        self.state.reg[1] = 5
        compare(self.state, 0, 1)
        self.state.reg[0] = 9
        compare(self.state, 0, 1)
        self.assertEqual(self.state.fl, 0b011)

    def test_clear_flags_option(self):
        self.state.fl = 0b111
        self.state.reg[0] = 9
        self.state.reg[1] = 5
        compare(self.state, 0, 1, clear_flags=True)
        self.assertEqual(self.state.fl, 0b010)

if __name__ == '__main__':
    unittest.main()
