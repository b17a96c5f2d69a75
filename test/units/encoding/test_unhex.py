import logging

from unittest import mock

from boxknife.lib.environment import environment
from boxknife.lib.hexcodec import InvalidCharacterError, OddLengthError

from .. import TestUnitBase


class TestUnhex(TestUnitBase):

    def test_find_anywhere(self):
        unit = self.load()
        self.assertEqual(B'test52af ' | unit | bytes, bytes([0x74, 0x65, 0x73, 0x74, 0x52, 0xaf, 0x20]))
        self.assertEqual(B'test52af' | unit | bytes, bytes([0x74, 0x65, 0x73, 0x74, 0x52, 0xaf]))
        self.assertEqual(B'!52af' | unit | bytes, bytes([0x21, 0x52, 0xaf]))
        self.assertEqual(B'!5 2af' | unit | bytes, bytes([0x21, 0x35, 0x20, 0x2a, 0x66]))

    def test_hex_only(self):
        unit = self.load(hex_only=True)
        self.assertEqual(
            bytes(B'01 23 45 67 89 ab cd ef' | unit),
            bytes([0x01, 0x23, 0x45, 0x67, 0x89, 0xab, 0xcd, 0xef]))
        self.assertEqual(
            bytes(B'0123456789abcdef' | unit),
            bytes([0x01, 0x23, 0x45, 0x67, 0x89, 0xab, 0xcd, 0xef]))
        self.assertEqual(bytes(B'41ff\n00FF' | unit), B'A\xFF\n00FF')

    def test_strict_implies_hex_only(self):
        unit = self.load('-s')
        self.assertTrue(unit.args.hex_only)
        self.assertTrue(unit.args.strict)
        self.assertEqual(unit.policy, (True, True))

    def test_strict_errors_are_raised_when_detached(self):
        unit = self.load(strict=True)
        with self.assertRaises(OddLengthError):
            B'41l' | unit | bytes
        with self.assertRaises(InvalidCharacterError):
            B'41ll' | unit | bytes
        self.assertEqual(B' 4142\n' | unit | bytes, B'AB')

    def test_direct_construction(self):
        self.assertEqual(self.unit()(strict=True)(B'4142'), B'AB')
        self.assertEqual(self.unit()()(B'x41'), B'xA')

    def test_reverse_is_hex_encoding(self):
        data = self.generate_random_buffer(100)
        self.assertEqual(data | -self.load() | bytes, data.hex().encode('ascii'))
        self.assertEqual(data | -self.load() | self.load() | bytes, data)

    def test_options(self):
        argp = self.unit().argparser()
        options = {option for action in argp._actions for option in action.option_strings}
        self.assertLessEqual({'-o', '--hex-only', '-s', '--strict', '-R', '--reverse'}, options)


class TestUnhexCommandLine(TestUnitBase):

    def test_output_is_not_a_terminal(self):
        with mock.patch.object(environment.term_size, 'value', 0):
            self.assertEqual(self.run_unit('-s', '4142'), (0, B'AB'))

    def test_argument(self):
        self.assertEqual(self.run_unit('6141210a00ff'), (0, B'aA!\n\x00\xff'))

    def test_stdin(self):
        self.assertEqual(self.run_unit(stdin=B'41ff\n00FF'), (0, bytes([0x41, 0xFF, 0x0A, 0x00, 0xFF])))

    def test_stdin_hex_only(self):
        self.assertEqual(self.run_unit('-o', stdin=B'41ff\n00FF'), (0, B'A\xFF\n00FF'))

    def test_lenient_modes_always_succeed(self):
        data = self.generate_random_buffer(300)
        self.assertEqual(self.run_unit(stdin=data)[0], 0)
        self.assertEqual(self.run_unit('--hex-only', stdin=data)[0], 0)

    def test_strict_odd_length(self):
        logging.disable(logging.NOTSET)
        with self.assertLogs(self.unit().logger, logging.ERROR) as logs:
            code, output = self.run_unit('-s', stdin=B'41l')
        self.assertEqual(code, 1)
        self.assertEqual(output, B'')
        self.assertIn('Odd number of digits', '\n'.join(logs.output))

    def test_strict_invalid_character(self):
        logging.disable(logging.NOTSET)
        with self.assertLogs(self.unit().logger, logging.ERROR) as logs:
            code, output = self.run_unit('-s', stdin=B'41ll')
        self.assertEqual(code, 1)
        self.assertEqual(output, B'')
        self.assertIn('Invalid character', '\n'.join(logs.output))

    def test_quiet_failure(self):
        code, output = self.run_unit('-Q', '-s', stdin=B'41ll')
        self.assertEqual(code, 1)
        self.assertEqual(output, B'')

    def test_reverse(self):
        self.assertEqual(self.run_unit('-R', stdin=B'\x00\xFF'), (0, B'00ff'))

    def test_invalid_arguments(self):
        code, output = self.run_unit('--no-such-flag')
        self.assertEqual(code, 2)
        self.assertEqual(output, B'')
