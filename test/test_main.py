import io
import sys

from types import SimpleNamespace
from unittest import mock

from boxknife.__main__ import main

from . import TestBase


class TestMain(TestBase):

    def _main(self, *argv, stdin=B''):
        stdin = SimpleNamespace(buffer=io.BytesIO(stdin))
        with mock.patch.object(sys, 'stdin', stdin), mock.patch.object(sys, 'stderr', io.StringIO()) as stderr:
            code, output = self.run_commandline(lambda argv, _: main(argv), *argv)
        return code, output, stderr.getvalue()

    def test_dispatch_to_unit(self):
        code, output, _ = self._main('unhex', '-s', '4142')
        self.assertEqual(code, 0)
        self.assertEqual(output, B'AB')

    def test_dispatch_reads_stdin(self):
        code, output, _ = self._main('urlenc', stdin=B'a b')
        self.assertEqual(code, 0)
        self.assertEqual(output, B'a%20b')

    def test_unknown_unit(self):
        code, output, errors = self._main('b64', 'x')
        self.assertEqual(code, 2)
        self.assertEqual(output, B'')
        self.assertIn('unknown unit', errors)

    def test_usage(self):
        code, _, errors = self._main()
        self.assertEqual(code, 2)
        self.assertIn('unhex', errors)
        code, _, errors = self._main('--help')
        self.assertEqual(code, 0)
        self.assertIn('urldec', errors)
