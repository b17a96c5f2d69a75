import io
import logging
import random
import string
import unittest

from unittest import mock

import boxknife

from boxknife.lib.environment import environment


__all__ = ['boxknife', 'TestBase']


class TestBase(unittest.TestCase):

    def setUp(self):
        # every test sees the same pseudo-random data
        random.seed(0xB0C5)
        logging.disable(logging.CRITICAL)

    def generate_random_buffer(self, size: int) -> bytes:
        return bytes(random.randrange(0x100) for _ in range(size))

    def generate_random_text(self, size: int) -> bytes:
        return ''.join(random.choice(string.printable) for _ in range(size)).encode('utf8')

    def run_commandline(self, entry, *argv, stdin=B''):
        """
        Call `entry` with the argument list and a stream for standard input, as it would be called
        from the command line. Returns the exit status and the bytes that were written to standard
        output.
        """
        output = io.BytesIO()
        stdout = io.TextIOWrapper(output, encoding='utf8')
        with mock.patch('sys.stdout', stdout), mock.patch.object(environment.verbosity, 'value', None):
            try:
                entry(list(argv), io.BytesIO(stdin))
            except SystemExit as error:
                status = error.code
            else:
                status = 0
            stdout.flush()
            result = output.getvalue()
        stdout.detach()
        return status, result
