from boxknife.lib.argparser import ArgparseError

from .. import TestUnitBase


class TestUrlEncoder(TestUnitBase):

    def test_default(self):
        unit = self.load()
        self.assertEqual(str('aA!,é'.encode('utf8') | unit), 'aA%21%2c%c3%a9')
        self.assertEqual(str(B'\x00\xFF' | unit), '%00%ff')

    def test_rfc3986(self):
        unit = self.load('-u')
        self.assertEqual(B'a-b c/d~' | unit | bytes, B'a-b%20c%2fd~')

    def test_exclude_with_rfc3986(self):
        unit = self.load(rfc3986=True, exclude_chars='/')
        self.assertEqual(B'a-b c/d~' | unit | bytes, B'a-b%20c/d~')

    def test_custom_and_rfc3986_are_exclusive(self):
        with self.assertRaises(ArgparseError):
            self.load('-u', '-c', 'abc')

    def test_roundtrip_with_decoder(self):
        from boxknife import urldec
        data = 'aA!,é'.encode('utf8')
        self.assertEqual(data | self.load() | urldec | bytes, data)


class TestUrlEncoderCommandLine(TestUnitBase):

    def test_argument(self):
        self.assertEqual(self.run_unit('aAé!,'), (0, B'aA%c3%a9%21%2c'))

    def test_argument_exclude(self):
        self.assertEqual(self.run_unit('-e', '!,', 'aAé!,'), (0, B'aA%c3%a9!,'))

    def test_argument_custom(self):
        self.assertEqual(self.run_unit('-e', '!,', '-c', 'aA,', 'aAé!,'), (0, '%61%41é!,'.encode('utf8')))

    def test_stdin(self):
        self.assertEqual(self.run_unit(stdin='aAé!,'.encode('utf8')), (0, B'aA%c3%a9%21%2c'))
