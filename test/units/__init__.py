from __future__ import annotations

import importlib

from .. import boxknife, TestBase

from boxknife.units import Entry, LogLevel, Unit

__all__ = ['boxknife', 'TestUnitBase']


class TestUnitBase(TestBase):
    """
    The unit under test is determined by the module name of the test case: the test cases in
    `test.units.encoding.test_unhex` test `boxknife.units.encoding.unhex`.
    """

    @classmethod
    def unit(cls) -> type[Unit]:
        _, *path, module = cls.__module__.split('.')
        if module.startswith('test_'):
            module = module[5:]
        code = importlib.import_module('.'.join(['boxknife', *path, module]))
        for item in vars(code).values():
            if isinstance(item, type) and issubclass(item, Entry) and item.__module__ == code.__name__:
                return item
        raise LookupError(F'no unit found in {code.__name__}')

    @classmethod
    def load(cls, *args, **kwargs) -> Unit:
        unit = cls.unit().assemble(*args, **kwargs)
        unit.log_level = LogLevel.DETACHED
        return unit

    def run_unit(self, *argv, stdin=B''):
        return self.run_commandline(self.unit().run, *argv, stdin=stdin)
