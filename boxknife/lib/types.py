"""
Type aliases shared by the boxknife library and its units.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Union

buf = Union[bytes, bytearray, memoryview]

if TYPE_CHECKING:
    from typing import Annotated as Param
else:
    class _ParamAnnotation:
        """
        At runtime, `Param[T, argument]` evaluates to `argument`, which is where the unit framework
        looks for the command line description of a parameter. Type checkers see
        `Annotated[T, argument]` instead.
        """
        def __getitem__(self, item):
            _, argument = item
            return argument

    Param = _ParamAnnotation()

__all__ = ['buf', 'Param']
