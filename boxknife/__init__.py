"""
The boxknife package is a small collection of byte-stream transcoders for hexadecimal and URL
encoding. Its centerpiece is the permissive hex decoder `boxknife.unhex`, which can decode hex
pairs anywhere in arbitrary data, decode mostly-hex input with graceful degradation, or decode
strictly.

All units can be imported from this package, for example `from boxknife import unhex`. The
modules that define them are only imported on first use. See `boxknife.units` for how units are
used in Python code.
"""
from __future__ import annotations

__version__ = '0.4.1'
__distribution__ = 'boxknife'

from threading import RLock
from typing import Dict, List, Optional

from boxknife.units import Arg, Unit


class UnitRegistry:
    """
    Maps the command line names of all units to their classes. The map is computed once, when it
    is first needed, by importing every module below `boxknife.units`.
    """

    def __init__(self):
        self._lock = RLock()
        self._units: Optional[Dict[str, type[Unit]]] = None

    @property
    def units(self) -> Dict[str, type[Unit]]:
        with self._lock:
            if self._units is None:
                from boxknife.lib.loader import iter_units
                self._units = {unit.name: unit for unit in iter_units()}
            return self._units

    def names(self) -> List[str]:
        return sorted(self.units)

    def resolve(self, name: str) -> Optional[type[Unit]]:
        return self.units.get(name)


registry = UnitRegistry()


def load(name: str) -> Optional[type[Unit]]:
    """
    Returns the unit with the given command line name, or `None` if there is no such unit.
    """
    return registry.resolve(name)


def __getattr__(name: str):
    unit = None if name.startswith('__') else registry.resolve(name)
    if unit is None:
        raise AttributeError(F'module {__name__!r} has no attribute {name!r}')
    return unit


def __dir__():
    return [*registry.names(), 'Arg', 'Unit', 'load', 'registry']
