"""
Discovery of the units that are shipped in the `boxknife.units` package.
"""
from __future__ import annotations

import importlib
import logging
import pkgutil

from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from boxknife.units import Unit


def iter_units(package: str = 'boxknife.units') -> Iterator[type[Unit]]:
    """
    Imports every module below the given package and yields the entry point units defined in
    them. A module that cannot be imported is reported and skipped.
    """
    from boxknife.units import Entry
    root = importlib.import_module(package)
    for info in pkgutil.walk_packages(root.__path__, F'{package}.'):
        try:
            module = importlib.import_module(info.name)
        except Exception as error:
            logging.getLogger(__name__).error(F'skipping {info.name}, import failed: {error!s}')
            continue
        for item in vars(module).values():
            if not isinstance(item, type) or item.__module__ != module.__name__:
                continue
            if issubclass(item, Entry):
                yield item
