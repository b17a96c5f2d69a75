"""
Logging for boxknife units and the settings that can be made through environment variables:

- `BOXKNIFE_VERBOSITY`: the log level of units on the command line, given either as the number of
  `-v` switches or as the name of a `boxknife.lib.environment.LogLevel`.
- `BOXKNIFE_COLORLESS`: disables colored level names in log output.
- `BOXKNIFE_TERM_SIZE`: the terminal width used for help output.
"""
from __future__ import annotations

import os
import sys
import logging

from enum import IntEnum
from typing import Generic, Optional, TypeVar

_T = TypeVar('_T')

Logger = logging.Logger


class LogLevel(IntEnum):
    """
    The log levels of a unit. `NONE` silences a unit completely, while `DETACHED` is the level
    of a unit that is used from Python code: failures are raised as exceptions instead of being
    logged.
    """
    DEBUG    = logging.DEBUG     # noqa
    INFO     = logging.INFO      # noqa
    WARNING  = logging.WARNING   # noqa
    ERROR    = logging.ERROR     # noqa
    CRITICAL = logging.CRITICAL  # noqa
    NONE     = logging.CRITICAL + 50   # noqa
    DETACHED = logging.CRITICAL + 100  # noqa

    @classmethod
    def FromVerbosity(cls, verbosity: int) -> LogLevel:
        """
        Translate the number of `-v` switches into a log level; negative values detach.
        """
        if verbosity < 0:
            return cls.DETACHED
        return (cls.WARNING, cls.INFO, cls.DEBUG)[min(verbosity, 2)]


class BoxKnifeFormatter(logging.Formatter):
    """
    Formats records as `(time) level in unit: message`. The level is written as one of the words
    `failure`, `warning`, `comment` or `verbose`, which can be colored using `colorama`.
    """

    LEVELS = {
        logging.CRITICAL : ('failure', 'LIGHTRED_EX'),
        logging.ERROR    : ('failure', 'LIGHTRED_EX'),
        logging.WARNING  : ('warning', 'LIGHTYELLOW_EX'),
        logging.INFO     : ('comment', 'LIGHTBLUE_EX'),
        logging.DEBUG    : ('verbose', 'LIGHTBLACK_EX'),
    }

    def __init__(self, colorize: bool = False, timestamp: bool = True):
        layout = '{level} in {name}: {message}'
        if timestamp:
            layout = '({asctime}) ' + layout
        super().__init__(layout, datefmt='%H:%M:%S', style='{')
        self.colorize = colorize

    def formatMessage(self, record: logging.LogRecord) -> str:
        word, color = self.LEVELS.get(record.levelno, ('message', 'RESET'))
        if self.colorize:
            from colorama import Fore
            word = F'{getattr(Fore, color)}{word}{Fore.RESET}'
        record.level = word
        return super().formatMessage(record)


def logger(name: str) -> Logger:
    """
    Returns the logger for the unit with the given name. It writes to standard error and does
    not propagate to the root logger. Level names are colored when standard error is a terminal,
    unless `BOXKNIFE_COLORLESS` is set.
    """
    log = logging.getLogger(name)
    if log.handlers:
        return log
    stream = sys.stderr
    colorize = stream.isatty() and not environment.colorless.value
    if colorize and os.name == 'nt':
        import colorama
        stream = colorama.AnsiToWin32(stream).stream
    handler = logging.StreamHandler(stream)
    handler.setFormatter(BoxKnifeFormatter(colorize))
    log.addHandler(handler)
    log.propagate = False
    return log


class Setting(Generic[_T]):
    """
    A setting that is read from the environment variable `BOXKNIFE_<name>` once, when it is
    created. Subclasses parse the raw string; `default` is used when the variable is unset.
    """
    default: Optional[_T] = None

    def __init__(self, name: str):
        self.key = F'BOXKNIFE_{name}'
        raw = os.environ.get(self.key)
        self.value: Optional[_T] = self.default if raw is None else self.parse(raw)

    def parse(self, raw: str) -> Optional[_T]:
        raise NotImplementedError


class BoolSetting(Setting[bool]):
    default = False

    def parse(self, raw: str) -> bool:
        raw = raw.strip().lower()
        if raw.isdigit():
            return int(raw) != 0
        return raw not in ('', 'no', 'off', 'false')


class IntSetting(Setting[int]):
    default = 0

    def parse(self, raw: str) -> int:
        try:
            return int(raw, 0)
        except ValueError:
            return self.default


class LogLevelSetting(Setting[LogLevel]):

    def parse(self, raw: str) -> Optional[LogLevel]:
        raw = raw.strip()
        if raw.isdigit():
            return LogLevel.FromVerbosity(int(raw))
        try:
            return LogLevel[raw.upper()]
        except KeyError:
            choices = ', '.join(level.name for level in LogLevel)
            logging.getLogger(__name__).warning(
                F'ignoring {self.key}={raw!r}, valid levels are: {choices}')
            return None


class environment:
    verbosity = LogLevelSetting('VERBOSITY')
    term_size = IntSetting('TERM_SIZE')
    colorless = BoolSetting('COLORLESS')
