"""
The argument parser that backs the command line interface of every `boxknife.units.Unit`.
"""
from __future__ import annotations

import sys
import textwrap

from argparse import Action, ArgumentParser, Namespace, RawDescriptionHelpFormatter
from typing import Sequence

from boxknife.lib.tools import get_terminal_size


class ArgparseError(ValueError):
    """
    Raised by `boxknife.lib.argparser.UnitArgumentParser` instead of terminating the process. The
    parser that failed is attached so that the command line entry point can print its usage.
    """
    def __init__(self, parser: UnitArgumentParser, message: str):
        super().__init__(message)
        self.parser = parser


class UnitHelpFormatter(RawDescriptionHelpFormatter):
    """
    Fills the paragraphs of the unit documentation to the terminal width and shows the option
    strings of each argument once, followed by its metavariable.
    """

    def __init__(self, prog: str):
        super().__init__(prog, max_help_position=30, width=get_terminal_size(80))

    def add_text(self, text):
        if text:
            text = '\n\n'.join(textwrap.fill(paragraph, self._width) for paragraph in text.split('\n\n'))
        super().add_text(text)

    def _format_action_invocation(self, action: Action) -> str:
        flags = action.option_strings
        if not flags:
            return super()._format_action_invocation(action)
        invocation = ', '.join(flags)
        if action.nargs != 0:
            invocation = F'{invocation} {self._format_args(action, action.dest.upper())}'
        if flags[0].startswith('--'):
            # align long-only options with the long form of options that also have a short form
            invocation = F'    {invocation}'
        return invocation


class UnitArgumentParser(ArgumentParser):
    """
    Keywords given to the parser are used as defaults. This is how arguments that were passed to
    a unit as Python keywords are merged with arguments given as on a command line.
    """

    def __init__(self, prog: str, description: str, **keywords):
        super().__init__(
            prog=prog,
            description=description,
            add_help=False,
            formatter_class=UnitHelpFormatter,
        )
        if sys.version_info >= (3, 14):
            self.color = False
        self.keywords = keywords

    def error(self, message: str):
        raise ArgparseError(self, message)

    def exit_with_usage(self, message: str):
        """
        The default argparse behavior: print the usage and the message, then exit with status 2.
        """
        super().error(message)

    def parse_unit_arguments(self, argv: Sequence[str]) -> Namespace:
        self.set_defaults(**self.keywords)
        return self.parse_args(list(argv))
