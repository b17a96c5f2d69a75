"""
The unit framework. A unit is a class that inherits from `boxknife.units.Unit` and implements
`boxknife.units.Unit.process`; a unit that also implements `reverse` can be run in reverse mode.
Every unit is a shell command with the same name, and it can be used from Python code:

    >>> from boxknife import unhex, urlenc
    >>> B'ID:4142' | unhex | bytes
    b'ID:AB'
    >>> B'ID:4142' | unhex | urlenc | str
    'ID%3aAB'
    >>> B'AB' | -unhex | str
    '4142'

### Command Line Parameters

The command line interface of a unit is derived from the signature of its `__init__` method.
Parameters can be annotated with a `boxknife.units.Arg`, usually through
`boxknife.lib.types.Param` so that type checkers see the real type:

    class prefix(Unit):
        def __init__(self, text: Param[str, Arg.String(help='Data to be prepended.')] = ''):
            super().__init__(text=text)

        def process(self, data):
            return self.args.text.encode(self.codec) + data

The values of all parameters are available as members of `args`. In addition, every unit accepts
the generic switches `-h`, `-Q`, `-v` and, when it is reversible, `-R`. The input is read from an
optional positional argument or, when it is missing, from standard input.
"""
from __future__ import annotations

import abc
import copy
import inspect
import os
import sys

from abc import ABCMeta
from argparse import OPTIONAL, Namespace
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from boxknife.lib.argparser import ArgparseError, UnitArgumentParser
from boxknife.lib.environment import Logger, LogLevel, environment, logger
from boxknife.lib.exceptions import BoxKnifeCriticalException, BoxKnifeException
from boxknife.lib.tools import dashed, documentation, isbuffer
from boxknife.lib.types import buf

if TYPE_CHECKING:
    from typing import Self


class Entry:
    """
    Marker base class of every unit that can be executed from the command line.
    """


class Arg:
    """
    The command line description of a unit parameter. The positional arguments are the option
    strings and the keyword arguments are passed on to `argparse.ArgumentParser.add_argument`.
    Arguments with the same `group` are mutually exclusive.
    """

    __slots__ = 'flags', 'options', 'group'

    def __init__(self, *flags: str, group: Optional[str] = None, **options):
        self.flags = list(flags)
        self.options = options
        self.group = group

    def __copy__(self) -> Arg:
        return self.__class__(*self.flags, group=self.group, **self.options)

    def __repr__(self) -> str:
        options = ''.join(F', {key}={value!r}' for key, value in self.options.items())
        return F'{self.__class__.__name__}({", ".join(map(repr, self.flags))}{options})'

    @classmethod
    def Switch(cls, *flags: str, help: Optional[str] = None, group: Optional[str] = None) -> Arg:
        """
        A boolean option that is `False` unless it is given.
        """
        return cls(*flags, group=group, action='store_true', help=help)

    @classmethod
    def String(
        cls,
        *flags: str,
        help: Optional[str] = None,
        metavar: Optional[str] = None,
        group: Optional[str] = None,
    ) -> Arg:
        """
        An argument that holds a string.
        """
        if metavar is None and flags:
            metavar = 'STR'
        return cls(*flags, group=group, type=str, help=help, metavar=metavar)

    @property
    def positional(self) -> bool:
        return any(not flag.startswith('-') for flag in self.flags)

    @classmethod
    def ForParameter(cls, parameter: inspect.Parameter, namespace: Dict[str, Any]) -> Arg:
        """
        Completes the annotation of an `__init__` parameter to a full argument description. An
        option receives a long form derived from the parameter name, and the default value of
        the parameter decides about the argparse action and type.
        """
        annotation = parameter.annotation
        if isinstance(annotation, str):
            annotation = eval(annotation, namespace)
        argument = copy.copy(annotation) if isinstance(annotation, Arg) else cls()
        options = argument.options
        name = parameter.name

        if not argument.flags:
            if parameter.kind is parameter.KEYWORD_ONLY:
                argument.flags.append(F'--{dashed(name)}')
            else:
                argument.flags.append(name)
        if not argument.positional:
            options.setdefault('dest', name)
            if not any(flag.startswith('--') for flag in argument.flags):
                argument.flags.append(F'--{dashed(name)}')

        default = parameter.default
        if isinstance(default, bool):
            options.setdefault('action', 'store_false' if default else 'store_true')
        elif default is not parameter.empty:
            options.setdefault('default', default)
            if argument.positional:
                options.setdefault('nargs', OPTIONAL)
            if default is not None and 'action' not in options:
                options.setdefault('type', type(default))

        if options.get('action', 'store').startswith('store_'):
            options.pop('default', None)
            options.pop('type', None)
        return argument


class Executable(ABCMeta):
    """
    The metaclass of all units. Concrete units become subclasses of `boxknife.units.Entry`, and
    the command line arguments of a unit are inferred from its `__init__` signature when the class
    is created.
    """

    _arguments: Dict[str, Arg]

    def __new__(mcs, name: str, bases: tuple, namespace: Dict[str, Any], abstract: bool = False):
        if not abstract and not any(issubclass(base, Entry) for base in bases):
            bases = bases + (Entry,)
        return super().__new__(mcs, name, bases, namespace)

    def __init__(cls, name: str, bases: tuple, namespace: Dict[str, Any], abstract: bool = False):
        super().__init__(name, bases, namespace)
        module = sys.modules[cls.__module__].__dict__
        parameters = list(inspect.signature(cls.__init__).parameters.values())[1:]
        cls._arguments = {
            parameter.name: Arg.ForParameter(parameter, module) for parameter in parameters
            if parameter.kind not in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD)
        }

    def __or__(cls, other):
        return cls() | other

    def __ror__(cls, other) -> Unit:
        return other | cls()

    def __neg__(cls) -> Unit:
        return -cls()

    @property
    def is_reversible(cls) -> bool:
        """
        Whether the unit implements a `reverse` operation.
        """
        return cls.reverse is not None

    @property
    def codec(cls) -> str:
        """
        The codec used to convert between text and bytes.
        """
        return 'UTF8'

    @property
    def name(cls) -> str:
        """
        The name of the unit on the command line.
        """
        return dashed(cls.__name__)

    @property
    def logger(cls) -> Logger:
        try:
            return cls.__dict__['_logger']
        except KeyError:
            log = cls._logger = logger(cls.name)
            return log


class Unit(metaclass=Executable, abstract=True):
    """
    The base class of all units. It connects units to byte strings, streams and each other, and
    it implements the command line interface.
    """

    reverse: Optional[Callable[[bytes], buf]] = None
    """
    Units that implement an inverse of `boxknife.units.Unit.process` define it as a method with
    the same signature.
    """

    _source: Optional[buf | Unit]

    @abc.abstractmethod
    def process(self, data: bytes) -> buf:
        """
        Transform the input. This is the operation of the unit.
        """

    def __init__(self, **arguments):
        self._source = None
        self.args = Namespace(reverse=False, verbose=0, quiet=False, value=None)
        vars(self.args).update(arguments)
        self.log_detach()

    is_reversible = property(lambda self: type(self).is_reversible)
    codec = property(lambda self: type(self).codec)
    name = property(lambda self: type(self).name)
    logger = property(lambda self: type(self).logger)

    @property
    def log_level(self) -> LogLevel:
        """
        The current log level; it is `NONE` for a unit that was told to be quiet.
        """
        if self.args.quiet:
            return LogLevel.NONE
        return LogLevel(self.logger.getEffectiveLevel())

    @log_level.setter
    def log_level(self, value: int | LogLevel) -> None:
        if not isinstance(value, LogLevel):
            value = LogLevel.FromVerbosity(value)
        self.logger.setLevel(value)

    def log_detach(self) -> Self:
        """
        Detach the unit from its logger: failures are raised to the caller instead of logged.
        Units are detached unless they were created for the command line.
        """
        self.log_level = LogLevel.DETACHED
        return self

    @classmethod
    def _log(cls, level: LogLevel, messages: tuple) -> bool:
        enabled = cls.logger.isEnabledFor(level)
        if enabled and messages:
            cls.logger.log(level, ' '.join(cls._render(message) for message in messages))
        return enabled

    @classmethod
    def _render(cls, message) -> str:
        if callable(message):
            message = message()
        if isbuffer(message):
            data = bytes(message)
            text = data.decode(cls.codec, 'replace')
            return text if text.isprintable() else data.hex().upper()
        return str(message)

    @classmethod
    def log_fail(cls, *messages) -> bool:
        """
        Log at error level; returns whether messages at this level are shown. Messages can be
        callables, which are only evaluated when the message is shown.
        """
        return cls._log(LogLevel.ERROR, messages)

    @classmethod
    def log_warn(cls, *messages) -> bool:
        return cls._log(LogLevel.WARNING, messages)

    @classmethod
    def log_info(cls, *messages) -> bool:
        return cls._log(LogLevel.INFO, messages)

    @classmethod
    def log_debug(cls, *messages) -> bool:
        return cls._log(LogLevel.DEBUG, messages)

    def _report(self, exception: Exception) -> None:
        if self.log_level >= LogLevel.DETACHED:
            raise exception
        if isinstance(exception, BoxKnifeCriticalException):
            self.log_fail(F'critical error, terminating: {exception!s}')
        elif isinstance(exception, BoxKnifeException):
            self.log_fail(str(exception))
        else:
            self.log_fail(F'unexpected exception of type {exception.__class__.__name__}: {exception!s}')
        if self.log_debug():
            self.logger.debug('stack trace of the failure:', exc_info=exception)

    def act(self, data: buf) -> bytes:
        """
        Apply the operation of the unit, or its reverse when the unit is in reverse mode.
        """
        data = bytes(data)
        if not self.args.reverse:
            return bytes(self.process(data))
        if not self.is_reversible:
            raise NotImplementedError(F'{self.name} has no reverse operation')
        self.log_debug('applying reverse operation')
        return bytes(self.reverse(data))

    def read(self) -> bytes:
        """
        Run the unit on its input, which is the output of the preceding unit in a pipeline or
        the data that was connected to it. A failure of an attached unit is logged and the
        result is empty.
        """
        source = self._source
        if isinstance(source, Unit):
            data = source.read()
        else:
            data = source or B''
        try:
            return self.act(data)
        except Exception as error:
            self._report(error)
            return B''

    def __call__(self, data: Optional[buf] = None) -> bytes:
        return self.act(B'' if data is None else data)

    def __ror__(self, data) -> Unit:
        if data is None:
            return self
        if isinstance(data, Unit):
            self._source = data
        elif isinstance(self._source, Unit):
            # new input for a pipeline goes to its first unit
            self._source.__ror__(data)
        elif isinstance(data, str):
            self._source = data.encode(self.codec)
        elif isbuffer(data):
            self._source = bytes(data)
        elif callable(getattr(data, 'read', None)):
            self._source = data.read()
        else:
            raise TypeError(F'cannot use an object of type {type(data).__name__} as input to {self.name}')
        return self

    def __or__(self, sink):
        if isinstance(sink, Executable):
            sink = sink()
        if isinstance(sink, Unit):
            return sink.__ror__(self)
        output = self.read()
        if sink is bytes or sink is Ellipsis:
            return output
        if sink is str:
            return output.decode(self.codec)
        if sink is bytearray:
            return bytearray(output)
        if isinstance(sink, bytearray):
            sink.extend(output)
            return sink
        if callable(getattr(sink, 'write', None)):
            sink.write(output)
            return None
        if callable(sink):
            return sink(output)
        raise TypeError(F'cannot send the output of {self.name} to an object of type {type(sink).__name__}')

    def __neg__(self) -> Unit:
        clone = copy.copy(self)
        clone.args.reverse = not self.args.reverse
        return clone

    def __copy__(self) -> Unit:
        clone = self.__class__.__new__(self.__class__)
        clone.__dict__.update(self.__dict__)
        clone.args = Namespace(**vars(self.args))
        clone._source = None
        return clone

    def __bytes__(self):
        return self.read()

    def __str__(self):
        return self.read().decode(self.codec)

    @classmethod
    def argparser(cls, **keywords) -> UnitArgumentParser:
        """
        The argument parser of the unit. Given keywords become the defaults of the parser.
        """
        parser = UnitArgumentParser(cls.name, documentation(cls), **keywords)
        generic = parser.add_argument_group('generic options')
        generic.add_argument('-h', '--help', action='help', help='Show this help message and exit.')
        generic.add_argument('-Q', '--quiet', action='store_true', help='Disables all log output.')
        generic.add_argument('-v', '--verbose', action='count', default=0,
            help='Specify up to two times to increase log level.')
        if cls.is_reversible:
            generic.add_argument('-R', '--reverse', action='store_true', help='Use the reverse operation.')
        else:
            parser.set_defaults(reverse=False)
        exclusive = {}
        for argument in cls._arguments.values():
            target = parser
            if argument.group is not None:
                if argument.group not in exclusive:
                    exclusive[argument.group] = parser.add_mutually_exclusive_group()
                target = exclusive[argument.group]
            try:
                target.add_argument(*argument.flags, **argument.options)
            except Exception as error:
                raise BoxKnifeCriticalException(F'invalid argument {argument!r} for {cls.name}: {error!s}') from error
        parser.add_argument('value', nargs=OPTIONAL, default=None,
            help='input value, reads from stdin if not present')
        return parser

    @classmethod
    def assemble(cls, *argv: str, **keywords) -> Unit:
        """
        Create a unit from arguments given as on the command line and from keywords, which
        override the defaults of the command line parameters. The log level of the unit is set
        from the generic switches.
        """
        args = cls.argparser(**keywords).parse_unit_arguments(argv)
        unit = cls(**{name: getattr(args, name) for name in cls._arguments})
        for generic in ('quiet', 'reverse', 'verbose', 'value'):
            setattr(unit.args, generic, getattr(args, generic))
        unit.log_level = LogLevel.NONE if args.quiet else args.verbose
        return unit

    @classmethod
    def run(cls, argv=None, stream=None) -> None:
        """
        Run the unit as a command. The input is the positional `value` argument when it is given
        and the contents of `stream` (standard input by default) otherwise. The output is written
        to standard output as it is. On failure, nothing is written to standard output, the error
        is logged and the process exits with status 1.
        """
        argv = sys.argv[1:] if argv is None else argv
        try:
            unit = cls.assemble(*argv)
        except ArgparseError as error:
            error.parser.exit_with_usage(str(error))
            return
        except Exception as error:
            cls.logger.critical(F'initialization failed: {error!s}')
            sys.exit(1)

        if environment.verbosity.value is not None and not unit.args.quiet:
            unit.log_level = environment.verbosity.value

        if unit.args.value is not None:
            data = os.fsencode(unit.args.value)
        else:
            with (stream or sys.stdin.buffer) as source:
                data = source.read()

        try:
            result = unit.act(data)
        except KeyboardInterrupt:
            unit.log_warn('aborting due to keyboard interrupt')
            sys.exit(1)
        except Exception as error:
            unit._report(error)
            sys.exit(1)

        sys.stdout.buffer.write(result)
        sys.stdout.buffer.flush()
