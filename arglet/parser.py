"""
Argument parser: option registry, positional policy, tokenizer and accessors.

Overview
- Registration: add_flag()/add_option() create Option entries with unique
  aliases; set_required()/set_hidden()/set_appending() replace the whole set of
  options carrying each attribute; add_xor() declares mutually exclusive
  options; set_required_positionals()/set_allowed_positionals() bound the
  number of positional arguments (none are accepted until allowed).
- Parsing: parse(argv) walks the argument vector once, left to right:
  • the first "--" turns every later token into a positional;
  • tokens not starting with "-" are positionals, and no option may follow one;
  • "-abc" sets the flags a, b and c;
  • "-x", "-xVALUE", "-x=VALUE", "--name", "--name=VALUE" select an option, and
    missing values are taken from the following tokens;
  • anything else ("-", "---", "-1", "") is rejected.
  After the walk, required options, the positional minimum and XOR groups are
  checked, in that order.
- Access: get()/get_many() convert stored values (or defaults) to bool, int,
  float or str; is_parsed()/has_option()/positionals answer the rest.
- Help: format_help() returns plain text, print_help() renders it with rich.

Errors
- UsageError subclasses: the program misused the API (bad names, duplicate
  aliases, inconsistent arities, bad positional bounds, ...).
- ParsingError subclasses: the command line (or a typed read of it) is invalid.
"""
import difflib
import os
import sys
from collections import deque

from rich.console import Console

from . import help as helpers, names as grammar
from .faults import (
    FaultCode,
    DuplicatedNameError,
    UnknownNameError,
    ArityMismatchError,
    XorGroupError,
    PositionalBoundsError,
    MultipleValuesError,
    EmptyArgumentsError,
    UnrecognizedArgumentError,
    UnknownSwitchError,
    MalformedGroupError,
    InterleavedOptionError,
    TooManyPositionalsError,
    MissingPositionalsError,
    MissingRequiredError,
    ConflictingOptionsError,
)
from .options import Option
from .utils import UNLIMITED_POSITIONALS, IntrospectableType, Unset, coalesce, counted, ordinal


def _program_name(path, /):
    """
    Take the part after the last path separator, unless the separator is the
    final character ("/usr/bin/" is kept as is).
    """
    _, separator, tail = path.rpartition(os.sep)
    return tail if separator and tail else path


class ArgumentParser(metaclass=IntrospectableType):
    """
    Declarative POSIX-like command-line parser.

    Parameters
    - prog: program name for help and messages; when omitted it is taken from
      argv[0] on the first parse().
    - version: version string shown in the help header.
    - preamble / epilog: free text before the options list and after it.
    - colorful: style help and faults with the rich palette.
    - fancy: wrap rendered help in a panel.

    Notes
    - A parser is owned by one caller: configure it, parse, query, and
      optionally reset() and parse again.
    - Parsers are not copyable; build a new one instead.
    """

    __introspectable__ = (
        "options",
        "positionals",
        "xors",
        "minimum_positionals",
        "maximum_positionals",
        "positional_help",
        "positional_metavar",
        "program_name",
        "program_version",
        "help_preamble",
        "help_epilog",
        "colorful",
        "fancy",
    )
    __displayable__ = (
        "program_name",
        "program_version",
        "options",
        "minimum_positionals",
        "maximum_positionals",
        "xors",
    )

    def __init__(self, prog=Unset, version="", *, preamble="", epilog="", colorful=False, fancy=False):
        self._options = []
        self._positionals = []
        self._xors = []
        self._minimum_positionals = 0
        self._maximum_positionals = 0
        self._positional_help = ""
        self._positional_metavar = ""
        self._program_name = ""
        self._program_version = ""
        self._help_preamble = ""
        self._help_epilog = ""
        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        if prog is not Unset:
            self.set_program_info(prog, version)
        self.set_help_info(preamble, epilog)

    def __copy__(self):
        raise TypeError(f"{type(self).__name__!r} objects cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__!r} objects cannot be copied")

    # --- program and help information ---

    def set_program_info(self, name, version=""):
        if not isinstance(name, str) or not isinstance(version, str):
            raise TypeError("set_program_info() arguments must be strings")
        self._program_name = name
        self._program_version = version

    def set_help_info(self, preamble, epilog):
        if not isinstance(preamble, str) or not isinstance(epilog, str):
            raise TypeError("set_help_info() arguments must be strings")
        self._help_preamble = preamble
        self._help_epilog = epilog

    # --- registration ---

    def add_flag(self, *names, help=""):
        """
        Register a flag (an option taking no value); equivalent to
        add_option(*names, nargs=0, help=help).
        """
        return self.add_option(*names, nargs=0, help=help)

    def add_option(self, *names, nargs=1, help="", metavar=Unset, default=Unset, metavars=(), defaults=(), choices=()):
        """
        Register an option and return its Option entry.

        Parameters
        - names: "-x" and/or "--name" aliases, none of them registered yet.
        - nargs: values per occurrence (0 for a flag, 1 by default).
        - help: description for the help output.
        - metavar / default: single-argument shorthands for metavars / defaults.
        - metavars / defaults / choices: per-argument collections, each either
          empty or exactly nargs long.

        Raises
        - EmptyNamesError, MalformedNameError, DuplicatedNameError
        - ArityMismatchError, InvalidDefaultError
        """
        if metavar is not Unset or default is not Unset:
            if nargs != 1 or metavars or defaults:
                raise ArityMismatchError(
                    "'metavar' and 'default' only apply to single-argument options",
                    title="arity mismatch",
                    code=FaultCode.ARITY_MISMATCH,
                    hint="use 'metavars' and 'defaults' with one entry per argument",
                )
            metavars = () if metavar is Unset else (metavar,)
            defaults = () if default is Unset else (default,)

        option = Option(*names, nargs=nargs, help=help, metavars=metavars, defaults=defaults, choices=choices)
        for name in option.names:
            if (existing := self._find(name)) is not None:
                raise DuplicatedNameError(
                    "option name %r is already used by %r" % (grammar.dashed(name), existing.name),
                    title="duplicated option name",
                    code=FaultCode.DUPLICATED_NAME,
                    hint="every alias must be unique across the parser",
                    input=grammar.dashed(name),
                )
        self._options.append(option)
        return option

    def has_option(self, name, /):
        return self._find(grammar.lenient(name)) is not None

    def set_required(self, *names):
        """
        Make exactly the named options required (all others become optional).
        """
        selected = self._resolve(names)
        for option in self._options:
            option.set_required(option in selected)

    def set_hidden(self, *names):
        """
        Hide exactly the named options from the help output.
        """
        selected = self._resolve(names)
        for option in self._options:
            option.set_hidden(option in selected)

    def set_appending(self, *names):
        """
        Make exactly the named options appending.

        Raises
        - AppendingMismatchError: an option losing the attribute already holds
          more than one occurrence's worth of values. Nothing is changed then.
        """
        selected = self._resolve(names)
        for option in self._options:
            option.check_appending(option in selected)
        for option in self._options:
            option.set_appending(option in selected)

    def add_xor(self, *names):
        """
        Declare that at most one of the named options may be given.

        Raises
        - XorGroupError: the names select fewer than two distinct options.
        - UnknownNameError / MalformedNameError: a name is not registered or invalid.
        """
        group = {}
        for name, option in zip(names, self._resolve(names)):
            group.setdefault(option, name)
        if len(group) < 2:
            raise XorGroupError(
                "an exclusive group needs at least two distinct options, but %d were given" % len(group),
                title="invalid exclusive group",
                code=FaultCode.XOR_GROUP,
                hint="pass two or more names of different options",
            )
        self._xors.append(tuple(group.values()))

    # --- positional policy ---

    def set_required_positionals(self, minimum, /):
        if minimum > self._maximum_positionals:
            raise PositionalBoundsError(
                "minimum of %d positionals exceeds the allowed maximum of %d" % (minimum, self._maximum_positionals),
                title="invalid positional bounds",
                code=FaultCode.POSITIONAL_BOUNDS,
                hint="call set_allowed_positionals() with a larger maximum first",
            )
        self._minimum_positionals = minimum

    def set_allowed_positionals(self, maximum, /):
        if maximum < self._minimum_positionals:
            raise PositionalBoundsError(
                "maximum of %d positionals is below the required minimum of %d" % (maximum, self._minimum_positionals),
                title="invalid positional bounds",
                code=FaultCode.POSITIONAL_BOUNDS,
                hint="lower the required minimum first",
            )
        self._maximum_positionals = maximum

    def set_positional_help(self, help, metavar="POSITIONALS"):
        """
        Describe the positional arguments; a non-empty metavar replaces the
        generated usage hint and adds a help line.
        """
        if not isinstance(help, str) or not isinstance(metavar, str):
            raise TypeError("set_positional_help() arguments must be strings")
        self._positional_help = help
        self._positional_metavar = metavar

    def has_positionals(self):
        return bool(self._positionals)

    # --- parsing ---

    def parse(self, argv=Unset, /):
        """
        Parse a full argument vector (argv[0] is the program path).

        Parameters
        - argv: iterable of strings; defaults to sys.argv.

        Raises
        - EmptyArgumentsError: argv is empty.
        - ParsingError subclasses for every invalid command line.
        """
        argv = list(coalesce(argv, sys.argv))
        if not argv:
            raise EmptyArgumentsError(
                "nothing to parse, the argument vector is empty",
                title="empty argument vector",
                code=FaultCode.EMPTY_ARGUMENTS,
                hint="pass the program path as the first element",
            )
        if not self._program_name:
            self._program_name = _program_name(argv[0])

        tokens = deque(enumerate(argv[1:], 1))
        separated = False

        while tokens:
            index, token = tokens.popleft()

            if not separated and token == "--":
                separated = True
            elif separated or (token and token[0] != "-"):
                self._parse_positional(token, index)
            elif grammar.is_short(token) or grammar.is_long(token):
                if self._positionals:
                    raise InterleavedOptionError(
                        "option %r at %s position follows positional arguments" % (token, ordinal(index)),
                        title="option after positionals",
                        code=FaultCode.INTERLEAVED_OPTION,
                        hint="place options before positional arguments",
                        input=token,
                        index=index,
                    )
                if grammar.is_short_group(token):
                    self._parse_group(token, index)
                else:
                    self._parse_switch(token, index, tokens)
            else:
                raise UnrecognizedArgumentError(
                    "unrecognized argument %r at %s position" % (token, ordinal(index)),
                    title="unrecognized argument",
                    code=FaultCode.UNRECOGNIZED_ARGUMENT,
                    hint="options are spelled '-x' or '--name'; put '--' before positionals starting with '-'",
                    input=token,
                    index=index,
                )

        self._check_required()
        self._check_xors()

    def _parse_positional(self, token, index, /):
        if len(self._positionals) >= self._maximum_positionals:
            if not self._maximum_positionals:
                message = "unexpected positional argument %r at %s position" % (token, ordinal(index))
                hint = "this program takes no positional arguments"
            else:
                message = "too many positional arguments, %r at %s position exceeds the maximum of %d" % (
                    token, ordinal(index), self._maximum_positionals
                )
                hint = "pass at most %s" % counted(self._maximum_positionals, "positional argument")
            raise TooManyPositionalsError(
                message,
                title="too many positionals",
                code=FaultCode.TOO_MANY_POSITIONALS,
                hint=hint,
                input=token,
                index=index,
            )
        self._positionals.append(token)

    def _parse_group(self, token, index, /):
        for char in token[1:]:
            if not grammar.isletter(char):
                raise MalformedGroupError(
                    "bad form of flag group %r at %s position" % (token, ordinal(index)),
                    title="malformed flag group",
                    code=FaultCode.MALFORMED_GROUP,
                    hint="only letters may follow '-' in a group of flags, e.g. -abc",
                    input=token,
                    index=index,
                )
            self._switch(char, index).parse([], index=index)

    def _parse_switch(self, token, index, tokens, /):
        name, remainder = grammar.split(token)
        values = []
        if remainder:
            values.append(remainder.removeprefix("="))
        option = self._switch(name, index)
        if 0 < (missing := option.nargs - len(values)) <= len(tokens):
            values.extend(tokens.popleft()[1] for _ in range(missing))
        option.parse(values, index=index)

    def _switch(self, name, index, /):
        """Find the option selected by a command-line token or raise UnknownSwitchError."""
        if (option := self._find(name)) is not None:
            return option
        spelled = grammar.dashed(name)
        suggestions = difflib.get_close_matches(
            spelled, [grammar.dashed(alias) for option in self._options for alias in option.names], 5
        )
        try:
            hint = "did you mean %r?" % suggestions[0]
        except IndexError:
            hint = "run with --help to see all available options"
        raise UnknownSwitchError(
            "unknown option %r at %s position" % (spelled, ordinal(index)),
            title="unknown option",
            code=FaultCode.UNKNOWN_SWITCH,
            hint=hint,
            input=spelled,
            suggestions=suggestions,
            index=index,
        )

    def _check_required(self):
        if missing := [option.name for option in self._options if option.required and not option.parsed]:
            raise MissingRequiredError(
                "the following options are required, but were not set: %s" % ", ".join(missing),
                title="missing required options",
                code=FaultCode.MISSING_REQUIRED,
                hint="pass %s" % " and ".join(missing),
                missing=tuple(missing),
            )
        if len(self._positionals) < self._minimum_positionals:
            raise MissingPositionalsError(
                "expected at least %s, but %d were given" % (
                    counted(self._minimum_positionals, "positional argument"), len(self._positionals)
                ),
                title="missing positionals",
                code=FaultCode.MISSING_POSITIONALS,
                hint="add the missing positional arguments after the options",
            )

    def _check_xors(self):
        for group in self._xors:
            given = [name for name in group if self.is_parsed(name)]
            if len(given) > 1:
                first, second = (grammar.dashed(grammar.lenient(name)) for name in given[:2])
                raise ConflictingOptionsError(
                    "options %r and %r must not be used together" % (first, second),
                    title="conflicting options",
                    code=FaultCode.CONFLICTING_OPTIONS,
                    hint="pass only one of: %s" % ", ".join(grammar.dashed(grammar.lenient(name)) for name in group),
                    options=(first, second),
                )

    def reset(self):
        """Forget parsed values and positionals; configuration is kept."""
        for option in self._options:
            option.reset()
        self._positionals.clear()

    # --- access ---

    def is_parsed(self, name, /):
        option = self._find(grammar.lenient(name))
        return option is not None and option.parsed

    def get(self, name, /, type=str):
        """
        Return the single value of a flag or one-argument option as type.

        Raises
        - MultipleValuesError: the option takes more than one argument.
        - UnknownSwitchError: no such option.
        - UnparsedOptionError, UncastableValueError, UnsupportedTypeError
        """
        option = self._lookup(name)
        if option.nargs > 1:
            raise MultipleValuesError(
                "option %r takes %s and cannot be read as a single value" % (
                    option.name, counted(option.nargs, "argument")
                ),
                title="multiple values",
                code=FaultCode.MULTIPLE_VALUES,
                hint="use get_many(%r) instead" % option.name,
                option=option.name,
            )
        return option.convert(type)[0]

    def get_many(self, name, /, type=str):
        """
        Return every stored value (or every default) of an option as type.
        """
        return self._lookup(name).convert(type)

    # --- help ---

    def format_help(self):
        return helpers.format_help(self)

    def render_help(self):
        return helpers.render_help(self)

    def print_help(self, console=Unset):
        renderable = self.render_help()
        if self._fancy:
            renderable = helpers.panel(self, renderable)
        coalesce(console, Console()).print(renderable, soft_wrap=True)

    # --- lookups ---

    def _find(self, name, /):
        for option in self._options:
            if option.has_name(name):
                return option
        return None

    def _resolve(self, names, /):
        """Map lookup names to options (identity list) or raise UnknownNameError."""
        selected = []
        for name in names:
            if (option := self._find(grammar.lenient(name))) is None:
                raise UnknownNameError(
                    "no option named %r is registered" % name,
                    title="unknown option name",
                    code=FaultCode.UNKNOWN_NAME,
                    hint="register it with add_option() or add_flag() first",
                    input=name,
                )
            selected.append(option)
        return selected

    def _lookup(self, name, /):
        if (option := self._find(grammar.lenient(name))) is None:
            raise UnknownSwitchError(
                "unknown option %r" % name,
                title="unknown option",
                code=FaultCode.UNKNOWN_SWITCH,
                hint="only registered options can be read",
                input=name,
            )
        return option


__all__ = (
    "ArgumentParser",
    "UNLIMITED_POSITIONALS",
)
