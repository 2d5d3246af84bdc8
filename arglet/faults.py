"""
Arglet faults (usage and parsing errors) and rendering.

Scope
- FaultCode: stable numeric identifiers for every condition the parser reports.
  Codes are grouped by domain: 21xxx for usage errors (the program configured
  or queried the parser incorrectly) and 22xxx for parsing errors (the user's
  command line or a value conversion is invalid).
- ParserException: base type carrying a message plus read-only options
  (title, code, hint and context such as input/option/index), able to render
  itself through rich.
- UsageError / ParsingError: the two kinds callers are expected to catch,
  with one concrete subclass per condition.
- trigger(): surface a fault either by raising it or, in shell mode, by
  printing it on the stderr console and exiting.
- getdoc(): optional documentation lookup for a code from the host application.

Integration
- The parser core always raises; wrapper programs (see arglet.demo) catch
  ParsingError and call trigger(fault, shell=True, ...) to report it.
- Styling can be overridden with a __styles__ mapping in __main__, codes can
  be relabelled with __codes__, and __prog__ overrides the program name shown
  in headers.
"""
import re
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used by the parser (stable identifiers).

    grouping
    - registration (2110x/2111x/2112x)
      • EMPTY_NAMES, MALFORMED_NAME, DUPLICATED_NAME, UNKNOWN_NAME,
        ARITY_MISMATCH, INVALID_DEFAULT, APPENDING_MISMATCH, XOR_GROUP
    - positional policy (2113x)
      • POSITIONAL_BOUNDS
    - access (2114x/2115x)
      • MULTIPLE_VALUES, UNSUPPORTED_TYPE, EMPTY_ARGUMENTS
    - tokens (2210x)
      • UNRECOGNIZED_ARGUMENT, UNKNOWN_SWITCH, MALFORMED_GROUP, INTERLEAVED_OPTION
    - positionals (2211x)
      • TOO_MANY_POSITIONALS, MISSING_POSITIONALS
    - values (2212x)
      • VALUE_COUNT, INVALID_CHOICE, DUPLICATED_SWITCH
    - whole-parse constraints (2213x)
      • MISSING_REQUIRED, CONFLICTING_OPTIONS
    - typed access (2214x)
      • UNCASTABLE_VALUE, UNPARSED_OPTION

    normalize() lets the host remap codes to custom labels.
    """
    # --- usage errors: registration (21xxx) ---
    EMPTY_NAMES           = 21101
    MALFORMED_NAME        = 21102
    DUPLICATED_NAME       = 21103
    UNKNOWN_NAME          = 21104
    ARITY_MISMATCH        = 21111
    INVALID_DEFAULT       = 21112
    APPENDING_MISMATCH    = 21113
    XOR_GROUP             = 21121

    # --- usage errors: positional policy (21xxx) ---
    POSITIONAL_BOUNDS     = 21131

    # --- usage errors: access (21xxx) ---
    MULTIPLE_VALUES       = 21141
    UNSUPPORTED_TYPE      = 21142
    EMPTY_ARGUMENTS       = 21151

    # --- parsing errors: tokens (22xxx) ---
    UNRECOGNIZED_ARGUMENT = 22101
    UNKNOWN_SWITCH        = 22102
    MALFORMED_GROUP       = 22103
    INTERLEAVED_OPTION    = 22104

    # --- parsing errors: positionals (22xxx) ---
    TOO_MANY_POSITIONALS  = 22111
    MISSING_POSITIONALS   = 22112

    # --- parsing errors: values (22xxx) ---
    VALUE_COUNT           = 22121
    INVALID_CHOICE        = 22122
    DUPLICATED_SWITCH     = 22123

    # --- parsing errors: whole-parse constraints (22xxx) ---
    MISSING_REQUIRED      = 22131
    CONFLICTING_OPTIONS   = 22132

    # --- parsing errors: typed access (22xxx) ---
    UNCASTABLE_VALUE      = 22141
    UNPARSED_OPTION       = 22142

    def normalize(self):
        """
        return a host-normalized string for this code.

        a __codes__ mapping in __main__ overrides numeric ids with friendlier
        labels; otherwise the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ParserException(Exception):
    """
    Base class of every fault raised by arglet.

    Attributes
    - message: one-sentence, lowercased description of the problem.
    - options: read-only mapping with at least 'title', 'code' and 'hint';
      raise sites add context ('input', 'option', 'index', 'missing', ...),
      and trigger() adds runtime switches ('shell', 'colorful', 'fancy',
      'deferred', 'prog', 'console').
    """

    def __init__(self, message, /, **options):
        if not isinstance(message, str):
            raise TypeError(f"{type(self).__name__} message must be a string")
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    @property
    def code(self):
        return self.options.get("code")

    @property
    def hint(self):
        return self.options.get("hint")

    def __str__(self):
        return self.message

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # green arrow
            "hint": "italic #9CE19C",  # green hint text
            "docs": "underline #00E5FF dim",
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(self.options.get("prog") or getattr(main, "__prog__", "arglet"), styler("prog-name"))
        code = self.code.normalize() if isinstance(self.code, FaultCode) else "?"
        title = self.options.get("title") or re.sub(r"(?<!^)(?=[A-Z])", " ", type(self).__name__).lower()

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code, styler("code")),
            " | ",
            text(title.title(), styler("error-title")),
            " ]"
        )
        renders = [text(self.message, styler("error-message"))]
        if self.hint:
            renders.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))
        if isinstance(self.code, FaultCode) and (docs := getdoc(self.code)):
            renders.append(text(docs, styler("docs")))

        if self.options.get("fancy", False):
            return Panel(Group(*renders), title=header, title_align="left")

        return Group(header, *renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self
        (self.options.get("console") or console).print(self)
        if self.options.get("deferred", False):
            return
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        fault = type(self)(self.message, **{**self.options, **overrides})
        fault.__cause__ = self.__cause__
        return fault


class UsageError(ParserException):
    """The program registered, configured or queried the parser incorrectly."""


class ParsingError(ParserException):
    """The command line, or a stored value requested with a type, is invalid."""


class EmptyNamesError(UsageError): ...
class MalformedNameError(UsageError): ...
class DuplicatedNameError(UsageError): ...
class UnknownNameError(UsageError): ...
class ArityMismatchError(UsageError): ...
class InvalidDefaultError(UsageError): ...
class AppendingMismatchError(UsageError): ...
class XorGroupError(UsageError): ...
class PositionalBoundsError(UsageError): ...
class MultipleValuesError(UsageError): ...
class UnsupportedTypeError(UsageError): ...
class EmptyArgumentsError(UsageError): ...

class UnrecognizedArgumentError(ParsingError): ...
class UnknownSwitchError(ParsingError): ...
class MalformedGroupError(ParsingError): ...
class InterleavedOptionError(ParsingError): ...
class TooManyPositionalsError(ParsingError): ...
class MissingPositionalsError(ParsingError): ...
class ValueCountError(ParsingError): ...
class InvalidChoiceError(ParsingError): ...
class DuplicatedSwitchError(ParsingError): ...
class MissingRequiredError(ParsingError): ...
class ConflictingOptionsError(ParsingError): ...
class UncastableValueError(ParsingError): ...
class UnparsedOptionError(ParsingError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ (see ParserException).
    - options are merged into a copy of the fault before triggering.
    - without shell=True the merged fault is raised; with it, the fault is
      printed on the stderr console (or options['console']) and the process
      exits with status 1, unless deferred=True.

    typical options
    - shell, deferred, fancy, colorful, prog, console.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ keyed by
    FaultCode; missing entries yield None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "ParserException",
    "UsageError",
    "ParsingError",
    "EmptyNamesError",
    "MalformedNameError",
    "DuplicatedNameError",
    "UnknownNameError",
    "ArityMismatchError",
    "InvalidDefaultError",
    "AppendingMismatchError",
    "XorGroupError",
    "PositionalBoundsError",
    "MultipleValuesError",
    "UnsupportedTypeError",
    "EmptyArgumentsError",
    "UnrecognizedArgumentError",
    "UnknownSwitchError",
    "MalformedGroupError",
    "InterleavedOptionError",
    "TooManyPositionalsError",
    "MissingPositionalsError",
    "ValueCountError",
    "InvalidChoiceError",
    "DuplicatedSwitchError",
    "MissingRequiredError",
    "ConflictingOptionsError",
    "UncastableValueError",
    "UnparsedOptionError",
    "trigger",
    "getdoc",
)
