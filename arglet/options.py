"""
Option registry entries.

An Option describes one named command-line option and accumulates the values
parsed for it:

- names: bare aliases in registration order ("f", "flag"); the first one is the
  canonical display name.
- nargs: number of values consumed per occurrence; 0 makes the option a flag.
- choices: optional per-position sets of accepted values.
- defaults: values reported when the option was not given; flags always
  default to "false".
- required / hidden / appending: whole-parse requirement, help visibility and
  whether repeated occurrences accumulate.
- values: raw strings gathered by parse(); empty until the option is seen.

Options are created by ArgumentParser.add_option/add_flag, which also checks
that aliases are unique across the registry. The per-entry invariants
(choices, meta-vars and defaults sized to the arity, defaults within their
choice sets) are enforced here.
"""
from collections.abc import Iterable, Set

from . import converters, names as grammar
from .faults import (
    FaultCode,
    EmptyNamesError,
    ArityMismatchError,
    InvalidDefaultError,
    AppendingMismatchError,
    ValueCountError,
    DuplicatedSwitchError,
    InvalidChoiceError,
    UnparsedOptionError,
    UncastableValueError,
)
from .utils import IntrospectableType, counted, ordinal, Unset


def _position(index, /):
    return "" if index is Unset else " at %s position" % ordinal(index)


def _sanitize_names(metadata, /):
    """
    Validate every alias strictly and collapse repeats, keeping the first
    occurrence of each.

    Raises
    - EmptyNamesError: when no alias is given.
    - MalformedNameError: when an alias is neither "-x" nor "--name".
    """
    if not metadata["names"]:
        raise EmptyNamesError(
            "an option needs at least one name",
            title="missing option names",
            code=FaultCode.EMPTY_NAMES,
            hint="register it as e.g. add_option('-o', '--output')",
        )
    sanitized = []
    for name in map(grammar.strict, metadata["names"]):
        if name not in sanitized:
            sanitized.append(name)
    metadata["names"] = tuple(sanitized)


def _sanitize_arity(metadata, /):
    if not isinstance(nargs := metadata["nargs"], int) or isinstance(nargs, bool):
        raise TypeError("option 'nargs' must be an integer")
    if nargs < 0:
        raise ArityMismatchError(
            "option %r cannot take a negative number of arguments" % grammar.dashed(metadata["names"][0]),
            title="invalid arity",
            code=FaultCode.ARITY_MISMATCH,
            hint="use 0 for a flag or a positive count of values",
        )
    if not isinstance(metadata["help"], str):
        raise TypeError("option 'help' must be a string")


def _sized(metadata, field, values, /):
    """Reject a non-empty per-position collection whose length is not the arity."""
    if values and len(values) != metadata["nargs"]:
        name = grammar.dashed(metadata["names"][0])
        raise ArityMismatchError(
            "option %r takes %s, but %d %s were given" % (
                name, counted(metadata["nargs"], "argument"), len(values), field
            ),
            title="%s do not match arity" % field,
            code=FaultCode.ARITY_MISMATCH,
            hint="give exactly one entry per argument, or none at all",
            option=name,
        )


def _sanitize_choices(metadata, /):
    """
    Normalize choices into a tuple of per-position tuples.

    Sets are sorted so help output does not depend on hashing; other
    iterables keep their order with repeats collapsed.
    """
    choices = []
    for position in metadata["choices"]:
        if isinstance(position, str) or not isinstance(position, Iterable):
            raise TypeError("option 'choices' must be a collection of string collections")
        if isinstance(position, Set):
            position = sorted(position)
        accepted = []
        for choice in position:
            if not isinstance(choice, str):
                raise TypeError("option choices must be strings")
            if choice not in accepted:
                accepted.append(choice)
        choices.append(tuple(accepted))
    _sized(metadata, "choices", choices)
    metadata["choices"] = tuple(choices)


def _sanitize_metavars(metadata, /):
    metavars = tuple(metadata["metavars"])
    if not all(isinstance(metavar, str) for metavar in metavars):
        raise TypeError("option meta-vars must be strings")
    _sized(metadata, "meta-vars", metavars)
    metadata["metavars"] = metavars


def _sanitize_defaults(metadata, /):
    """
    Check defaults against the arity and the choice sets; flags always get ("false",).
    """
    defaults = tuple(metadata["defaults"])
    if not all(isinstance(default, str) for default in defaults):
        raise TypeError("option defaults must be strings")
    _sized(metadata, "defaults", defaults)
    if metadata["nargs"] == 0:
        metadata["defaults"] = ("false",)
        return
    if metadata["choices"]:
        for index, (default, choices) in enumerate(zip(defaults, metadata["choices"]), 1):
            if default not in choices:
                name = grammar.dashed(metadata["names"][0])
                raise InvalidDefaultError(
                    "default %r does not match possible choices for %r (%s argument)" % (
                        default, name, ordinal(index)
                    ),
                    title="invalid default",
                    code=FaultCode.INVALID_DEFAULT,
                    hint="pick one of: %s" % ", ".join(choices),
                    option=name,
                    input=default,
                )
    metadata["defaults"] = defaults


class Option(metaclass=IntrospectableType):
    """
    One named option of an ArgumentParser.

    Parameters
    - names: "-x" / "--name" aliases (at least one); repeats are ignored.
    - nargs: values per occurrence (0 for a flag).
    - help: description shown in help output.
    - metavars: value placeholders for help, none or one per argument.
    - defaults: fallback values, none or one per argument, each within its
      choice set when choices are given.
    - choices: accepted values, none or one collection per argument.

    Raises
    - UsageError subclasses for invalid names or collections that do not
      match the arity.

    Properties
    - Every name in __introspectable__ is a read-only attribute; containers are
      returned as copies.
    """

    __introspectable__ = (
        "names",
        "nargs",
        "help",
        "metavars",
        "defaults",
        "choices",
        "values",
        "required",
        "hidden",
        "appending",
    )
    __displayable__ = (
        "names",
        "nargs",
        "defaults",
        "choices",
        "required",
        "hidden",
        "appending",
    )

    def __init__(self, *names, nargs=1, help="", metavars=(), defaults=(), choices=()):
        metadata = {
            "names": names,
            "nargs": nargs,
            "help": help,
            "metavars": metavars,
            "defaults": defaults,
            "choices": choices,
        }
        _sanitize_names(metadata)
        _sanitize_arity(metadata)
        _sanitize_choices(metadata)
        _sanitize_metavars(metadata)
        _sanitize_defaults(metadata)

        for name, object in metadata.items():
            setattr(self, "_" + name, object)

        self._values = []
        self._required = False
        self._hidden = False
        self._appending = False

    @property
    def name(self):
        """Canonical alias in command-line spelling ("-f", "--flag")."""
        return grammar.dashed(self._names[0])

    @property
    def parsed(self):
        return bool(self._values)

    @property
    def flag(self):
        return self._nargs == 0

    def has_name(self, name, /):
        """Whether the bare name is one of this option's aliases."""
        return name in self._names

    def set_required(self, required=True, /):
        self._required = bool(required)

    def set_hidden(self, hidden=True, /):
        self._hidden = bool(hidden)

    def check_appending(self, appending, /):
        """
        Raise AppendingMismatchError when turning appending off would leave
        more (or fewer) stored values than one occurrence provides.
        """
        if not appending and self._values and len(self._values) != max(self._nargs, 1):
            raise AppendingMismatchError(
                "option %r already holds %s and cannot stop appending" % (
                    self.name, counted(len(self._values), "value")
                ),
                title="appending mismatch",
                code=FaultCode.APPENDING_MISMATCH,
                hint="call reset() before changing the appending options",
                option=self.name,
            )

    def set_appending(self, appending=True, /):
        self.check_appending(appending)
        self._appending = bool(appending)

    def parse(self, values, /, *, index=Unset):
        """
        Accept the values of one occurrence.

        Parameters
        - values: list of raw strings, exactly nargs long (empty for flags).
        - index: 1-based command-line position, only used in messages.

        Raises
        - ValueCountError: wrong number of values.
        - DuplicatedSwitchError: second occurrence of a non-appending option.
        - InvalidChoiceError: a value outside its position's choice set.
        """
        if len(values) != self._nargs:
            raise ValueCountError(
                "option %r expects %s, but %d were given%s" % (
                    self.name, counted(self._nargs, "argument"), len(values), _position(index)
                ),
                title="wrong number of values",
                code=FaultCode.VALUE_COUNT,
                hint=(
                    "%s takes no value" % self.name if self.flag else
                    "pass %s after %s" % (counted(self._nargs, "value"), self.name)
                ),
                option=self.name,
                index=index,
            )
        if self._values and not self._appending:
            raise DuplicatedSwitchError(
                "option %r was already given%s" % (self.name, _position(index)),
                title="duplicated option",
                code=FaultCode.DUPLICATED_SWITCH,
                hint="pass %s only once" % self.name,
                option=self.name,
                index=index,
            )
        if self.flag:
            self._values.append("true")
            return
        for value, choices in zip(values, self._choices):
            if value not in choices:
                raise InvalidChoiceError(
                    "%r does not match possible choices for %r%s" % (value, self.name, _position(index)),
                    title="invalid choice",
                    code=FaultCode.INVALID_CHOICE,
                    hint="choose one of: %s" % ", ".join(choices),
                    option=self.name,
                    input=value,
                    index=index,
                )
        self._values.extend(values)

    def reset(self):
        self._values.clear()

    def convert(self, type=str, /):
        """
        Return the stored values (or, when unparsed, the defaults) converted to type.

        Raises
        - UnsupportedTypeError: type is not one of bool, int, float, str.
        - UnparsedOptionError: nothing stored and no defaults.
        - UncastableValueError: a value cannot be converted.
        """
        converter = converters.resolve(type)
        if not (source := self._values or self._defaults):
            raise UnparsedOptionError(
                "option %r was not given and has no default" % self.name,
                title="unparsed option",
                code=FaultCode.UNPARSED_OPTION,
                hint="check is_parsed(%r) before reading it" % self.name,
                option=self.name,
            )
        try:
            return [converter(value) for value in source]
        except ValueError as error:
            raise UncastableValueError(
                "failed to convert a value of %r to %s: %s" % (self.name, type.__name__, error),
                title="uncastable value",
                code=FaultCode.UNCASTABLE_VALUE,
                hint="pass a valid %s to %s" % (type.__name__, self.name),
                option=self.name,
            ) from error


__all__ = (
    "Option",
)
