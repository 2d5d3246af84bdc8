"""
Arglet utilities (internal helpers shared by the option registry and parser)

Overview
- UnsetType / Unset
  • Singleton sentinel for "value not provided", distinct from None and "".
- coalesce(value, default=None)
  • Replace Unset with a concrete default, keep every other value (falsey included).
- rename(callable, name) / @rename("name")
  • Stable __name__/__qualname__ for generated accessors and dunders.
- mirror("attr")
  • Read-only property over self._attr; containers are handed out as copies so the
    registry cannot be mutated through the public surface.
- pluralize(text) / counted(count, noun)
  • Small English pluralizer for count-dependent messages ("1 argument", "2 arguments").
- ordinal(number)
  • Position labels for messages ("third position", "12th position").
- IntrospectableType
  • Metaclass publishing the names in __introspectable__ as mirror() properties and
    providing a stable __repr__/__rich_repr__.

Usage guidance
- Prefer Unset for API defaults when "" or None is a meaningful user value.
- Names not in __all__ are internal and may change without notice.
"""
import builtins
import functools
import operator
import re
import sys
from collections.abc import Sequence, Mapping, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and "".
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a singleton per process.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values such as None, 0 or "" are returned unchanged; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce("", "fallback")     -> ""
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    Forms
    - rename(callable, name) -> callable
    - rename(name) -> decorator

    Raises
    - TypeError: when the target is not an updatable callable, the name is not a
      string, or the arity is wrong.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _immortalize(object):
    """
    Copy container values recursively.

    - tuple: new tuple, items processed (tuples stay hashable for callers).
    - other non-string sequences: new list.
    - mappings: new dict with the same keys.
    - sets: new set.
    - anything else is returned as-is.
    """
    if isinstance(object, tuple):
        return tuple(map(_immortalize, object))
    elif isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_immortalize, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_immortalize, object.values())))
    elif isinstance(object, Set):
        return set(map(_immortalize, object))
    else:
        return object


def mirror(name, /):
    """
    Define a read-only property that mirrors the private attribute "_{name}".

    Containers are copied on every access (see _immortalize).
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _immortalize(getattr(self, "_" + name))

    return property(getter)


@functools.cache
def pluralize(text, /):
    """
    Best-effort English pluralizer for the last word of a phrase.

    Examples
    - pluralize("argument")        -> "arguments"
    - pluralize("positional")      -> "positionals"
    - pluralize("missing option")  -> "missing options"
    - pluralize("entry")           -> "entries"
    """
    if not isinstance(text, str):
        raise TypeError("pluralize() argument must be a string")

    if not text:
        return text

    match = re.search(r'(\S+)(\s*)$', text)
    if not match:
        return text

    head = text[:match.start(1)]
    last = match.group(1)
    trail = match.group(2)
    lower = last.lower()

    if lower.endswith(("s", "sh", "ch", "x", "z")):
        plural = lower + "es"
    elif lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        plural = lower[:-1] + "ies"
    else:
        plural = lower + "s"

    if last.isupper():
        plural = plural.upper()
    elif last[:1].isupper():
        plural = plural[:1].upper() + plural[1:]

    return head + plural + trail


@functools.cache
def ordinal(number, /):
    """
    Return a human-friendly ordinal label for a 1-based position.

    1..10 are spelled out ("first"…"tenth"); larger numbers use numeric
    ordinals ("11th", "22nd").
    """
    try:
        return {
            1: "first",
            2: "second",
            3: "third",
            4: "fourth",
            5: "fifth",
            6: "sixth",
            7: "seventh",
            8: "eighth",
            9: "ninth",
            10: "tenth",
        }[number]
    except KeyError:
        pass

    if 10 < number % 100 < 20:
        return f"{number}th"

    return f'{number}%s' % {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")


def counted(count, noun, /):
    """
    Render "<count> <noun>" with the noun pluralized unless count is one.
    """
    return "%d %s" % (count, noun if count == 1 else pluralize(noun))


class IntrospectableType(type):
    """
    Metaclass for registry objects with a read-only public surface.

    Responsibilities
    - Expose every name listed in __introspectable__ as a mirror() property
      backed by "_{name}".
    - Derive __typename__ from the class name (camel-case split with hyphens),
      used in messages.
    - Provide a compact __repr__ and a __rich_repr__ for rich.pretty; the shown
      names come from __displayable__ when set, otherwise __introspectable__.
    """
    __introspectable__ = ()
    __displayable__ = None

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        if "__repr__" not in namespace:
            self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__displayable__ or type(self).__introspectable__:
                yield name, getattr(self, name)
        if "__rich_repr__" not in namespace:
            self.__rich_repr__ = __rich_repr__

        return self


UNLIMITED_POSITIONALS = sys.maxsize
"""Maximum positional count meaning "no upper bound"."""


Unset = UnsetType()
"""
Sentinel for "not provided".

Use Unset as a default when "" or None is a valid user value but "no input"
still has to be told apart (e.g. an empty version string versus no version).
"""


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "pluralize",
    "ordinal",
    "counted",

    # Types
    "UnsetType",
    "IntrospectableType",

    # Constants
    "Unset",
    "UNLIMITED_POSITIONALS",
)
