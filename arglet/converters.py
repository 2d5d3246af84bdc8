"""
Typed conversion of raw option values.

The set of supported target types is closed: bool, int, float and str. Each
converter takes the raw string and either returns the converted value or
raises ValueError; the option layer turns that into an UncastableValueError.
Requesting any other type is a usage error raised by resolve().

Numbers are parsed over the whole string without locale involvement:
"8" is a valid float, "1.9" is not a valid int, and trailing garbage such as
"12abc" is rejected.
"""
import re

from .faults import FaultCode, UnsupportedTypeError

_INTEGER = re.compile(r"\s*[+-]?[0-9]+")
_FLOAT = re.compile(r"\s*[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

_TRUTHY = frozenset(("on", "true", "1", "yes"))
_FALSY = frozenset(("off", "false", "0", "no"))


def to_bool(value, /):
    """
    "on"/"true"/"1"/"yes" -> True, "off"/"false"/"0"/"no" -> False (case-insensitive).
    """
    lowered = value.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise ValueError("%r is not a boolean" % value)


def to_int(value, /):
    if not _INTEGER.fullmatch(value):
        raise ValueError("%r is not an integer" % value)
    return int(value)


def to_float(value, /):
    if not _FLOAT.fullmatch(value):
        raise ValueError("%r is not a number" % value)
    return float(value)


def to_str(value, /):
    return value


CONVERTERS = {
    bool: to_bool,
    int: to_int,
    float: to_float,
    str: to_str,
}


def resolve(type, /):
    """
    Return the converter for one of the supported types.

    Raises
    - UnsupportedTypeError: for any type outside bool, int, float and str.
    """
    try:
        return CONVERTERS[type]
    except (KeyError, TypeError):
        raise UnsupportedTypeError(
            "unsupported value type %r" % getattr(type, "__name__", type),
            title="unsupported value type",
            code=FaultCode.UNSUPPORTED_TYPE,
            hint="request one of: bool, int, float, str",
            type=type,
        ) from None


__all__ = (
    "CONVERTERS",
    "resolve",
    "to_bool",
    "to_int",
    "to_float",
    "to_str",
)
