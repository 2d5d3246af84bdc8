"""
Option name grammar.

Registration names are checked strictly:
- short: "-" followed by one ASCII letter ("-v")
- long:  "--" followed by an ASCII letter and at least one more character out of
  ASCII letters, digits, "-" and "_" ("--verbose", "--dry-run", "--a1")

Lookups are lenient: a bare single character "v" means "-v" and a bare longer
name "verbose" means "--verbose". Both forms normalize to the bare name that
keys the registry ("v", "verbose").

Token predicates used by the tokenizer live here too, so the accepted command
line spellings and the accepted registration spellings stay in one place.
"""
import re

from .faults import FaultCode, MalformedNameError

_SHORT = re.compile(r"-(?P<name>[A-Za-z])")
_LONG = re.compile(r"--(?P<name>[A-Za-z][A-Za-z0-9_-]+)")
_SPLIT = re.compile(r"--(?P<name>[A-Za-z0-9_-]*)(?P<rest>.*)", re.DOTALL)

_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_WORD = _LETTERS | frozenset("0123456789-_")


def isletter(char, /):
    """ASCII-only letter test (str.isalpha would also accept non-latin letters)."""
    return char in _LETTERS


def strict(name, /):
    """
    Validate a registration name and return its bare form.

    Raises
    - MalformedNameError: for anything that is neither "-x" nor "--name".
    """
    if not isinstance(name, str):
        raise TypeError("option names must be strings")
    if match := _SHORT.fullmatch(name) or _LONG.fullmatch(name):
        return match["name"]
    raise MalformedNameError(
        "invalid option name %r" % name,
        title="malformed option name",
        code=FaultCode.MALFORMED_NAME,
        hint="use '-x' (one letter) or '--name' (a letter followed by letters, digits, '-' or '_')",
        input=name,
    )


def lenient(name, /):
    """
    Normalize a lookup name: bare names get their dashes added first.
    """
    if not isinstance(name, str):
        raise TypeError("option names must be strings")
    if len(name) == 1 and name != "-":
        return strict("-" + name)
    if len(name) > 1 and name[0] != "-":
        return strict("--" + name)
    return strict(name)


def dashed(name, /):
    """
    Return the command line spelling of a bare name ("v" -> "-v", "verbose" -> "--verbose").
    """
    return ("-" if len(name) == 1 else "--") + name


def is_short(token, /):
    return len(token) > 1 and token[0] == "-" and isletter(token[1])


def is_short_group(token, /):
    return len(token) > 2 and token[0] == "-" and isletter(token[1]) and isletter(token[2])


def is_long(token, /):
    return len(token) > 3 and token.startswith("--") and isletter(token[2]) and token[3] in _WORD


def split(token, /):
    """
    Split an option token into (name, remainder).

    - short tokens: the letter after "-" and everything after it ("-d/ad" -> ("d", "/ad"))
    - long tokens: the longest run of name characters after "--" and the rest
      ("--name=value" -> ("name", "=value"))
    """
    if is_short(token):
        return token[1], token[2:]
    match = _SPLIT.fullmatch(token)
    return match["name"], match["rest"]


__all__ = (
    "strict",
    "lenient",
    "dashed",
    "isletter",
    "is_short",
    "is_short_group",
    "is_long",
    "split",
)
