"""
Demonstration program: a parser using every registration feature.

Run it as `python -m arglet [ARGS...]` (or the `arglet-demo` script). It prints
the help when --help is given and otherwise lists every option with the
values it received. A parsing error is reported on stderr, followed by the
help, and the exit status is 1.
"""
import sys

from rich.console import Console
from rich.text import Text

from . import faults
from .faults import ParsingError, trigger
from .parser import ArgumentParser
from .utils import Unset, coalesce

ARGUMENTS = (
    "help",
    "s",
    "f",
    "long",
    "hidden",
    "default",
    "appending",
    "required",
    "choice",
    "all",
)


def build(*, colorful=False, fancy=False):
    parser = ArgumentParser("app", "1.0", preamble="pretext", epilog="some epilog", colorful=colorful, fancy=fancy)
    parser.set_positional_help("some additional arguments")
    parser.add_flag("-h", "--help", help="show help")
    parser.add_flag("-s", help="short option as flag")
    parser.add_flag("-f", "--flag", "--other-name", help="arbitrary number of names")
    parser.add_option("--long", help="long option with argument")
    parser.add_option("--hidden", help="hidden option")
    parser.set_hidden("hidden")
    parser.add_option("--default", help="option with default", metavar="META", default="DEFAULT")
    parser.add_option("--appending", help="option that appends values, like -I file1 -I file2")
    parser.add_option("--required", help="required option")
    parser.add_option("-c", "--choice", help="choice desc", metavar="ARG", choices=[("a", "b")])
    parser.add_option(
        "--all",
        nargs=2,
        help="multiple arguments",
        metavars=("ARG1", "ARG2"),
        defaults=("a", "d"),
        choices=[("a", "b"), ("c", "d")],
    )
    parser.set_appending("appending", "all")
    parser.set_required("required", "all")
    parser.set_allowed_positionals(2)
    return parser


def main(argv=Unset, /, *, console=Unset, stderr=Unset, colorful=False):
    """
    Parse argv (sys.argv by default) and report; returns the exit status.
    """
    parser = build(colorful=colorful)
    console = coalesce(console, Console())

    try:
        parser.parse(coalesce(argv, sys.argv))
    except ParsingError as fault:
        trigger(
            fault,
            shell=True,
            deferred=True,
            prog=parser.program_name,
            colorful=colorful,
            console=coalesce(stderr, faults.console),
        )
        parser.print_help(console)
        return 1

    if parser.is_parsed("help"):
        parser.print_help(console)
        return 0

    for name in ARGUMENTS:
        if parser.is_parsed(name):
            received = "".join("'%s'," % value for value in parser.get_many(name))
        else:
            received = "(not set)"
        console.print(Text("%s: %s" % (name, received)), soft_wrap=True)
    if parser.has_positionals():
        console.print(Text("positionals: %s" % ", ".join(map(repr, parser.positionals))), soft_wrap=True)
    return 0


__all__ = (
    "build",
    "main",
)
