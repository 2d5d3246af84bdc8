"""
Help text for an ArgumentParser.

Layout

    Usage of <prog>[ <version>]:
      <prog> [OPTION...][ <positional hint>]

    [<preamble>

    ]Options:
     -x --long <ARG>  help text (required, appending, choices: [a|b], default: a)
    ...
    [ <POSITIONALS>   positional help]
    [
    <epilog>]

The text is produced as a stream of (fragment, style) pairs. format_help()
joins the fragments into plain text; render_help() turns the same stream into
a rich Text, so the styled and the plain output never drift apart.

Palette keys
- usage-label, program-name, program-version, usage-section
- preamble, epilog, group-label
- option-name, metavar, positional-name, description, annotation
- panel-title

Customization
- Define a mapping named __styles__ in __main__ to override palette entries.
- Styles only apply when the parser is colorful.
"""
from collections import defaultdict

from rich.panel import Panel
from rich.text import Text

from . import names as grammar
from .utils import UNLIMITED_POSITIONALS


def _positional_hint(parser, /):
    maximum = parser.maximum_positionals
    if maximum <= 0:
        return ""
    if parser.positional_metavar:
        return parser.positional_metavar
    if maximum == 1:
        return "<POSITIONAL>"
    if maximum < UNLIMITED_POSITIONALS:
        return "<%d-%d POSITIONALS>" % (parser.minimum_positionals, maximum)
    return "<POSITIONALS>"


def _annotations(option, /):
    annotations = []
    if option.required:
        annotations.append("required")
    if option.appending:
        annotations.append("appending")
    if option.nargs > 0 and option.choices:
        annotations.append("choices: " + " ".join("[%s]" % "|".join(choices) for choices in option.choices))
    if option.nargs > 0 and option.defaults:
        annotations.append("default: " + " ".join(option.defaults))
    return annotations


def _rows(parser, /):
    """
    Return (names, description) rows; each side is a list of (fragment, style).
    """
    rows = []
    for option in parser.options:
        if option.hidden:
            continue
        names = []
        for name in option.names:
            names += [(" ", ""), (grammar.dashed(name), "option-name")]
        for metavar in option.metavars or ("ARG",) * option.nargs:
            names += [(" ", ""), ("<%s>" % metavar, "metavar")]
        description = [(option.help, "description")]
        if annotations := _annotations(option):
            description.append((" (%s)" % ", ".join(annotations), "annotation"))
        rows.append((names, description))
    if parser.positional_help and parser.positional_metavar:
        rows.append((
            [(" ", ""), (parser.positional_metavar, "positional-name")],
            [(parser.positional_help, "description")],
        ))
    return rows


def _fragments(parser, /):
    prog = parser.program_name
    version = parser.program_version

    yield "Usage of ", "usage-label"
    yield prog, "program-name"
    if version:
        yield " ", ""
        yield version, "program-version"
    yield ":\n  ", ""
    yield prog, "program-name"
    yield " [OPTION...]", "usage-section"
    if hint := _positional_hint(parser):
        yield " " + hint, "usage-section"
    yield "\n\n", ""

    if preamble := parser.help_preamble:
        yield preamble, "preamble"
        yield "\n\n", ""

    yield "Options:", "group-label"
    yield "\n", ""

    rows = _rows(parser)
    width = max((sum(len(fragment) for fragment, _ in names) for names, _ in rows), default=0)
    for names, description in rows:
        yield from names
        yield " " * (width + 2 - sum(len(fragment) for fragment, _ in names)), ""
        yield from description
        yield "\n", ""

    if epilog := parser.help_epilog:
        yield "\n", ""
        yield epilog, "epilog"


def format_help(parser, /):
    """Return the help text of parser as a plain string."""
    return "".join(fragment for fragment, _ in _fragments(parser))


def _styles():
    return defaultdict(str, {
        "usage-label": "bold #00E6FF",  # cyan
        "program-name": "bold #FF4D94",  # magenta-pink
        "program-version": "#9CA3AF",
        "usage-section": "bold #36C5F0",  # sky-blue
        "preamble": "italic #A3A3A3",
        "epilog": "#737373",
        "group-label": "bold #FFFFFF",
        "option-name": "bold #00E6FF",
        "metavar": "bold #FFD600",  # amber
        "positional-name": "bold #FFD600",
        "description": "#9CA3AF",
        "annotation": "italic #9CA3AF",
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))


def render_help(parser, /):
    """
    Return the help of parser as a rich Text, styled when parser.colorful.
    """
    styles = _styles()

    def styler(style):
        return styles[style] if parser.colorful and style else ""

    return Text.assemble(*((fragment, styler(style)) for fragment, style in _fragments(parser) if fragment))


def panel(parser, renderable, /):
    """Wrap rendered help in a titled panel (fancy mode)."""
    title = Text(parser.program_name or "help", _styles()["panel-title"] if parser.colorful else "")
    return Panel(renderable, title=title, title_align="left")


__all__ = (
    "format_help",
    "render_help",
)
