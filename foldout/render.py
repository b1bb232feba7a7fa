"""
Usage and current-values rendering.

Both renderers read the parser through its public surface (exe, registry,
registry.entries) and return a rich Group of Text lines:

- usage(parser): "Usage: <exe> [options]", then every documentation entry in
  order. Options render as "--name (-x) [default]" padded to the longest
  rendered name (capped at NAME_WIDTH cells), then the description and the
  choices as "{a | b}". Text entries are printed verbatim.
- values(parser): "Current parameters for <exe>", then every documented
  option as "--name: value", "--name: value (default)" or "--name: [default]"
  while unset; options without a documentation entry (hidden ones) follow
  under "Unknown parameters".

Palette keys (override them with a __styles__ mapping in __main__)
- usage-label, program-name, option-name, default, description, choice, text
- values-label, value, default-marker, unset, unknown-label
"""
from collections import defaultdict

from rich.console import Group
from rich.text import Text

NAME_WIDTH = 32
INDENT = "    "


def _palette(colorful):
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "option-name": "bold #00E6FF",
        "default": "#FFD600",
        "description": "#9CA3AF",
        "choice": "bold #FF4D94",
        "text": "",
        "values-label": "bold #FFFFFF",
        "value": "bold #22C55E",
        "default-marker": "dim",
        "unset": "#737373",
        "unknown-label": "bold #EF4444",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _spelling(option, styler):
    name = Text("--" + option.name, styler("option-name"))
    if option.alias is not None:
        name.append(" (-" + option.alias + ")", styler("option-name"))
    name.append(" [")
    name.append(option.default, styler("default"))
    name.append("]")
    return name


def usage(parser, *, colorful=True):
    styler = _palette(colorful)
    registry = parser.registry

    options = [registry[entry.text] for entry in registry.entries if entry.kind == "option"]
    longest = max((min(NAME_WIDTH, len(option.spelling)) for option in options), default=0)

    lines = [
        Text.assemble(
            ("Usage: ", styler("usage-label")),
            (parser.exe, styler("program-name")),
            " [options]",
        ),
        Text(""),
    ]
    for entry in registry.entries:
        if entry.kind == "text":
            lines.append(Text(entry.text, styler("text")))
            continue

        option = registry[entry.text]
        line = Text(INDENT)
        line.append_text(_spelling(option, styler))
        line.append(" " * (2 + longest - min(NAME_WIDTH, len(option.spelling))))
        if option.descr is not None:
            line.append_text(option.descr if isinstance(option.descr, Text) else Text(option.descr, styler("description")))
        if option.choices:
            line.append("  {")
            line.append_text(Text(" | ").join(Text(choice, styler("choice")) for choice in option.choices))
            line.append("}")
        line.rstrip()
        lines.append(line)

    return Group(*lines)


def values(parser, *, colorful=True):
    styler = _palette(colorful)
    registry = parser.registry

    lines = [Text.assemble(("Current parameters for ", styler("values-label")), (parser.exe, styler("program-name")))]

    documented = set()
    for entry in registry.entries:
        if entry.kind != "option":
            continue
        option = registry[entry.text]
        documented.add(option.name)

        line = Text.assemble(INDENT, ("--" + option.name, styler("option-name")), ": ")
        if option.value:
            line.append(option.value, styler("value"))
            if option.value == option.default:
                line.append(" (default)", styler("default-marker"))
        else:
            line.append("[" + option.default + "]", styler("unset"))
        lines.append(line)

    unknown = [name for name in registry if name not in documented]
    if unknown:
        lines.append(Text(""))
        lines.append(Text("Unknown parameters", styler("unknown-label")))
    for name in unknown:
        lines.append(Text.assemble(
            INDENT, ("--" + name, styler("option-name")), ": ", (registry[name].value or "", styler("value"))
        ))

    return Group(*lines)


__all__ = (
    "usage",
    "values",
)
