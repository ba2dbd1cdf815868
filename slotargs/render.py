"""
Help, usage and version rendering (rich).

Sections, in order (empty ones are skipped)
- info       "name version" (root) or "name command" (subcommand), then the description
- AUTHOR:    name <email>
- ADDRESS:   label: link
- USAGE:     synthesized usage lines, shortest first
- OPTIONS:   one row per option, ordered by sort key
- ARGS:      one row per positional, in declaration order
- COMMANDS:  root only, one row per subcommand

Rows are laid out with rich Table.grid. Optional entries are marked "(optional)", entries
with a usable default show it as "[default]".

Palette keys (override any of them with __styles__ in __main__)
- program-name, version, description-section, section-label
- option-name, metavar, marker, argument-description
- command-name, command-description, usage-section
"""
import io
from collections import defaultdict

from rich.console import Console, Group
from rich.padding import Padding
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

OPTIONAL = "(optional)"


def _palette(colorful):
    styles = defaultdict(str, {
        "program-name": "bold #FF4D94",  # magenta-pink brand
        "version": "bold #36C5F0",  # sky-blue
        "description-section": "italic #A3A3A3",  # neutral gray
        "section-label": "bold #FFFFFF",  # white headers
        "usage-section": "#36C5F0",
        "option-name": "bold #00E6FF",  # cyan
        "metavar": "bold #FFD600",  # amber
        "marker": "#9CA3AF dim",
        "argument-description": "#9CA3AF",
        "command-name": "bold #22C55E",  # green
        "command-description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment if colorful else Text(fragment.plain)
        return Text(str(fragment), styles[style] if colorful else "")
    return text


def _grid(rows):
    table = Table.grid(padding=(0, 4))
    table.add_column(no_wrap=True)
    table.add_column()
    for row in rows:
        table.add_row(*row)
    return Padding(table, (0, 0, 0, 3))


def _marker(argument, text):
    if argument.optional:
        return text(OPTIONAL, "marker")
    if (default := argument.default()) is not None:
        return text(f"[{default}]", "marker")
    return Text("")


def _usage(application, command):
    node = application.commands[command]
    prog = application.name + (f" {command}" if command is not None else "")

    loose = any(option.optional or option.default() is not None for option in node.options.values())
    words = []
    for cardinal in node.cardinals:
        left, right = ("[", "]") if not cardinal.required else ("<", ">")
        match cardinal.arity:
            case 1:
                words.append(f"{left}{cardinal.name}{right}")
            case 2:
                words.append(f"{left}{cardinal.name}{right} {left}{cardinal.name}{right}")
            case None:
                words.append(f"{left}{cardinal.name}...{right}")
            case arity:
                words.append(f"{left}{cardinal.name}{{{arity}}}{right}")

    usages = [" ".join([prog, "[options]" if loose else "options", *words])]
    if command is None and len(application.commands) > 1:
        usages.append(f"{application.name} <command> [args]")
    return sorted(usages, key=len)


def versioner(application, /):
    """'name version', or just the name when no version was given."""
    return " ".join(part for part in (application.name, application.version) if part)


def helper(application, command=None, /):
    """Build the help renderable of one command (None is the root)."""
    node = application.commands[command]
    text = _palette(application.colorful)
    sections = []

    info = Text.assemble(
        text(application.name, "program-name"),
        " ",
        text(command if command is not None else application.version, "version"),
    )
    if node.descr:
        info.append("\n").append(text(node.descr, "description-section"))
    sections.append(info)

    people = []
    if application.authors:
        people.append(text("AUTHOR:", "section-label"))
        people.append(_grid(
            [(Text(f"{author} <{email}>"),) for author, email in application.authors]
        ))
    if application.addresses:
        people.append(text("ADDRESS:", "section-label"))
        people.append(_grid(
            [(Text(f"{label}: {link}"),) for label, link in application.addresses]
        ))
    if people:
        sections.append(Group(*people))

    sections.append(Group(
        text("USAGE:", "section-label"),
        _grid([(text(usage, "usage-section"),) for usage in _usage(application, command)]),
    ))

    if options := sorted(node.options.values(), key=lambda option: option.sort_key):
        rows = []
        for option in options:
            names = text(", ".join(option.aliases), "option-name")
            if not option.boolean:
                names = Text.assemble(names, " ", text(f"<{option.name}>", "metavar"), " ", _marker(option, text))
            rows.append((names, text(option.descr, "argument-description")))
        sections.append(Group(text("OPTIONS:", "section-label"), _grid(rows)))

    if node.cardinals:
        rows = []
        for cardinal in node.cardinals:
            names = Text.assemble(text(f"<{cardinal.name}>", "metavar"), " ", _marker(cardinal, text))
            rows.append((names, text(cardinal.descr, "argument-description")))
        sections.append(Group(text("ARGS:", "section-label"), _grid(rows)))

    if command is None and (children := [child for name, child in application.commands.items() if name is not None]):
        rows = []
        for child in sorted(children, key=lambda child: child.sort_key):
            label = child.name if child.short is None else f"{child.name}, {child.short}"
            rows.append((text(label, "command-name"), text(child.descr, "command-description")))
        sections.append(Group(text("COMMANDS:", "section-label"), _grid(rows)))

    renders = []
    for index, section in enumerate(sections):
        if index:
            renders.append(Text(""))
        renders.append(section)

    if application.fancy:
        return Panel(Group(*renders), title=Text.assemble("[ ", f"{application.name} help".upper(), " ]"), title_align="left")
    return Group(*renders)


def export(renderable, /, width=100):
    """Plain text of a renderable (styles dropped, trailing spaces trimmed)."""
    console = Console(file=io.StringIO(), width=width, record=True, color_system=None)
    console.print(renderable)
    lines = console.export_text(styles=False).splitlines()
    return "\n".join(line.rstrip() for line in lines).strip("\n") + "\n"


__all__ = (
    "versioner",
    "helper",
    "export",
)
