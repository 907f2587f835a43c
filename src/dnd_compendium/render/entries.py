"""Rendering of 5etools entry lists.

An entry list is an ordered sequence of prose strings and structured
blocks (lists, tables, named sub-sections). Each entry becomes one or more
Markdown blocks; every piece of prose passes through tag substitution.
"""

from __future__ import annotations

from collections.abc import Iterable

from dnd_compendium.markup.tags import substitute
from dnd_compendium.models.fields import (
    BulletList,
    Entry,
    EntrySection,
    ListItem,
    Paragraph,
    Table,
    Unrecognized,
)
from dnd_compendium.render.normalize import fallback_line


def _list_line(item: ListItem) -> str:
    if item.name is None:
        return f"- {substitute(item.text)}"
    line = f"- **{substitute(item.name)}**"
    if item.text:
        line += f": {substitute(item.text)}"
    return line


def _table_row(cells: Iterable[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def render_table(table: Table) -> list[str]:
    """Render a table as a caption block (if any) and a pipe table block.

    Tables without column labels get an empty header row sized to the widest
    data row.
    """
    width = max((len(row) for row in table.rows), default=0)
    labels = [substitute(label) for label in table.labels] or [""] * width
    if not labels:
        return []

    lines = [
        _table_row(labels),
        _table_row("---" for _ in labels),
        *(_table_row(substitute(cell) for cell in row) for row in table.rows),
    ]
    blocks = [f"**{substitute(table.caption)}**"] if table.caption else []
    blocks.append("\n".join(lines))
    return blocks


def render_named(name: str, entries: Iterable[Entry]) -> list[str]:
    """Render entries under a run-in ``***Name.***`` heading.

    A leading paragraph continues the heading's line; anything else follows
    the heading as its own block.
    """
    entries = tuple(entries)
    blocks = render_entries(entries)
    if not name:
        return blocks
    heading = f"***{name}.***"
    if entries and isinstance(entries[0], Paragraph) and blocks:
        blocks[0] = f"{heading} {blocks[0]}"
    else:
        blocks.insert(0, heading)
    return blocks


def render_entry(entry: Entry) -> list[str]:
    if isinstance(entry, Paragraph):
        return [substitute(entry.text)]
    if isinstance(entry, BulletList):
        if not entry.items:
            return []
        return ["\n".join(_list_line(item) for item in entry.items)]
    if isinstance(entry, Table):
        return render_table(entry)
    if isinstance(entry, EntrySection):
        return render_named(substitute(entry.name or ""), entry.entries)
    if isinstance(entry, Unrecognized):
        return [fallback_line("entry", entry.raw)]
    return []


def render_entries(entries: Iterable[Entry]) -> list[str]:
    """Render an entry list to Markdown blocks, in order."""
    blocks: list[str] = []
    for entry in entries:
        blocks.extend(render_entry(entry))
    return blocks


def flatten_sections(entries: Iterable[Entry]) -> list[Entry]:
    """Replace each named sub-section by its own entries."""
    flat: list[Entry] = []
    for entry in entries:
        if isinstance(entry, EntrySection):
            flat.extend(flatten_sections(entry.entries))
        else:
            flat.append(entry)
    return flat
