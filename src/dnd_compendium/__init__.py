"""5etools-to-Markdown compendium converter.

Turns the spell, monster and item files of a 5etools data tree into one
Markdown document per entity.

Example:
    >>> from pathlib import Path
    >>> from dnd_compendium import convert_all
    >>> report = convert_all(Path("data"), Path("out"))
"""

from __future__ import annotations

from dnd_compendium.models import EntityKind
from dnd_compendium.pipeline import BatchReport, convert_all, convert_kind
from dnd_compendium.render import RenderedDocument, render_entity


__version__ = "0.1.0"

__all__ = [
    "BatchReport",
    "EntityKind",
    "RenderedDocument",
    "__version__",
    "convert_all",
    "convert_kind",
    "render_entity",
]
