"""Source discovery, batch conversion and document output.

Exports:
    discover_source_files: Find a kind's source files in a data tree.
    load_entities: Decode one source file into raw entities.
    write_document: Persist a rendered document.
    convert_kind: Convert every source file of one kind.
    convert_all: Convert several kinds into one report.
"""

from __future__ import annotations

from dnd_compendium.pipeline.batch import (
    BatchReport,
    FileFailure,
    convert_all,
    convert_file,
    convert_kind,
    render_file,
)
from dnd_compendium.pipeline.loader import discover_source_files, load_entities
from dnd_compendium.pipeline.writer import write_document


__all__ = [
    "BatchReport",
    "FileFailure",
    "convert_all",
    "convert_file",
    "convert_kind",
    "discover_source_files",
    "load_entities",
    "render_file",
    "write_document",
]
