"""Batch conversion of a data tree into Markdown documents.

Each source file is converted as a unit: all of its entities are rendered
in memory first, so a file that fails to decode leaves nothing behind.
Entities that cannot be rendered at all are skipped with a warning. Whole-file
failures (unreadable sources, documents that cannot be written, a missing kind
directory) are collected in the report, or raised when ``fail_fast`` is set.

Example:
    >>> report = convert_all(Path("data"), Path("out"))
    >>> report.documents, report.ok
    (1024, True)
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from dnd_compendium.core.exceptions import (
    CompendiumError,
    DocumentWriteError,
    RenderError,
    SourceFileError,
)
from dnd_compendium.core.logging import bind_context, clear_context, get_logger
from dnd_compendium.models.enums import EntityKind
from dnd_compendium.pipeline.loader import discover_source_files, load_entities
from dnd_compendium.pipeline.writer import write_document
from dnd_compendium.render import RenderedDocument, render_entity


logger = get_logger(__name__)


# =============================================================================
# Report
# =============================================================================


@dataclass(frozen=True)
class FileFailure:
    """A source file or kind directory that could not be converted.

    Attributes:
        path: The failing file, or the kind directory when it is missing.
        error: The error that invalidated it.
    """

    path: Path
    error: CompendiumError


@dataclass
class BatchReport:
    """Counters for one conversion run.

    Attributes:
        files: Source files converted successfully.
        documents: Documents written.
        skipped_entities: Entities dropped because they could not be rendered.
        failures: Source files or kind directories that failed as a whole.
    """

    files: int = 0
    documents: int = 0
    skipped_entities: int = 0
    failures: list[FileFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Check whether every source file converted."""
        return not self.failures

    def merge(self, other: BatchReport) -> None:
        """Add another report's counters to this one."""
        self.files += other.files
        self.documents += other.documents
        self.skipped_entities += other.skipped_entities
        self.failures.extend(other.failures)


# =============================================================================
# Conversion
# =============================================================================


def render_file(path: Path, kind: EntityKind) -> tuple[list[RenderedDocument], int]:
    """Decode a source file and render every entity in it.

    Args:
        path: The source file.
        kind: Entity kind held by the file.

    Returns:
        The rendered documents in file order, and the number of skipped entities.

    Raises:
        SourceFileError: If the file cannot be read or decoded, or is empty.
    """
    documents: list[RenderedDocument] = []
    skipped = 0
    for index, raw in enumerate(load_entities(path, kind)):
        try:
            document = render_entity(kind, raw)
        except RenderError as exc:
            logger.warning("Skipping entity", file=str(path), index=index, error=exc.message)
            skipped += 1
            continue
        if not document.file_base_name:
            logger.warning("Skipping entity without a name", file=str(path), index=index)
            skipped += 1
            continue
        documents.append(document)
    return documents, skipped


def convert_file(
    path: Path,
    kind: EntityKind,
    out_directory: Path,
    *,
    suffix: str = ".md",
) -> BatchReport:
    """Convert one source file into documents under ``out_directory``.

    Args:
        path: The source file.
        kind: Entity kind held by the file.
        out_directory: Directory receiving this kind's documents.
        suffix: Document file extension.

    Returns:
        Report for this file alone.

    Raises:
        SourceFileError: If the file cannot be read or decoded, or is empty.
        DocumentWriteError: If a document cannot be written.
    """
    documents, skipped = render_file(path, kind)
    for document in documents:
        write_document(out_directory, document, suffix=suffix)
    logger.info("Converted source file", file=str(path), count=len(documents), skipped=skipped)
    return BatchReport(files=1, documents=len(documents), skipped_entities=skipped)


def convert_kind(
    kind: EntityKind,
    data_directory: Path,
    out_directory: Path,
    *,
    suffix: str = ".md",
    fail_fast: bool = False,
) -> BatchReport:
    """Convert every source file of one kind.

    Documents land in ``out_directory / kind.output_directory``.

    Args:
        kind: Entity kind to convert.
        data_directory: Root of the 5etools data tree.
        out_directory: Root of the output tree.
        suffix: Document file extension.
        fail_fast: Raise the first file failure instead of recording it.

    Returns:
        Report for the kind.

    Raises:
        SourceFileError: When ``fail_fast`` is set, if the kind's data
            directory is missing or a file cannot be read.
        DocumentWriteError: When ``fail_fast`` is set, on the first document
            that cannot be written.
    """
    report = BatchReport()
    target = out_directory / kind.output_directory
    bind_context(kind=kind.value)
    try:
        try:
            paths = discover_source_files(data_directory, kind)
        except SourceFileError as exc:
            if fail_fast:
                raise
            directory = Path(exc.source_file) if exc.source_file else data_directory
            logger.error("Source directory failed", directory=str(directory), error=exc.message)
            report.failures.append(FileFailure(path=directory, error=exc))
            return report
        logger.info("Discovered source files", count=len(paths))
        for path in paths:
            try:
                report.merge(convert_file(path, kind, target, suffix=suffix))
            except (SourceFileError, DocumentWriteError) as exc:
                if fail_fast:
                    raise
                logger.error("Source file failed", file=str(path), error=str(exc))
                report.failures.append(FileFailure(path=path, error=exc))
    finally:
        clear_context()
    return report


def convert_all(
    data_directory: Path,
    out_directory: Path,
    *,
    kinds: Iterable[EntityKind] = tuple(EntityKind),
    suffix: str = ".md",
    fail_fast: bool = False,
) -> BatchReport:
    """Convert several kinds and combine their reports.

    Args:
        data_directory: Root of the 5etools data tree.
        out_directory: Root of the output tree.
        kinds: Kinds to convert, in order.
        suffix: Document file extension.
        fail_fast: Raise the first file failure instead of recording it.

    Returns:
        Combined report.
    """
    report = BatchReport()
    for kind in kinds:
        report.merge(
            convert_kind(kind, data_directory, out_directory, suffix=suffix, fail_fast=fail_fast)
        )
    logger.info(
        "Conversion finished",
        files=report.files,
        documents=report.documents,
        failures=len(report.failures),
    )
    return report


__all__ = [
    "BatchReport",
    "FileFailure",
    "convert_all",
    "convert_file",
    "convert_kind",
    "render_file",
]
