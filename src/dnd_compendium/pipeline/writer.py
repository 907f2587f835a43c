"""Document persistence."""

from __future__ import annotations

from pathlib import Path

from dnd_compendium.core.exceptions import DocumentWriteError
from dnd_compendium.core.logging import get_logger
from dnd_compendium.render.document import RenderedDocument


logger = get_logger(__name__)


def write_document(out_directory: Path, document: RenderedDocument, *, suffix: str = ".md") -> Path:
    """Write a rendered document, replacing any previous version.

    Args:
        out_directory: Directory for the kind's documents; created if missing.
        document: The document to write.
        suffix: File extension appended to the document's base name.

    Returns:
        Path of the written file.

    Raises:
        DocumentWriteError: If the directory or file cannot be written.
    """
    path = out_directory / document.file_name(suffix)
    try:
        out_directory.mkdir(parents=True, exist_ok=True)
        path.write_text(document.body, encoding="utf-8")
    except OSError as exc:
        raise DocumentWriteError(
            f"Cannot write document: {exc.strerror or exc}",
            output_file=str(path),
        ) from exc
    logger.debug("Wrote document", path=str(path))
    return path


__all__ = ["write_document"]
