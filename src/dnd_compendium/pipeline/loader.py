"""Source-file discovery and envelope decoding.

A 5etools data tree keeps spells and monsters in one file per book under
``spells/`` and ``bestiary/``, each directory carrying an ``index.json`` that
maps source abbreviations to file names. Items live in two files at the data
root. Lore companions ("fluff" files) hold no statistics and are skipped.

Only the top-level envelope is validated here; the shape of each entity is
left to the renderers.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, create_model

from dnd_compendium.core.exceptions import EmptySourceError, SourceDecodeError, SourceFileError
from dnd_compendium.core.logging import get_logger
from dnd_compendium.models.enums import EntityKind


logger = get_logger(__name__)


# =============================================================================
# Discovery
# =============================================================================

FILE_PATTERNS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.SPELL: ("spells-*.json",),
    EntityKind.MONSTER: ("bestiary-*.json",),
    EntityKind.ITEM: ("items.json", "items-base.json"),
}

INDEX_FILE = "index.json"

_INDEX_ADAPTER: TypeAdapter[dict[str, str]] = TypeAdapter(dict[str, str])


def is_fluff(path: Path) -> bool:
    """Check whether a file holds lore text rather than statistics."""
    return "fluff" in path.name


def _read_index(index_path: Path) -> list[Path]:
    try:
        listing = _INDEX_ADAPTER.validate_json(index_path.read_bytes())
    except OSError as exc:
        raise SourceFileError(
            f"Failed to read index: {exc}", source_file=str(index_path)
        ) from exc
    except ValidationError as exc:
        raise SourceDecodeError(
            f"Invalid index: {exc.error_count()} error(s)",
            source_file=str(index_path),
            details={"errors": exc.errors(include_url=False)},
        ) from exc
    return [index_path.parent / name for name in listing.values()]


def discover_source_files(data_directory: Path, kind: EntityKind) -> list[Path]:
    """Find the source files holding entities of one kind.

    Args:
        data_directory: Root of the 5etools data tree.
        kind: Entity kind to look for.

    Returns:
        Existing, non-fluff JSON files, sorted by path.

    Raises:
        SourceFileError: If the kind's directory does not exist or its
            index cannot be read.
        SourceDecodeError: If the index is not a JSON object of file names.
    """
    subdirectory = kind.source_directory
    directory = data_directory / subdirectory if subdirectory else data_directory
    if not directory.is_dir():
        raise SourceFileError(
            f"Data directory not found for {kind.output_directory}",
            source_file=str(directory),
        )

    index_path = directory / INDEX_FILE
    if subdirectory and index_path.is_file():
        candidates = _read_index(index_path)
        logger.debug("Using source index", index=str(index_path), count=len(candidates))
    else:
        candidates = [
            path for pattern in FILE_PATTERNS[kind] for path in directory.glob(pattern)
        ]

    return sorted({path for path in candidates if path.is_file() and not is_fluff(path)})


# =============================================================================
# Decoding
# =============================================================================


@lru_cache(maxsize=None)
def envelope_model(kind: EntityKind) -> type[BaseModel]:
    """Build the pydantic model for a source file's top-level object.

    Every key named by ``kind.envelope_keys`` must hold an array when
    present; other keys (``_meta`` and friends) are ignored.

    Args:
        kind: Entity kind the file is read for.

    Returns:
        A model class with one list field per envelope key.
    """
    fields: dict[str, Any] = {
        key: (list[Any], Field(default_factory=list)) for key in kind.envelope_keys
    }
    return create_model(
        f"{kind.value.capitalize()}SourceFile",
        __config__=ConfigDict(extra="ignore"),
        **fields,
    )


def load_entities(path: Path, kind: EntityKind) -> list[Any]:
    """Decode one source file and return its raw entity array.

    Args:
        path: The JSON file to read.
        kind: Entity kind the file is read for.

    Returns:
        The raw entities in file order.

    Raises:
        SourceFileError: If the file cannot be read.
        SourceDecodeError: If the file is not JSON or its envelope is malformed.
        EmptySourceError: If the file holds no entities of the kind.

    Example:
        >>> load_entities(Path("data/spells/spells-phb.json"), EntityKind.SPELL)[0]["name"]
        'Acid Splash'
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise SourceFileError(f"Failed to read source file: {exc}", source_file=str(path)) from exc

    try:
        envelope = envelope_model(kind).model_validate_json(data)
    except ValidationError as exc:
        raise SourceDecodeError(
            f"Failed to decode source file: {exc.errors(include_url=False)[0]['msg']}",
            source_file=str(path),
            details={"error_count": exc.error_count()},
        ) from exc

    entities = [entity for key in kind.envelope_keys for entity in getattr(envelope, key)]
    if not entities:
        raise EmptySourceError(f"No {kind.value} entries found", source_file=str(path))

    logger.debug("Decoded source file", file=str(path), kind=kind.value, count=len(entities))
    return entities


__all__ = [
    "FILE_PATTERNS",
    "INDEX_FILE",
    "discover_source_files",
    "envelope_model",
    "is_fluff",
    "load_entities",
]
