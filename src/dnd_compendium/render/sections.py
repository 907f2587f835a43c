"""Declarative section sequencing shared by all entity renderers.

A document is an ordered list of sections. Each :class:`Section` is an
(extractor, normalizer, formatter) triple:

* the extractor pulls the field from the entity, returning ``None`` when
  the field is absent (the section is then skipped);
* the normalizer turns the field into display text (or a list of blocks);
* the formatter wraps that text into Markdown blocks, returning no blocks
  when there is nothing to show.

Adding an entity kind means writing its section list, not a new renderer.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar

from dnd_compendium.models.entities import ExtraFields, SourceInfo
from dnd_compendium.render.document import RenderedDocument, assemble, safe_file_name
from dnd_compendium.render.normalize import fallback_lines, source_text


class Renderable(Protocol):
    name: str
    source: SourceInfo
    extra_fields: ExtraFields


E = TypeVar("E", bound=Renderable)

Formatter = Callable[[Any], list[str]]


def _identity(value: Any) -> Any:
    return value


@dataclass(frozen=True)
class Section(Generic[E]):
    """One step of a document.

    Attributes:
        name: Section name, used in logs and tests.
        extract: Returns the field value or None when absent.
        normalize: Turns the value into display text or blocks.
        format: Turns normalized output into Markdown blocks.
    """

    name: str
    extract: Callable[[E], Any]
    normalize: Callable[[Any], Any] = _identity
    format: Formatter = list

    def render(self, entity: E) -> list[str]:
        value = self.extract(entity)
        if value is None:
            return []
        return self.format(self.normalize(value))


# =============================================================================
# Formatters
# =============================================================================


def heading(level: int) -> Formatter:
    def format_heading(text: str) -> list[str]:
        return [f"{'#' * level} {text}"]

    return format_heading


def emphasis(text: str) -> list[str]:
    return [f"*{text}*"] if text else []


def labeled(label: str) -> Formatter:
    """Format text as ``label text``; empty text produces no block."""

    def format_labeled(text: str) -> list[str]:
        return [f"{label} {text}"] if text else []

    return format_labeled


def titled(title: str) -> Formatter:
    """Prefix a non-empty list of blocks with a ``## title`` heading."""

    def format_titled(blocks: list[str]) -> list[str]:
        return [f"## {title}", *blocks] if blocks else []

    return format_titled


def joined_lines(lines: list[str]) -> list[str]:
    return ["\n".join(lines)] if lines else []


# =============================================================================
# Shared Sections
# =============================================================================


def name_section() -> Section[Any]:
    return Section("name", lambda entity: entity.name, format=heading(1))


def source_section() -> Section[Any]:
    return Section("source", lambda entity: entity.source, source_text, labeled("**Source:**"))


def fallback_section() -> Section[Any]:
    return Section("unmapped", lambda entity: entity.extra_fields, fallback_lines, joined_lines)


# =============================================================================
# Renderer
# =============================================================================


@dataclass(frozen=True)
class EntityRenderer(Generic[E]):
    """Renders one entity kind from its decoder and section list."""

    decode: Callable[[Any], E]
    sections: Sequence[Section[E]]

    def blocks(self, entity: E) -> list[str]:
        blocks: list[str] = []
        for section in self.sections:
            blocks.extend(section.render(entity))
        return blocks

    def render(self, entity: E) -> RenderedDocument:
        return RenderedDocument(safe_file_name(entity.name), assemble(self.blocks(entity)))

    def render_raw(self, raw: Any) -> RenderedDocument:
        return self.render(self.decode(raw))
