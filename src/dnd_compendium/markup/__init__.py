"""Inline markup handling for 5etools prose."""

from __future__ import annotations

from dnd_compendium.markup.tags import TAG_KINDS, TagKind, substitute


__all__ = ["TAG_KINDS", "TagKind", "substitute"]
