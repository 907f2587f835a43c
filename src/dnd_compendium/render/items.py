"""Item documents.

Section order: name, type and rarity, attunement, weight, value,
description, source, then unmapped fields.
"""

from __future__ import annotations

from dnd_compendium.models.entities import Item, decode_item
from dnd_compendium.render.document import RenderedDocument
from dnd_compendium.render.entries import render_entries
from dnd_compendium.render.normalize import attunement_text, item_value_text, weight_text
from dnd_compendium.render.sections import (
    EntityRenderer,
    Section,
    emphasis,
    fallback_section,
    labeled,
    name_section,
    source_section,
)


def subtitle_text(item: Item) -> str:
    """``Weapon, Common``, or whichever of type and rarity is present."""
    return ", ".join(part for part in (item.item_type, item.rarity) if part)


ITEM_SECTIONS: tuple[Section[Item], ...] = (
    name_section(),
    Section("subtitle", lambda item: item, subtitle_text, emphasis),
    Section("attunement", lambda item: item.attunement, attunement_text, emphasis),
    Section("weight", lambda item: item.weight, weight_text, labeled("**Weight:**")),
    Section("value", lambda item: item.value, item_value_text, labeled("**Value:**")),
    Section("entries", lambda item: item.entries, render_entries),
    source_section(),
    fallback_section(),
)


ITEM_RENDERER: EntityRenderer[Item] = EntityRenderer(decode_item, ITEM_SECTIONS)


def render_item(item: Item) -> RenderedDocument:
    """Render a decoded item to its document."""
    return ITEM_RENDERER.render(item)
