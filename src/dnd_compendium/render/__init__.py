"""Markdown rendering of decoded entities.

Example:
    >>> from dnd_compendium.models import EntityKind
    >>> from dnd_compendium.render import render_entity
    >>> document = render_entity(EntityKind.SPELL, {"name": "Light", "level": 0, "school": "V"})
    >>> document.body.splitlines()[:3]
    ['# Light', '', '*Cantrip Evocation*']
"""

from __future__ import annotations

from typing import Any

from dnd_compendium.models.enums import EntityKind
from dnd_compendium.render.document import RenderedDocument, assemble, safe_file_name
from dnd_compendium.render.items import ITEM_RENDERER, render_item
from dnd_compendium.render.monsters import MONSTER_RENDERER, render_monster
from dnd_compendium.render.sections import EntityRenderer, Section
from dnd_compendium.render.spells import SPELL_RENDERER, render_spell


RENDERERS: dict[EntityKind, EntityRenderer[Any]] = {
    EntityKind.SPELL: SPELL_RENDERER,
    EntityKind.MONSTER: MONSTER_RENDERER,
    EntityKind.ITEM: ITEM_RENDERER,
}


def render_entity(kind: EntityKind, raw: Any) -> RenderedDocument:
    """Decode one raw entity of the given kind and render it.

    Args:
        kind: The entity kind.
        raw: One element of a source file's entity array.

    Returns:
        The rendered document.

    Raises:
        RenderError: If the raw value is not a JSON object.
    """
    return RENDERERS[kind].render_raw(raw)


__all__ = [
    "RENDERERS",
    "EntityRenderer",
    "RenderedDocument",
    "Section",
    "assemble",
    "render_entity",
    "render_item",
    "render_monster",
    "render_spell",
    "safe_file_name",
]
