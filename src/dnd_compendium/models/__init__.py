"""Entity records and polymorphic field variants for 5etools data.

Submodules:
    enums: Entity kinds and code tables (sizes, schools, alignments).
    fields: Closed variant types and their ``classify_*`` decoders.
    entities: Frozen Spell, Monster and Item records and their decoders.
"""

from __future__ import annotations

from dnd_compendium.models.entities import (
    DECODERS,
    Entity,
    Item,
    Monster,
    SourceInfo,
    Spell,
    decode_item,
    decode_monster,
    decode_spell,
)
from dnd_compendium.models.enums import EntityKind, Size, SpellSchool
from dnd_compendium.models.fields import Unrecognized


__all__ = [
    "DECODERS",
    "Entity",
    "EntityKind",
    "Item",
    "Monster",
    "Size",
    "SourceInfo",
    "Spell",
    "SpellSchool",
    "Unrecognized",
    "decode_item",
    "decode_monster",
    "decode_spell",
]
