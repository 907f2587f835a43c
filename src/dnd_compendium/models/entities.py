"""Immutable entity records decoded from 5etools JSON.

Each ``decode_*`` function turns one element of a source file's entity array
into a frozen record. Polymorphic fields are classified once here (see
:mod:`dnd_compendium.models.fields`). Every top-level key the record does not
claim is kept, in source order, in ``extra_fields`` so that the renderer can
surface it instead of dropping it.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from dnd_compendium.core.exceptions import RenderError
from dnd_compendium.models.enums import ABILITY_KEYS, EntityKind
from dnd_compendium.models.fields import (
    AlignmentCodes,
    ArmorClass,
    Attunement,
    BonusMap,
    CastingTime,
    ChallengeRating,
    Components,
    CreatureType,
    Duration,
    Entry,
    HitPoints,
    ItemValue,
    NamedBlock,
    Number,
    ScalingTable,
    SizeCode,
    Speed,
    SpellRange,
    TextList,
    Unrecognized,
    classify_alignment,
    classify_armor_class,
    classify_attunement,
    classify_bonus_map,
    classify_casting_times,
    classify_challenge_rating,
    classify_class_names,
    classify_components,
    classify_creature_type,
    classify_durations,
    classify_entries,
    classify_hit_points,
    classify_item_value,
    classify_named_blocks,
    classify_range,
    classify_scaling,
    classify_size,
    classify_speed,
    classify_text_list,
    is_number,
)


ExtraFields = tuple[tuple[str, Any], ...]

IDENTITY_KEYS = frozenset({"name", "source", "page", "srd", "basicRules"})


@dataclass(frozen=True)
class SourceInfo:
    """Where an entity is published.

    Attributes:
        book: Source book code (e.g., 'PHB').
        page: Page number, when known.
        srd: Whether the entity is part of the SRD.
        basic_rules: Whether the entity is part of the Basic Rules.
    """

    book: str
    page: int | None = None
    srd: bool = False
    basic_rules: bool = False


@dataclass(frozen=True)
class Spell:
    name: str
    source: SourceInfo
    level: int | Unrecognized | None = None
    school: str | None = None
    ritual: bool = False
    casting_times: tuple[CastingTime | Unrecognized, ...] | None = None
    range: SpellRange | Unrecognized | None = None
    components: Components | Unrecognized | None = None
    durations: tuple[Duration | Unrecognized, ...] | None = None
    entries: tuple[Entry, ...] | None = None
    scaling: tuple[ScalingTable | Unrecognized, ...] | None = None
    entries_higher: tuple[Entry, ...] | None = None
    damage_types: tuple[str, ...] = ()
    saving_throws: tuple[str, ...] = ()
    classes: tuple[str, ...] | Unrecognized | None = None
    misc_tags: tuple[str, ...] = ()
    area_tags: tuple[str, ...] = ()
    reprinted_as: tuple[Any, ...] = ()
    extra_fields: ExtraFields = field(default=())


@dataclass(frozen=True)
class Monster:
    name: str
    source: SourceInfo
    size: SizeCode | Unrecognized | None = None
    creature_type: CreatureType | Unrecognized | None = None
    alignment: AlignmentCodes | Unrecognized | None = None
    armor_class: ArmorClass | Unrecognized | None = None
    hit_points: HitPoints | Unrecognized | None = None
    speed: Speed | Unrecognized | None = None
    abilities: tuple[tuple[str, Any], ...] = ()
    saves: BonusMap | Unrecognized | None = None
    skills: BonusMap | Unrecognized | None = None
    senses: TextList | Unrecognized | None = None
    passive_perception: Number | None = None
    languages: TextList | Unrecognized | None = None
    challenge_rating: ChallengeRating | Unrecognized | None = None
    traits: tuple[NamedBlock | Unrecognized, ...] | None = None
    actions: tuple[NamedBlock | Unrecognized, ...] | None = None
    reactions: tuple[NamedBlock | Unrecognized, ...] | None = None
    legendary: tuple[NamedBlock | Unrecognized, ...] | None = None
    environment: tuple[str, ...] = ()
    extra_fields: ExtraFields = field(default=())


@dataclass(frozen=True)
class Item:
    name: str
    source: SourceInfo
    item_type: str | None = None
    rarity: str | None = None
    attunement: Attunement | Unrecognized | None = None
    weight: Number | None = None
    value: ItemValue | Unrecognized | None = None
    entries: tuple[Entry, ...] | None = None
    tier: str | None = None
    extra_fields: ExtraFields = field(default=())


Entity = Spell | Monster | Item


# =============================================================================
# Decoding Helpers
# =============================================================================


def is_flag_set(raw: Any) -> bool:
    """Interpret a boolean-or-string flag such as ``srd``.

    A string flag names the entity's alternative title in that publication,
    so any non-empty string other than "false" or "0" counts as set.
    """
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        return raw.strip().lower() not in ("", "false", "0")
    return False


def _text(raw: Any) -> str | None:
    return raw if isinstance(raw, str) and raw else None


def _strings(raw: Any) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(value for value in raw if isinstance(value, str))


def _source_info(raw: dict[str, Any]) -> SourceInfo:
    page = raw.get("page")
    return SourceInfo(
        book=_text(raw.get("source")) or "",
        page=page if isinstance(page, int) and not isinstance(page, bool) else None,
        srd=is_flag_set(raw.get("srd")),
        basic_rules=is_flag_set(raw.get("basicRules")),
    )


def _entity_name(raw: Any, kind: EntityKind) -> str:
    if not isinstance(raw, dict):
        raise RenderError(
            f"{kind.value.capitalize()} entry is not a JSON object",
            details={"type": type(raw).__name__},
        )
    name = raw.get("name")
    if isinstance(name, str):
        return name
    return "" if name is None else str(name)


def extra_fields(raw: dict[str, Any], claimed: frozenset[str]) -> ExtraFields:
    """Collect unclaimed keys in source order."""
    return tuple((key, value) for key, value in raw.items() if key not in claimed)


# =============================================================================
# Decoders
# =============================================================================


SPELL_KEYS = IDENTITY_KEYS | {
    "level",
    "school",
    "meta",
    "time",
    "range",
    "components",
    "duration",
    "entries",
    "scalingLevelDice",
    "entriesHigher",
    "damageInflict",
    "savingThrow",
    "classes",
    "miscTags",
    "areaTags",
    "reprintedAs",
}


def decode_spell(raw: Any) -> Spell:
    """Decode one spell object.

    Raises:
        RenderError: If the value is not a JSON object.
    """
    name = _entity_name(raw, EntityKind.SPELL)
    level = raw.get("level")
    meta = raw.get("meta") if isinstance(raw.get("meta"), dict) else {}
    reprinted = raw.get("reprintedAs")
    return Spell(
        name=name,
        source=_source_info(raw),
        level=level if isinstance(level, int) and not isinstance(level, bool) else (
            None if level is None else Unrecognized(level)
        ),
        school=_text(raw.get("school")),
        ritual=meta.get("ritual") is True,
        casting_times=classify_casting_times(raw.get("time")),
        range=classify_range(raw.get("range")),
        components=classify_components(raw.get("components")),
        durations=classify_durations(raw.get("duration")),
        entries=classify_entries(raw.get("entries")),
        scaling=classify_scaling(raw.get("scalingLevelDice")),
        entries_higher=classify_entries(raw.get("entriesHigher")),
        damage_types=_strings(raw.get("damageInflict")),
        saving_throws=_strings(raw.get("savingThrow")),
        classes=classify_class_names(raw.get("classes")),
        misc_tags=_strings(raw.get("miscTags")),
        area_tags=_strings(raw.get("areaTags")),
        reprinted_as=tuple(reprinted) if isinstance(reprinted, list) else (),
        extra_fields=extra_fields(raw, SPELL_KEYS),
    )


MONSTER_KEYS = IDENTITY_KEYS | set(ABILITY_KEYS) | {
    "size",
    "type",
    "alignment",
    "ac",
    "hp",
    "speed",
    "save",
    "skill",
    "senses",
    "passive",
    "languages",
    "cr",
    "trait",
    "action",
    "reaction",
    "legendary",
    "environment",
}


def decode_monster(raw: Any) -> Monster:
    """Decode one monster object.

    Raises:
        RenderError: If the value is not a JSON object.
    """
    name = _entity_name(raw, EntityKind.MONSTER)
    passive = raw.get("passive")
    return Monster(
        name=name,
        source=_source_info(raw),
        size=classify_size(raw.get("size")),
        creature_type=classify_creature_type(raw.get("type")),
        alignment=classify_alignment(raw.get("alignment")),
        armor_class=classify_armor_class(raw.get("ac")),
        hit_points=classify_hit_points(raw.get("hp")),
        speed=classify_speed(raw.get("speed")),
        abilities=tuple((key, raw[key]) for key in ABILITY_KEYS if key in raw),
        saves=classify_bonus_map(raw.get("save")),
        skills=classify_bonus_map(raw.get("skill")),
        senses=classify_text_list(raw.get("senses")),
        passive_perception=passive if is_number(passive) else None,
        languages=classify_text_list(raw.get("languages")),
        challenge_rating=classify_challenge_rating(raw.get("cr")),
        traits=classify_named_blocks(raw.get("trait")),
        actions=classify_named_blocks(raw.get("action")),
        reactions=classify_named_blocks(raw.get("reaction")),
        legendary=classify_named_blocks(raw.get("legendary")),
        environment=_strings(raw.get("environment")),
        extra_fields=extra_fields(raw, MONSTER_KEYS),
    )


ITEM_KEYS = IDENTITY_KEYS | {
    "type",
    "rarity",
    "reqAttune",
    "attunement",
    "weight",
    "value",
    "entries",
    "tier",
}


def decode_item(raw: Any) -> Item:
    """Decode one item object.

    Raises:
        RenderError: If the value is not a JSON object.
    """
    name = _entity_name(raw, EntityKind.ITEM)
    weight = raw.get("weight")
    return Item(
        name=name,
        source=_source_info(raw),
        item_type=_text(raw.get("type")),
        rarity=_text(raw.get("rarity")),
        attunement=classify_attunement(raw.get("reqAttune"), raw.get("attunement")),
        weight=weight if is_number(weight) else None,
        value=classify_item_value(raw.get("value")),
        entries=classify_entries(raw.get("entries")),
        tier=_text(raw.get("tier")),
        extra_fields=extra_fields(raw, ITEM_KEYS),
    )


DECODERS: dict[EntityKind, Callable[[Any], Entity]] = {
    EntityKind.SPELL: decode_spell,
    EntityKind.MONSTER: decode_monster,
    EntityKind.ITEM: decode_item,
}


__all__ = [
    "DECODERS",
    "Entity",
    "ExtraFields",
    "Item",
    "Monster",
    "SourceInfo",
    "Spell",
    "decode_item",
    "decode_monster",
    "decode_spell",
    "extra_fields",
    "is_flag_set",
]
