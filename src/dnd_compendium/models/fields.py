"""Closed variant types for polymorphic 5etools fields.

A single logical value may be encoded as a string, a number, an object or
an array depending on the source file. Each ``classify_*`` function inspects
the raw JSON value once and returns one variant from a closed set, so the
renderers never inspect raw JSON types themselves.

Every classifier is total:

* an absent value (``None``) stays ``None`` and its section is skipped;
* a recognised shape becomes a typed variant;
* anything else becomes :class:`Unrecognized` carrying the raw value.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeGuard


Number = int | float

SPEED_KINDS: tuple[str, ...] = ("walk", "fly", "swim", "climb", "burrow")


def is_number(value: Any) -> TypeGuard[Number]:
    """Check for a JSON number, excluding booleans."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _strings(values: Any) -> tuple[str, ...]:
    if not isinstance(values, list):
        return ()
    return tuple(value for value in values if isinstance(value, str))


@dataclass(frozen=True)
class Unrecognized:
    """A value whose shape matches no known encoding of its field."""

    raw: Any


# =============================================================================
# Monster Fields
# =============================================================================


@dataclass(frozen=True)
class SizeCode:
    code: str


@dataclass(frozen=True)
class CreatureType:
    """Creature type with optional tags, e.g. humanoid (elf, shapechanger)."""

    name: str
    tags: tuple[str, ...] = ()


@dataclass(frozen=True)
class AlignmentCodes:
    """Alignment as groups of codes or words.

    Each group reads as one phrase ("chaotic evil"). Several groups appear
    when the source lists alternative alignments.
    """

    groups: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class ArmorClass:
    value: Number | str
    sources: tuple[str, ...] = ()


@dataclass(frozen=True)
class HitPoints:
    average: Number | None = None
    formula: str | None = None
    special: str | None = None


@dataclass(frozen=True)
class SpeedEntry:
    kind: str
    value: Number | str
    condition: str | None = None


@dataclass(frozen=True)
class Speed:
    entries: tuple[SpeedEntry, ...]


@dataclass(frozen=True)
class ChallengeRating:
    value: Number | str


@dataclass(frozen=True)
class BonusMap:
    """Ordered name → bonus pairs, used for saving throws and skills."""

    pairs: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class TextList:
    items: tuple[str, ...]


def classify_size(raw: Any) -> SizeCode | Unrecognized | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        return SizeCode(raw)
    if isinstance(raw, list) and raw and isinstance(raw[0], str):
        return SizeCode(raw[0])
    return Unrecognized(raw)


def _type_tag(tag: Any) -> str | None:
    if isinstance(tag, str):
        return tag
    if isinstance(tag, dict) and isinstance(tag.get("tag"), str):
        prefix = tag.get("prefix")
        return f"{prefix} {tag['tag']}" if isinstance(prefix, str) else tag["tag"]
    return None


def classify_creature_type(raw: Any) -> CreatureType | Unrecognized | None:
    """Classify a creature type.

    Accepts ``"humanoid"``, ``{"type": "humanoid", "tags": [...]}`` and
    ``{"type": {"choose": ["beast", "monstrosity"]}}``. Tags may be plain
    strings or ``{"tag": ..., "prefix": ...}`` objects.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        return CreatureType(raw)
    if not isinstance(raw, dict):
        return Unrecognized(raw)

    kind = raw.get("type")
    if isinstance(kind, dict) and _strings(kind.get("choose")):
        name = " or ".join(_strings(kind.get("choose")))
    elif isinstance(kind, str):
        name = kind
    else:
        return Unrecognized(raw)

    tags = raw.get("tags") if isinstance(raw.get("tags"), list) else []
    labels = tuple(label for label in map(_type_tag, tags) if label)
    return CreatureType(name, labels)


def _alignment_group(values: list[Any]) -> tuple[str, ...] | None:
    group: list[str] = []
    for value in values:
        if isinstance(value, str):
            group.append(value)
        else:
            return None
    return tuple(group)


def classify_alignment(raw: Any) -> AlignmentCodes | Unrecognized | None:
    """Classify an alignment.

    Accepts a code or phrase string, an array of codes, or an array of
    ``{"alignment": [...]}`` / ``{"special": "..."}`` objects.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        return AlignmentCodes(((raw,),))
    if not isinstance(raw, list):
        return Unrecognized(raw)

    flat = _alignment_group(raw)
    if flat is not None:
        return AlignmentCodes((flat,) if flat else ())

    groups: list[tuple[str, ...]] = []
    for value in raw:
        if isinstance(value, dict) and isinstance(value.get("special"), str):
            groups.append((value["special"],))
        elif isinstance(value, dict) and isinstance(value.get("alignment"), list):
            group = _alignment_group(value["alignment"])
            if group is None:
                return Unrecognized(raw)
            groups.append(group)
        else:
            return Unrecognized(raw)
    return AlignmentCodes(tuple(groups))


def _armor_class_object(raw: dict[str, Any]) -> ArmorClass | None:
    value = raw.get("ac")
    if not is_number(value):
        return None
    return ArmorClass(value, _strings(raw.get("from")))


def classify_armor_class(raw: Any) -> ArmorClass | Unrecognized | None:
    """Classify armor class: ``15``, ``[15]`` or ``[{"ac": 16, "from": [...]}]``."""
    if raw is None:
        return None
    if is_number(raw):
        return ArmorClass(raw)
    first = raw[0] if isinstance(raw, list) and raw else raw
    if is_number(first):
        return ArmorClass(first)
    if isinstance(first, dict):
        armor = _armor_class_object(first)
        if armor is not None:
            return armor
    return Unrecognized(raw)


def classify_hit_points(raw: Any) -> HitPoints | Unrecognized | None:
    if raw is None:
        return None
    if is_number(raw):
        return HitPoints(average=raw)
    if isinstance(raw, dict):
        average = raw.get("average")
        formula = raw.get("formula")
        if is_number(average):
            return HitPoints(average=average, formula=formula if isinstance(formula, str) else None)
        if isinstance(raw.get("special"), str):
            return HitPoints(special=raw["special"])
    return Unrecognized(raw)


def _speed_entry(kind: str, value: Any) -> SpeedEntry | None:
    if is_number(value) or isinstance(value, str):
        return SpeedEntry(kind, value)
    if isinstance(value, dict) and is_number(value.get("number")):
        condition = value.get("condition")
        return SpeedEntry(kind, value["number"], condition if isinstance(condition, str) else None)
    return None


def classify_speed(raw: Any) -> Speed | Unrecognized | None:
    """Classify a speed map.

    Movement kinds are kept in the fixed order walk, fly, swim, climb,
    burrow. A bare number is a walking speed.
    """
    if raw is None:
        return None
    if is_number(raw):
        return Speed((SpeedEntry("walk", raw),))
    if not isinstance(raw, dict):
        return Unrecognized(raw)
    entries = (_speed_entry(kind, raw[kind]) for kind in SPEED_KINDS if kind in raw)
    return Speed(tuple(entry for entry in entries if entry is not None))


def classify_challenge_rating(raw: Any) -> ChallengeRating | Unrecognized | None:
    if raw is None:
        return None
    if is_number(raw) or isinstance(raw, str):
        return ChallengeRating(raw)
    if isinstance(raw, dict):
        value = raw.get("cr")
        if is_number(value) or isinstance(value, str):
            return ChallengeRating(value)
    return Unrecognized(raw)


def classify_bonus_map(raw: Any) -> BonusMap | Unrecognized | None:
    """Classify a saving throw or skill map; non-string bonuses are skipped."""
    if raw is None:
        return None
    if not isinstance(raw, dict):
        return Unrecognized(raw)
    return BonusMap(tuple((name, bonus) for name, bonus in raw.items() if isinstance(bonus, str)))


def classify_text_list(raw: Any) -> TextList | Unrecognized | None:
    if raw is None:
        return None
    if isinstance(raw, str):
        return TextList((raw,) if raw else ())
    if isinstance(raw, list):
        return TextList(_strings(raw))
    return Unrecognized(raw)


# =============================================================================
# Spell Fields
# =============================================================================


@dataclass(frozen=True)
class CastingTime:
    number: Number | None
    unit: str
    condition: str | None = None


@dataclass(frozen=True)
class SpellRange:
    kind: str
    distance_kind: str | None = None
    amount: Number | None = None


@dataclass(frozen=True)
class Duration:
    kind: str
    amount: Number | None = None
    unit: str | None = None
    condition: str | None = None
    ends: tuple[str, ...] = ()
    concentration: bool = False


@dataclass(frozen=True)
class Material:
    """Material component; ``text`` describes it and any cost."""

    text: str | None = None


@dataclass(frozen=True)
class Components:
    verbal: bool = False
    somatic: bool = False
    material: Material | None = None
    royalty: bool = False


@dataclass(frozen=True)
class ScalingStep:
    level: str
    dice: str


@dataclass(frozen=True)
class ScalingTable:
    label: str | None
    steps: tuple[ScalingStep, ...]


def _optional_text(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _optional_number(value: Any) -> Number | None:
    return value if is_number(value) else None


def classify_casting_times(raw: Any) -> tuple[CastingTime | Unrecognized, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        return (Unrecognized(raw),)
    times: list[CastingTime | Unrecognized] = []
    for value in raw:
        if isinstance(value, dict) and isinstance(value.get("unit"), str):
            times.append(
                CastingTime(
                    _optional_number(value.get("number")),
                    value["unit"],
                    _optional_text(value.get("condition")),
                )
            )
        else:
            times.append(Unrecognized(value))
    return tuple(times)


def classify_range(raw: Any) -> SpellRange | Unrecognized | None:
    if raw is None:
        return None
    if not isinstance(raw, dict) or not isinstance(raw.get("type"), str):
        return Unrecognized(raw)
    distance = raw.get("distance") if isinstance(raw.get("distance"), dict) else {}
    return SpellRange(
        raw["type"],
        _optional_text(distance.get("type")),
        _optional_number(distance.get("amount")),
    )


def _duration(value: Any) -> Duration | Unrecognized:
    if not isinstance(value, dict) or not isinstance(value.get("type"), str):
        return Unrecognized(value)
    span = value.get("duration") if isinstance(value.get("duration"), dict) else {}
    return Duration(
        kind=value["type"],
        amount=_optional_number(span.get("amount")),
        unit=_optional_text(span.get("type")),
        condition=_optional_text(value.get("condition")) or None,
        ends=_strings(value.get("ends")),
        concentration=value.get("concentration") is True,
    )


def classify_durations(raw: Any) -> tuple[Duration | Unrecognized, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        return (Unrecognized(raw),)
    return tuple(_duration(value) for value in raw)


def _material(raw: Any) -> Material | None:
    if raw is None or raw is False:
        return None
    if isinstance(raw, str):
        return Material(text=raw)
    if isinstance(raw, dict):
        return Material(text=_optional_text(raw.get("text")))
    return Material()


def classify_components(raw: Any) -> Components | Unrecognized | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        return Unrecognized(raw)
    return Components(
        verbal=raw.get("v") is True,
        somatic=raw.get("s") is True,
        material=_material(raw.get("m")),
        royalty=raw.get("r") is True,
    )


def _scaling_dice(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and is_number(value.get("count")) and is_number(value.get("faces")):
        return f"{int(value['count'])}d{int(value['faces'])}"
    return None


def _scaling_table(raw: dict[str, Any]) -> ScalingTable | Unrecognized:
    scaling = raw.get("scaling")
    if not isinstance(scaling, dict):
        return Unrecognized(raw)
    steps = tuple(
        ScalingStep(str(level), dice)
        for level, dice in ((level, _scaling_dice(value)) for level, value in scaling.items())
        if dice is not None
    )
    return ScalingTable(_optional_text(raw.get("label")) or None, steps)


def classify_scaling(raw: Any) -> tuple[ScalingTable | Unrecognized, ...] | None:
    """Classify cantrip scaling dice.

    Accepts ``{"label": ..., "scaling": {"1": "1d6", ...}}``, an array of
    such objects, or an array of ``{"level": 5, "dice": ...}`` steps.
    """
    if raw is None:
        return None
    if isinstance(raw, dict):
        return (_scaling_table(raw),)
    if not isinstance(raw, list):
        return (Unrecognized(raw),)

    tables: list[ScalingTable | Unrecognized] = []
    steps: list[ScalingStep] = []
    for value in raw:
        if isinstance(value, dict) and "scaling" in value:
            tables.append(_scaling_table(value))
        elif isinstance(value, dict) and is_number(value.get("level")):
            dice = _scaling_dice(value.get("dice"))
            if dice is None:
                tables.append(Unrecognized(value))
            else:
                steps.append(ScalingStep(str(int(value["level"])), dice))
        else:
            tables.append(Unrecognized(value))
    if steps:
        tables.insert(0, ScalingTable(None, tuple(steps)))
    return tuple(tables)


def classify_class_names(raw: Any) -> tuple[str, ...] | Unrecognized | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        return Unrecognized(raw)
    classes = raw.get("fromClassList")
    if not isinstance(classes, list):
        return ()
    return tuple(
        entry["name"] for entry in classes if isinstance(entry, dict) and isinstance(entry.get("name"), str)
    )


# =============================================================================
# Item Fields
# =============================================================================


@dataclass(frozen=True)
class Attunement:
    required: bool
    condition: str | None = None


@dataclass(frozen=True)
class ItemValue:
    quantity: Number
    unit: str


def classify_attunement(explicit: Any, generic: Any) -> Attunement | Unrecognized | None:
    """Classify attunement from the ``reqAttune`` and ``attunement`` keys.

    The explicit ``reqAttune`` key wins whenever it is present, even when
    it is false; ``attunement`` is only consulted in its absence.
    """
    raw = explicit if explicit is not None else generic
    if raw is None:
        return None
    if isinstance(raw, bool):
        return Attunement(raw)
    if isinstance(raw, str):
        return Attunement(True, raw or None)
    return Unrecognized(raw)


def classify_item_value(raw: Any) -> ItemValue | Unrecognized | None:
    if raw is None:
        return None
    if is_number(raw):
        return ItemValue(raw, "gp")
    if isinstance(raw, dict) and is_number(raw.get("quantity")) and isinstance(raw.get("unit"), str):
        return ItemValue(raw["quantity"], raw["unit"])
    return Unrecognized(raw)


# =============================================================================
# Entries
# =============================================================================


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class ListItem:
    name: str | None
    text: str


@dataclass(frozen=True)
class BulletList:
    items: tuple[ListItem, ...]


@dataclass(frozen=True)
class Table:
    caption: str | None
    labels: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class EntrySection:
    """A named group of entries (``{"type": "entries", "name": ...}``)."""

    name: str | None
    entries: tuple[Entry, ...]


Entry = Paragraph | BulletList | Table | EntrySection | Unrecognized


@dataclass(frozen=True)
class NamedBlock:
    """A trait, action, reaction or legendary action."""

    name: str
    entries: tuple[Entry, ...]


def _list_item(raw: Any) -> ListItem | None:
    if isinstance(raw, str):
        return ListItem(None, raw)
    if not isinstance(raw, dict):
        return None
    text = raw.get("entry")
    if not isinstance(text, str):
        text = " ".join(_strings(raw.get("entries")))
    return ListItem(_optional_text(raw.get("name")), text)


def _table_cell(raw: Any) -> str:
    if isinstance(raw, str):
        return raw
    if is_number(raw):
        return str(raw)
    if not isinstance(raw, dict):
        return ""
    if isinstance(raw.get("text"), str):
        return raw["text"]
    roll = raw.get("roll")
    if isinstance(roll, dict):
        if is_number(roll.get("exact")):
            return str(roll["exact"])
        if is_number(roll.get("min")) and is_number(roll.get("max")):
            return f"{roll['min']}-{roll['max']}"
    return ""


def _entry(raw: Any) -> Entry:
    if isinstance(raw, str):
        return Paragraph(raw)
    if not isinstance(raw, dict):
        return Unrecognized(raw)

    entry_type = raw.get("type")
    if entry_type == "list" and isinstance(raw.get("items"), list):
        items = (_list_item(item) for item in raw["items"])
        return BulletList(tuple(item for item in items if item is not None))
    if entry_type == "table":
        rows = raw.get("rows") if isinstance(raw.get("rows"), list) else []
        return Table(
            caption=_optional_text(raw.get("caption")),
            labels=_strings(raw.get("colLabels")),
            rows=tuple(tuple(_table_cell(cell) for cell in row) for row in rows if isinstance(row, list)),
        )
    if isinstance(raw.get("entries"), list):
        return EntrySection(_optional_text(raw.get("name")), classify_entries(raw["entries"]) or ())
    return Unrecognized(raw)


def classify_entries(raw: Any) -> tuple[Entry, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        return (Unrecognized(raw),)
    return tuple(_entry(value) for value in raw)


def classify_named_blocks(raw: Any) -> tuple[NamedBlock | Unrecognized, ...] | None:
    if raw is None:
        return None
    if not isinstance(raw, list):
        return (Unrecognized(raw),)
    blocks: list[NamedBlock | Unrecognized] = []
    for value in raw:
        if isinstance(value, dict):
            blocks.append(
                NamedBlock(_optional_text(value.get("name")) or "", classify_entries(value.get("entries")) or ())
            )
        else:
            blocks.append(Unrecognized(value))
    return tuple(blocks)
