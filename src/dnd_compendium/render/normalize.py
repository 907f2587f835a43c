"""Field normalization: classified field values to display strings.

Every function here is total over its field's variants. Recognized shapes
follow fixed phrasing tables; :class:`Unrecognized` values fall back to the
raw value's textual form. Nothing in this module raises for a field shape.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from typing import Any

from dnd_compendium.markup.tags import substitute
from dnd_compendium.models.entities import ExtraFields, SourceInfo
from dnd_compendium.models.enums import ALIGNMENT_WORDS, Size, SpellSchool
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
    HitPoints,
    ItemValue,
    Number,
    ScalingStep,
    SizeCode,
    Speed,
    SpellRange,
    TextList,
    Unrecognized,
    is_number,
)


UNKNOWN = "Unknown"

SIZE_NAMES: dict[str, str] = {size.value: size.full_name for size in Size}
SCHOOL_NAMES: dict[str, str] = {school.value: school.full_name for school in SpellSchool}


# =============================================================================
# Generic Helpers
# =============================================================================


def raw_text(raw: Any) -> str:
    """Textual form of a raw JSON value (strings verbatim, others as compact JSON)."""
    if isinstance(raw, str):
        return raw
    return json.dumps(raw, ensure_ascii=False, separators=(",", ":"))


def format_number(value: Number) -> str:
    """Format a JSON number, dropping the fraction of integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _measure(amount: Number | None, unit: str | None, joiner: str = " ") -> str:
    parts = [format_number(amount) if amount is not None else None, unit]
    return joiner.join(part for part in parts if part)


def ordinal(number: int) -> str:
    """Ordinal numeral (1st, 2nd, 3rd, 4th, 11th, 21st)."""
    if 10 <= number % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(number % 10, "th")
    return f"{number}{suffix}"


def fallback_line(key: str, raw: Any) -> str:
    return f"#todo {key}: {json.dumps(raw, ensure_ascii=False, separators=(',', ':'))}"


def fallback_lines(fields: ExtraFields) -> list[str]:
    """Visible markers for every unclaimed source field."""
    return [fallback_line(key, value) for key, value in fields]


# =============================================================================
# Monster Fields
# =============================================================================


def size_name(code: str) -> str:
    """Expand a size code (``M`` → ``Medium``); unknown codes are returned as is."""
    return SIZE_NAMES.get(code, code)


def size_text(size: SizeCode | Unrecognized) -> str:
    if isinstance(size, SizeCode):
        return size_name(size.code)
    return UNKNOWN


def alignment_word(code: str) -> str:
    """Expand a one-letter alignment code; longer strings pass through."""
    return ALIGNMENT_WORDS.get(code, code)


def alignment_text(alignment: AlignmentCodes | Unrecognized) -> str:
    if isinstance(alignment, Unrecognized):
        return raw_text(alignment.raw)
    return " or ".join(" ".join(alignment_word(code) for code in group) for group in alignment.groups)


def creature_type_text(creature_type: CreatureType | Unrecognized) -> str:
    if isinstance(creature_type, Unrecognized):
        return raw_text(creature_type.raw)
    if creature_type.tags:
        return f"{creature_type.name} ({', '.join(creature_type.tags)})"
    return creature_type.name


def ability_modifier(score: int) -> int:
    """Ability modifier, ``floor((score - 10) / 2)``.

    Example:
        >>> ability_modifier(8)
        -1
        >>> ability_modifier(1)
        -5
    """
    return (score - 10) // 2


def ability_cell(score: Any) -> str:
    """Score with signed modifier, e.g. ``16 (+3)``; non-integers render as a dash."""
    if isinstance(score, int) and not isinstance(score, bool):
        return f"{score} ({ability_modifier(score):+d})"
    return "—"


def armor_class_text(armor: ArmorClass | Unrecognized) -> str:
    if isinstance(armor, Unrecognized):
        return raw_text(armor.raw)
    value = format_number(armor.value) if is_number(armor.value) else str(armor.value)
    if armor.sources:
        return f"{value} ({', '.join(substitute(source) for source in armor.sources)})"
    return value


def hit_points_text(hit_points: HitPoints | Unrecognized) -> str:
    if isinstance(hit_points, Unrecognized):
        return raw_text(hit_points.raw)
    if hit_points.average is None:
        return hit_points.special or UNKNOWN
    average = format_number(hit_points.average)
    if hit_points.formula:
        return f"{average} ({hit_points.formula})"
    return average


def speed_text(speed: Speed | Unrecognized) -> str:
    """Comma-joined speeds; walking speed is unlabeled, numbers get ``ft.``."""
    if isinstance(speed, Unrecognized):
        return raw_text(speed.raw)
    parts: list[str] = []
    for entry in speed.entries:
        value = f"{format_number(entry.value)} ft." if is_number(entry.value) else str(entry.value)
        text = value if entry.kind == "walk" else f"{entry.kind} {value}"
        parts.append(f"{text} {entry.condition}" if entry.condition else text)
    return ", ".join(parts)


def challenge_rating_text(rating: ChallengeRating | Unrecognized) -> str:
    """Challenge rating; numbers print as integers, strings such as ``1/4`` verbatim."""
    if isinstance(rating, Unrecognized):
        return raw_text(rating.raw)
    if is_number(rating.value):
        return f"{rating.value:.0f}"
    return rating.value


def bonus_map_text(
    bonuses: BonusMap | Unrecognized,
    *,
    label: Callable[[str], str] = str,
) -> str:
    if isinstance(bonuses, Unrecognized):
        return raw_text(bonuses.raw)
    return ", ".join(f"{label(name)} {bonus}" for name, bonus in bonuses.pairs)


def save_label(ability: str) -> str:
    return ability.upper()


def skill_label(skill: str) -> str:
    return skill[:1].upper() + skill[1:]


def text_list_text(values: TextList | Unrecognized) -> str:
    if isinstance(values, Unrecognized):
        return raw_text(values.raw)
    return ", ".join(values.items)


# =============================================================================
# Spell Fields
# =============================================================================


def spell_level_text(level: int | Unrecognized) -> str:
    """``Cantrip`` for level 0, otherwise ``3rd-level`` style."""
    if isinstance(level, Unrecognized):
        return raw_text(level.raw)
    if level == 0:
        return "Cantrip"
    return f"{ordinal(level)}-level"


def school_name(code: str) -> str:
    """Expand a school code (``V`` → ``Evocation``); unknown codes pass through."""
    return SCHOOL_NAMES.get(code, code)


def scaling_level_label(level: str) -> str:
    if level.isdecimal():
        return f"{ordinal(int(level))} level"
    return f"{level} level"


def scaling_steps(steps: Iterable[ScalingStep]) -> list[ScalingStep]:
    """Steps sorted by numeric level; non-numeric levels sort last."""
    return sorted(
        steps,
        key=lambda step: (not step.level.isdecimal(), int(step.level) if step.level.isdecimal() else 0),
    )


CASTING_UNIT_LABELS: dict[str, str] = {
    "bonus": "bonus action",
}


def _casting_time(time: CastingTime | Unrecognized) -> str:
    if isinstance(time, Unrecognized):
        return raw_text(time.raw)
    text = _measure(time.number, CASTING_UNIT_LABELS.get(time.unit, time.unit))
    if time.condition:
        return f"{text}, {time.condition}"
    return text


def casting_time_text(times: Iterable[CastingTime | Unrecognized]) -> str:
    return ", ".join(_casting_time(time) for time in times)


POINT_RANGE_LABELS: dict[str, str] = {
    "self": "Self",
    "touch": "Touch",
    "sight": "Sight",
    "unlimited": "Unlimited",
}

AREA_RANGE_SHAPES: tuple[str, ...] = (
    "radius",
    "cone",
    "line",
    "cube",
    "sphere",
    "hemisphere",
    "cylinder",
    "emanation",
)


def _point_range(spell_range: SpellRange) -> str:
    label = POINT_RANGE_LABELS.get(spell_range.distance_kind or "")
    return label or _measure(spell_range.amount, spell_range.distance_kind)


def _area_range(spell_range: SpellRange) -> str:
    return f"{_measure(spell_range.amount, spell_range.distance_kind, '-')} {spell_range.kind}"


RANGE_FORMATS: dict[str, Callable[[SpellRange], str]] = {
    "point": _point_range,
    **{shape: _area_range for shape in AREA_RANGE_SHAPES},
    "special": lambda spell_range: "Special",
}


def range_text(spell_range: SpellRange | Unrecognized) -> str:
    """Range phrasing, e.g. ``Self``, ``60 feet`` or ``20-feet radius``."""
    if isinstance(spell_range, Unrecognized):
        return raw_text(spell_range.raw)
    formatter = RANGE_FORMATS.get(spell_range.kind)
    if formatter is None:
        return spell_range.kind
    return formatter(spell_range)


DURATION_ENDS: dict[str, str] = {
    "dispel": "dispelled",
    "trigger": "triggered",
    "discharge": "discharged",
}


def _timed(duration: Duration) -> str:
    span = _measure(duration.amount, duration.unit)
    if duration.concentration:
        return f"Concentration, up to {span}"
    return span


def _concentration(duration: Duration) -> str:
    if duration.amount is None:
        return "Concentration"
    return f"Concentration, up to {_measure(duration.amount, duration.unit)}"


def _permanent(duration: Duration) -> str:
    if duration.ends:
        text = "Until " + " or ".join(DURATION_ENDS.get(end, end) for end in duration.ends)
    else:
        text = "Until dispelled"
    if duration.condition:
        return f"{text} or {duration.condition}"
    return text


DURATION_FORMATS: dict[str, Callable[[Duration], str]] = {
    "instant": lambda duration: "Instantaneous",
    "timed": _timed,
    "concentration": _concentration,
    "permanent": _permanent,
    "special": lambda duration: "Special",
}


def _duration(duration: Duration | Unrecognized) -> str:
    if isinstance(duration, Unrecognized):
        return raw_text(duration.raw)
    formatter = DURATION_FORMATS.get(duration.kind)
    if formatter is None:
        return duration.kind
    return formatter(duration)


def duration_text(durations: Iterable[Duration | Unrecognized]) -> str:
    return ", ".join(_duration(duration) for duration in durations)


def components_text(components: Components | Unrecognized) -> str:
    """Present components in V, S, M, R order; ``M (text)`` when described."""
    if isinstance(components, Unrecognized):
        return raw_text(components.raw)
    parts: list[str] = []
    if components.verbal:
        parts.append("V")
    if components.somatic:
        parts.append("S")
    if components.material is not None:
        text = components.material.text
        parts.append(f"M ({text})" if text else "M")
    if components.royalty:
        parts.append("R")
    return ", ".join(parts)


def class_names_text(classes: tuple[str, ...] | Unrecognized) -> str:
    if isinstance(classes, Unrecognized):
        return raw_text(classes.raw)
    return ", ".join(classes)


# =============================================================================
# Item Fields
# =============================================================================


def attunement_text(attunement: Attunement | Unrecognized) -> str:
    if isinstance(attunement, Unrecognized):
        return f"Requires attunement {raw_text(attunement.raw)}"
    if not attunement.required:
        return ""
    if attunement.condition:
        return f"Requires attunement {attunement.condition}"
    return "Requires attunement"


def weight_text(weight: Number) -> str:
    if weight <= 0:
        return ""
    return f"{weight:.1f} lb."


def item_value_text(value: ItemValue | Unrecognized) -> str:
    if isinstance(value, Unrecognized):
        return raw_text(value.raw)
    return f"{format_number(value.quantity)} {value.unit}"


# =============================================================================
# Shared
# =============================================================================


def source_text(source: SourceInfo) -> str:
    """Book code, optional page, then independent SRD / Basic Rules suffixes."""
    text = source.book
    if source.page:
        text += f", page {source.page}"
    if source.srd:
        text += " (SRD)"
    if source.basic_rules:
        text += " (Basic Rules)"
    return text
