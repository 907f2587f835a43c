"""Spell documents.

Section order: name, level and school, casting time, range, components,
duration, description, scaling dice, higher-level casting, damage types,
saving throws, classes, source, then unmapped fields.
"""

from __future__ import annotations

from dnd_compendium.models.entities import Spell, decode_spell
from dnd_compendium.models.fields import ScalingTable, Unrecognized
from dnd_compendium.render.document import RenderedDocument
from dnd_compendium.render.entries import flatten_sections, render_entries
from dnd_compendium.render.normalize import (
    casting_time_text,
    class_names_text,
    components_text,
    duration_text,
    fallback_line,
    range_text,
    scaling_level_label,
    scaling_steps,
    school_name,
    spell_level_text,
)
from dnd_compendium.render.sections import (
    EntityRenderer,
    Section,
    emphasis,
    fallback_section,
    joined_lines,
    labeled,
    name_section,
    source_section,
)


def subtitle_text(spell: Spell) -> str:
    """``3rd-level Evocation``; ritual spells get a ``(ritual)`` suffix."""
    parts = []
    if spell.level is not None:
        parts.append(spell_level_text(spell.level))
    if spell.school:
        parts.append(school_name(spell.school))
    text = " ".join(parts)
    if text and spell.ritual:
        text += " (ritual)"
    return text


def scaling_lines(tables: tuple[ScalingTable | Unrecognized, ...]) -> list[str]:
    if not tables:
        return []
    lines = ["**Scaling:**"]
    for table in tables:
        if isinstance(table, Unrecognized):
            lines.append(fallback_line("scalingLevelDice", table.raw))
            continue
        if table.label:
            lines.append(f"*{table.label}*")
        lines.extend(f"- {scaling_level_label(step.level)}: {step.dice}" for step in scaling_steps(table.steps))
    return lines


def higher_level_blocks(spell: Spell) -> list[str]:
    blocks = render_entries(flatten_sections(spell.entries_higher or ()))
    if blocks:
        blocks[0] = f"**At Higher Levels:** {blocks[0]}"
    return blocks


def _listed(values: tuple[str, ...]) -> str:
    return ", ".join(values)


SPELL_SECTIONS: tuple[Section[Spell], ...] = (
    name_section(),
    Section("subtitle", lambda spell: spell, subtitle_text, emphasis),
    Section("casting_time", lambda spell: spell.casting_times, casting_time_text, labeled("**Casting Time:**")),
    Section("range", lambda spell: spell.range, range_text, labeled("**Range:**")),
    Section("components", lambda spell: spell.components, components_text, labeled("**Components:**")),
    Section("duration", lambda spell: spell.durations, duration_text, labeled("**Duration:**")),
    Section("entries", lambda spell: spell.entries, render_entries),
    Section("scaling", lambda spell: spell.scaling, scaling_lines, joined_lines),
    Section("higher_levels", lambda spell: spell, higher_level_blocks),
    Section("damage_types", lambda spell: spell.damage_types, _listed, labeled("**Damage Type:**")),
    Section("saving_throws", lambda spell: spell.saving_throws, _listed, labeled("**Saving Throw:**")),
    Section("classes", lambda spell: spell.classes, class_names_text, labeled("**Classes:**")),
    source_section(),
    fallback_section(),
)


SPELL_RENDERER: EntityRenderer[Spell] = EntityRenderer(decode_spell, SPELL_SECTIONS)


def render_spell(spell: Spell) -> RenderedDocument:
    """Render a decoded spell to its document."""
    return SPELL_RENDERER.render(spell)
