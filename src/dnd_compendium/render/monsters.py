"""Monster stat block documents.

Section order: name, size/type/alignment, armor class, hit points, speed,
ability scores, saving throws, skills, senses, languages, challenge,
traits, actions, reactions, legendary actions, source, then unmapped fields.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from dnd_compendium.markup.tags import substitute
from dnd_compendium.models.entities import Monster, decode_monster
from dnd_compendium.models.enums import ABILITY_KEYS
from dnd_compendium.models.fields import BonusMap, NamedBlock, Paragraph, Unrecognized
from dnd_compendium.render.document import RenderedDocument
from dnd_compendium.render.entries import render_named
from dnd_compendium.render.normalize import (
    ability_cell,
    alignment_text,
    armor_class_text,
    bonus_map_text,
    challenge_rating_text,
    creature_type_text,
    fallback_line,
    format_number,
    hit_points_text,
    save_label,
    size_text,
    skill_label,
    speed_text,
    text_list_text,
)
from dnd_compendium.render.sections import (
    EntityRenderer,
    Section,
    emphasis,
    fallback_section,
    labeled,
    name_section,
    source_section,
    titled,
)


# Action names whose recharge annotation is fixed in the heading. The
# matching tag is removed from the action's text.
FIXED_ACTION_ANNOTATIONS: dict[str, tuple[str, str]] = {
    "Mind Control Spores": ("(Recharge 5-6)", "{@recharge 5}"),
}


def subtitle_text(monster: Monster) -> str:
    """``Medium humanoid (elf), chaotic neutral``."""
    words = []
    if monster.size is not None:
        words.append(size_text(monster.size))
    if monster.creature_type is not None:
        words.append(creature_type_text(monster.creature_type))
    text = " ".join(word for word in words if word)
    alignment = alignment_text(monster.alignment) if monster.alignment is not None else ""
    if alignment:
        return f"{text}, {alignment}" if text else alignment
    return text


def ability_table(monster: Monster) -> str:
    scores = dict(monster.abilities)
    header = "|" + "|".join(key.upper() for key in ABILITY_KEYS) + "|"
    divider = "|" + "|".join(":---:" for _ in ABILITY_KEYS) + "|"
    values = "|" + "|".join(ability_cell(scores.get(key)) for key in ABILITY_KEYS) + "|"
    return "\n".join((header, divider, values))


def saves_text(saves: BonusMap | Unrecognized) -> str:
    return bonus_map_text(saves, label=save_label)


def skills_text(skills: BonusMap | Unrecognized) -> str:
    return bonus_map_text(skills, label=skill_label) or "None"


def senses_text(monster: Monster) -> str:
    parts = []
    if monster.senses is not None:
        parts.append(text_list_text(monster.senses))
    if monster.passive_perception is not None:
        parts.append(f"passive Perception {format_number(monster.passive_perception)}")
    return ", ".join(part for part in parts if part)


def _with_fixed_annotation(block: NamedBlock) -> NamedBlock:
    annotation, tag = FIXED_ACTION_ANNOTATIONS[block.name]
    entries = tuple(
        Paragraph(entry.text.replace(tag, "")) if isinstance(entry, Paragraph) else entry
        for entry in block.entries
    )
    return replace(block, name=f"{block.name} {annotation}", entries=entries)


def named_block(block: NamedBlock | Unrecognized, *, key: str) -> list[str]:
    """Render a trait or action as ``***Name.*** text``."""
    if isinstance(block, Unrecognized):
        return [fallback_line(key, block.raw)]
    if key == "action" and block.name in FIXED_ACTION_ANNOTATIONS:
        block = _with_fixed_annotation(block)
    return render_named(substitute(block.name), block.entries)


def _blocks(key: str) -> Callable[[tuple[NamedBlock | Unrecognized, ...]], list[str]]:
    def render_blocks(blocks: tuple[NamedBlock | Unrecognized, ...]) -> list[str]:
        rendered: list[str] = []
        for block in blocks:
            rendered.extend(named_block(block, key=key))
        return rendered

    return render_blocks


MONSTER_SECTIONS: tuple[Section[Monster], ...] = (
    name_section(),
    Section("subtitle", lambda monster: monster, subtitle_text, emphasis),
    Section("armor_class", lambda monster: monster.armor_class, armor_class_text, labeled("**Armor Class**")),
    Section("hit_points", lambda monster: monster.hit_points, hit_points_text, labeled("**Hit Points**")),
    Section("speed", lambda monster: monster.speed, speed_text, labeled("**Speed**")),
    Section("abilities", lambda monster: monster if monster.abilities else None, ability_table, lambda table: [table]),
    Section("saving_throws", lambda monster: monster.saves, saves_text, labeled("**Saving Throws**")),
    Section("skills", lambda monster: monster.skills or BonusMap(()), skills_text, labeled("**Skills**")),
    Section("senses", lambda monster: monster, senses_text, labeled("**Senses**")),
    Section("languages", lambda monster: monster.languages, text_list_text, labeled("**Languages**")),
    Section("challenge", lambda monster: monster.challenge_rating, challenge_rating_text, labeled("**Challenge**")),
    Section("traits", lambda monster: monster.traits, _blocks("trait"), titled("Traits")),
    Section("actions", lambda monster: monster.actions, _blocks("action"), titled("Actions")),
    Section("reactions", lambda monster: monster.reactions, _blocks("reaction"), titled("Reactions")),
    Section("legendary", lambda monster: monster.legendary, _blocks("legendary"), titled("Legendary Actions")),
    source_section(),
    fallback_section(),
)


MONSTER_RENDERER: EntityRenderer[Monster] = EntityRenderer(decode_monster, MONSTER_SECTIONS)


def render_monster(monster: Monster) -> RenderedDocument:
    """Render a decoded monster to its stat block document."""
    return MONSTER_RENDERER.render(monster)
