"""Enumeration types and code tables for 5etools reference data.

The source data abbreviates sizes, schools and alignments with one-letter
codes. The tables here expand them for display.
"""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Kinds of entity the converter renders.

    The value is the key of the entity array in a source file's top-level
    object (``{"spell": [...]}``).
    """

    SPELL = "spell"
    MONSTER = "monster"
    ITEM = "item"

    @property
    def source_directory(self) -> str | None:
        """Get the data subdirectory holding this kind's files.

        Returns:
            Directory name, or None when the files sit in the data root.
        """
        directories = {
            EntityKind.SPELL: "spells",
            EntityKind.MONSTER: "bestiary",
            EntityKind.ITEM: None,
        }
        return directories[self]

    @property
    def envelope_keys(self) -> tuple[str, ...]:
        """Get the top-level keys whose arrays hold entities of this kind.

        Returns:
            Keys in reading order; base items live under 'baseitem'.
        """
        if self is EntityKind.ITEM:
            return ("item", "baseitem")
        return (self.value,)

    @property
    def output_directory(self) -> str:
        """Get the output subdirectory for rendered documents.

        Returns:
            Directory name (e.g., 'monsters').
        """
        return f"{self.value}s"


class Size(StrEnum):
    """Creature size codes."""

    TINY = "T"
    SMALL = "S"
    MEDIUM = "M"
    LARGE = "L"
    HUGE = "H"
    GARGANTUAN = "G"

    @property
    def full_name(self) -> str:
        """Get the display name of the size (e.g., 'Medium')."""
        return self.name.capitalize()


class SpellSchool(StrEnum):
    """Schools of magic, keyed by their source code."""

    ABJURATION = "A"
    CONJURATION = "C"
    DIVINATION = "D"
    ENCHANTMENT = "E"
    EVOCATION = "V"
    ILLUSION = "I"
    NECROMANCY = "N"
    TRANSMUTATION = "T"

    @property
    def full_name(self) -> str:
        """Get the display name of the school (e.g., 'Evocation')."""
        return self.name.capitalize()


ALIGNMENT_WORDS: dict[str, str] = {
    "L": "lawful",
    "N": "neutral",
    "C": "chaotic",
    "G": "good",
    "E": "evil",
    "U": "unaligned",
    "A": "any alignment",
}


ABILITY_KEYS: tuple[str, ...] = ("str", "dex", "con", "int", "wis", "cha")


__all__ = [
    "ABILITY_KEYS",
    "ALIGNMENT_WORDS",
    "EntityKind",
    "Size",
    "SpellSchool",
]
