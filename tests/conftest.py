"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the compendium converter test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Callable, Generator


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from dnd_compendium.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "DND_COMPENDIUM_DATA_DIRECTORY": str(tmp_path / "data"),
        "DND_COMPENDIUM_OUT_DIRECTORY": str(tmp_path / "out"),
        "DND_COMPENDIUM_LOG_LEVEL": "DEBUG",
        "DND_COMPENDIUM_FAIL_FAST": "true",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


# =============================================================================
# Entity Fixtures
# =============================================================================


@pytest.fixture
def sample_spell_data() -> dict[str, Any]:
    """Provide a Fireball spell in 5etools form.

    Returns:
        Raw spell object.
    """
    return {
        "name": "Fireball",
        "source": "PHB",
        "page": 241,
        "srd": True,
        "level": 3,
        "school": "V",
        "time": [{"number": 1, "unit": "action"}],
        "range": {"type": "point", "distance": {"type": "feet", "amount": 150}},
        "components": {"v": True, "s": True, "m": "a tiny ball of bat guano and sulfur"},
        "duration": [{"type": "instant"}],
        "entries": [
            "A bright streak flashes from your pointing finger to a point you choose "
            "within range and then blossoms with a low roar into an explosion of flame. "
            "Each creature in a 20-foot-radius sphere centered on that point must make "
            "a Dexterity saving throw. A target takes {@damage 8d6} fire damage on a "
            "failed save, or half as much damage on a successful one.",
        ],
        "entriesHigher": [
            {
                "type": "entries",
                "name": "At Higher Levels",
                "entries": [
                    "When you cast this spell using a spell slot of 4th level or higher, "
                    "the damage increases by {@scaledamage 8d6|3-9|1d6} for each slot "
                    "level above 3rd.",
                ],
            },
        ],
        "damageInflict": ["fire"],
        "savingThrow": ["dexterity"],
        "classes": {
            "fromClassList": [
                {"name": "Sorcerer", "source": "PHB"},
                {"name": "Wizard", "source": "PHB"},
            ],
        },
    }


@pytest.fixture
def sample_monster_data() -> dict[str, Any]:
    """Provide a goblin stat block in 5etools form.

    Returns:
        Raw monster object.
    """
    return {
        "name": "Goblin",
        "source": "MM",
        "page": 166,
        "size": ["S"],
        "type": {"type": "humanoid", "tags": ["goblinoid"]},
        "alignment": ["N", "E"],
        "ac": [{"ac": 15, "from": ["{@item leather armor|phb|leather armor}", "{@item shield|phb|shield}"]}],
        "hp": {"average": 7, "formula": "2d6"},
        "speed": {"walk": 30},
        "str": 8,
        "dex": 14,
        "con": 10,
        "int": 10,
        "wis": 8,
        "cha": 8,
        "skill": {"stealth": "+6"},
        "senses": ["darkvision 60 ft."],
        "passive": 9,
        "languages": ["Common", "Goblin"],
        "cr": "1/4",
        "trait": [
            {
                "name": "Nimble Escape",
                "entries": [
                    "The goblin can take the Disengage or Hide action as a bonus action "
                    "on each of its turns.",
                ],
            },
        ],
        "action": [
            {
                "name": "Scimitar",
                "entries": [
                    "{@atk mw} {@hit 4} to hit, reach 5 ft., one target. {@h}5 "
                    "({@damage 1d6 + 2}) slashing damage.",
                ],
            },
        ],
        "environment": ["forest", "grassland", "hill", "underdark"],
    }


@pytest.fixture
def sample_item_data() -> dict[str, Any]:
    """Provide a Longsword in 5etools form.

    Returns:
        Raw item object.
    """
    return {
        "name": "Longsword",
        "type": "Weapon",
        "rarity": "Common",
        "weight": 3.0,
        "value": 15,
        "source": "PHB",
        "page": 149,
        "entries": ["A versatile weapon that can be used with one or two hands."],
    }


# =============================================================================
# Data Tree Fixtures
# =============================================================================


@pytest.fixture
def write_json() -> Callable[[Path, Any], Path]:
    """Provide a helper writing a JSON document, creating parent directories.

    Returns:
        Function taking a path and a JSON-serializable value.
    """

    def _write(path: Path, data: Any) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def data_tree(
    tmp_path: Path,
    write_json: Callable[[Path, Any], Path],
    sample_spell_data: dict[str, Any],
    sample_monster_data: dict[str, Any],
    sample_item_data: dict[str, Any],
) -> Path:
    """Create a minimal 5etools data tree with one file per kind.

    Returns:
        The data directory.
    """
    data = tmp_path / "data"
    write_json(data / "spells" / "index.json", {"PHB": "spells-phb.json"})
    write_json(data / "spells" / "spells-phb.json", {"spell": [sample_spell_data]})
    write_json(data / "spells" / "fluff-spells-phb.json", {"spellFluff": []})
    write_json(data / "bestiary" / "index.json", {"MM": "bestiary-mm.json"})
    write_json(data / "bestiary" / "bestiary-mm.json", {"monster": [sample_monster_data]})
    write_json(data / "items.json", {"item": [sample_item_data]})
    write_json(
        data / "items-base.json",
        {
            "baseitem": [
                {
                    "name": "Gold Piece",
                    "type": "Currency",
                    "weight": 0.02,
                    "value": {"quantity": 1, "unit": "gp"},
                    "source": "PHB",
                    "page": 143,
                },
            ],
        },
    )
    return data
