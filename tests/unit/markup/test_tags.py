"""Tests for directive tag substitution."""

from __future__ import annotations

import pytest

from dnd_compendium.markup.tags import TAG_KINDS, TagKind, substitute


class TestSubstitute:
    """Tests for the substitute function."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("{@damage 2d10}", "2d10"),
            ("{@dice 1d20}", "1d20"),
            ("{@spell fireball}", "fireball"),
            ("{@spell fireball|Fire Ball}", "Fire Ball"),
            ("{@spell fireball|PHB|the fireball}", "the fireball"),
            ("{@spell fireball|PHB}", "PHB"),
            ("{@spell fireball|}", "fireball"),
            ("{@item longsword|phb}", "phb"),
            ("{@creature goblin}", "goblin"),
            ("{@condition frightened}", "frightened"),
            ("{@hazard quicksand|DMG}", "quicksand"),
            ("{@atk mw}", "(melee weapon)"),
            ("{@atk rw}", "(ranged weapon)"),
            ("{@atk ms}", "(melee spell)"),
            ("{@atk rs}", "(ranged spell)"),
            ("{@atk mw,rw}", ""),
            ("{@hit 7}", "+7"),
            ("{@h}", "Hit:"),
            ("{@dc 15}", "DC 15"),
            ("{@recharge 5}", "(Recharge 5-6)"),
            ("{@recharge 0}", "(Recharge after a Short or Long Rest)"),
        ],
    )
    def test_single_tag(self, text: str, expected: str) -> None:
        """Test each supported tag kind in isolation."""
        assert substitute(text) == expected

    def test_acid_splash_description(self) -> None:
        """Test a damage tag inside prose."""
        text = (
            "A target must succeed on a Dexterity saving throw or take "
            "{@damage 1d6} acid damage."
        )
        assert substitute(text) == (
            "A target must succeed on a Dexterity saving throw or take 1d6 acid damage."
        )

    def test_mixed_dice_and_damage(self) -> None:
        """Test several tags of two kinds in one string."""
        text = (
            "This spell's damage increases by {@dice 1d6} when you reach 5th level "
            "({@damage 2d6}), 11th level ({@damage 3d6}), and 17th level ({@damage 4d6})."
        )
        assert substitute(text) == (
            "This spell's damage increases by 1d6 when you reach 5th level (2d6), "
            "11th level (3d6), and 17th level (4d6)."
        )

    def test_attack_line(self) -> None:
        """Test a full monster attack line."""
        text = "{@atk mw} {@hit 4} to hit, reach 5 ft. {@h}5 ({@damage 1d6 + 2}) slashing damage."
        assert substitute(text) == (
            "(melee weapon) +4 to hit, reach 5 ft. Hit:5 (1d6 + 2) slashing damage."
        )

    def test_plain_text_unchanged(self) -> None:
        """Test that text without tags is returned as is."""
        assert substitute("No tags here.") == "No tags here."

    def test_unknown_kind_unchanged(self) -> None:
        """Test that unsupported tag kinds are left in place."""
        text = "Roll {@scaledamage 8d6|3-9|1d6} more."
        assert substitute(text) == text

    def test_unterminated_tag_unchanged(self) -> None:
        """Test that an opening marker without a closing brace is kept."""
        assert substitute("take {@damage 1d6 fire") == "take {@damage 1d6 fire"

    def test_unterminated_after_complete_tag(self) -> None:
        """Test that complete tags before an unterminated one are still replaced."""
        assert substitute("{@dice 1d4} and {@dice 2d4") == "1d4 and {@dice 2d4"

    def test_hit_tag_not_confused_with_bare_h(self) -> None:
        """Test that the bare h kind only matches an exact ``{@h}``."""
        assert substitute("{@hit 3} {@h}") == "+3 Hit:"

    def test_idempotent(self) -> None:
        """Test that substituting twice changes nothing more."""
        once = substitute("{@condition prone} after {@dc 13} save; {@recharge 4}")
        assert substitute(once) == once

    def test_recharge_payload_is_trimmed(self) -> None:
        """Test that surrounding whitespace in the payload is ignored."""
        assert substitute("{@recharge  6 }") == "(Recharge 6-6)"


class TestTagKinds:
    """Tests for the tag table."""

    def test_order(self) -> None:
        """Test the fixed processing order."""
        assert [kind.name for kind in TAG_KINDS] == [
            "damage",
            "dice",
            "spell",
            "item",
            "creature",
            "condition",
            "hazard",
            "atk",
            "hit",
            "h",
            "dc",
            "recharge",
        ]

    def test_replacement_not_rescanned_for_same_kind(self) -> None:
        """Test that a kind's output is not rescanned by that kind."""
        kind = TagKind.with_payload("dice", lambda payload: "{@dice " + payload + "}")
        assert kind.apply("{@dice 1d4}") == "{@dice 1d4}"

    def test_later_kind_sees_earlier_output(self) -> None:
        """Test that replacement text is visible to later kinds."""
        assert substitute("{@condition {@dice 1d4}}") == "1d4"
