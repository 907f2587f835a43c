"""Directive tag substitution for 5etools prose.

Source prose embeds directive tags such as ``{@damage 8d6}`` or
``{@spell fireball|display}``. :func:`substitute` rewrites them to plain text.

Tag kinds are processed in a fixed order. Each kind is handled by one
compiled pattern and one rule: the pattern matches the opening marker
``{@kind `` up to the first following ``}``, and every match is replaced
in a single left-to-right pass. Replacement text is never rescanned for
the same kind, but later kinds in the order do see it. An opening marker
without a closing brace is left untouched.

Example:
    >>> substitute("take {@damage 1d6} acid damage")
    'take 1d6 acid damage'
    >>> substitute("{@atk mw} {@hit 5} to hit. {@h}7 damage")
    '(melee weapon) +5 to hit. Hit:7 damage'
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass


TagRule = Callable[[str], str]


ATTACK_LABELS: dict[str, str] = {
    "mw": "(melee weapon)",
    "rw": "(ranged weapon)",
    "ms": "(melee spell)",
    "rs": "(ranged spell)",
}


# =============================================================================
# Rules
# =============================================================================


def _verbatim(payload: str) -> str:
    return payload


def _display_override(payload: str) -> str:
    """Return the display text of a reference tag.

    ``name|display`` shows ``display``. The three-part 5etools form
    ``name|source|display`` shows its third part. Empty overrides fall back
    to the name.
    """
    parts = payload.split("|")
    override = parts[2] if len(parts) > 2 else parts[1] if len(parts) == 2 else ""
    return override or parts[0]


def _first_part(payload: str) -> str:
    return payload.split("|", 1)[0]


def _attack(payload: str) -> str:
    return ATTACK_LABELS.get(payload, "")


def _hit_bonus(payload: str) -> str:
    return "+" + payload


def _hit_label(payload: str) -> str:
    return "Hit:"


def _difficulty_class(payload: str) -> str:
    return "DC " + payload


def _recharge(payload: str) -> str:
    value = payload.strip()
    if value == "0":
        return "(Recharge after a Short or Long Rest)"
    return f"(Recharge {value}-6)"


# =============================================================================
# Tag Table
# =============================================================================


@dataclass(frozen=True)
class TagKind:
    """One directive tag kind and how it is replaced.

    Attributes:
        name: The tag keyword following ``{@``.
        pattern: Compiled pattern matching one whole tag span.
        rule: Maps the payload to replacement text.
    """

    name: str
    pattern: re.Pattern[str]
    rule: TagRule

    @classmethod
    def with_payload(cls, name: str, rule: TagRule) -> TagKind:
        """Build a kind written as ``{@name payload}``."""
        return cls(name, re.compile(r"\{@" + re.escape(name) + r" ([^}]*)\}"), rule)

    @classmethod
    def bare(cls, name: str, rule: TagRule) -> TagKind:
        """Build a kind written as ``{@name}`` with no payload."""
        return cls(name, re.compile(r"\{@" + re.escape(name) + r"\}()"), rule)

    def apply(self, text: str) -> str:
        """Replace every occurrence of this kind in one left-to-right pass."""
        if "{@" + self.name not in text:
            return text
        return self.pattern.sub(lambda match: self.rule(match.group(1)), text)


TAG_KINDS: tuple[TagKind, ...] = (
    TagKind.with_payload("damage", _verbatim),
    TagKind.with_payload("dice", _verbatim),
    TagKind.with_payload("spell", _display_override),
    TagKind.with_payload("item", _display_override),
    TagKind.with_payload("creature", _display_override),
    TagKind.with_payload("condition", _verbatim),
    TagKind.with_payload("hazard", _first_part),
    TagKind.with_payload("atk", _attack),
    TagKind.with_payload("hit", _hit_bonus),
    TagKind.bare("h", _hit_label),
    TagKind.with_payload("dc", _difficulty_class),
    TagKind.with_payload("recharge", _recharge),
)


def substitute(text: str) -> str:
    """Resolve every supported directive tag in ``text``.

    Args:
        text: Prose that may contain directive tags.

    Returns:
        The text with all well-formed supported tags replaced. Unknown tag
        kinds and unterminated tags are returned unchanged.
    """
    for kind in TAG_KINDS:
        text = kind.apply(text)
    return text


__all__ = [
    "ATTACK_LABELS",
    "TAG_KINDS",
    "TagKind",
    "TagRule",
    "substitute",
]
