"""Document assembly and file naming."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


RESERVED_CHARACTERS = '/\\:*?"<>|'

_RESERVED_TABLE = str.maketrans({character: "-" for character in RESERVED_CHARACTERS})


@dataclass(frozen=True)
class RenderedDocument:
    """The rendered text of one entity and the base name of its file.

    Attributes:
        file_base_name: File name without suffix, safe on common filesystems.
        body: The complete document text.
    """

    file_base_name: str
    body: str

    def file_name(self, suffix: str = ".md") -> str:
        return self.file_base_name + suffix


def safe_file_name(name: str) -> str:
    """Replace each filesystem-reserved character with ``-``.

    Example:
        >>> safe_file_name("Mordenkainen's Sword: Part 1/2")
        "Mordenkainen's Sword- Part 1-2"
    """
    return name.translate(_RESERVED_TABLE)


def assemble(blocks: Iterable[str]) -> str:
    """Join blocks with blank lines; the body ends with a single newline."""
    return "\n\n".join(block for block in blocks if block) + "\n"
