"""Integration tests for converting a data tree end to end."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from dnd_compendium.core.exceptions import (
    DocumentWriteError,
    EmptySourceError,
    SourceDecodeError,
    SourceFileError,
)
from dnd_compendium.models import EntityKind
from dnd_compendium.pipeline import convert_all, convert_kind


if TYPE_CHECKING:
    from collections.abc import Callable


class TestConvertAll:
    """Tests for a full conversion run."""

    def test_every_kind_written(self, data_tree: Path, tmp_path: Path) -> None:
        """Test one document per entity under each kind's directory."""
        out = tmp_path / "out"

        report = convert_all(data_tree, out)

        assert report.ok
        assert report.files == 4
        assert report.documents == 4
        assert sorted(path.relative_to(out).as_posix() for path in out.rglob("*.md")) == [
            "items/Gold Piece.md",
            "items/Longsword.md",
            "monsters/Goblin.md",
            "spells/Fireball.md",
        ]

    def test_document_contents(self, data_tree: Path, tmp_path: Path) -> None:
        """Test rendered bodies on disk."""
        out = tmp_path / "out"
        convert_all(data_tree, out)

        longsword = (out / "items" / "Longsword.md").read_text(encoding="utf-8")
        assert longsword == (
            "# Longsword\n\n*Weapon, Common*\n\n**Weight:** 3.0 lb.\n\n**Value:** 15 gp\n\n"
            "A versatile weapon that can be used with one or two hands.\n\n**Source:** PHB, page 149\n"
        )
        fireball = (out / "spells" / "Fireball.md").read_text(encoding="utf-8")
        assert "*3rd-level Evocation*" in fireball
        assert "8d6 fire damage" in fireball
        goblin = (out / "monsters" / "Goblin.md").read_text(encoding="utf-8")
        assert "**Challenge** 1/4" in goblin

    def test_selected_kinds_only(self, data_tree: Path, tmp_path: Path) -> None:
        """Test converting a subset of kinds."""
        out = tmp_path / "out"

        report = convert_all(data_tree, out, kinds=(EntityKind.MONSTER,))

        assert report.documents == 1
        assert not (out / "spells").exists()

    def test_rerun_overwrites(self, data_tree: Path, tmp_path: Path) -> None:
        """Test that a second run leaves identical output."""
        out = tmp_path / "out"
        convert_all(data_tree, out)
        first = (out / "spells" / "Fireball.md").read_text(encoding="utf-8")

        convert_all(data_tree, out)

        assert (out / "spells" / "Fireball.md").read_text(encoding="utf-8") == first


class TestFailures:
    """Tests for file and entity failures."""

    def test_bad_file_reported_and_others_converted(
        self,
        data_tree: Path,
        tmp_path: Path,
        write_json: Callable[[Path, Any], Path],
    ) -> None:
        """Test that a broken file is reported while the rest still convert."""
        write_json(data_tree / "spells" / "index.json", {"PHB": "spells-phb.json", "BAD": "spells-bad.json"})
        (data_tree / "spells" / "spells-bad.json").write_text("{not json", encoding="utf-8")
        out = tmp_path / "out"

        report = convert_kind(EntityKind.SPELL, data_tree, out)

        assert not report.ok
        assert [failure.path.name for failure in report.failures] == ["spells-bad.json"]
        assert isinstance(report.failures[0].error, SourceDecodeError)
        assert (out / "spells" / "Fireball.md").exists()

    def test_fail_fast_raises(
        self,
        data_tree: Path,
        tmp_path: Path,
        write_json: Callable[[Path, Any], Path],
    ) -> None:
        """Test that fail_fast stops at the first broken file."""
        write_json(data_tree / "spells" / "index.json", {"AAA": "spells-aaa.json", "PHB": "spells-phb.json"})
        write_json(data_tree / "spells" / "spells-aaa.json", {"spell": []})

        with pytest.raises(EmptySourceError):
            convert_kind(EntityKind.SPELL, data_tree, tmp_path / "out", fail_fast=True)

        assert not (tmp_path / "out" / "spells").exists()

    def test_decode_failure_leaves_no_partial_output(
        self,
        tmp_path: Path,
        write_json: Callable[[Path, Any], Path],
    ) -> None:
        """Test that a file failing validation writes nothing."""
        data = tmp_path / "data"
        write_json(data / "items.json", {"item": [{"name": "Rope"}], "baseitem": "broken"})

        report = convert_kind(EntityKind.ITEM, data, tmp_path / "out")

        assert report.documents == 0
        assert len(report.failures) == 1
        assert not (tmp_path / "out" / "items").exists()

    def test_unrenderable_entity_skipped(
        self,
        tmp_path: Path,
        write_json: Callable[[Path, Any], Path],
    ) -> None:
        """Test that non-object and nameless entities are skipped, not fatal."""
        data = tmp_path / "data"
        write_json(data / "items.json", {"item": ["Rope", {"source": "PHB"}, {"name": "Torch", "source": "PHB"}]})

        report = convert_kind(EntityKind.ITEM, data, tmp_path / "out")

        assert report.ok
        assert report.documents == 1
        assert report.skipped_entities == 2
        assert (tmp_path / "out" / "items" / "Torch.md").exists()

    def test_missing_kind_directory_recorded(self, data_tree: Path, tmp_path: Path) -> None:
        """Test that an absent kind directory fails that kind only."""
        shutil.rmtree(data_tree / "bestiary")
        out = tmp_path / "out"

        report = convert_all(data_tree, out)

        assert not report.ok
        assert [failure.path for failure in report.failures] == [data_tree / "bestiary"]
        assert isinstance(report.failures[0].error, SourceFileError)
        assert report.documents == 3
        assert (out / "spells" / "Fireball.md").exists()
        assert (out / "items" / "Longsword.md").exists()

    def test_missing_kind_directory_raises_with_fail_fast(self, data_tree: Path, tmp_path: Path) -> None:
        """Test that fail_fast raises the discovery error."""
        shutil.rmtree(data_tree / "bestiary")

        with pytest.raises(SourceFileError, match="Data directory not found for monsters"):
            convert_all(data_tree, tmp_path / "out", fail_fast=True)

    def test_unwritable_document_recorded(
        self,
        tmp_path: Path,
        write_json: Callable[[Path, Any], Path],
    ) -> None:
        """Test that a document that cannot be written fails its file, not the run."""
        data = tmp_path / "data"
        write_json(
            data / "items.json",
            {"item": [{"name": "A", "source": "PHB"}, {"name": "x" * 300, "source": "PHB"}]},
        )
        write_json(data / "items-base.json", {"baseitem": [{"name": "Torch", "source": "PHB"}]})
        out = tmp_path / "out"

        report = convert_kind(EntityKind.ITEM, data, out)

        assert [failure.path.name for failure in report.failures] == ["items.json"]
        assert isinstance(report.failures[0].error, DocumentWriteError)
        assert (out / "items" / "Torch.md").exists()
