"""Tests for entry list rendering."""

from __future__ import annotations

from dnd_compendium.models.fields import (
    BulletList,
    EntrySection,
    ListItem,
    Paragraph,
    Table,
    Unrecognized,
    classify_entries,
)
from dnd_compendium.render.entries import flatten_sections, render_entries, render_named, render_table


class TestRenderEntries:
    """Tests for render_entries."""

    def test_paragraphs_substituted(self) -> None:
        """Test that prose passes through tag substitution."""
        assert render_entries([Paragraph("It does {@damage 1d4} damage.")]) == ["It does 1d4 damage."]

    def test_list_is_one_block(self) -> None:
        """Test that a list becomes a single block of bullet lines."""
        entries = [BulletList((ListItem(None, "First effect"), ListItem(None, "Second effect")))]
        assert render_entries(entries) == ["- First effect\n- Second effect"]

    def test_named_list_items(self) -> None:
        """Test bold item names."""
        entries = [BulletList((ListItem("Fire", "You burn."), ListItem("Cold", "")))]
        assert render_entries(entries) == ["- **Fire**: You burn.\n- **Cold**"]

    def test_empty_list_dropped(self) -> None:
        """Test that an empty list renders nothing."""
        assert render_entries([BulletList(())]) == []

    def test_named_section_runs_in(self) -> None:
        """Test that a named section's first paragraph follows its heading."""
        entries = [EntrySection("Variant", (Paragraph("First."), Paragraph("Second.")))]
        assert render_entries(entries) == ["***Variant.*** First.", "Second."]

    def test_unnamed_section_inlines(self) -> None:
        """Test that a section without a name renders its entries only."""
        assert render_entries([EntrySection(None, (Paragraph("Inner."),))]) == ["Inner."]

    def test_unrecognized_entry(self) -> None:
        """Test the visible marker for an unknown entry."""
        assert render_entries([Unrecognized({"type": "image"})]) == ['#todo entry: {"type":"image"}']

    def test_order_preserved(self) -> None:
        """Test that blocks follow source order."""
        entries = classify_entries(["A", {"type": "list", "items": ["B"]}, "C"])
        assert render_entries(entries) == ["A", "- B", "C"]


class TestRenderTable:
    """Tests for table rendering."""

    def test_table_with_caption(self) -> None:
        """Test caption block and pipe table."""
        table = Table("Wild Magic", ("d4", "Effect"), (("1", "{@condition blinded}"), ("2-4", "Nothing")))
        assert render_table(table) == [
            "**Wild Magic**",
            "| d4 | Effect |\n| --- | --- |\n| 1 | blinded |\n| 2-4 | Nothing |",
        ]

    def test_table_without_labels(self) -> None:
        """Test an empty header sized to the widest row."""
        table = Table(None, (), (("a", "b"),))
        assert render_table(table) == ["|  |  |\n| --- | --- |\n| a | b |"]

    def test_empty_table(self) -> None:
        """Test a table with neither labels nor rows."""
        assert render_table(Table(None, (), ())) == []


class TestHelpers:
    """Tests for section helpers."""

    def test_render_named_with_list_first(self) -> None:
        """Test that a non-prose first entry goes below the heading."""
        blocks = render_named("Options", [BulletList((ListItem(None, "One"),))])
        assert blocks == ["***Options.***", "- One"]

    def test_flatten_sections(self) -> None:
        """Test that nested sections are replaced by their entries."""
        entries = [EntrySection("Outer", (Paragraph("A"), EntrySection("Inner", (Paragraph("B"),))))]
        assert flatten_sections(entries) == [Paragraph("A"), Paragraph("B")]
