"""Unit tests for the pod-like section scanner.

These tests cover ``podlike.parser.parse_sections``: bare and grouped markers,
the ``@=`` alternate syntax, the ``+`` escape for literal marker lines, blank
line trimming at block edges, and the silent handling of malformed input.

Usage
-----
Run ``pytest tests/test_parser.py -v``. No fixtures beyond the sample
documents defined in this module are required.
"""

from __future__ import annotations

from textwrap import dedent

import pytest

from podlike.parser import Section, parse_sections

SAMPLE_DOCUMENT = dedent(
    """\
    package Example;

    =name

    Example #1

    =cut

    =name

    Example #2

    =cut

    =head1 WHY?

    Because.

    +=head1 NESTED

    Still inside.

    =cut

    1;
    """
)


def test_bare_marker_yields_single_record() -> None:
    """A bare marker block should produce one record with no group."""
    sections = parse_sections("=pod\n\nContent\n\n=cut")
    assert sections == [Section(index=1, name="pod", group=None, data=["Content"])], (
        f"Unexpected sections for bare marker: {sections!r}"
    )


def test_grouped_marker_sets_group_and_name() -> None:
    """An opener with an argument stores the keyword as the group."""
    sections = parse_sections("=name example-1\nFirst\n=cut\n")
    assert len(sections) == 1
    assert sections[0].group == "name"
    assert sections[0].name == "example-1"
    assert sections[0].data == ["First"]


def test_argument_is_trimmed_and_keeps_inner_spaces() -> None:
    """The argument is the trimmed remainder of the opener line."""
    sections = parse_sections("=head1   WHY   NOT?  \nbody\n=cut")
    assert sections[0].group == "head1"
    assert sections[0].name == "WHY   NOT?"


def test_indexes_are_contiguous_across_keywords() -> None:
    """Every closed block shares one running index counter."""
    sections = parse_sections(SAMPLE_DOCUMENT)
    assert [section.index for section in sections] == [1, 2, 3]
    assert [section.name for section in sections] == ["name", "name", "WHY?"]


def test_escaped_marker_is_unescaped_and_does_not_split_block() -> None:
    """``+=head1`` inside a block is captured as ``=head1``."""
    sections = parse_sections(SAMPLE_DOCUMENT)
    why = sections[2]
    assert why.data == ["Because.", "", "=head1 NESTED", "", "Still inside."], (
        f"Escaped marker not captured literally: {why.data!r}"
    )


def test_escaped_closer_does_not_close_block() -> None:
    """An escaped ``+=cut`` is content, not a closer."""
    sections = parse_sections("=example\nbefore\n+=cut\nafter\n=cut\n")
    assert sections[0].data == ["before", "=cut", "after"]


def test_only_one_escape_level_is_removed() -> None:
    """Double escapes keep one ``+`` after capture."""
    sections = parse_sections("=example\n++=cut\n+@=pod\n=cut")
    assert sections[0].data == ["+=cut", "@=pod"]


def test_plus_lines_without_marker_are_left_alone() -> None:
    """Only ``+`` directly before a marker prefix counts as an escape."""
    sections = parse_sections("=example\n+ item\n+1\n=cut")
    assert sections[0].data == ["+ item", "+1"]


def test_alternate_syntax_matches_primary_syntax() -> None:
    """``@=`` blocks produce records identical to ``=`` blocks."""
    primary = parse_sections("=name example\n\nline one\nline two\n\n=cut")
    alternate = parse_sections("@=name example\n\nline one\nline two\n\n@=cut")
    assert primary == alternate


def test_other_prefix_markers_are_content() -> None:
    """A ``=`` block keeps ``@=`` lines, and ``=cut`` does not close ``@=``."""
    sections = parse_sections("@=outer\n=inner\ntext\n=cut\n@=cut\n")
    assert len(sections) == 1
    assert sections[0].name == "outer"
    assert sections[0].data == ["=inner", "text", "=cut"]


def test_unterminated_block_is_dropped() -> None:
    """An opener without a closer produces no record."""
    sections = parse_sections("=done\nkept\n=cut\n=dangling\nlost\n")
    assert [section.name for section in sections] == ["done"]


def test_reopened_block_replaces_pending_one() -> None:
    """A second opener of the same prefix discards the pending block."""
    sections = parse_sections("=first\nlost\n=second\nkept\n=cut")
    assert sections == [Section(index=1, name="second", group=None, data=["kept"])]


def test_text_outside_blocks_is_ignored() -> None:
    """Prose, stray closers, and escaped lines outside blocks are discarded."""
    sections = parse_sections("prose\n=cut\n+=head1 nope\n\n=only\nyes\n=cut\ntrailing")
    assert sections == [Section(index=1, name="only", group=None, data=["yes"])]


def test_all_edge_blank_lines_are_trimmed() -> None:
    """Leading and trailing blank runs are removed; inner blanks remain."""
    text = "=trim\n\n   \n\nfirst\n\n\nsecond\n  \n\n=cut"
    sections = parse_sections(text)
    assert sections[0].data == ["first", "", "", "second"]


def test_block_with_only_blank_lines_has_empty_data() -> None:
    """A closed block with no content still yields a record."""
    sections = parse_sections("=empty\n\n\n=cut")
    assert sections == [Section(index=1, name="empty", group=None, data=[])]


def test_windows_line_endings_are_accepted() -> None:
    """CRLF input parses the same as LF input."""
    sections = parse_sections("=pod\r\n\r\nContent\r\n\r\n=cut\r\n")
    assert sections[0].data == ["Content"]


def test_only_newline_characters_end_lines() -> None:
    """Form feeds and Unicode separators stay inside their line."""
    sections = parse_sections("=pod\nfirst\n\x0c\nsecond\n=cut\n")
    assert sections[0].data == ["first", "\x0c", "second"], (
        f"Form feed line not kept verbatim: {sections[0].data!r}"
    )
    sections = parse_sections("=pod\nalpha\u2028beta\x85gamma\n=cut")
    assert sections[0].data == ["alpha\u2028beta\x85gamma"]


def test_separator_before_closer_does_not_close_block() -> None:
    """A closer preceded by a group separator on the same line is content."""
    sections = parse_sections("=pod\nkeep\x1c=cut\nafter\n=cut\n")
    assert sections[0].data == ["keep\x1c=cut", "after"]


@pytest.mark.parametrize(
    "line",
    [
        " =indented",
        "=with-dash",
        "==double",
        "=",
        "=cut trailing words",
    ],
)
def test_malformed_openers_are_not_captured(line: str) -> None:
    """Lines that are not valid openers never start a block."""
    sections = parse_sections(f"{line}\nbody\n=cut\n")
    assert sections == [], f"Expected no sections for opener {line!r}"


def test_closer_allows_trailing_whitespace() -> None:
    """``=cut`` followed by spaces still closes the block."""
    sections = parse_sections("=pod\nbody\n=cut   \n")
    assert [section.data for section in sections] == [["body"]]


def test_as_dict_uses_public_field_names() -> None:
    """The serialisable shape exposes ``list`` instead of ``group``."""
    section = parse_sections("=name example-1\nFirst\n=cut")[0]
    assert section.as_dict() == {
        "index": 1,
        "name": "example-1",
        "list": "name",
        "data": ["First"],
    }
    assert not section.is_bare


def test_empty_text_returns_no_sections() -> None:
    """Parsing an empty string is not an error."""
    assert parse_sections("") == []
