r"""Scan text for pod-like sections and return them as ordered records.

A section opens with a marker line such as ``=pod`` or ``=name example-1``
and closes with ``=cut``. The alternate ``@=`` prefix (``@=pod`` ... ``@=cut``)
behaves identically and lets a document carry POD-looking text without other
POD tools picking it up. Inside an open block, marker lines prefixed with
``+`` are captured literally with one ``+`` removed, so ``+=head1 WHY?``
becomes ``=head1 WHY?`` in the block's data.

Example
-------
>>> from podlike.parser import parse_sections
>>> sections = parse_sections("=pod\n\nContent\n\n=cut")
>>> sections[0].name, sections[0].group, sections[0].data
('pod', None, ['Content'])
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ

from ._constants import ALT_PREFIX, CLOSER_TOKEN, ESCAPE_PREFIX, PRIMARY_PREFIX

logger = logging.getLogger(__name__)

_PREFIX = f"{re.escape(ALT_PREFIX)}|{re.escape(PRIMARY_PREFIX)}"
_ESCAPE = re.escape(ESCAPE_PREFIX)

OPENER_PATTERN = re.compile(
    rf"^(?P<prefix>{_PREFIX})(?P<token>\w+)(?:\s+(?P<argument>.*))?$"
)
CLOSER_PATTERN = re.compile(rf"^(?P<prefix>{_PREFIX}){CLOSER_TOKEN}\s*$")
ESCAPED_PATTERN = re.compile(rf"^{_ESCAPE}(?={_ESCAPE}*(?:{_PREFIX}))")
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")


@dc.dataclass(slots=True)
class Section:
    """A closed block captured from the source text.

    Attributes
    ----------
    index : int
        1-based position among every closed block, in closing order.
    name : str or None
        Marker argument for grouped markers, the marker keyword otherwise.
    group : str or None
        Marker keyword when the opener carried an argument; ``None`` for
        bare markers.
    data : list[str]
        Lines between the opener and the closer with escapes removed and
        edge blank lines trimmed.
    """

    index: int
    name: str | None
    group: str | None
    data: list[str]

    @property
    def is_bare(self) -> bool:
        """Return ``True`` when the block was opened without an argument."""
        return self.group is None

    def as_dict(self) -> dict[str, typ.Any]:
        """Return the record using its public field names."""
        return {
            "index": self.index,
            "name": self.name,
            "list": self.group,
            "data": list(self.data),
        }


@dc.dataclass(slots=True)
class _OpenBlock:
    prefix: str
    token: str
    argument: str | None
    line_no: int
    lines: list[str] = dc.field(default_factory=list)


def _is_blank(line: str) -> bool:
    return not line.strip()


def _trim_blank_edges(lines: list[str]) -> list[str]:
    """Drop every leading and trailing whitespace-only line."""
    start = 0
    end = len(lines)
    while start < end and _is_blank(lines[start]):
        start += 1
    while end > start and _is_blank(lines[end - 1]):
        end -= 1
    return lines[start:end]


def _match_opener(line: str, line_no: int) -> _OpenBlock | None:
    match = OPENER_PATTERN.match(line.rstrip())
    if not match or match.group("token") == CLOSER_TOKEN:
        return None
    argument = (match.group("argument") or "").strip() or None
    return _OpenBlock(
        prefix=match.group("prefix"),
        token=match.group("token"),
        argument=argument,
        line_no=line_no,
    )


def _match_closer(line: str) -> str | None:
    match = CLOSER_PATTERN.match(line)
    return match.group("prefix") if match else None


def _unescape(line: str) -> str | None:
    """Strip one escape prefix from an escaped marker line, if present."""
    if ESCAPED_PATTERN.match(line):
        return line[len(ESCAPE_PREFIX) :]
    return None


def _close(block: _OpenBlock, index: int) -> Section:
    if block.argument is None:
        name, group = block.token, None
    else:
        name, group = block.argument, block.token
    return Section(
        index=index,
        name=name,
        group=group,
        data=_trim_blank_edges(block.lines),
    )


def parse_sections(text: str) -> list[Section]:
    r"""Split ``text`` into ordered :class:`Section` records.

    Parameters
    ----------
    text : str
        Raw document content. Lines end at ``\n``, ``\r\n`` or ``\r``; other
        characters such as form feeds stay part of the line.

    Returns
    -------
    list[Section]
        One record per closed block, indexed from 1 in closing order. Returns
        an empty list when the text contains no complete block.

    Notes
    -----
    Parsing never fails. Openers without a matching closer, and openers
    replaced by a later opener of the same prefix, are dropped. Only one
    block is open at a time; marker lines using the other prefix are
    captured as ordinary content.
    """
    sections: list[Section] = []
    current: _OpenBlock | None = None

    for line_no, line in enumerate(LINE_BREAK_PATTERN.split(text), start=1):
        if current is None:
            current = _match_opener(line, line_no)
            continue

        if _match_closer(line) == current.prefix:
            sections.append(_close(current, len(sections) + 1))
            current = None
            continue

        unescaped = _unescape(line)
        if unescaped is not None:
            current.lines.append(unescaped)
            continue

        opened = _match_opener(line, line_no)
        if opened is not None and opened.prefix == current.prefix:
            logger.debug(
                "Dropping unterminated %s%s block from line %d; reopened at line %d",
                current.prefix,
                current.token,
                current.line_no,
                line_no,
            )
            current = opened
            continue

        current.lines.append(line)

    if current is not None:
        logger.debug(
            "Dropping unterminated %s%s block from line %d at end of input",
            current.prefix,
            current.token,
            current.line_no,
        )

    logger.debug("Parsed %d section(s)", len(sections))
    return sections


__all__ = ["Section", "parse_sections"]
