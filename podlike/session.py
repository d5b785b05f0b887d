r"""Query and splice parsed sections from a single source text.

:class:`SectionSession` owns the record store for one document. The text is
parsed lazily on the first query, after which the read-only lookups
(:meth:`~SectionSession.item`, :meth:`~SectionSession.content`,
:meth:`~SectionSession.list`, :meth:`~SectionSession.contents`,
:meth:`~SectionSession.list_item`) scan the current records, and
:meth:`~SectionSession.pluck` removes matches as it returns them.

Example
-------
>>> from podlike.session import SectionSession
>>> session = SectionSession("=name one\nFirst\n=cut\n=name two\nSecond\n=cut")
>>> [section.name for section in session.list("name")]
['one', 'two']
>>> len(session.pluck("list", "name")), session.pluck("list", "name")
(2, [])
"""

from __future__ import annotations

import dataclasses as dc
import logging
import threading
import typing as typ

from .parser import Section, parse_sections

if typ.TYPE_CHECKING:
    import types
    from pathlib import Path

logger = logging.getLogger(__name__)

PluckKind = typ.Literal["list", "item"]
PLUCK_KINDS: tuple[str, ...] = typ.get_args(PluckKind)


def _is_bare_match(section: Section, key: str) -> bool:
    return section.is_bare and section.name == key


def _snapshot(section: Section) -> Section:
    """Copy a stored record so callers cannot edit the store through it."""
    return dc.replace(section, data=list(section.data))


class SectionSession:
    """Own the parsed sections of one document and answer queries on them.

    The record store is populated once, on first access, and afterwards only
    shrinks through :meth:`pluck`. Queries hand out copies of the
    stored records. Every operation holds the session lock, so
    a session may be shared between threads without losing or duplicating
    plucked records.
    """

    def __init__(self, text: str) -> None:
        """Bind the session to ``text`` without parsing it yet.

        Parameters
        ----------
        text : str
            Raw document content handed to :func:`parse_sections` on first
            use.
        """
        self._text = text
        self._records: list[Section] | None = None
        self._lock = threading.RLock()

    @classmethod
    def from_file(cls, path: Path, *, encoding: str = "utf-8") -> SectionSession:
        """Create a session over the contents of ``path``."""
        from .sources import read_file_source

        return cls(read_file_source(path, encoding=encoding))

    @classmethod
    def from_module(cls, module: types.ModuleType | str) -> SectionSession:
        """Create a session over the source code of ``module``."""
        from .sources import read_module_source

        return cls(read_module_source(module))

    @property
    def text(self) -> str:
        """Return the source text backing this session."""
        return self._text

    def _store(self) -> list[Section]:
        if self._records is None:
            self._records = parse_sections(self._text)
            logger.debug("Loaded %d section(s) into session", len(self._records))
        return self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._store())

    def sections(self) -> list[Section]:
        """Return a snapshot of every record currently in the store."""
        with self._lock:
            return [_snapshot(section) for section in self._store()]

    def item(self, name: str | None) -> Section | None:
        """Return the section addressed by ``name``.

        A bare marker (``=name`` with no argument) matching ``name`` wins. When
        there is none, the first member of the group ``name`` is returned
        instead. ``None`` is returned when nothing matches or ``name`` is
        empty.
        """
        if not name:
            return None
        with self._lock:
            records = self._store()
            for section in records:
                if _is_bare_match(section, name):
                    return _snapshot(section)
            for section in records:
                if section.group == name:
                    return _snapshot(section)
        return None

    def content(self, name: str | None) -> list[str] | None:
        """Return the data lines of :meth:`item`, or ``None`` without a match."""
        section = self.item(name)
        if section is None:
            return None
        return list(section.data)

    def list(self, name: str | None) -> list[Section]:
        """Return every section opened as ``=name <argument>``, in order."""
        if not name:
            return []
        with self._lock:
            return [
                _snapshot(section) for section in self._store() if section.group == name
            ]

    def contents(self, name: str | None) -> list[list[str]]:
        """Return the data lines of every section in the group ``name``.

        When no grouped section uses ``name``, the data of each bare section
        called ``name`` is returned instead, so repeated ``=name`` blocks can
        be collected the same way as ``=name <argument>`` blocks.
        """
        if not name:
            return []
        with self._lock:
            records = self._store()
            matches = [section for section in records if section.group == name]
            if not matches:
                matches = [section for section in records if _is_bare_match(section, name)]
            return [list(section.data) for section in matches]

    def list_item(self, list_name: str | None, item_name: str | None) -> list[Section]:
        """Return sections in group ``list_name`` whose argument is ``item_name``."""
        if not list_name or not item_name:
            return []
        with self._lock:
            return [
                _snapshot(section)
                for section in self._store()
                if section.group == list_name and section.name == item_name
            ]

    def pluck(self, kind: PluckKind, key: str | None) -> list[Section]:
        """Remove and return the sections matching ``key``.

        Parameters
        ----------
        kind : {"list", "item"}
            ``"list"`` selects every section in the group ``key``; ``"item"``
            selects every bare section named ``key``.
        key : str or None
            Group or section name to match. Empty keys match nothing.

        Returns
        -------
        list[Section]
            The removed sections in store order. A repeated call with the same
            arguments returns an empty list because the matches are gone.

        Raises
        ------
        ValueError
            If ``kind`` is not ``"list"`` or ``"item"``.
        """
        if kind not in PLUCK_KINDS:
            msg = f"Unknown pluck kind {kind!r}; expected one of {', '.join(PLUCK_KINDS)}."
            raise ValueError(msg)
        if not key:
            return []

        def _selected(section: Section) -> bool:
            if kind == "list":
                return section.group == key
            return _is_bare_match(section, key)

        with self._lock:
            records = self._store()
            plucked = [section for section in records if _selected(section)]
            if plucked:
                records[:] = [section for section in records if not _selected(section)]
            logger.debug("Plucked %d section(s) for %s %r", len(plucked), kind, key)
            return plucked


__all__ = ["PLUCK_KINDS", "PluckKind", "SectionSession"]
