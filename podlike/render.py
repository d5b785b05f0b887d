"""Render query results for the command line.

Query results are sections, lists of sections, data lines, lists of data
lines, or ``None`` when nothing matched. :func:`render_json` serialises any
of them with msgspec using the public record shape
(``index``/``name``/``list``/``data``); :class:`SectionRenderer` lays them out
as plain text through a Jinja2 template that can be swapped per project.
"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ
from pathlib import Path

import msgspec.json as msgspec_json
from jinja2 import Environment, FileSystemLoader

from .parser import Section

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
DEFAULT_TEMPLATE = "sections.txt.jinja"

Payload = Section | cabc.Sequence[typ.Any] | None


def _to_builtins(payload: Payload) -> typ.Any:
    if isinstance(payload, Section):
        return payload.as_dict()
    if isinstance(payload, str) or payload is None:
        return payload
    return [_to_builtins(entry) for entry in payload]


def render_json(payload: Payload) -> str:
    """Return ``payload`` encoded as a JSON document."""
    return msgspec_json.encode(_to_builtins(payload)).decode("utf-8")


class SectionRenderer:
    """Lay out sections and data lines as plain text."""

    def __init__(self, template_path: Path | None = None) -> None:
        """Load the packaged template, or ``template_path`` when given."""
        if template_path is None:
            templates_dir, template_name = DEFAULT_TEMPLATES_DIR, DEFAULT_TEMPLATE
        else:
            templates_dir, template_name = template_path.parent, template_path.name
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=False,  # noqa: S701 - plain-text output
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template(template_name)

    def render_sections(self, sections: cabc.Sequence[Section]) -> str:
        """Render each section with its header and data lines."""
        return self.template.render(sections=list(sections))

    @staticmethod
    def render_lines(lines: cabc.Sequence[str]) -> str:
        """Join data lines back into a block of text."""
        return "\n".join(lines) + "\n" if lines else ""

    def render(self, payload: Payload) -> str:
        """Render any query result as text; ``None`` renders as nothing."""
        if payload is None:
            return ""
        if isinstance(payload, Section):
            return self.render_sections([payload])
        entries = list(payload)
        if not entries:
            return ""
        if all(isinstance(entry, Section) for entry in entries):
            return self.render_sections(entries)
        if all(isinstance(entry, str) for entry in entries):
            return self.render_lines(entries)
        return "\n".join(self.render_lines(entry) for entry in entries)


def render(
    payload: Payload, *, fmt: str = "text", renderer: SectionRenderer | None = None
) -> str:
    """Render ``payload`` as ``"text"`` or ``"json"``."""
    if fmt == "json":
        return render_json(payload)
    if fmt == "text":
        return (renderer or SectionRenderer()).render(payload)
    msg = f"Unsupported output format '{fmt}'."
    raise ValueError(msg)
