"""Typed dataclasses describing podlike project configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from podlike.sources import DEFAULT_TIMEOUT, SourceSpec

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json")


class ConfigError(ValueError):
    """Raised when the project configuration is invalid or incomplete."""


@dc.dataclass(slots=True)
class ProjectConfig:
    """Defaults and named sources read from ``podlike.yaml``.

    Attributes
    ----------
    format : str
        Default output format for the CLI (``"text"`` or ``"json"``).
    encoding : str
        Default encoding for file and URL sources.
    timeout : float
        HTTP timeout in seconds for URL sources.
    template : Path or None
        Optional Jinja2 template overriding the packaged text layout.
    sources : dict[str, SourceSpec]
        Named sources addressable by key from the CLI.
    """

    format: str = "text"
    encoding: str = "utf-8"
    timeout: float = DEFAULT_TIMEOUT
    template: Path | None = None
    sources: dict[str, SourceSpec] = dc.field(default_factory=dict)

    def get_source(self, key: str) -> SourceSpec:
        """Return the configured source named ``key``."""
        try:
            return self.sources[key]
        except KeyError as exc:
            msg = f"Unknown source '{key}'. Known sources: {', '.join(sorted(self.sources)) or 'none'}."
            raise ConfigError(msg) from exc

    def resolve_source(self, value: str) -> SourceSpec:
        """Resolve a configured key, falling back to a literal source reference."""
        if value in self.sources:
            return self.sources[value]
        return SourceSpec.parse(value, encoding=self.encoding)
