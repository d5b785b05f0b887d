"""Load podlike project YAML into typed dataclasses."""

from __future__ import annotations

import collections.abc as cabc
import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from podlike.sources import DEFAULT_TIMEOUT, SourceSpec

from .models import OUTPUT_FORMATS, ConfigError, ProjectConfig

logger = logging.getLogger(__name__)

_SOURCE_KINDS = ("path", "module", "url")


def load_config(path: Path) -> ProjectConfig:
    """Load the YAML project file describing defaults and named sources.

    Parameters
    ----------
    path : Path
        Filesystem path to the project file (for example ``podlike.yaml``).

    Returns
    -------
    ProjectConfig
        Parsed configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConfigError
        If a default or a source entry is invalid.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from podlike.config import load_config
    >>> config = load_config(Path("podlike.yaml"))  # doctest: +SKIP
    >>> config.get_source("guide").kind  # doctest: +SKIP
    'path'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    defaults = raw.get("defaults", {}) or {}
    if not isinstance(defaults, cabc.Mapping):
        msg = "'defaults' must be a mapping."
        raise ConfigError(msg)

    fmt = str(defaults.get("format", "text"))
    if fmt not in OUTPUT_FORMATS:
        msg = f"Unsupported output format '{fmt}'; expected one of {', '.join(OUTPUT_FORMATS)}."
        raise ConfigError(msg)
    encoding = str(defaults.get("encoding", "utf-8"))
    timeout = _parse_timeout(defaults.get("timeout", DEFAULT_TIMEOUT))
    base_dir = path.resolve().parent
    template_raw = defaults.get("template")
    template = _resolve_path(base_dir, str(template_raw)) if template_raw else None

    sources_raw = raw.get("sources") or {}
    if not isinstance(sources_raw, cabc.Mapping):
        msg = "'sources' must be a mapping of source keys to definitions."
        raise ConfigError(msg)
    sources: dict[str, SourceSpec] = {}
    for key, payload in sources_raw.items():
        match payload:
            case dict():
                sources[str(key)] = _build_source(
                    str(key), payload, base_dir=base_dir, encoding=encoding
                )
            case _:
                msg = f"Source '{key}' must be a mapping."
                raise ConfigError(msg)

    logger.debug("Loaded %d source(s) from %s", len(sources), path)
    return ProjectConfig(
        format=fmt,
        encoding=encoding,
        timeout=timeout,
        template=template,
        sources=sources,
    )


def load_config_or_default(path: Path) -> ProjectConfig:
    """Return :func:`load_config` for ``path``, or defaults when it is absent."""
    if not path.exists():
        logger.debug("No configuration at %s; using defaults", path)
        return ProjectConfig()
    return load_config(path)


def _parse_timeout(value: object) -> float:
    try:
        timeout = float(typ.cast("typ.Any", value))
    except (TypeError, ValueError) as exc:
        msg = f"Timeout must be a number, got {value!r}."
        raise ConfigError(msg) from exc
    if timeout <= 0:
        msg = f"Timeout must be positive, got {timeout}."
        raise ConfigError(msg)
    return timeout


def _resolve_path(base_dir: Path, value: str) -> Path:
    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        return candidate
    return base_dir / candidate


def _build_source(
    key: str,
    payload: cabc.Mapping[str, typ.Any],
    *,
    base_dir: Path,
    encoding: str,
) -> SourceSpec:
    present = [kind for kind in _SOURCE_KINDS if payload.get(kind)]
    if len(present) != 1:
        msg = f"Source '{key}' must define exactly one of: {', '.join(_SOURCE_KINDS)}."
        raise ConfigError(msg)
    kind = present[0]
    location = str(payload[kind]).strip()
    if kind == "path":
        location = str(_resolve_path(base_dir, location))
    return SourceSpec(
        kind=typ.cast("typ.Literal['path', 'module', 'url']", kind),
        location=location,
        encoding=str(payload.get("encoding", encoding)),
    )
