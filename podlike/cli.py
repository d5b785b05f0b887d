"""Cyclopts CLI entrypoint for extracting pod-like sections from documents.

The ``podlike`` console script defined here reads a source (a key from
``podlike.yaml``, a file path, ``module:<dotted.name>``, or an HTTP(S) URL),
parses its sections once, and prints the result of a single query as text or
JSON. Every command accepts ``--config``, ``--format`` and ``--verbose``;
options can also be supplied through ``PODLIKE_*`` environment variables.

Examples
--------
List every section of a file:

>>> from podlike.cli import main
>>> main()  # doctest: +SKIP

Print the body of the ``=synopsis`` block in a module as JSON:

>>> from podlike.cli import app
>>> app.run(
...     ["content", "module:mypkg.tool", "synopsis", "--format", "json"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from ._constants import DEFAULT_CONFIG_FILENAME, ENV_PREFIX
from .config import OUTPUT_FORMATS, ConfigError, ProjectConfig, load_config_or_default
from .render import Payload, SectionRenderer, render
from .session import PluckKind, SectionSession
from .sources import open_session

DEFAULT_CONFIG = Path(DEFAULT_CONFIG_FILENAME)

app = App(name="podlike", config=cyclopts.config.Env(ENV_PREFIX, command=False))  # type: ignore[unknown-argument]

SourceArg = typ.Annotated[
    str,
    Parameter(help="Configured source key, file path, module:NAME, or http(s) URL"),
]
ConfigOpt = typ.Annotated[
    Path, Parameter(help="Path to the project config", env_var="PODLIKE_CONFIG")
]
FormatOpt = typ.Annotated[
    str | None,
    Parameter(name="--format", help="Output format: text or json (config default)"),
]
VerboseOpt = typ.Annotated[bool, Parameter(help="Log debug output to stderr")]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _resolve_format(project: ProjectConfig, output_format: str | None) -> str:
    fmt = output_format or project.format
    if fmt not in OUTPUT_FORMATS:
        msg = f"Unsupported output format '{fmt}'; expected one of {', '.join(OUTPUT_FORMATS)}."
        raise ConfigError(msg)
    return fmt


def _open(
    source: str, config_path: Path, output_format: str | None
) -> tuple[SectionSession, ProjectConfig, str]:
    """Resolve ``source`` and the output format, then open a session.

    The format is checked first so a bad ``--format`` fails before any file
    is read or URL fetched.
    """
    project = load_config_or_default(config_path)
    fmt = _resolve_format(project, output_format)
    spec = project.resolve_source(source)
    return open_session(spec, timeout=project.timeout), project, fmt


def _emit(payload: Payload, project: ProjectConfig, fmt: str) -> None:
    renderer = SectionRenderer(project.template) if fmt == "text" else None
    output = render(payload, fmt=fmt, renderer=renderer)
    if fmt == "json":
        print(output)
    elif output:
        print(output, end="")


@app.command(help="Print every section found in SOURCE.")
def sections(
    source: SourceArg,
    /,
    *,
    config: ConfigOpt = DEFAULT_CONFIG,
    output_format: FormatOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Print all parsed sections of ``source`` in document order."""
    _configure_logging(verbose)
    session, project, fmt = _open(source, config, output_format)
    _emit(session.sections(), project, fmt)


@app.command(help="Print the section addressed by NAME.")
def item(
    source: SourceArg,
    name: str,
    /,
    *,
    config: ConfigOpt = DEFAULT_CONFIG,
    output_format: FormatOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Print the bare ``=NAME`` section, or the first section of group NAME."""
    _configure_logging(verbose)
    session, project, fmt = _open(source, config, output_format)
    _emit(session.item(name), project, fmt)


@app.command(help="Print the data lines of the section addressed by NAME.")
def content(
    source: SourceArg,
    name: str,
    /,
    *,
    config: ConfigOpt = DEFAULT_CONFIG,
    output_format: FormatOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Print the lines captured by :meth:`SectionSession.content`."""
    _configure_logging(verbose)
    session, project, fmt = _open(source, config, output_format)
    _emit(session.content(name), project, fmt)


@app.command(name="list", help="Print every section opened as '=NAME <argument>'.")
def list_group(
    source: SourceArg,
    name: str,
    /,
    *,
    config: ConfigOpt = DEFAULT_CONFIG,
    output_format: FormatOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Print the members of group ``name`` in document order."""
    _configure_logging(verbose)
    session, project, fmt = _open(source, config, output_format)
    _emit(session.list(name), project, fmt)


@app.command(help="Print the data lines of every section in group NAME.")
def contents(
    source: SourceArg,
    name: str,
    /,
    *,
    config: ConfigOpt = DEFAULT_CONFIG,
    output_format: FormatOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Print the lines captured by :meth:`SectionSession.contents`."""
    _configure_logging(verbose)
    session, project, fmt = _open(source, config, output_format)
    _emit(session.contents(name), project, fmt)


@app.command(help="Print sections of group LIST whose argument is NAME.")
def list_item(
    source: SourceArg,
    list_name: str,
    name: str,
    /,
    *,
    config: ConfigOpt = DEFAULT_CONFIG,
    output_format: FormatOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Print the sections selected by :meth:`SectionSession.list_item`."""
    _configure_logging(verbose)
    session, project, fmt = _open(source, config, output_format)
    _emit(session.list_item(list_name, name), project, fmt)


@app.command(help="Remove and print the sections matching KIND and KEY.")
def pluck(
    source: SourceArg,
    kind: PluckKind,
    key: str,
    /,
    *,
    remaining: typ.Annotated[
        bool, Parameter(help="Also print the sections left after plucking")
    ] = False,
    config: ConfigOpt = DEFAULT_CONFIG,
    output_format: FormatOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Pluck sections from a fresh session over ``source``.

    Parameters
    ----------
    source : str
        Configured key, path, ``module:NAME`` or URL.
    kind : {"list", "item"}
        ``list`` removes group members; ``item`` removes bare sections.
    key : str
        Group or section name to remove.
    remaining : bool, optional
        When ``True``, print the sections that survive the pluck after the
        plucked ones.

    Returns
    -------
    None
        Output is written to stdout.
    """
    _configure_logging(verbose)
    session, project, fmt = _open(source, config, output_format)
    _emit(session.pluck(kind, key), project, fmt)
    if remaining:
        _emit(session.sections(), project, fmt)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``podlike`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
