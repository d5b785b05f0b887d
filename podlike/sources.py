r"""Acquire the raw text that podlike sessions parse.

Sections can live in a plain file, in the source code of an importable Python
module, or behind an HTTP(S) URL. This module reads each of those into a
string and surfaces every acquisition failure as :class:`SourceError`, so the
parser itself never deals with I/O.

Example
-------
>>> from podlike.sources import SourceSpec, load_source
>>> spec = SourceSpec.parse("module:podlike.parser")
>>> spec.kind, spec.location
('module', 'podlike.parser')
>>> "=cut" in load_source(spec)  # doctest: +SKIP
True
"""

from __future__ import annotations

import dataclasses as dc
import importlib
import inspect
import logging
import types
import typing as typ
from pathlib import Path

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .session import SectionSession

logger = logging.getLogger(__name__)

SourceKind = typ.Literal["path", "module", "url"]
MODULE_SCHEME = "module:"
URL_SCHEMES = ("http://", "https://")
DEFAULT_TIMEOUT = 30.0


class SourceError(OSError):
    """Raised when a source document cannot be read, imported, or fetched."""


@dc.dataclass(slots=True, frozen=True)
class SourceSpec:
    """Describe where a document's text comes from.

    Attributes
    ----------
    kind : {"path", "module", "url"}
        Acquisition mechanism.
    location : str
        Filesystem path, dotted module name, or URL.
    encoding : str
        Text encoding for files and, when the server omits one, URLs.
    """

    kind: SourceKind
    location: str
    encoding: str = "utf-8"

    @classmethod
    def parse(cls, value: str, *, encoding: str = "utf-8") -> SourceSpec:
        """Interpret a command-line style source reference.

        ``module:<dotted.name>`` selects a module, ``http://`` and
        ``https://`` prefixes select a URL, and anything else is a path.
        """
        value = value.strip()
        if not value:
            msg = "Source reference cannot be empty"
            raise SourceError(msg)
        if value.startswith(MODULE_SCHEME):
            return cls("module", value.removeprefix(MODULE_SCHEME).strip(), encoding)
        if value.lower().startswith(URL_SCHEMES):
            return cls("url", value, encoding)
        return cls("path", value, encoding)


def read_file_source(path: Path | str, *, encoding: str = "utf-8") -> str:
    """Return the full contents of ``path``.

    Raises
    ------
    SourceError
        If the file is missing, unreadable, or not valid ``encoding`` text.
    """
    target = Path(path)
    logger.info("Reading sections from %s", target)
    try:
        text = target.read_text(encoding=encoding)
    except FileNotFoundError as exc:
        msg = f"Source file '{target}' not found."
        raise SourceError(msg) from exc
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Unable to read source file '{target}': {exc}"
        raise SourceError(msg) from exc
    logger.debug("Read %d character(s) from %s", len(text), target)
    return text


def read_module_source(module: types.ModuleType | str) -> str:
    """Return the source code of ``module`` (a module object or dotted name).

    Raises
    ------
    SourceError
        If the module cannot be imported or its source is unavailable, for
        example for built-in or bytecode-only modules.
    """
    if isinstance(module, str):
        name = module.strip()
        logger.info("Importing module %s for sections", name)
        try:
            module = importlib.import_module(name)
        except ImportError as exc:
            msg = f"Unable to import module '{name}': {exc}"
            raise SourceError(msg) from exc
    try:
        text = inspect.getsource(module)
    except (OSError, TypeError) as exc:
        msg = f"Source for module '{module.__name__}' is not available: {exc}"
        raise SourceError(msg) from exc
    logger.debug("Read %d character(s) from module %s", len(text), module.__name__)
    return text


def _build_retrying_session() -> requests.Session:
    session = requests.Session()
    retry = Retry(
        total=5,
        read=5,
        connect=3,
        backoff_factor=0.5,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("GET", "HEAD"),
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def _declares_charset(content_type: str | None) -> bool:
    """Return ``True`` when a ``Content-Type`` header names a charset."""
    if not content_type:
        return False
    params = content_type.split(";")[1:]
    return any(param.strip().lower().startswith("charset=") for param in params)


def fetch_url_source(
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    encoding: str | None = None,
    session: requests.Session | None = None,
) -> str:
    """Download ``url`` and return its body as text.

    Parameters
    ----------
    url : str
        HTTP(S) address of the document.
    timeout : float, optional
        Per-request timeout in seconds. Defaults to ``30.0``.
    encoding : str or None, optional
        Encoding used when the ``Content-Type`` header names no charset,
        instead of the ISO-8859-1 default requests applies to ``text/*``.
    session : requests.Session or None, optional
        Session to reuse. When omitted, a session with retry/backoff on
        server errors is created and closed after the request.

    Raises
    ------
    SourceError
        If the request fails or the server answers with an error status.
    """
    owned = session is None
    http = session or _build_retrying_session()
    logger.info("Fetching sections from %s", url)
    try:
        resp = http.get(url, timeout=timeout)
        resp.raise_for_status()
        if encoding and not _declares_charset(resp.headers.get("Content-Type")):
            resp.encoding = encoding
        text = resp.text
    except requests.RequestException as exc:
        msg = f"Failed to fetch source '{url}': {exc}"
        raise SourceError(msg) from exc
    finally:
        if owned:
            http.close()
    logger.debug("Fetched %d character(s) from %s", len(text), url)
    return text


def load_source(spec: SourceSpec, *, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Return the text described by ``spec``."""
    match spec.kind:
        case "path":
            return read_file_source(spec.location, encoding=spec.encoding)
        case "module":
            return read_module_source(spec.location)
        case "url":
            return fetch_url_source(
                spec.location, timeout=timeout, encoding=spec.encoding
            )
    msg = f"Unsupported source kind {spec.kind!r}"
    raise SourceError(msg)


def open_session(spec: SourceSpec, *, timeout: float = DEFAULT_TIMEOUT) -> SectionSession:
    """Load ``spec`` and wrap its text in a fresh :class:`SectionSession`."""
    return SectionSession(load_source(spec, timeout=timeout))


__all__ = [
    "SourceError",
    "SourceKind",
    "SourceSpec",
    "fetch_url_source",
    "load_source",
    "open_session",
    "read_file_source",
    "read_module_source",
]
