r"""Extract pod-like sections embedded in source files and query them.

Sections are blocks delimited by ``=token`` / ``=cut`` (or ``@=token`` /
``@=cut``) marker lines that can sit anywhere in a document, typically inside
comments or string literals. The package parses them into ordered records and
offers lookups by name and group, plus a destructive ``pluck`` for one-shot
consumption.

Exports
-------
- ``Section``: dataclass describing one parsed block.
- ``SectionSession``: record store with query and pluck operations.
- ``parse_sections``: scan a string into ``Section`` records.
- ``app`` / ``main``: Cyclopts application behind the ``podlike`` command.

Examples
--------
>>> from podlike import SectionSession
>>> session = SectionSession("=pod\n\nContent\n\n=cut")
>>> session.content("pod")
['Content']
>>> from podlike import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main
from .parser import Section, parse_sections
from .session import SectionSession

__all__ = ["Section", "SectionSession", "app", "main", "parse_sections"]
