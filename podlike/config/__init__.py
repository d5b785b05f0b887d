"""Load and validate podlike project configuration.

This subpackage parses an optional ``podlike.yaml`` file holding output
defaults and named sources, resolves relative paths against the file's
directory, and produces a :class:`ProjectConfig` that the CLI consumes. The
primary entry point is :func:`load_config`; :func:`load_config_or_default`
tolerates a missing file.

Examples
--------
>>> from pathlib import Path
>>> from podlike.config import load_config_or_default
>>> config = load_config_or_default(Path("does-not-exist.yaml"))
>>> config.format
'text'
"""

from .loader import load_config, load_config_or_default
from .models import OUTPUT_FORMATS, ConfigError, ProjectConfig

__all__ = [
    "OUTPUT_FORMATS",
    "ConfigError",
    "ProjectConfig",
    "load_config",
    "load_config_or_default",
]
