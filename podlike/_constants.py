"""Common literal values used across podlike.

These constants keep the marker syntax and default file names in one place so
the parser, the CLI, and tests import the same values without drifting.
Intended for internal use within the podlike package.

Examples
--------
>>> from podlike import _constants
>>> f"{_constants.PRIMARY_PREFIX}{_constants.CLOSER_TOKEN}"
'=cut'
>>> f"{_constants.ESCAPE_PREFIX}{_constants.ALT_PREFIX}head1"
'+@=head1'
"""

PRIMARY_PREFIX = "="
ALT_PREFIX = "@="
ESCAPE_PREFIX = "+"
CLOSER_TOKEN = "cut"

DEFAULT_CONFIG_FILENAME = "podlike.yaml"
ENV_PREFIX = "PODLIKE_"
