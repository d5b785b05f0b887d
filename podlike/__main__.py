"""Allow ``python -m podlike`` to run the CLI."""

from .cli import main

main()
