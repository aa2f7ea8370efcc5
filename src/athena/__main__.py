"""Allow ``python -m athena``."""

from athena.cli.app import cli

cli()
