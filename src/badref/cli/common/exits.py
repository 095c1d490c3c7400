"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from badref.cli.common.output import out

# Setup failures (configuration, discovery) abort before any scan.
SETUP_FAILURE_CODE = 2


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Helper function to print an error message and exit with a given code.

    Exists to satisfy pylint W0707 and to standardize error exits.
    """
    out.error(message)
    raise typer.Exit(code) from exc
