"""
CLI Error Handling
==================

Maps the exceptions a decafc command can raise to a message on stderr
and a process exit code.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from decafc.errors import DecafError


class ExitCode(IntEnum):
    """Exit codes shared by the decafc tools."""
    SUCCESS = 0
    BUILD_ERROR = 1      # Syntax error in the input program
    INVALID_ARGS = 2     # Unreadable input file
    INTERNAL_ERROR = 3   # Bug in decafc


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised while processing an input file and exit.

    Syntax errors already render as "file:line: error: ..." and are
    printed unchanged. Anything that is neither a decafc error nor an I/O
    problem with the input is an internal error; its traceback is shown
    under --verbose.

    Raises:
        SystemExit: Always
    """
    if isinstance(error, DecafError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.BUILD_ERROR)

    if isinstance(error, (OSError, UnicodeDecodeError)):
        click.echo(f"Error: cannot read input: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    click.echo(f"Internal error: {error}", err=True)
    if verbose:
        traceback.print_exc()
    sys.exit(ExitCode.INTERNAL_ERROR)
