"""
decafparse - Decaf Parser Command-Line Interface
================================================

Reads a Decaf source file, tokenizes and parses it, and prints the
resulting AST. On the first syntax error the error is printed to stderr
and the tool exits with status 1.

Usage Examples
--------------
Print the AST:
    $ decafparse prog.decaf

Print the token stream instead:
    $ decafparse --tokens prog.decaf

Verbose mode (debug logging):
    $ decafparse -v prog.decaf
"""

import logging
from pathlib import Path
from typing import Optional

import click

from decafc import __version__
from decafc.cli.errors import handle_cli_exception
from decafc.frontend.ast import ASTPrinter
from decafc.frontend.lexer import DecafLexer
from decafc.frontend.parser import DecafParser, ParserOptions

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit (for debugging)",
)
@click.option(
    "--legacy-escapes",
    is_flag=True,
    help="Resolve only the first escape sequence in each string literal",
)
@click.option(
    "--max-id-length",
    type=click.IntRange(min=1),
    default=None,
    help="Truncate identifiers longer than this (default: 256)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="decafparse")
def main(
    input_file: Path,
    tokens: bool,
    legacy_escapes: bool,
    max_id_length: Optional[int],
    verbose: bool,
) -> None:
    """
    Parse a Decaf source file and print its syntax tree.

    INPUT_FILE is the Decaf source file to parse.

    \b
    Examples:
        decafparse prog.decaf             # Print the AST
        decafparse --tokens prog.decaf    # Print tokens
        decafparse -v prog.decaf          # Debug logging
    """
    setup_logging(verbose)

    options = ParserOptions(legacy_string_escapes=legacy_escapes)
    if max_id_length is not None:
        options.max_identifier_length = max_id_length

    try:
        source = input_file.read_text()
        logger.debug("Read %d characters from %s", len(source), input_file)

        token_list = list(DecafLexer(source, str(input_file)).tokenize())

        if tokens:
            for token in token_list:
                click.echo(f"{token.line}: {token.type.name} {token.text}")
            return

        program = DecafParser(token_list, str(input_file), options).parse()
        click.echo(ASTPrinter().print(program))

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
