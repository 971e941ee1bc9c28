"""
decafparse CLI Tests
====================

Tests for the decafparse command-line tool and the shared CLI error
handler.
"""

import pytest
from click.testing import CliRunner

from decafc import __version__
from decafc.cli.decafparse import main
from decafc.cli.errors import ExitCode, handle_cli_exception
from decafc.errors import DecafError
from decafc.frontend.errors import InvalidTypeError


def run_on(source, *args):
    """Write source to prog.decaf in a temp directory and run decafparse."""
    runner = CliRunner()
    with runner.isolated_filesystem():
        with open("prog.decaf", "w") as f:
            f.write(source)
        return runner.invoke(main, [*args, "prog.decaf"])


# =============================================================================
# decafparse Tests
# =============================================================================

class TestDecafParse:
    """Tests for the decafparse command."""

    def test_prints_ast(self):
        result = run_on("int x;\ndef void main() { x = 1; }\n")
        assert result.exit_code == 0, f"Parse failed: {result.output}"
        assert "Program" in result.output
        assert "Variable (global): int x" in result.output
        assert "Function: void main()" in result.output
        assert "Assign: x = 1" in result.output

    def test_empty_file(self):
        result = run_on("")
        assert result.exit_code == 0
        assert result.output.strip() == "Program"

    def test_tokens_flag(self):
        result = run_on("int x;\n", "--tokens")
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "1: KEYWORD int",
            "1: IDENTIFIER x",
            "1: SYMBOL ;",
        ]

    def test_syntax_error(self):
        result = run_on("int x;\nint y\n")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "prog.decaf:2:" in result.output
        assert "error:" in result.output

    def test_lexical_error(self):
        result = run_on("int x@;")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "invalid character" in result.output

    def test_missing_file(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["missing.decaf"])
        assert result.exit_code == 2

    def test_max_id_length(self):
        result = run_on("int abcdef;", "--max-id-length", "3")
        assert result.exit_code == 0
        assert "Variable (global): int abc" in result.output
        assert "abcdef" not in result.output.split("Program", 1)[1]

    def test_max_id_length_must_be_positive(self):
        result = run_on("int x;", "--max-id-length", "0")
        assert result.exit_code == 2

    def test_legacy_escapes(self):
        source = 'def void f() { print("\\t\\t"); }'
        default = run_on(source)
        legacy = run_on(source, "--legacy-escapes")
        assert "print('\\t\\t')" in default.output
        assert "print('\\t\\\\t')" in legacy.output

    def test_deeply_nested_expression(self):
        """Excessive nesting is a syntax error, not an internal error."""
        depth = 500
        result = run_on("def void f() { x = " + "(" * depth + "1" + ")" * depth + "; }")
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "nested too deeply" in result.output

    def test_verbose(self):
        result = run_on("int x;", "-v")
        assert result.exit_code == 0
        assert "Variable (global): int x" in result.output

    def test_version(self):
        result = CliRunner().invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


# =============================================================================
# Error Handler Tests
# =============================================================================

class TestHandleCliException:
    """Tests for exit code mapping."""

    def test_syntax_error_exit_code(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(InvalidTypeError("char"))
        assert exc_info.value.code == ExitCode.BUILD_ERROR
        assert "invalid type 'char'" in capsys.readouterr().err

    def test_decaf_error_exit_code(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(DecafError("bad input"))
        assert exc_info.value.code == ExitCode.BUILD_ERROR
        assert "bad input" in capsys.readouterr().err

    def test_file_error_exit_code(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(FileNotFoundError("nope.decaf"))
        assert exc_info.value.code == ExitCode.INVALID_ARGS

    def test_internal_error_exit_code(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(RuntimeError("boom"))
        assert exc_info.value.code == ExitCode.INTERNAL_ERROR
        assert "Internal error: boom" in capsys.readouterr().err

    def test_undecodable_input_exit_code(self, capsys):
        error = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
        with pytest.raises(SystemExit) as exc_info:
            handle_cli_exception(error)
        assert exc_info.value.code == ExitCode.INVALID_ARGS
        assert "cannot read input" in capsys.readouterr().err
