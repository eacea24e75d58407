"""Tests for the homy command line interface."""

import json

import pytest

from homy.cli import build_parser, main
from homy.cli.errors import (
    CLIFileNotFoundError,
    CLIValidationError,
    cli_verbose_enabled,
    format_cli_error,
)
from homy.cli.validation import validate_path, validate_source_path
from homy.errors import UndeclaredNameError

APP = """
name_app_mini("Demo");
web_package_mini();
web_mini_version("2.0");
body@ (style: "main.css")
    "Hello";
/body
"""


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Keep config discovery and HOMY_* variables out of CLI tests."""
    monkeypatch.chdir(tmp_path)
    for name in ("HOMY_LOG_LEVEL", "HOMY_MAX_CALL_DEPTH", "HOMY_MAX_STEPS",
                 "HOMY_MAX_LINE_LENGTH", "HOMY_VERBOSE", "HOMY_DEBUG"):
        monkeypatch.delenv(name, raising=False)


def _exit_code(argv):
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestRun:
    def test_json_output(self, homy_file, capsys):
        path = homy_file(APP)
        main(["run", str(path), "--json"])
        data = json.loads(capsys.readouterr().out)
        assert data["name"] == "Demo"
        assert data["webVersion"] == "2.0"
        assert data["body"] == {"styleReference": "main.css", "content": ["Hello"]}

    def test_table_output(self, homy_file, capsys):
        path = homy_file(APP)
        main(["run", str(path)])
        out = capsys.readouterr().out
        assert "app.homy" in out
        assert "Demo" in out
        assert "main.css" in out

    def test_bare_file_argument_runs(self, homy_file, capsys):
        path = homy_file('print("hi");')
        main([str(path), "--json"])
        out = capsys.readouterr().out
        assert out.startswith("hi\n")

    def test_wrong_extension(self, homy_file, capsys):
        path = homy_file("let a = 1;", name="app.txt")
        assert _exit_code(["run", str(path)]) == 1
        assert "Invalid file extension. Expected .homy" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert _exit_code(["run", str(tmp_path / "missing.homy")]) == 1
        assert "File not found at" in capsys.readouterr().err

    def test_runtime_error(self, homy_file, capsys):
        path = homy_file("missing;")
        assert _exit_code(["run", str(path)]) == 1
        err = capsys.readouterr().err
        assert "Runtime Error in homy program" in err
        assert "'missing' is not declared" in err

    def test_syntax_error(self, homy_file, capsys):
        path = homy_file("let = 1;")
        assert _exit_code(["run", str(path)]) == 1
        assert "Runtime Error in homy program" in capsys.readouterr().err

    def test_configured_extension(self, tmp_path, homy_file, capsys):
        (tmp_path / "homy.toml").write_text('file_extension = ".hm"\n', encoding="utf-8")
        path = homy_file('name_app_mini("X");', name="app.hm")
        main(["run", str(path), "--json"])
        assert json.loads(capsys.readouterr().out)["name"] == "X"

    def test_configured_call_depth(self, tmp_path, homy_file, capsys):
        (tmp_path / "homy.toml").write_text("[runtime]\nmax_call_depth = 5\n", encoding="utf-8")
        path = homy_file("func f(n) { return f(n + 1); }\nf(0);")
        assert _exit_code(["run", str(path)]) == 1
        assert "CALL_DEPTH" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, homy_file, capsys):
        (tmp_path / "homy.toml").write_text("[runtime]\nmax_call_depth = 0\n", encoding="utf-8")
        path = homy_file("let a = 1;")
        assert _exit_code(["run", str(path)]) == 1
        assert "max_call_depth" in capsys.readouterr().err


class TestLint:
    def test_clean(self, homy_file, capsys):
        path = homy_file("let a = 1;\n")
        main(["lint", str(path)])
        assert capsys.readouterr().out == 'No issues found in "app.homy".\n'

    def test_findings_exit_nonzero(self, homy_file, capsys):
        path = homy_file("let a = 1; \nweb_package_mini();\n")
        assert _exit_code(["lint", str(path)]) == 1
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == 'Issues found in "app.homy":'
        assert lines[1] == f"{path}:1:11: [trailing-whitespace] Trailing whitespace found."
        assert lines[2].startswith(f"{path}:2:1: [homy-web-package-version-sync]")

    def test_lints_files_that_do_not_parse(self, homy_file, capsys):
        path = homy_file("let = ;\n")
        main(["lint", str(path)])
        assert "No issues found" in capsys.readouterr().out


class TestTools:
    def test_tokens(self, homy_file, capsys):
        path = homy_file("let a = 1;")
        main(["tokens", str(path)])
        out = capsys.readouterr().out
        assert "LET" in out
        assert "IDENTIFIER" in out
        assert "EOF" in out

    def test_format_to_stdout(self, homy_file, capsys):
        path = homy_file("if(a){b=1;}")
        main(["format", str(path)])
        assert capsys.readouterr().out == "if (a) {\n    b = 1;\n}\n"

    def test_format_write(self, homy_file, capsys):
        path = homy_file("let   a=1;")
        main(["format", str(path), "--write"])
        assert path.read_text(encoding="utf-8") == "let a = 1;\n"
        assert capsys.readouterr().out == f"Formatted {path}\n"

    def test_no_command(self, capsys):
        assert _exit_code([]) == 1
        assert "usage:" in capsys.readouterr().err

    def test_version(self, capsys):
        assert _exit_code(["--version"]) == 0
        assert "homy" in capsys.readouterr().out

    def test_parser_commands(self):
        parser = build_parser()
        args = parser.parse_args(["--log-level", "debug", "format", "x.homy", "--write"])
        assert args.command == "format"
        assert args.write is True
        assert args.log_level == "debug"


class TestValidation:
    def test_none_path(self):
        with pytest.raises(CLIValidationError) as exc_info:
            validate_path(None)
        assert exc_info.value.message == "Usage: homy <file_path>"

    def test_none_allowed(self):
        assert validate_path(None, allow_none=True) is None

    def test_not_path_like(self):
        with pytest.raises(CLIValidationError):
            validate_path(42)

    def test_missing(self, tmp_path):
        with pytest.raises(CLIFileNotFoundError):
            validate_source_path(tmp_path / "gone.homy")

    def test_directory_is_rejected(self, tmp_path):
        directory = tmp_path / "dir.homy"
        directory.mkdir()
        with pytest.raises(CLIValidationError):
            validate_source_path(directory)

    def test_valid(self, homy_file):
        path = homy_file("")
        assert validate_source_path(str(path)) == path


class TestErrorFormatting:
    def test_cli_error_with_hint(self):
        text = format_cli_error(CLIValidationError("Bad input", hint="Try again"))
        assert text == "Error: Bad input\nHint: Try again"

    def test_homy_error(self):
        error = UndeclaredNameError(message="'x' is not declared", line=1, column=1, name="x")
        assert format_cli_error(error).startswith("Runtime Error in homy program:\n")

    def test_other_errors(self):
        assert format_cli_error(ValueError("nope")) == "Error: ValueError: nope"

    def test_verbose_from_environment(self, monkeypatch):
        assert not cli_verbose_enabled()
        monkeypatch.setenv("HOMY_VERBOSE", "yes")
        assert cli_verbose_enabled()
