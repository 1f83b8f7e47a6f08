"""Tests for the Typer command-line interface."""

from __future__ import annotations

import io
from pathlib import Path

import pytest
import typer
from rich.console import Console
from typer.testing import CliRunner

from mediafetch import __main__ as entry
from mediafetch import __version__
from mediafetch.cli import app as cli_app
from mediafetch.cli import formatters
from mediafetch.exceptions import SynthesisError, UnknownCipherError

runner = CliRunner()

PLAYER_SCRIPT = """
var Xy={Ab:function(a,b){var c=a[0];a[0]=a[b%a.length];a[b]=c},
Cd:function(a){a.reverse()},Ef:function(a,b){a.splice(0,b)}};
function Gh(a){a=a.split("");Xy.Cd(a,1);Xy.Ef(a,2);Xy.Ab(a,5);return a.join("")}
var cfg={sts:16500};var d=c.sig||Gh(c.s);
"""


@pytest.fixture
def output(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> io.StringIO:
    buffer = io.StringIO()
    console = Console(file=buffer, width=200)
    monkeypatch.setattr(formatters, "console", console)
    monkeypatch.setattr(cli_app, "console", console)
    monkeypatch.setattr(cli_app, "CONFIG_FILE", tmp_path / "config.ini")
    return buffer


def test_version(output: io.StringIO) -> None:
    result = runner.invoke(cli_app.app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in output.getvalue()


def test_guess_cipher_from_file(output: io.StringIO, tmp_path: Path) -> None:
    script = tmp_path / "player.js"
    script.write_text(PLAYER_SCRIPT, encoding="utf-8")
    result = runner.invoke(
        cli_app.app, ["guess-cipher", str(script), "--version-key", "vflNEW"]
    )
    assert result.exit_code == 0, result.output
    assert "'vflNEW' => '16500 r s2 w5'," in output.getvalue()


def test_guess_cipher_failure_raises(output: io.StringIO, tmp_path: Path) -> None:
    script = tmp_path / "player.js"
    script.write_text("var nothing=1;", encoding="utf-8")
    result = runner.invoke(cli_app.app, ["guess-cipher", str(script)])
    assert result.exit_code != 0
    assert isinstance(result.exception, SynthesisError)


def test_decipher_known_version(output: io.StringIO) -> None:
    result = runner.invoke(
        cli_app.app,
        [
            "decipher",
            "vfl_ymO4Z",
            "7272B1BA35548BA3939F9CE39C4E72A98BB78ABB28."
            "560A7424D42FF070C115935232F8BDB8A1F3E05C05C",
        ],
    )
    assert result.exit_code == 0, result.output
    assert (
        "72B1BA35548BA3939F9CE39C4E72A98BB78ABB28."
        "560A7424D42FF070C115C35232F8BDB8A1F3E059"
    ) in output.getvalue()


def test_decipher_unknown_version_without_guessing(output: io.StringIO) -> None:
    result = runner.invoke(cli_app.app, ["decipher", "vflUNKNOWN", "ABC", "--no-guess"])
    assert isinstance(result.exception, UnknownCipherError)


def test_config_round_trip(output: io.StringIO, tmp_path: Path) -> None:
    result = runner.invoke(cli_app.app, ["config", "--workers", "4", "--limit", "5000000"])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "config.ini").is_file()

    result = runner.invoke(cli_app.app, ["config", "--show"])
    assert result.exit_code == 0, result.output
    shown = output.getvalue()
    assert "max_workers" in shown
    assert "5000000" in shown


def test_fetch_needs_exactly_one_destination(output: io.StringIO) -> None:
    result = runner.invoke(cli_app.app, ["fetch", "http://127.0.0.1:9/video"])
    assert result.exit_code == 1
    assert "exactly one" in output.getvalue()


def test_fetch_rejects_malformed_header(output: io.StringIO, tmp_path: Path) -> None:
    result = runner.invoke(
        cli_app.app,
        ["fetch", "http://127.0.0.1:9/video", "-o", str(tmp_path / "v.mp4"), "-H", "bogus"],
    )
    assert result.exit_code == 2


def test_decipher_applies_signature_to_url(output: io.StringIO) -> None:
    result = runner.invoke(
        cli_app.app,
        [
            "decipher",
            "vfl_ymO4Z",
            "7272B1BA35548BA3939F9CE39C4E72A98BB78ABB28."
            "560A7424D42FF070C115935232F8BDB8A1F3E05C05C",
            "--url",
            "http://m.example/videoplayback?id=7",
        ],
    )
    assert result.exit_code == 0, result.output
    assert (
        "http://m.example/videoplayback?id=7&signature="
        "72B1BA35548BA3939F9CE39C4E72A98BB78ABB28."
        "560A7424D42FF070C115C35232F8BDB8A1F3E059"
    ) in output.getvalue()


def test_interrupt_exits_with_130(monkeypatch: pytest.MonkeyPatch) -> None:
    def interrupted(**kwargs):
        raise typer.Abort()

    monkeypatch.setattr(entry, "app", interrupted)
    with pytest.raises(SystemExit) as excinfo:
        entry.main()
    assert excinfo.value.code == 130


def test_main_reports_usage_errors(
    output: io.StringIO, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setattr(
        "sys.argv",
        ["mediafetch", "fetch", "http://127.0.0.1:9/video", "-o", str(tmp_path / "v"), "-H", "x"],
    )
    with pytest.raises(SystemExit) as excinfo:
        entry.main()
    assert excinfo.value.code == 2


def test_main_exits_cleanly_after_version(
    output: io.StringIO, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("sys.argv", ["mediafetch", "--version"])
    with pytest.raises(SystemExit) as excinfo:
        entry.main()
    assert excinfo.value.code == 0
