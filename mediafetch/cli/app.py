"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from mediafetch import __version__
from mediafetch.cipher.resolver import CipherResolver
from mediafetch.cipher.synthesizer import PlayerScript, version_key_from_url
from mediafetch.engine.downloader import MediaDownloader
from mediafetch.models.transfer import OutputTarget, ResourceDescriptor
from mediafetch.storage.config_manager import ConfigManager
from mediafetch.utils.path import resolve_output
from mediafetch.utils.structured_logger import create_structured_logger
from mediafetch.utils.urls import apply_signature

from .formatters import (
    print_config,
    print_decipher_outcome,
    print_fetch_summary,
    print_probe,
)
from .progress import RichProgressReporter, TextProgressReporter

# Logs and progress go to stderr so `--stdout` output stays clean.
console = Console(stderr=True)

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("mediafetch")

app = typer.Typer(
    name="mediafetch",
    help=(
        "Resilient media retrieval: resumable, segmented and bandwidth-governed "
        "downloads. Use 'mediafetch <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "mediafetch"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def parse_header(value: str) -> tuple[str, str]:
    name, sep, rest = value.partition(":")
    if not sep or not name.strip():
        raise typer.BadParameter(f"Expected 'Name: value', got '{value}'")
    return name.strip(), rest.strip()


def _cancel_on_sigterm() -> None:
    """Turns SIGTERM into cancellation of the running task so cleanup runs."""
    task = asyncio.current_task()
    try:
        asyncio.get_running_loop().add_signal_handler(signal.SIGTERM, task.cancel)
    except (NotImplementedError, RuntimeError):
        log.debug("SIGTERM handler not available on this platform")


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-v for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """mediafetch CLI"""
    if version:
        console.print(f"[bold]mediafetch[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    logging.getLogger("mediafetch").setLevel("DEBUG" if verbose >= 1 else "INFO")

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command(name="fetch")
def fetch_command(
    url: str = typer.Argument(..., help="URL of the resource."),
    output: Path | None = typer.Option(
        None, "-o", "--output", help="File (or existing directory) to write the resource to."
    ),
    stdout: bool = typer.Option(
        False, "--stdout", help="Write the resource to standard output."
    ),
    referer: str | None = typer.Option(None, "--referer", help="Referer header."),
    headers: list[str] | None = typer.Option(  # noqa: B008
        None, "-H", "--header", help="Extra request header, 'Name: value'. Repeatable."
    ),
    expected_bytes: int | None = typer.Option(
        None,
        "--expected-bytes",
        help="Known size; large files are then fetched in parallel segments.",
    ),
    workers: int | None = typer.Option(
        None, "-w", "--workers", help="Maximum parallel connections per file."
    ),
    limit: int | None = typer.Option(
        None, "--limit", help="Bandwidth ceiling in bits per second."
    ),
    proxy: str | None = typer.Option(
        None, "--proxy", help="HTTP proxy, 'scheme://host:port' or 'host:port'."
    ),
    no_progress: bool = typer.Option(
        False, "--no-progress", help="Do not show a progress bar."
    ),
    plain: bool = typer.Option(
        False, "--plain", help="Draw a plain-text progress line instead of a bar."
    ),
    keep_partial: bool = typer.Option(
        False, "--keep-partial", help="Keep the '.part' file if the download fails."
    ),
    log_dir: Path | None = typer.Option(
        None, "--log-dir", help="Write JSON-lines transfer events to this directory."
    ),
):
    """Download one resource to a file or to standard output."""
    if bool(output) == stdout:
        console.print("[red]✗ Give exactly one of --output or --stdout.[/red]")
        raise typer.Exit(code=1)

    extra_headers = tuple(parse_header(h) for h in headers or [])
    cli_options = {"max_workers": workers, "bandwidth_limit": limit, "proxy": proxy}
    config = ConfigManager(CONFIG_FILE).load_config(cli_options)

    if output:
        output = resolve_output(output, url)

    descriptor = ResourceDescriptor(
        url=url,
        output=OutputTarget.file(output) if output else OutputTarget.memory(),
        referer=referer,
        extra_headers=extra_headers,
        expected_bytes=expected_bytes,
    )

    async def _download(reporter):
        async with MediaDownloader(
            config, reporter=reporter, events=events, keep_partial=keep_partial
        ) as downloader:
            return await downloader.fetch(descriptor)

    async def _fetch_async():
        _cancel_on_sigterm()
        if no_progress:
            return await _download(None)
        if plain:
            return await _download(TextProgressReporter(sys.stderr))
        with RichProgressReporter(console) as reporter:
            return await _download(reporter)

    base_logger, events = create_structured_logger(log_dir, enable_json=log_dir is not None)
    try:
        result = asyncio.run(_fetch_async())
    finally:
        base_logger.close()
    if stdout:
        sys.stdout.buffer.write(result.body or b"")
        sys.stdout.buffer.flush()
    else:
        print_fetch_summary(result)


@app.command(name="probe")
def probe_command(
    url: str = typer.Argument(..., help="URL of the resource."),
    max_bytes: int = typer.Option(
        910 * 1024, "--bytes", help="How many bytes to read at most."
    ),
    proxy: str | None = typer.Option(None, "--proxy", help="HTTP proxy."),
):
    """Report the content type and total size of a resource."""
    config = ConfigManager(CONFIG_FILE).load_config({"proxy": proxy})

    async def _probe_async():
        async with MediaDownloader(config) as downloader:
            return await downloader.probe(url, max_bytes=max_bytes)

    print_probe(asyncio.run(_probe_async()))


@app.command(name="decipher")
def decipher_command(
    version_key: str = typer.Argument(..., help="Player version key, e.g. 'vfl_ymO4Z'."),
    token: str = typer.Argument(..., help="The scrambled signature."),
    script_url: str | None = typer.Option(
        None, "--script-url", help="Player script to guess an unknown cipher from."
    ),
    no_guess: bool = typer.Option(
        False, "--no-guess", help="Fail instead of guessing unknown ciphers."
    ),
    url: str | None = typer.Option(
        None, "--url", help="Media URL to print with the deciphered signature applied."
    ),
):
    """Unscramble a signature with the cipher of a player version."""
    config = ConfigManager(CONFIG_FILE).load_config()
    resolver = CipherResolver(allow_synthesis=not no_guess, proxy=config.proxy)
    outcome = asyncio.run(resolver.resolve(version_key, token, script_url))
    signed_url = apply_signature(url, outcome.signature) if url else None
    print_decipher_outcome(outcome, signed_url)


@app.command(name="guess-cipher")
def guess_cipher_command(
    script: str = typer.Argument(..., help="Player script: a local file or a URL."),
    version_key: str | None = typer.Option(
        None, "--version-key", help="Version key to label the result with."
    ),
):
    """Derive the cipher program from a player script."""
    if script.startswith(("http://", "https://")):
        config = ConfigManager(CONFIG_FILE).load_config()
        player = asyncio.run(PlayerScript.fetch(script, proxy=config.proxy))
        version_key = version_key or version_key_from_url(script)
    else:
        try:
            player = PlayerScript(Path(script).read_text(encoding="utf-8"))
        except OSError as e:
            console.print(f"[red]✗ Cannot read '{script}': {e}[/red]")
            raise typer.Exit(code=1) from e

    result = player.synthesize(version_key)
    if not result.ok:
        raise result.error
    label = version_key or "player"
    line = f"'{label}' => '{result.program}',"
    if player.last_modified:
        line = f"{line}  # {player.last_modified}"
    console.print(f"[green]✓ Current cipher is:[/green]\n{line}", highlight=False)


@app.command(name="config")
def config_command(
    proxy: str | None = typer.Option(None, "--proxy", help="Default HTTP proxy."),
    limit: int | None = typer.Option(None, "--limit", help="Default bandwidth ceiling (bits/s)."),
    workers: int | None = typer.Option(None, "--workers", help="Default parallel connections."),
    show: bool = typer.Option(False, "--show", help="Print the effective configuration."),
):
    """Write the configuration file, or show it with --show."""
    manager = ConfigManager(CONFIG_FILE)
    if show:
        print_config(CONFIG_FILE, manager.load_config())
        return

    settings = manager.load_config(
        {"proxy": proxy, "bandwidth_limit": limit, "max_workers": workers}
    ).model_dump()
    manager.save_new_config(settings)
    console.print(f"[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")


