"""
Contains functions for formatting and printing data to the console using Rich.
"""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mediafetch.cipher.resolver import DecipherOutcome
from mediafetch.models.config import FetchConfig
from mediafetch.models.transfer import FetchResult
from mediafetch.utils.formatting import format_bps, format_duration, format_size
from mediafetch.utils.urls import content_type_ext

console = Console()


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ConnectFailed": [
            "• Check the host name and your internet connection.",
            "• If you use a proxy, make sure it is reachable (`--proxy`).",
        ],
        "ProxyError": [
            "• The proxy refused to open a tunnel to the origin.",
            "• Verify the proxy address, or try without `--proxy`.",
        ],
        "RateLimited": [
            "• The origin is rate-limiting this address.",
            "• Wait a while before retrying, or go through a different proxy.",
        ],
        "CaptchaRedirect": [
            "• The origin wants a CAPTCHA solved for this address.",
            "• Open the URL in a browser from the same network, or use a proxy.",
        ],
        "TooManyRedirects": [
            "• The server redirects in a loop.",
            "• The URL may have expired; fetch a fresh one.",
        ],
        "TruncatedTransfer": [
            "• The server kept closing the connection early.",
            "• Try again later, or lower `--workers`.",
        ],
        "RetriesExhausted": [
            "• Every attempt failed; the last error is shown above.",
            "• Raise `error_budget` in the config file to try longer.",
        ],
        "SegmentFailed": [
            "• One parallel segment failed, so the whole transfer was stopped.",
            "• Try `--workers 1` to disable parallel segments.",
        ],
        "UnknownCipherError": [
            "• This player version is not in the cipher table.",
            "• Pass `--script-url` so the cipher can be guessed from the player script.",
        ],
        "SynthesisError": [
            "• The player script did not match the expected cipher structure.",
            "• The player may have changed shape; report the version key.",
        ],
        "ConfigurationError": [
            "• Check the values in your configuration file.",
            "• Run `mediafetch config` to write a fresh one.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -v for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_fetch_summary(result: FetchResult):
    """Prints the completion summary of a transfer."""
    rate = result.bytes_written * 8 / result.elapsed if result.elapsed > 0 else 0.0
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    if result.path:
        table.add_row("Saved to", f"[green]{result.path}[/green]")
    table.add_row("URL", f"[dim]{result.final_url}[/dim]")
    table.add_row("Size", format_size(result.bytes_written))
    table.add_row("Time", format_duration(result.elapsed))
    table.add_row("Average", format_bps(rate))
    if result.segments > 1:
        table.add_row("Segments", str(result.segments))
    console.print(
        Panel(table, title="[bold green]Download Complete[/bold green]", expand=False)
    )


def print_probe(result: FetchResult):
    content_type = result.content_type or "unknown"
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Status", result.status_line)
    table.add_row("Final URL", f"[dim]{result.final_url}[/dim]")
    table.add_row("Content-Type", content_type)
    table.add_row("Extension", content_type_ext(result.content_type))
    table.add_row(
        "Size", f"{format_size(result.bytes_written)} ({result.bytes_written} bytes)"
    )
    console.print(Panel(table, title="[bold cyan]Probe[/bold cyan]", expand=False))


def print_decipher_outcome(outcome: DecipherOutcome, signed_url: str | None = None):
    program = outcome.program
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Version", program.version_key or "-")
    table.add_row("Program", str(program))
    table.add_row("Signature", f"[cyan]{outcome.signature}[/cyan]")
    if outcome.diagnostic:
        table.add_row("Warning", f"[yellow]{outcome.diagnostic}[/yellow]")
    console.print(table)
    if signed_url:
        console.print(signed_url, soft_wrap=True, highlight=False, markup=False)


def print_config(config_path: Path, config: FetchConfig):
    """Prints the effective configuration in a table."""
    table = Table(box=None, show_header=False, padding=(0, 2))
    table.add_column(style="cyan")
    table.add_column()
    for key in sorted(FetchConfig.get_ini_keys()):
        value = getattr(config, key)
        if isinstance(value, list):
            value = ", ".join(value)
        table.add_row(key, "[dim]-[/dim]" if value is None else str(value))
    console.print(
        Panel(table, title=f"Configuration ({config_path})", border_style="blue")
    )
