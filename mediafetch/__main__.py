"""
Main entry point for the mediafetch application.
This module handles top-level setup, exception handling, and CLI invocation.
"""

import asyncio
import logging
import os
import sys

import click
from rich.console import Console

from mediafetch.cli.app import app
from mediafetch.cli.formatters import format_error_with_suggestions
from mediafetch.exceptions import MediaFetchError


def main() -> None:
    """Main entry point function."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("mediafetch")
    console = Console(stderr=True)

    try:
        exit_code = app(standalone_mode=False)
    except (click.Abort, KeyboardInterrupt, asyncio.CancelledError):
        console.print("\n[yellow]⚠️  Transfer cancelled.[/yellow]")
        sys.exit(130)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except MediaFetchError as e:
        console.print(f"\n{format_error_with_suggestions(e)}")
        sys.exit(1)
    except Exception as e:
        console.print(f"\n{format_error_with_suggestions(e, {'type': 'Unexpected'})}")
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)
    if isinstance(exit_code, int):
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
