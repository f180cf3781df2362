"""CLI application for stamp using Rich and Typer."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from stamp import __version__, clipboard
from stamp.core.config import (
    CONFIG_FILE,
    StampConfig,
    save_config,
    setup_logging,
)
from stamp.core.counters import CounterError
from stamp.core.factory import AppContext, build_context
from stamp.core.generator import GeneratorError
from stamp.core.sequential import highest, next_code
from stamp.core.types import PROJECT_SPEC, SequentialSpec

app = typer.Typer(
    name="stamp",
    help="""Generate note filenames based on date/time.

Note types:
  daily     YYYY-MM-DD
  fleeting  YYYY-MM-DD-FHHMMSS
  voice     YYYY-MM-DD-VTHHMMSS
  analog    YYYY-MM-DD-AN (sequential per day)
  monthly   YYYY-MM
  yearly    YYYY
  project   PXXXX (shorthand for seq --prefix P --width 4)
  seq       custom prefix + zero-padded number (directory scan)

Default (no type): YYYY-MM-DD-HHMM""",
    no_args_is_help=False,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    """Application context plus the root-level output flags."""

    context: AppContext
    ext: Optional[bool] = None
    copy: bool = False
    quiet: bool = False


def _say(message: str) -> None:
    console.print(message, markup=False, highlight=False, soft_wrap=True)


@contextmanager
def _handle_errors() -> Iterator[None]:
    """Turn expected failures into an error message and exit code 1."""
    try:
        yield
    except (OSError, CounterError, GeneratorError, ValueError) as e:
        err_console.print(
            f"Error: {e}", style="red", markup=False, highlight=False, soft_wrap=True
        )
        raise typer.Exit(1)


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj


def _emit(
    ctx: typer.Context,
    result: str,
    ext: Optional[bool] = None,
    copy: bool = False,
    quiet: bool = False,
) -> None:
    """Print (and optionally copy) a generated name."""
    state = _state(ctx)

    if ext is None:
        ext = state.ext
    if ext is None:
        ext = state.context.config.always_extension
    copy = copy or state.copy
    quiet = quiet or state.quiet

    if ext:
        result += ".md"

    if not copy:
        typer.echo(result)
        return

    try:
        clipboard.copy(result)
    except clipboard.ClipboardError as e:
        typer.echo(result)
        err_console.print(
            f"Error: clipboard error: {e}",
            style="red",
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        raise typer.Exit(1)

    if not quiet:
        typer.echo(result)
        _say("Copied to clipboard!")


# Output flags shared by every note type (a subcommand flag wins over the root one)
def _ext_option():
    return typer.Option(None, "--ext/--no-ext", help="Add .md extension to output")


def _copy_option():
    return typer.Option(False, "--copy", help="Copy to clipboard (macOS only)")


def _quiet_option():
    return typer.Option(False, "--quiet", "-q", help="Quiet mode (no extra output)")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    ext: Optional[bool] = _ext_option(),
    copy: bool = _copy_option(),
    quiet: bool = _quiet_option(),
    config: Optional[str] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: ~/.stamp/config.yaml)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """Generate note filenames based on date/time."""
    if debug:
        setup_logging("DEBUG")
        logging.getLogger().setLevel(logging.DEBUG)

    if ctx.resilient_parsing:
        return

    injected = ctx.obj
    if isinstance(injected, CliState):
        state = injected
    else:
        if injected is None:
            with _handle_errors():
                injected = build_context(config)
        state = CliState(context=injected)

    state.ext = ext
    state.copy = copy
    state.quiet = quiet
    ctx.obj = state

    if ctx.invoked_subcommand is None:
        with _handle_errors():
            _emit(ctx, state.context.generator.default())


@app.command()
def daily(
    ctx: typer.Context,
    ext: Optional[bool] = _ext_option(),
    copy: bool = _copy_option(),
    quiet: bool = _quiet_option(),
):
    """Generate daily note filename (YYYY-MM-DD)."""
    _emit(ctx, _state(ctx).context.generator.daily(), ext, copy, quiet)


@app.command()
def fleeting(
    ctx: typer.Context,
    ext: Optional[bool] = _ext_option(),
    copy: bool = _copy_option(),
    quiet: bool = _quiet_option(),
):
    """Generate fleeting note filename (YYYY-MM-DD-FHHMMSS)."""
    _emit(ctx, _state(ctx).context.generator.fleeting(), ext, copy, quiet)


@app.command()
def voice(
    ctx: typer.Context,
    ext: Optional[bool] = _ext_option(),
    copy: bool = _copy_option(),
    quiet: bool = _quiet_option(),
):
    """Generate voice transcript filename (YYYY-MM-DD-VTHHMMSS)."""
    _emit(ctx, _state(ctx).context.generator.voice(), ext, copy, quiet)


@app.command()
def monthly(
    ctx: typer.Context,
    ext: Optional[bool] = _ext_option(),
    copy: bool = _copy_option(),
    quiet: bool = _quiet_option(),
):
    """Generate monthly review filename (YYYY-MM)."""
    _emit(ctx, _state(ctx).context.generator.monthly(), ext, copy, quiet)


@app.command()
def yearly(
    ctx: typer.Context,
    ext: Optional[bool] = _ext_option(),
    copy: bool = _copy_option(),
    quiet: bool = _quiet_option(),
):
    """Generate yearly review filename (YYYY)."""
    _emit(ctx, _state(ctx).context.generator.yearly(), ext, copy, quiet)


@app.command()
def analog(
    ctx: typer.Context,
    check: bool = typer.Option(
        False, "--check", help="Check next number without incrementing"
    ),
    reset: bool = typer.Option(False, "--reset", help="Reset today's counter"),
    counter: bool = typer.Option(False, "--counter", help="Show current counter"),
    ext: Optional[bool] = _ext_option(),
    copy: bool = _copy_option(),
    quiet: bool = _quiet_option(),
):
    """Generate analog/slipbox note filename (YYYY-MM-DD-AN)."""
    state = _state(ctx)
    counters = state.context.counters
    today = state.context.generator.current_date()

    with _handle_errors():
        if check:
            _emit(ctx, counters.check_analog(today), ext, copy, quiet)
            return

        if reset:
            counters.reset_analog(today)
            if not (quiet or state.quiet):
                _say("Counter reset for analog notes")
            return

        if counter:
            count = counters.get_analog(today)
            _say(f"Current analog counter for {today}: {count}")
            return

        _emit(ctx, counters.next_analog(today), ext, copy, quiet)


def _run_sequential(
    ctx: typer.Context,
    spec: SequentialSpec,
    title_args: Optional[list[str]],
    check: bool,
    counter: bool,
    label: str = "",
    ext: Optional[bool] = None,
    copy: bool = False,
    quiet: bool = False,
) -> None:
    """Shared body of the project and seq commands."""
    with _handle_errors():
        cwd = Path.cwd()

        if counter:
            current = highest(cwd, spec)
            if label:
                label = f"{label} counter"
            else:
                label = f"counter for prefix {spec.normalized().prefix.upper()}"

            if current == 0:
                _say(f"Current {label}: none")
            else:
                _say(f"Current {label}: {current}")
            return

        code, _ = next_code(cwd, spec)

        title = " ".join(title_args or [])
        if title and not check:
            code += " " + title

        _emit(ctx, code, ext, copy, quiet)


@app.command()
def project(
    ctx: typer.Context,
    title: Optional[list[str]] = typer.Argument(None, help="Optional title"),
    check: bool = typer.Option(
        False, "--check", help="Check next number without creating files"
    ),
    counter: bool = typer.Option(
        False, "--counter", help="Show highest existing number"
    ),
    ext: Optional[bool] = _ext_option(),
    copy: bool = _copy_option(),
    quiet: bool = _quiet_option(),
):
    """Generate project number (PXXXX), same as `seq --prefix P --width 4`."""
    _run_sequential(
        ctx,
        PROJECT_SPEC,
        title,
        check,
        counter,
        label="project",
        ext=ext,
        copy=copy,
        quiet=quiet,
    )


def seq(
    ctx: typer.Context,
    title: Optional[list[str]] = typer.Argument(None, help="Optional title"),
    prefix: str = typer.Option(
        "P", "--prefix", help="Prefix for generated code (case-insensitive match)"
    ),
    width: int = typer.Option(4, "--width", help="Number of digits for zero padding"),
    start: int = typer.Option(
        1, "--start", help="Starting number when no entries are found"
    ),
    check: bool = typer.Option(
        False, "--check", help="Check next number without creating files"
    ),
    counter: bool = typer.Option(
        False, "--counter", help="Show highest existing number for the prefix"
    ),
    ext: Optional[bool] = _ext_option(),
    copy: bool = _copy_option(),
    quiet: bool = _quiet_option(),
):
    """Generate sequential codes from the current directory."""
    _run_sequential(
        ctx,
        SequentialSpec(prefix=prefix, width=width, start=start),
        title,
        check,
        counter,
        ext=ext,
        copy=copy,
        quiet=quiet,
    )


app.command("seq")(seq)
app.command("sequential", hidden=True)(seq)


@app.command("config")
def show_config(
    ctx: typer.Context,
    init: bool = typer.Option(
        False, "--init", help="Write the default config file if it doesn't exist"
    ),
):
    """Show the effective configuration."""
    state = _state(ctx)
    config_file = state.context.config_file or CONFIG_FILE

    if init:
        with _handle_errors():
            if config_file.exists():
                _say(f"Config already exists at {config_file}")
            else:
                written = save_config(StampConfig(), config_file)
                _say(f"Config written to {written}")
        return

    config = state.context.config
    table = Table(title="Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value")

    table.add_row("Config file", str(config_file))
    table.add_row("Timezone", config.timezone or "system")
    table.add_row("Always extension", "yes" if config.always_extension else "no")
    table.add_row("Counter file", str(config.counter_file))
    table.add_row(
        "Project start (persisted counter)", str(config.project_start)
    )

    console.print(table)


@app.command()
def version():
    """Print version information."""
    _say(f"stamp version {__version__}")


def run_cli():
    """Entry point for the CLI."""
    app()


__all__ = ["app", "run_cli", "CliState"]
