"""
Command-line interface for doclisting using Typer.

Loads the doctor directory, applies search/filter/sort criteria through a
browsing session and renders the results with Rich.
"""

import asyncio
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table
from rich.traceback import install as install_rich_traceback

from ..clients import directory
from ..config import Settings, get_settings
from ..core.facets import count_specialties
from ..core.mappers import extract_number
from ..core.models import Record
from ..core.session import DirectorySession, LoadState
from ..utils.exceptions import (
    ConfigurationError,
    DocListingError,
    ErrorCategory,
    ErrorSeverity,
)
from ..utils.logging import (
    generate_correlation_id,
    get_logger,
    operation_logger,
    setup_logging,
)

install_rich_traceback(show_locals=False)

app = typer.Typer(
    name="doclisting",
    help="[bold blue]doclisting[/bold blue] - Search, filter and sort a doctor directory",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()

_logger = get_logger(__name__)


class ExitCodes:
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONFIGURATION_ERROR = 2
    NETWORK_ERROR = 3
    API_ERROR = 4
    VALIDATION_ERROR = 5
    USER_INTERRUPTED = 130


def get_exit_code_for_error(error: Exception) -> int:
    """Determine appropriate exit code based on error type."""
    if isinstance(error, KeyboardInterrupt):
        return ExitCodes.USER_INTERRUPTED

    if isinstance(error, DocListingError):
        category_to_exit_code = {
            ErrorCategory.CONFIGURATION_ERROR: ExitCodes.CONFIGURATION_ERROR,
            ErrorCategory.NETWORK_ERROR: ExitCodes.NETWORK_ERROR,
            ErrorCategory.API_ERROR: ExitCodes.API_ERROR,
            ErrorCategory.DATA_ERROR: ExitCodes.API_ERROR,
            ErrorCategory.USER_ERROR: ExitCodes.VALIDATION_ERROR,
        }
        return category_to_exit_code.get(error.category, ExitCodes.GENERAL_ERROR)

    return ExitCodes.GENERAL_ERROR


def get_configured_settings(config_path: Path | None = None) -> Settings:
    """Load settings, optionally from an alternate env file."""
    try:
        if config_path is not None:
            settings = Settings(_env_file=str(config_path))
            _logger.info("Loaded configuration", config_file=str(config_path))
        else:
            settings = get_settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load configuration: {e!s}",
            config_key="configuration_file" if config_path else "default_settings",
            actual_value=str(config_path) if config_path else "default",
        ) from e

    return settings


def display_error(
    message: str,
    exception: Exception | None = None,
    show_hints: bool = True,
) -> None:
    """Display an error with troubleshooting hints."""
    console.print(f"[red]✗ Error:[/red] {message}")

    if isinstance(exception, DocListingError):
        if exception.user_message != message:
            console.print(f"[dim red]Details: {exception.user_message}[/dim red]")

        console.print(
            f"[dim]Category: {exception.category.value.replace('_', ' ').title()}[/dim]"
        )
        if exception.severity in [ErrorSeverity.HIGH, ErrorSeverity.CRITICAL]:
            console.print(
                f"[dim red]Severity: {exception.severity.value.upper()}[/dim red]"
            )

        if show_hints and exception.troubleshooting_hints:
            console.print("\n[bold yellow]💡 Troubleshooting Tips:[/bold yellow]")
            for i, hint in enumerate(exception.troubleshooting_hints, 1):
                console.print(f"  {i}. {hint}")

        if exception.retryable:
            console.print("[dim green]i  Run the command again to retry[/dim green]")

    elif exception:
        console.print(f"[dim red]Details: {exception}[/dim red]")


def display_success(message: str) -> None:
    console.print(f"[green]✓[/green] {message}")


def display_warning(message: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {message}")


def handle_cli_exception(operation: str, exception: Exception) -> int:
    """Centralized CLI exception handling with proper exit codes."""
    exit_code = get_exit_code_for_error(exception)

    if isinstance(exception, KeyboardInterrupt):
        display_warning("Operation cancelled by user")
    else:
        display_error(f"{operation} failed", exception)

    _logger.error(f"CLI error: {operation}", error=exception, exit_code=exit_code)
    return exit_code


def load_session(
    settings: Settings, file: Path | None, correlation_id: str
) -> DirectorySession:
    """Load the directory into a new session, exiting on a failed load."""
    session = DirectorySession()
    source = directory.create_source(settings, file)
    origin = str(file) if file else settings.source_url

    with operation_logger("load_directory", correlation_id, source=origin):
        with console.status("[bold blue]Loading doctors..."):
            asyncio.run(session.load(source))

    if session.state == LoadState.FAILED:
        display_error(f"Error loading doctors: {session.error}", session.failure)
        raise typer.Exit(get_exit_code_for_error(session.failure))

    return session


def _format_experience(record: Record) -> str:
    years = extract_number(record.experience)
    return f"{years} yrs" if years is not None else "-"


def _format_fee(record: Record) -> str:
    fee = extract_number(record.fees)
    return f"₹{fee}" if fee is not None else "-"


def _format_modes(record: Record) -> str:
    modes = []
    if record.in_clinic:
        modes.append("Clinic")
    if record.video_consult:
        modes.append("Video")
    return ", ".join(modes) or "-"


def _format_clinic(record: Record) -> str:
    if record.clinic is None:
        return "-"
    return f"{record.clinic.name or 'Clinic'}, {record.clinic.locality or 'Location'}"


def display_results(records: list[Record], limit: int, total: int) -> None:
    """Render the ordered results as a table."""
    if not records:
        display_warning("No doctors found matching your criteria.")
        return

    table = Table(
        title=f"[bold magenta]Doctors ({len(records)} of {total})[/bold magenta]",
        show_header=True,
        header_style="bold magenta",
        border_style="blue",
    )
    table.add_column("#", justify="right", style="dim")
    table.add_column("Doctor", style="white")
    table.add_column("Specialties", style="cyan")
    table.add_column("Experience", justify="right", style="green")
    table.add_column("Fee", justify="right", style="yellow")
    table.add_column("Consult", style="white")
    table.add_column("Clinic", style="dim")

    for index, record in enumerate(records[:limit], 1):
        table.add_row(
            str(index),
            record.name,
            ", ".join(record.specialties) or "Specialist",
            _format_experience(record),
            _format_fee(record),
            _format_modes(record),
            _format_clinic(record),
        )

    console.print(table)

    if len(records) > limit:
        console.print(f"[dim]... and {len(records) - limit} more doctors[/dim]")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Only show errors and warnings"
    ),
    json_logs: bool = typer.Option(
        False, "--json-logs", help="Emit logs as JSON lines"
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file path (.env)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
):
    """
    [bold blue]doclisting[/bold blue] - Browse a doctor directory

    [bold]Examples:[/bold]
        doclisting search "sharma" --mode video --sort fees
        doclisting search --specialty Dentist --specialty ENT
        doclisting specialties --search derm
    """
    correlation_id = generate_correlation_id()

    try:
        settings = get_configured_settings(config)
    except ConfigurationError as e:
        display_error("Configuration error", e)
        raise typer.Exit(get_exit_code_for_error(e))

    setup_logging(
        verbose=verbose,
        quiet=quiet,
        json_logs=json_logs or settings.log_format == "json",
        log_level=settings.log_level,
    )
    _logger.with_correlation_id(correlation_id)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose
    ctx.obj["correlation_id"] = correlation_id


@app.command("search")
def search_command(
    ctx: typer.Context,
    query: str = typer.Argument("", help="Case-insensitive text to find in doctor names"),
    mode: str = typer.Option(
        "all", "--mode", "-m", help="Consultation mode: 'all', 'video' or 'clinic'"
    ),
    specialty: list[str] | None = typer.Option(
        None, "--specialty", "-s", help="Specialty to include (repeatable, OR-ed)"
    ),
    sort: str = typer.Option(
        "none", "--sort", help="Ordering: 'none', 'fees' or 'experience'"
    ),
    limit: int | None = typer.Option(
        None, "--limit", "-l", min=1, help="Maximum number of rows to display"
    ),
    file: Path | None = typer.Option(
        None, "--file", "-f", help="Read doctors from a local JSON file"
    ),
):
    """
    Search, filter and sort the doctor directory.

    [bold]Examples:[/bold]
        doclisting search "dr. a"
        doclisting search --mode clinic --sort fees
        doclisting search --specialty ENT --file doctors.json
    """
    settings = ctx.obj["settings"]
    correlation_id = ctx.obj["correlation_id"]
    row_limit = limit if limit is not None else settings.default_limit

    session = load_session(settings, file, correlation_id)

    try:
        session.set_query(query)
        session.set_mode(mode)
        for name in specialty or []:
            session.toggle_specialty(name)
        session.set_sort(sort)
    except DocListingError as e:
        raise typer.Exit(handle_cli_exception("Search", e))

    display_results(session.results, row_limit, len(session.records))


@app.command("specialties")
def specialties_command(
    ctx: typer.Context,
    search: str = typer.Option(
        "", "--search", "-s", help="Only show specialties containing this text"
    ),
    file: Path | None = typer.Option(
        None, "--file", "-f", help="Read doctors from a local JSON file"
    ),
):
    """
    List the specialties available in the directory.
    """
    settings = ctx.obj["settings"]
    correlation_id = ctx.obj["correlation_id"]

    session = load_session(settings, file, correlation_id)
    visible = session.set_facet_search(search)

    if not visible:
        display_warning("No specialties match your search.")
        return

    counts = count_specialties(session.records)

    table = Table(
        title="[bold magenta]Specialties[/bold magenta]",
        show_header=True,
        header_style="bold magenta",
        border_style="blue",
    )
    table.add_column("Specialty", style="cyan")
    table.add_column("Doctors", justify="right", style="green")

    for name in visible:
        table.add_row(name, str(counts.get(name, 0)))

    console.print(table)


@app.command("config-info")
def config_info_command(ctx: typer.Context):
    """
    Show current configuration in a readable format.
    """
    settings: Settings = ctx.obj["settings"]

    table = Table(title="[bold magenta]Configuration[/bold magenta]", border_style="blue")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    values: dict[str, Any] = settings.model_dump()
    for key, value in values.items():
        table.add_row(key, str(value))

    console.print(table)


if __name__ == "__main__":
    app()
