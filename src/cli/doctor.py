"""Doctor command for environment diagnostics."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from core.config import BrowserKind, write_user_env_vars
from core.domain.errors import ConfigurationError, ExtractionError
from core.services.extractor import list_input_files

from cli.context import settings_from_context

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(url: str, timeout: float = 10.0) -> tuple[bool, str]:
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
    except httpx.HTTPError as exc:
        return False, str(exc)
    return response.status_code < 400, f"HTTP {response.status_code}"


@app.command()
def run(
    ctx: typer.Context,
    offline: bool = typer.Option(False, "--offline", help="Skip the entry URL connectivity check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = settings_from_context(ctx)
    except ConfigurationError as exc:
        _console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=2) from exc

    table = Table(title="regcheck Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.browser is None:
        table.add_row("Browser", "MISSING", "Set REGCHECK_BROWSER (or run `doctor set-browser`)")
    else:
        table.add_row("Browser", "OK", settings.browser.value)
    table.add_row("Race timeout", "OK", f"{settings.race_timeout_seconds:.1f}s")
    table.add_row("Implicit wait", "OK", f"{settings.implicit_wait_seconds:.1f}s")

    # Input corpora
    try:
        files = list_input_files(
            settings.input_dir,
            marker=settings.input_marker,
            extensions=settings.input_extensions,
        )
        status = "OK" if files else "EMPTY"
        table.add_row("Input corpora", status, f"{len(files)} file(s) in {settings.input_dir}")
    except ExtractionError as exc:
        table.add_row("Input corpora", "FAIL", str(exc))

    expected_ok = settings.expected_path.is_file()
    table.add_row(
        "Expected baseline",
        "OK" if expected_ok else "MISSING",
        str(settings.expected_path),
    )

    # Connectivity (best-effort)
    if offline:
        table.add_row("Entry URL", "SKIPPED", settings.entry_url)
    else:
        ok_http, detail_http = _check_http(settings.entry_url)
        table.add_row("Entry URL", "OK" if ok_http else "FAIL", f"{settings.entry_url} ({detail_http})")

    _console.print(table)


@app.command(name="set-browser")
def set_browser(
    browser: BrowserKind = typer.Argument(..., help="Automation backend to store in the user config."),
) -> None:
    """Store the browser selector in the user config .env (no manual editing)."""

    env_path = write_user_env_vars({"REGCHECK_BROWSER": browser.value})
    _console.print(f"[green]Saved browser selector to:[/green] {env_path}")
