"""CLI principal (Typer).

Comandos:
- `extract`: corpus -> tabla de candidatos.
- `verify`: tabla de candidatos -> registro de salida (navegador real).
- `check`: un único token, sin tocar el registro.
- `reconcile`: registro de salida vs. línea base esperada.
- `run`: todo lo anterior en orden.
- `probe-not-found`: una URL inexistente debe responder 404/Not Found.
- `doctor`: diagnósticos de entorno.

Códigos de salida: 0 OK, 1 discrepancia/aserción, 2 error fatal de arranque.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import typer
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn

from adapters.locator_files import load_page_locators
from adapters.record_store import OutputRecordStore
from cli import doctor
from cli.context import settings_from_context
from cli.ui_components import (
    build_extraction_table,
    build_outcomes_table,
    build_reconciliation_panel,
    outcome_row,
    print_banner,
)
from core.config import AppSettings, load_settings
from core.domain.errors import (
    ConfigurationError,
    ExtractionError,
    HarnessError,
    ReconciliationError,
)
from core.domain.models import RegistrationCandidate
from core.log import setup_logging
from core.services.extractor import ExtractionResult, extract_candidates, load_candidates
from core.services.reconciler import reconcile_files
from core.services.session_lifecycle import SessionManager, session_scope
from core.services.site_probe import probe_not_found
from core.services.verification import (
    VerificationHooks,
    VerificationOptions,
    VerificationSummary,
    run_verification,
    verify_candidate,
)

app = typer.Typer(
    no_args_is_help=True,
    help="Registration lookup verification harness: extract, verify, reconcile.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()

EXIT_MISMATCH = 1
EXIT_FATAL = 2


def build_session_manager() -> SessionManager:
    return SessionManager()


def _fatal(exc: Exception) -> typer.Exit:
    _console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(code=EXIT_FATAL)


@app.callback()
def main(
    ctx: typer.Context,
    browser: Optional[str] = typer.Option(None, "--browser", "-b", help="chrome, firefox or safari."),
    headless: Optional[bool] = typer.Option(None, "--headless/--no-headless", help="Run the browser without a window."),
    input_dir: Optional[Path] = typer.Option(None, "--input-dir", help="Directory with *_input*.txt corpora."),
    candidates: Optional[Path] = typer.Option(None, "--candidates", help="Candidate table path."),
    output: Optional[Path] = typer.Option(None, "--output", help="Output record file path."),
    expected: Optional[Path] = typer.Option(None, "--expected", help="Expected baseline path."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Race timeout in seconds."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR, CRITICAL."),
) -> None:
    ctx.obj = {
        k: v
        for k, v in {
            "browser": browser,
            "headless": headless,
            "input_dir": input_dir,
            "candidates_path": candidates,
            "output_path": output,
            "expected_path": expected,
            "race_timeout_seconds": timeout,
            "log_level": log_level,
        }.items()
        if v is not None
    }

    try:
        settings = load_settings(**ctx.obj)
        setup_logging(settings.log_level, settings.log_file)
    except ConfigurationError:
        # El comando reportará el error de configuración con su código de salida.
        setup_logging("INFO")


def _settings(ctx: typer.Context) -> AppSettings:
    try:
        return settings_from_context(ctx)
    except ConfigurationError as exc:
        raise _fatal(exc) from exc


def _options(settings: AppSettings) -> VerificationOptions:
    return VerificationOptions(
        entry_url=settings.entry_url,
        report_url=settings.report_url,
        report_url_marker=settings.report_url_marker,
        timeout_seconds=settings.race_timeout_seconds,
        poll_seconds=settings.race_poll_seconds,
        locators=load_page_locators(settings.locators_path),
    )


def _extract(settings: AppSettings) -> ExtractionResult:
    return extract_candidates(
        input_dir=settings.input_dir,
        output_path=settings.candidates_path,
        marker=settings.input_marker,
        extensions=settings.input_extensions,
    )


def _verify(settings: AppSettings, candidates: Sequence[RegistrationCandidate]) -> VerificationSummary:
    options = _options(settings)
    store = OutputRecordStore(settings.output_path)

    manager = build_session_manager()
    progress = Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        console=_console,
        transient=True,
    )
    # El registro anterior solo se trunca cuando ya hay navegador.
    with session_scope(manager, settings) as session, progress:
        store.reset()
        task_id = progress.add_task("Verifying", total=len(candidates))
        hooks = VerificationHooks(
            candidate_started=lambda c: progress.update(task_id, description=f"Verifying {c.token}"),
            outcome=lambda c, o: progress.advance(task_id),
        )
        return run_verification(
            session=session,
            candidates=candidates,
            sink=store,
            options=options,
            hooks=hooks,
        )


def _reconcile(settings: AppSettings) -> None:
    try:
        report = reconcile_files(actual_path=settings.output_path, expected_path=settings.expected_path)
    except ReconciliationError as exc:
        _console.print(build_reconciliation_panel(None, exc))
        raise typer.Exit(code=EXIT_MISMATCH) from exc
    _console.print(build_reconciliation_panel(report))


@app.command()
def extract(ctx: typer.Context) -> None:
    """Mine the input corpora and write the labeled candidate table."""

    settings = _settings(ctx)
    try:
        result = _extract(settings)
    except ExtractionError as exc:
        raise _fatal(exc) from exc

    _console.print(build_extraction_table(result))
    _console.print(f"[green]Candidate table written to:[/green] {settings.candidates_path}")


@app.command()
def verify(ctx: typer.Context) -> None:
    """Verify every candidate in the table and append outcomes to the output file."""

    settings = _settings(ctx)
    try:
        candidates = load_candidates(settings.candidates_path)
        summary = _verify(settings, candidates)
    except HarnessError as exc:
        raise _fatal(exc) from exc

    _console.print(build_outcomes_table(summary))
    _console.print(f"[green]Output records written to:[/green] {settings.output_path}")


@app.command()
def check(
    ctx: typer.Context,
    token: str = typer.Argument(..., help="Registration to submit."),
    expect: Optional[str] = typer.Option(None, "--expect", help="Expected rejection message."),
) -> None:
    """Verify a single registration without touching the output file."""

    settings = _settings(ctx)
    manager = build_session_manager()
    try:
        options = _options(settings)
        with session_scope(manager, settings) as session:
            outcome = verify_candidate(session, token, options)
    except HarnessError as exc:
        raise _fatal(exc) from exc

    shown_token, kind, detail = outcome_row(outcome)
    _console.print(f"{shown_token}: [bold]{kind}[/bold] {detail}")

    if expect is not None:
        actual = outcome.message if outcome.kind == "rejected" else None
        if actual != expect:
            _console.print(f"[red]Expected rejection {expect!r}, got {actual!r}[/red]")
            raise typer.Exit(code=EXIT_MISMATCH)


@app.command()
def reconcile(ctx: typer.Context) -> None:
    """Compare the output file with the expected baseline, line by line."""

    settings = _settings(ctx)
    try:
        _reconcile(settings)
    except ExtractionError as exc:
        raise _fatal(exc) from exc


@app.command(name="run")
def run_all(ctx: typer.Context) -> None:
    """Extract, verify and reconcile in one go."""

    settings = _settings(ctx)
    print_banner(_console)
    try:
        result = _extract(settings)
        _console.print(build_extraction_table(result))
        summary = _verify(settings, result.candidates)
        _console.print(build_outcomes_table(summary))
        _reconcile(settings)
    except HarnessError as exc:
        raise _fatal(exc) from exc


@app.command(name="probe-not-found")
def probe(
    ctx: typer.Context,
    url: Optional[str] = typer.Argument(None, help="URL that must not exist (defaults to <entry>/nonexistentpage)."),
) -> None:
    """Check that the site answers 404 / Not Found for a missing page."""

    settings = _settings(ctx)
    target = url or settings.entry_url.rstrip("/") + "/nonexistentpage"
    manager = build_session_manager()
    try:
        with session_scope(manager, settings) as session:
            found = probe_not_found(
                session,
                target,
                timeout=settings.race_timeout_seconds,
                poll_interval=settings.race_poll_seconds,
            )
    except HarnessError as exc:
        raise _fatal(exc) from exc

    if not found:
        _console.print(f"[red]Expected 404 Not Found error was not found at {target}[/red]")
        raise typer.Exit(code=EXIT_MISMATCH)
    _console.print(f"[green]{target} reports Not Found[/green]")


def run() -> None:
    app()
