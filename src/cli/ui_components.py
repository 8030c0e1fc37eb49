"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.errors import ReconciliationError
from core.domain.models import VerificationOutcome
from core.services.extractor import ExtractionResult
from core.services.reconciler import ReconciliationReport
from core.services.verification import VerificationSummary


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida (solo en comandos de run completo)."""

    title = Text("regcheck", style="bold cyan")
    subtitle = Text("Extract • Verify • Reconcile", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_extraction_table(result: ExtractionResult) -> Table:
    table = Table(title="Candidate extraction")
    table.add_column("Input file", style="cyan")
    for path in result.files:
        table.add_row(str(path))
    table.caption = f"{len(result.valid)} VALID, {len(result.invalid)} INVALID"
    return table


_OUTCOME_STYLES = {
    "accepted": "green",
    "rejected": "yellow",
    "incomplete": "red",
}


def outcome_row(outcome: VerificationOutcome) -> tuple[str, ...]:
    if outcome.kind == "accepted":
        detail = f"{outcome.make} / {outcome.model} / {outcome.year}"
    elif outcome.kind == "rejected":
        detail = outcome.message
    else:
        detail = outcome.reason
    return (outcome.token, outcome.kind.upper(), detail)


def build_outcomes_table(summary: VerificationSummary) -> Table:
    table = Table(title="Verification outcomes")
    table.add_column("Registration", style="white", no_wrap=True)
    table.add_column("Outcome")
    table.add_column("Details", style="dim")
    for outcome in summary.outcomes:
        token, kind, detail = outcome_row(outcome)
        style = _OUTCOME_STYLES.get(outcome.kind, "white")
        table.add_row(token, f"[{style}]{kind}[/{style}]", detail)
    table.caption = (
        f"{summary.accepted} accepted, {summary.rejected} rejected, "
        f"{summary.incomplete} incomplete"
    )
    return table


def build_reconciliation_panel(
    report: ReconciliationReport | None,
    error: ReconciliationError | None = None,
) -> Panel:
    if error is not None:
        body = Text(str(error), style="red")
        return Panel(body, title=Text("Reconciliation FAILED", style="bold red"), border_style="red")

    body = Text()
    if report is not None:
        body.append(f"Lines compared: {report.lines_compared}\n")
        body.append(f"Fields compared: {report.fields_compared}")
    return Panel(body, title=Text("Reconciliation OK", style="bold green"), border_style="green")
