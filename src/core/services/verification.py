"""Orquestación de la verificación.

Cada candidato sigue el mismo protocolo:

    Start -> Racing -> Rejected | ReportReady -> (Accepted | Rejected)
                    -> Incomplete (timeout)

Por qué dos funciones:
- `verify_candidate` no toca el almacenamiento: maneja la sesión y devuelve
  un resultado (sirve también para `check`).
- `run_verification` recorre los candidatos en orden y añade cada registro al
  fichero en el momento, así un fallo a mitad de run deja en disco todo lo
  ya terminado.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, Protocol

from core.domain.errors import SessionError
from core.domain.locators import PageLocators
from core.domain.models import (
    REJECTION_MESSAGE,
    AcceptedOutcome,
    IncompleteOutcome,
    OutputRecord,
    RegistrationCandidate,
    RejectedOutcome,
    VerificationOutcome,
)
from core.interfaces.browser import BrowserSession
from core.services.pages import EntryPage, ReportPage
from core.services.race import Clock, Sleep, race

logger = logging.getLogger(__name__)

ERROR_CONDITION = "error"
REPORT_CONDITION = "report"


class RecordSink(Protocol):
    def append(self, record: OutputRecord) -> None:
        ...


@dataclass
class VerificationOptions:
    """Direcciones del sitio y política de espera de un run."""

    entry_url: str
    report_url: str
    report_url_marker: str = "report"
    timeout_seconds: float = 2.0
    poll_seconds: float = 0.1
    locators: PageLocators = field(default_factory=PageLocators)
    clock: Clock = time.monotonic
    sleep: Sleep = time.sleep


@dataclass
class VerificationHooks:
    """Callbacks opcionales para la capa de UI (progreso)."""

    candidate_started: Callable[[RegistrationCandidate], None] | None = None
    outcome: Callable[[RegistrationCandidate, VerificationOutcome], None] | None = None


@dataclass
class VerificationSummary:
    outcomes: list[VerificationOutcome] = field(default_factory=list)

    def _count(self, kind: str) -> int:
        return sum(1 for o in self.outcomes if o.kind == kind)

    @property
    def accepted(self) -> int:
        return self._count("accepted")

    @property
    def rejected(self) -> int:
        return self._count("rejected")

    @property
    def incomplete(self) -> int:
        return self._count("incomplete")

    @property
    def records_written(self) -> int:
        return self.accepted + self.rejected


def _read_report(session: BrowserSession, options: VerificationOptions, token: str) -> VerificationOutcome:
    report = ReportPage(session, options.locators)
    report.open(options.report_url)
    fields = report.read_fields()

    if fields.complete:
        return AcceptedOutcome(
            token=fields.registration or "",
            make=fields.make or "",
            model=fields.model or "",
            year=fields.year or "",
        )

    logger.warning("Report for %r is missing fields: %s", token, fields)
    return RejectedOutcome(token=fields.registration or "", message=REJECTION_MESSAGE)


def verify_candidate(
    session: BrowserSession,
    token: str,
    options: VerificationOptions,
) -> VerificationOutcome:
    """Envía un token por el formulario y clasifica el resultado.

    Los fallos de sesión no se capturan aquí; los contiene `run_verification`.
    """

    entry = EntryPage(session, options.locators)
    entry.open(options.entry_url)
    entry.enter_registration(token)
    entry.submit()

    winner = race(
        {
            ERROR_CONDITION: entry.error_present,
            REPORT_CONDITION: lambda: options.report_url_marker in session.current_url,
        },
        timeout=options.timeout_seconds,
        poll_interval=options.poll_seconds,
        clock=options.clock,
        sleep=options.sleep,
    )

    if winner is None:
        logger.info("No outcome for %r within %.1fs", token, options.timeout_seconds)
        return IncompleteOutcome(token=token)

    if winner == ERROR_CONDITION and entry.error_displayed():
        message = entry.error_text().strip()
        logger.info("Entered registration %r, alert message: %r", token, message)
        return RejectedOutcome(token=token, message=message)

    # Reporte alcanzado, o aviso oculto/obsoleto: camino del reporte.
    return _read_report(session, options, token)


def run_verification(
    *,
    session: BrowserSession,
    candidates: Iterable[RegistrationCandidate],
    sink: RecordSink,
    options: VerificationOptions,
    hooks: VerificationHooks | None = None,
) -> VerificationSummary:
    hooks = hooks or VerificationHooks()
    summary = VerificationSummary()

    for candidate in candidates:
        if hooks.candidate_started:
            hooks.candidate_started(candidate)

        try:
            outcome = verify_candidate(session, candidate.token, options)
        except SessionError as exc:
            logger.error("Session failure while verifying %r: %s", candidate.token, exc)
            outcome = IncompleteOutcome(token=candidate.token, reason=str(exc))

        record = outcome.to_record()
        if record is not None:
            sink.append(record)

        summary.outcomes.append(outcome)
        if hooks.outcome:
            hooks.outcome(candidate, outcome)

    logger.info(
        "Verification finished: %d accepted, %d rejected, %d incomplete",
        summary.accepted,
        summary.rejected,
        summary.incomplete,
    )
    return summary
