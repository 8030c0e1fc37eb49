"""Reconciliación estricta entre salida real y línea base esperada.

Comparación posicional: línea i contra línea i, campo j contra campo j. No se
ordena ni se empareja por clave. Se detiene en la primera discrepancia.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from core.domain.errors import (
    ExtractionError,
    FieldCountMismatch,
    FieldValueMismatch,
    LineCountMismatch,
)
from core.domain.models import FIELD_DELIMITER

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationReport:
    lines_compared: int
    fields_compared: int


def reconcile(actual: Sequence[str], expected: Sequence[str]) -> ReconciliationReport:
    if len(expected) != len(actual):
        raise LineCountMismatch(expected=len(expected), actual=len(actual))

    fields_compared = 0
    for index, (expected_line, actual_line) in enumerate(zip(expected, actual), start=1):
        expected_fields = expected_line.split(FIELD_DELIMITER)
        actual_fields = actual_line.split(FIELD_DELIMITER)

        if len(expected_fields) != len(actual_fields):
            raise FieldCountMismatch(
                line=index,
                expected=len(expected_fields),
                actual=len(actual_fields),
            )

        for field_index, (want, got) in enumerate(zip(expected_fields, actual_fields), start=1):
            if want != got:
                raise FieldValueMismatch(line=index, field=field_index, expected=want, actual=got)
            fields_compared += 1

    return ReconciliationReport(lines_compared=len(expected), fields_compared=fields_compared)


def _read_lines(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(f"Cannot read {path}: {exc}") from exc


def reconcile_files(*, actual_path: Path, expected_path: Path) -> ReconciliationReport:
    report = reconcile(_read_lines(actual_path), _read_lines(expected_path))
    logger.info(
        "Reconciled %s against %s: %d lines, %d fields",
        actual_path,
        expected_path,
        report.lines_compared,
        report.fields_compared,
    )
    return report
