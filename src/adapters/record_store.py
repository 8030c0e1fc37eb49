"""Registro de salida real (CSV-like).

Por qué abrir/cerrar en cada fila:
- Un crash a mitad de run deja un fichero válido con todas las filas ya
  procesadas; no hay handle abierto entre candidatos.
"""

from __future__ import annotations

from pathlib import Path

from core.domain.models import OUTPUT_HEADER, OutputRecord


class OutputRecordStore:
    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def reset(self) -> None:
        """Trunca el fichero y escribe la cabecera."""

        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(OUTPUT_HEADER + "\n")

    def append(self, record: OutputRecord) -> None:
        with self._path.open("a", encoding="utf-8", newline="") as fh:
            fh.write(record.to_line() + "\n")

    def read_lines(self) -> list[str]:
        return self._path.read_text(encoding="utf-8").splitlines()
