"""Extracción y clasificación de candidatos a matrícula.

Flujo:
1. Se leen todos los ficheros de entrada (nombre con la marca `_input` y
   extensión reconocida) en orden alfabético. Si alguno no se puede leer, se
   aborta sin escribir nada.
2. Patrón VALID (`AB12 CDE`) y patrón INVALID (alfanumérico de 1 a 7 que no
   empieza con forma VALID). Los duplicados colapsan conservando el orden de
   primera aparición y se restan los VALID de los INVALID.
3. La tabla (cabecera + VALID + INVALID) sobreescribe el fichero de salida.

Nota: el patrón INVALID también captura trozos cortos en mayúsculas de texto
que no es una matrícula (incluida la cola `CDE` de `AB12 CDE`). Se mantiene así.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Sequence

from core.domain.errors import ExtractionError
from core.domain.models import (
    CANDIDATES_HEADER,
    FIELD_DELIMITER,
    CandidateLabel,
    RegistrationCandidate,
)

logger = logging.getLogger(__name__)

VALID_PATTERN = re.compile(r"\b[A-Z]{2}[0-9]{2} [A-Z]{3}\b")
INVALID_PATTERN = re.compile(r"\b(?![A-Z]{2}[0-9]{2} [A-Z]{3}\b)[A-Z0-9]{1,7}\b")


@dataclass
class ExtractionResult:
    """Resultado de una extracción: ficheros leídos y candidatos etiquetados."""

    files: list[Path]
    candidates: list[RegistrationCandidate] = field(default_factory=list)

    @property
    def valid(self) -> list[RegistrationCandidate]:
        return [c for c in self.candidates if c.label is CandidateLabel.VALID]

    @property
    def invalid(self) -> list[RegistrationCandidate]:
        return [c for c in self.candidates if c.label is CandidateLabel.INVALID]


def is_input_file(path: Path, *, marker: str = "_input", extensions: Sequence[str] = (".txt",)) -> bool:
    name = path.name
    return path.is_file() and marker in name and name.endswith(tuple(extensions))


def list_input_files(
    input_dir: Path,
    *,
    marker: str = "_input",
    extensions: Sequence[str] = (".txt",),
) -> list[Path]:
    if not input_dir.is_dir():
        raise ExtractionError(f"Input directory not found: {input_dir}")
    try:
        entries = sorted(input_dir.iterdir(), key=lambda p: p.name)
    except OSError as exc:
        raise ExtractionError(f"Cannot list input directory {input_dir}: {exc}") from exc
    return [p for p in entries if is_input_file(p, marker=marker, extensions=extensions)]


def _read_corpus(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(f"Error reading file: {path}: {exc}") from exc


def _unique_matches(pattern: re.Pattern[str], texts: Iterable[str]) -> list[str]:
    seen: dict[str, None] = {}
    for text in texts:
        for line in text.splitlines():
            for match in pattern.finditer(line):
                seen.setdefault(match.group(0), None)
    return list(seen)


def classify(texts: Sequence[str]) -> list[RegistrationCandidate]:
    """Etiqueta los tokens de `texts`: primero todos los VALID, luego los INVALID."""

    valid = _unique_matches(VALID_PATTERN, texts)
    valid_set = set(valid)
    invalid = [t for t in _unique_matches(INVALID_PATTERN, texts) if t not in valid_set]

    return [RegistrationCandidate(token=t, label=CandidateLabel.VALID) for t in valid] + [
        RegistrationCandidate(token=t, label=CandidateLabel.INVALID) for t in invalid
    ]


def render_candidates_table(candidates: Iterable[RegistrationCandidate]) -> str:
    lines = [CANDIDATES_HEADER, *(c.to_row() for c in candidates)]
    return "\n".join(lines) + "\n"


def extract_candidates(
    *,
    input_dir: Path,
    output_path: Path,
    marker: str = "_input",
    extensions: Sequence[str] = (".txt",),
) -> ExtractionResult:
    files = list_input_files(input_dir, marker=marker, extensions=extensions)
    # Todo se lee antes de escribir: un fallo no deja tabla parcial.
    texts = [_read_corpus(path) for path in files]
    candidates = classify(texts)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_candidates_table(candidates), encoding="utf-8")

    result = ExtractionResult(files=files, candidates=candidates)
    logger.info(
        "Extracted %d VALID and %d INVALID candidates from %d file(s) into %s",
        len(result.valid),
        len(result.invalid),
        len(files),
        output_path,
    )
    return result


def load_candidates(path: Path) -> list[RegistrationCandidate]:
    """Lee la tabla de candidatos (se salta cabecera y líneas vacías)."""

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise ExtractionError(f"Error reading input file: {path}: {exc}") from exc

    candidates: list[RegistrationCandidate] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        token, _, status = line.partition(FIELD_DELIMITER)
        label = CandidateLabel.VALID if status == CandidateLabel.VALID.value else CandidateLabel.INVALID
        candidates.append(RegistrationCandidate(token=token, label=label))
    return candidates
