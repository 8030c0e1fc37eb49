"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta e inmutabilidad (`frozen`) para candidatos y resultados:
  una vez clasificados o producidos, no se tocan.
- El dominio no conoce Selenium, ficheros ni CLI: solo conceptos del problema.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

REJECTION_MESSAGE = "The license plate number is not recognised"

CANDIDATES_HEADER = "VARIANT_REG,STATUS"
OUTPUT_HEADER = "VARIANT_REG,MAKE,MODEL,YEAR"
FIELD_DELIMITER = ","


class CandidateLabel(str, Enum):
    """Clasificación sintáctica previa a cualquier verificación en vivo."""

    VALID = "VALID"
    INVALID = "INVALID"


class RegistrationCandidate(BaseModel):
    """Token extraído de un corpus que podría ser una matrícula."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(
        ...,
        description="Token tal y como aparece en el texto de entrada.",
    )
    label: CandidateLabel = Field(
        ...,
        description="VALID si encaja con el formato AB12 CDE, INVALID en otro caso.",
    )

    @property
    def status(self) -> str:
        """Valor de la columna STATUS en la tabla de candidatos."""

        if self.label is CandidateLabel.VALID:
            return CandidateLabel.VALID.value
        return REJECTION_MESSAGE

    def to_row(self) -> str:
        return f"{self.token}{FIELD_DELIMITER}{self.status}"


class OutputRecord(BaseModel):
    """Fila de la salida real: `token,message` o `token,make,model,year`."""

    model_config = ConfigDict(frozen=True)

    columns: tuple[str, ...] = Field(
        ...,
        min_length=2,
        max_length=4,
        description="Campos de la fila, en orden.",
    )

    def to_line(self) -> str:
        return FIELD_DELIMITER.join(self.columns)


class RejectedOutcome(BaseModel):
    """El formulario rechazó la matrícula (o el reporte vino incompleto)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["rejected"] = "rejected"
    token: str
    message: str

    def to_record(self) -> OutputRecord | None:
        return OutputRecord(columns=(self.token, self.message))


class AcceptedOutcome(BaseModel):
    """El formulario llevó al reporte y los cuatro campos estaban presentes."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["accepted"] = "accepted"
    token: str
    make: str
    model: str
    year: str

    def to_record(self) -> OutputRecord | None:
        return OutputRecord(columns=(self.token, self.make, self.model, self.year))


class IncompleteOutcome(BaseModel):
    """Ninguna de las dos condiciones se cumplió a tiempo; no se escribe fila."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["incomplete"] = "incomplete"
    token: str
    reason: str = Field(
        default="timeout",
        description="Diagnóstico (timeout o error de sesión). Nunca se persiste.",
    )

    def to_record(self) -> OutputRecord | None:
        return None


VerificationOutcome = Annotated[
    Union[RejectedOutcome, AcceptedOutcome, IncompleteOutcome],
    Field(discriminator="kind"),
]
