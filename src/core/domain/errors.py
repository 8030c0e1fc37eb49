"""Jerarquía de errores del harness.

Por qué un módulo propio:
- Separa los fallos fatales de arranque (config, extracción) de los fallos
  recuperables por candidato (sesión del navegador) y de los veredictos de
  reconciliación.
- La CLI traduce cada familia a un código de salida distinto.
"""

from __future__ import annotations


class HarnessError(Exception):
    """Raíz de todos los errores propios del harness."""


class ConfigurationError(HarnessError):
    """Configuración inválida o ausente (p.ej. backend de navegador desconocido)."""


class ExtractionError(HarnessError):
    """No se pudo leer el directorio/fichero de entrada o la tabla de candidatos."""


class SessionError(HarnessError):
    """Fallo del backend de navegador mientras se procesa un candidato."""


class ElementNotFoundError(SessionError):
    """El localizador no encontró ningún elemento en la página actual."""

    def __init__(self, locator: object) -> None:
        super().__init__(f"Element not found: {locator}")
        self.locator = locator


class ReconciliationError(HarnessError):
    """Discrepancia entre la salida real y la línea base esperada."""


class LineCountMismatch(ReconciliationError):
    def __init__(self, *, expected: int, actual: int) -> None:
        super().__init__(
            f"The number of lines in the actual output ({actual}) does not match "
            f"the expected output ({expected})."
        )
        self.expected = expected
        self.actual = actual


class FieldCountMismatch(ReconciliationError):
    def __init__(self, *, line: int, expected: int, actual: int) -> None:
        super().__init__(
            f"The number of fields in line {line} does not match: "
            f"expected {expected}, got {actual}."
        )
        self.line = line
        self.expected = expected
        self.actual = actual


class FieldValueMismatch(ReconciliationError):
    def __init__(self, *, line: int, field: int, expected: str, actual: str) -> None:
        super().__init__(
            f"Field {field} in line {line} does not match: "
            f"expected {expected!r}, got {actual!r}."
        )
        self.line = line
        self.field = field
        self.expected = expected
        self.actual = actual
