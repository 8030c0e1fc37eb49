"""Contrato de una sesión de navegador.

Por qué Protocol:
- El orquestador solo necesita un puñado de primitivas (navegar, escribir,
  pulsar, leer). Selenium las implementa en `adapters.browser`; los tests usan
  un stub con guion.
- Los localizadores llegan ya tipados (`Locator`), nunca como strings.

Errores:
- Un elemento ausente se señala con `ElementNotFoundError`.
- Cualquier otro fallo del backend se envuelve en `SessionError`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.locators import Locator


@runtime_checkable
class BrowserSession(Protocol):
    @property
    def current_url(self) -> str:
        ...

    @property
    def page_source(self) -> str:
        ...

    def navigate(self, url: str) -> None:
        ...

    def type_text(self, locator: Locator, text: str) -> None:
        ...

    def click(self, locator: Locator) -> None:
        ...

    def is_present(self, locator: Locator) -> bool:
        """Comprueba presencia en el DOM sin esperar (no lanza si no existe)."""

        ...

    def is_displayed(self, locator: Locator) -> bool:
        ...

    def read_text(self, locator: Locator) -> str:
        ...

    def read_attribute(self, locator: Locator, name: str) -> str | None:
        ...

    def close(self) -> None:
        """Cierra el navegador y libera el driver."""

        ...
