"""Page objects sobre `BrowserSession`.

Encapsulan qué localizador se usa para cada acción; el orquestador solo
habla de "enviar matrícula" o "leer marca".
"""

from __future__ import annotations

from dataclasses import dataclass

from core.domain.errors import ElementNotFoundError
from core.domain.locators import Locator, PageLocators
from core.interfaces.browser import BrowserSession


class EntryPage:
    """Formulario de consulta: un input de texto y un botón de envío."""

    def __init__(self, session: BrowserSession, locators: PageLocators) -> None:
        self._session = session
        self._locators = locators

    def open(self, url: str) -> None:
        self._session.navigate(url)

    def enter_registration(self, registration: str) -> None:
        self._session.type_text(self._locators.registration_input, registration)

    def submit(self) -> None:
        self._session.click(self._locators.submit_button)

    def error_present(self) -> bool:
        return self._session.is_present(self._locators.error_alert)

    def error_displayed(self) -> bool:
        """False si el aviso existe pero está oculto o ya no está en el DOM."""

        try:
            return self._session.is_displayed(self._locators.error_alert)
        except ElementNotFoundError:
            return False

    def error_text(self) -> str:
        return self._session.read_text(self._locators.error_alert)


@dataclass(frozen=True)
class ReportFields:
    registration: str | None
    make: str | None
    model: str | None
    year: str | None

    @property
    def complete(self) -> bool:
        return all((self.registration, self.make, self.model, self.year))


class ReportPage:
    """Página de reporte: matrícula en un input y tres celdas etiquetadas."""

    def __init__(self, session: BrowserSession, locators: PageLocators) -> None:
        self._session = session
        self._locators = locators

    def open(self, url: str) -> None:
        self._session.navigate(url)

    def _text(self, locator: Locator) -> str | None:
        try:
            return self._session.read_text(locator).strip()
        except ElementNotFoundError:
            return None

    def registration(self) -> str | None:
        try:
            value = self._session.read_attribute(self._locators.report_registration, "value")
        except ElementNotFoundError:
            return None
        return value.strip() if value is not None else None

    def read_fields(self) -> ReportFields:
        return ReportFields(
            registration=self.registration(),
            make=self._text(self._locators.report_make),
            model=self._text(self._locators.report_model),
            year=self._text(self._locators.report_year),
        )
