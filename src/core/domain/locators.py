"""Localizadores tipados de elementos de página.

Por qué no strings sueltos:
- El Core solo maneja un conjunto cerrado de estrategias (id/css/xpath); el
  adaptador de Selenium las traduce a `By.*`.
- Los localizadores son datos de configuración: se pueden sobreescribir con
  un JSON sin tocar código.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class LocatorStrategy(str, Enum):
    ID = "id"
    CSS = "css"
    XPATH = "xpath"


class Locator(BaseModel):
    """Descriptor inmutable: estrategia + expresión."""

    model_config = ConfigDict(frozen=True)

    strategy: LocatorStrategy
    value: str = Field(..., min_length=1)

    @classmethod
    def by_id(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.ID, value=value)

    @classmethod
    def by_css(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.CSS, value=value)

    @classmethod
    def by_xpath(cls, value: str) -> "Locator":
        return cls(strategy=LocatorStrategy.XPATH, value=value)

    @classmethod
    def labelled_cell(cls, label: str) -> "Locator":
        """Celda hermana de una celda de tabla cuyo texto es `label`."""

        return cls.by_xpath(f"//td[text()='{label}']/following-sibling::td")

    def __str__(self) -> str:
        return f"{self.strategy.value}={self.value}"


class PageLocators(BaseModel):
    """Localizadores de la página de entrada y de la página de reporte."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    registration_input: Locator = Locator.by_xpath("//input[@id='subForm1']")
    submit_button: Locator = Locator.by_css("button[type='submit']")
    error_alert: Locator = Locator.by_css(".alert.alert-danger")

    report_registration: Locator = Locator.by_id("subForm")
    report_make: Locator = Locator.labelled_cell("Make")
    report_model: Locator = Locator.labelled_cell("Model")
    report_year: Locator = Locator.labelled_cell("Year of manufacture")
