"""Carga de localizadores desde JSON.

Formato (todas las claves son opcionales; las ausentes usan el valor por defecto):

    {
      "error_alert": {"strategy": "css", "value": ".alert.alert-danger"},
      "report_make": {"strategy": "xpath", "value": "//td[text()='Make']/following-sibling::td"}
    }
"""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from core.domain.errors import ConfigurationError
from core.domain.locators import PageLocators


def load_page_locators(path: Path | None) -> PageLocators:
    if path is None:
        return PageLocators()
    try:
        raw = path.read_text(encoding="utf-8")
        data = json.loads(raw)
        return PageLocators.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid locator file {path}: {exc}") from exc
