"""Shared fixtures: a scripted browser session and a fake clock."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from core.config import AppSettings
from core.domain.errors import ElementNotFoundError, SessionError
from core.domain.locators import Locator, PageLocators
from core.domain.models import REJECTION_MESSAGE
from core.services.verification import VerificationOptions

ENTRY_URL = "https://lookup.test/"
REPORT_URL = "https://lookup.test/report"


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeBrowserSession:
    """Scripted stand-in for a real browser.

    `behaviour` decides what happens after the submit click:
    - "error": the alert appears (displayed unless `alert_displayed=False`).
    - "report": the browser lands on the report page.
    - "none": nothing happens.
    - "broken": navigation raises `SessionError`.
    """

    def __init__(
        self,
        *,
        behaviour: str = "error",
        alert_text: str = REJECTION_MESSAGE,
        alert_displayed: bool = True,
        report_fields: dict[str, str | None] | None = None,
        page_source: str = "",
        locators: PageLocators | None = None,
        report_url: str = REPORT_URL,
    ) -> None:
        self.behaviour = behaviour
        self.alert_text = alert_text
        self.alert_displayed = alert_displayed
        self.report_fields = report_fields or {}
        self.locators = locators or PageLocators()
        self.report_url = report_url
        self.source = page_source
        self.url = "about:blank"
        self.visited: list[str] = []
        self.typed: list[str] = []
        self.submitted = False
        self.closed = False

    @property
    def current_url(self) -> str:
        return self.url

    @property
    def page_source(self) -> str:
        return self.source

    def navigate(self, url: str) -> None:
        if self.behaviour == "broken":
            raise SessionError(f"Navigation to {url} failed: connection refused")
        self.visited.append(url)
        self.url = url
        if url != self.report_url:
            self.submitted = False

    def type_text(self, locator: Locator, text: str) -> None:
        if locator != self.locators.registration_input:
            raise ElementNotFoundError(locator)
        self.typed.append(text)

    def click(self, locator: Locator) -> None:
        if locator != self.locators.submit_button:
            raise ElementNotFoundError(locator)
        self.submitted = True
        if self.behaviour == "report":
            self.url = self.report_url

    def _alert_exists(self) -> bool:
        return self.submitted and self.behaviour == "error"

    def is_present(self, locator: Locator) -> bool:
        return locator == self.locators.error_alert and self._alert_exists()

    def is_displayed(self, locator: Locator) -> bool:
        if not self.is_present(locator):
            raise ElementNotFoundError(locator)
        return self.alert_displayed

    def _report_value(self, key: str, locator: Locator) -> str:
        if self.url != self.report_url:
            raise ElementNotFoundError(locator)
        value = self.report_fields.get(key)
        if value is None:
            raise ElementNotFoundError(locator)
        return value

    def read_text(self, locator: Locator) -> str:
        if locator == self.locators.error_alert:
            if not self._alert_exists():
                raise ElementNotFoundError(locator)
            return self.alert_text
        by_locator = {
            self.locators.report_make: "make",
            self.locators.report_model: "model",
            self.locators.report_year: "year",
        }
        if locator not in by_locator:
            raise ElementNotFoundError(locator)
        return self._report_value(by_locator[locator], locator)

    def read_attribute(self, locator: Locator, name: str) -> str | None:
        if locator != self.locators.report_registration or name != "value":
            raise ElementNotFoundError(locator)
        return self._report_value("registration", locator)

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep `.env` files and host `REGCHECK_*` variables out of `AppSettings`."""

    monkeypatch.setitem(AppSettings.model_config, "env_file", None)
    for key in list(os.environ):
        if key.upper().startswith("REGCHECK_"):
            monkeypatch.delenv(key)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def options(clock: FakeClock) -> VerificationOptions:
    return VerificationOptions(
        entry_url=ENTRY_URL,
        report_url=REPORT_URL,
        timeout_seconds=2.0,
        poll_seconds=0.1,
        clock=clock,
        sleep=clock.sleep,
    )


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "corpora"
    directory.mkdir()
    return directory
