"""Implementación de `BrowserSession` sobre Selenium WebDriver.

Traduce:
- `Locator` -> `(By.*, value)`.
- `NoSuchElementException` / `StaleElementReferenceException` -> `ElementNotFoundError`.
- Cualquier otra `WebDriverException` -> `SessionError`.
"""

from __future__ import annotations

from selenium.common.exceptions import (
    NoSuchElementException,
    StaleElementReferenceException,
    WebDriverException,
)
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from core.domain.errors import ElementNotFoundError, SessionError
from core.domain.locators import Locator, LocatorStrategy

_BY: dict[LocatorStrategy, str] = {
    LocatorStrategy.ID: By.ID,
    LocatorStrategy.CSS: By.CSS_SELECTOR,
    LocatorStrategy.XPATH: By.XPATH,
}


class SeleniumBrowserSession:
    def __init__(self, driver: WebDriver, *, implicit_wait_seconds: float) -> None:
        self._driver = driver
        self._implicit_wait = implicit_wait_seconds

    @property
    def driver(self) -> WebDriver:
        return self._driver

    @property
    def current_url(self) -> str:
        try:
            return self._driver.current_url
        except WebDriverException as exc:
            raise SessionError(f"Cannot read current URL: {exc}") from exc

    @property
    def page_source(self) -> str:
        try:
            return self._driver.page_source
        except WebDriverException as exc:
            raise SessionError(f"Cannot read page source: {exc}") from exc

    def _find(self, locator: Locator) -> WebElement:
        try:
            return self._driver.find_element(_BY[locator.strategy], locator.value)
        except (NoSuchElementException, StaleElementReferenceException) as exc:
            raise ElementNotFoundError(locator) from exc
        except WebDriverException as exc:
            raise SessionError(f"Lookup of {locator} failed: {exc}") from exc

    def navigate(self, url: str) -> None:
        try:
            self._driver.get(url)
        except WebDriverException as exc:
            raise SessionError(f"Navigation to {url} failed: {exc}") from exc

    def type_text(self, locator: Locator, text: str) -> None:
        element = self._find(locator)
        try:
            element.send_keys(text)
        except StaleElementReferenceException as exc:
            raise ElementNotFoundError(locator) from exc
        except WebDriverException as exc:
            raise SessionError(f"Typing into {locator} failed: {exc}") from exc

    def click(self, locator: Locator) -> None:
        element = self._find(locator)
        try:
            element.click()
        except StaleElementReferenceException as exc:
            raise ElementNotFoundError(locator) from exc
        except WebDriverException as exc:
            raise SessionError(f"Click on {locator} failed: {exc}") from exc

    def is_present(self, locator: Locator) -> bool:
        # Sin espera implícita: la carrera hace su propio sondeo.
        try:
            self._driver.implicitly_wait(0)
            return bool(self._driver.find_elements(_BY[locator.strategy], locator.value))
        except WebDriverException as exc:
            raise SessionError(f"Lookup of {locator} failed: {exc}") from exc
        finally:
            self._restore_implicit_wait()

    def _restore_implicit_wait(self) -> None:
        try:
            self._driver.implicitly_wait(self._implicit_wait)
        except WebDriverException as exc:
            raise SessionError(f"Cannot restore implicit wait: {exc}") from exc

    def is_displayed(self, locator: Locator) -> bool:
        element = self._find(locator)
        try:
            return element.is_displayed()
        except StaleElementReferenceException as exc:
            raise ElementNotFoundError(locator) from exc
        except WebDriverException as exc:
            raise SessionError(f"Visibility check of {locator} failed: {exc}") from exc

    def read_text(self, locator: Locator) -> str:
        element = self._find(locator)
        try:
            return element.text
        except StaleElementReferenceException as exc:
            raise ElementNotFoundError(locator) from exc
        except WebDriverException as exc:
            raise SessionError(f"Reading text of {locator} failed: {exc}") from exc

    def read_attribute(self, locator: Locator, name: str) -> str | None:
        element = self._find(locator)
        try:
            return element.get_attribute(name)
        except StaleElementReferenceException as exc:
            raise ElementNotFoundError(locator) from exc
        except WebDriverException as exc:
            raise SessionError(f"Reading {name!r} of {locator} failed: {exc}") from exc

    def close(self) -> None:
        try:
            self._driver.quit()
        except WebDriverException as exc:
            raise SessionError(f"Closing the browser failed: {exc}") from exc
