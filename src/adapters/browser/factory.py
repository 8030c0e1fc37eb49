"""Creación de drivers de Selenium según `AppSettings.browser`.

Por qué webdriver-manager:
- Descarga el driver que corresponde al navegador instalado; no hay que
  mantener binarios en PATH. Se puede desactivar con
  `REGCHECK_USE_DRIVER_MANAGER=false` (Selenium Manager / PATH).
"""

from __future__ import annotations

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.remote.webdriver import WebDriver

from adapters.browser.selenium_session import SeleniumBrowserSession
from core.config import AppSettings, BrowserKind
from core.domain.errors import ConfigurationError, SessionError


def _chrome(settings: AppSettings) -> WebDriver:
    options = webdriver.ChromeOptions()
    if settings.headless:
        options.add_argument("--headless=new")
    options.add_argument("--disable-dev-shm-usage")

    if settings.use_driver_manager:
        from selenium.webdriver.chrome.service import Service  # noqa: PLC0415
        from webdriver_manager.chrome import ChromeDriverManager  # noqa: PLC0415

        return webdriver.Chrome(service=Service(ChromeDriverManager().install()), options=options)
    return webdriver.Chrome(options=options)


def _firefox(settings: AppSettings) -> WebDriver:
    options = webdriver.FirefoxOptions()
    if settings.headless:
        options.add_argument("-headless")

    if settings.use_driver_manager:
        from selenium.webdriver.firefox.service import Service  # noqa: PLC0415
        from webdriver_manager.firefox import GeckoDriverManager  # noqa: PLC0415

        return webdriver.Firefox(service=Service(GeckoDriverManager().install()), options=options)
    return webdriver.Firefox(options=options)


def _safari(settings: AppSettings) -> WebDriver:
    # safaridriver viene con macOS; no hay modo headless.
    return webdriver.Safari()


_BUILDERS = {
    BrowserKind.CHROME: _chrome,
    BrowserKind.FIREFOX: _firefox,
    BrowserKind.SAFARI: _safari,
}


def build_driver(settings: AppSettings) -> WebDriver:
    if settings.browser is None:
        raise ConfigurationError("No browser configured.")
    builder = _BUILDERS.get(settings.browser)
    if builder is None:
        raise ConfigurationError(f"Unsupported browser: {settings.browser}")

    try:
        driver = builder(settings)
    except WebDriverException as exc:
        raise SessionError(f"WebDriver setup failed for {settings.browser.value}: {exc}") from exc

    try:
        driver.maximize_window()
        driver.implicitly_wait(settings.implicit_wait_seconds)
    except WebDriverException as exc:
        driver.quit()
        raise SessionError(f"WebDriver configuration failed: {exc}") from exc
    return driver


def create_session(settings: AppSettings) -> SeleniumBrowserSession:
    driver = build_driver(settings)
    return SeleniumBrowserSession(driver, implicit_wait_seconds=settings.implicit_wait_seconds)
