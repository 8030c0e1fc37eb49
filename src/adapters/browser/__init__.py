"""Backends de navegador (Selenium).

Cada backend implementa `core.interfaces.browser.BrowserSession`.
"""

from adapters.browser.factory import build_driver, create_session
from adapters.browser.selenium_session import SeleniumBrowserSession

__all__ = [
    "SeleniumBrowserSession",
    "build_driver",
    "create_session",
]
