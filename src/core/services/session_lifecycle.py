"""Ciclo de vida de la sesión de navegador.

Por qué un gestor explícito (y no un singleton global):
- La sesión se crea de forma perezosa y como mucho hay una activa por run.
- `session_scope` garantiza el cierre en todas las salidas, incluidos los
  fallos a mitad de run.
- La factoría es inyectable: en tests se pasa un stub sin navegador real.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator

from core.config import AppSettings
from core.domain.errors import ConfigurationError
from core.interfaces.browser import BrowserSession

logger = logging.getLogger(__name__)

SessionFactory = Callable[[AppSettings], BrowserSession]


def _default_factory(settings: AppSettings) -> BrowserSession:
    from adapters.browser import create_session  # noqa: PLC0415

    return create_session(settings)


class SessionManager:
    def __init__(self, factory: SessionFactory | None = None) -> None:
        self._factory = factory or _default_factory
        self._session: BrowserSession | None = None

    @property
    def active(self) -> BrowserSession | None:
        return self._session

    def acquire(self, settings: AppSettings) -> BrowserSession:
        """Devuelve la sesión activa o crea una nueva (idempotente)."""

        if self._session is not None:
            return self._session
        if settings.browser is None:
            raise ConfigurationError(
                "No browser configured. Set REGCHECK_BROWSER to one of: chrome, firefox, safari."
            )
        self._session = self._factory(settings)
        logger.info("Initialized browser session: %s", settings.browser.value)
        return self._session

    def release(self) -> None:
        """Cierra y olvida la sesión activa. No hace nada si no hay ninguna."""

        session, self._session = self._session, None
        if session is None:
            return
        try:
            session.close()
        finally:
            logger.info("Closed browser session")


@contextmanager
def session_scope(manager: SessionManager, settings: AppSettings) -> Iterator[BrowserSession]:
    try:
        yield manager.acquire(settings)
    finally:
        manager.release()
