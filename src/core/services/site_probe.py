"""Comprobación de que el sitio responde "no encontrado" para una URL inexistente."""

from __future__ import annotations

import time

from core.interfaces.browser import BrowserSession
from core.services.race import Clock, Sleep, race

NOT_FOUND_MARKERS = ("404", "Not Found")


def probe_not_found(
    session: BrowserSession,
    url: str,
    *,
    timeout: float = 2.0,
    poll_interval: float = 0.1,
    clock: Clock = time.monotonic,
    sleep: Sleep = time.sleep,
) -> bool:
    session.navigate(url)

    def _page_says_not_found() -> bool:
        source = session.page_source
        return any(marker in source for marker in NOT_FOUND_MARKERS)

    winner = race(
        {"not_found": _page_says_not_found},
        timeout=timeout,
        poll_interval=poll_interval,
        clock=clock,
        sleep=sleep,
    )
    return winner is not None
