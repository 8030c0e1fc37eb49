"""Espera tipo `select` sobre varias condiciones con un deadline compartido.

Un solo hilo: en cada ronda se evalúan los predicados en orden y gana el
primero que se cumple. Si vence el deadline sin ganador devuelve `None`.
Un predicado que lanza `ElementNotFoundError` cuenta como no cumplido.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Mapping

from core.domain.errors import ElementNotFoundError

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], None]


def race(
    conditions: Mapping[str, Callable[[], bool]],
    *,
    timeout: float,
    poll_interval: float = 0.1,
    clock: Clock = time.monotonic,
    sleep: Sleep = time.sleep,
) -> str | None:
    if not conditions:
        raise ValueError("race() needs at least one condition")

    deadline = clock() + timeout
    while True:
        for name, predicate in conditions.items():
            try:
                satisfied = predicate()
            except ElementNotFoundError:
                satisfied = False
            if satisfied:
                logger.debug("Race won by %r", name)
                return name

        remaining = deadline - clock()
        if remaining <= 0:
            logger.debug("Race timed out after %.2fs", timeout)
            return None
        sleep(min(poll_interval, remaining))
