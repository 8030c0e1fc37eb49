"""Tests for the single-threaded select-style wait."""

import pytest

from core.domain.errors import ElementNotFoundError
from core.domain.locators import Locator
from core.services.race import race


def test_first_satisfied_condition_wins(clock):
    calls = {"n": 0}

    def becomes_true_on_third_poll():
        calls["n"] += 1
        return calls["n"] >= 3

    winner = race(
        {"error": lambda: False, "report": becomes_true_on_third_poll},
        timeout=2.0,
        poll_interval=0.1,
        clock=clock,
        sleep=clock.sleep,
    )

    assert winner == "report"
    assert len(clock.sleeps) == 2


def test_earlier_condition_has_priority_within_a_round(clock):
    winner = race(
        {"error": lambda: True, "report": lambda: True},
        timeout=2.0,
        clock=clock,
        sleep=clock.sleep,
    )

    assert winner == "error"
    assert clock.sleeps == []


def test_timeout_returns_none_after_deadline(clock):
    winner = race(
        {"error": lambda: False, "report": lambda: False},
        timeout=2.0,
        poll_interval=0.5,
        clock=clock,
        sleep=clock.sleep,
    )

    assert winner is None
    assert clock.now == pytest.approx(2.0)


def test_missing_element_counts_as_not_satisfied(clock):
    def missing():
        raise ElementNotFoundError(Locator.by_css(".alert"))

    winner = race(
        {"error": missing, "report": lambda: clock.now >= 0.3},
        timeout=2.0,
        poll_interval=0.1,
        clock=clock,
        sleep=clock.sleep,
    )

    assert winner == "report"


def test_requires_at_least_one_condition(clock):
    with pytest.raises(ValueError):
        race({}, timeout=1.0, clock=clock, sleep=clock.sleep)
