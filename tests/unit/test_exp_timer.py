import time
from datetime import timedelta

import pytest

from retle.core.config import RetleConfig
from retle.core.timer import ExpTimer, default_exp_timer
from retle.domain.exceptions import InvalidBackoffError
from retle.domain.models import (
    DEFAULT_INITIAL_INTERVAL,
    DEFAULT_MULTIPLIER,
    BackoffPolicy,
)

SLEEP_TOLERANCE = 0.02


def test_new_exp_timer_stores_interval_and_multiplier():
    timer = ExpTimer(1.0, 2.0)

    assert timer.interval == 1.0
    assert timer.multiplier == 2.0
    assert timer == ExpTimer(1.0, 2.0)


def test_default_exp_timer_uses_default_settings():
    timer = default_exp_timer()

    assert timer == ExpTimer(DEFAULT_INITIAL_INTERVAL, DEFAULT_MULTIPLIER)
    assert timer.interval == 0.5
    assert timer.multiplier == 1.5


def test_exp_timer_accepts_timedelta_interval():
    timer = ExpTimer(timedelta(milliseconds=250), 2)

    assert timer.interval == pytest.approx(0.25)


def test_next_duration_doubles_each_call():
    timer = ExpTimer(1, 2)
    expected = 1

    for _ in range(10):
        assert timer.next_duration() == expected
        expected *= 2

    assert expected == 1024


def test_next_duration_with_unit_multiplier_is_constant():
    timer = ExpTimer(0.3, 1)

    assert [timer.next_duration() for _ in range(3)] == [0.3, 0.3, 0.3]


def test_next_duration_from_zero_interval_stays_zero():
    timer = ExpTimer(0, 3)

    assert timer.next_duration() == 0
    assert timer.next_duration() == 0


def test_sleep_waits_for_next_duration():
    sleep_timer = ExpTimer(0.1, 2)
    duration_timer = ExpTimer(0.1, 2)

    start = time.monotonic()
    sleep_timer.sleep()
    elapsed = time.monotonic() - start
    expected = duration_timer.next_duration()

    assert elapsed >= expected
    assert elapsed - expected <= SLEEP_TOLERANCE
    assert sleep_timer.interval == pytest.approx(0.2)


@pytest.mark.parametrize(
    "interval, multiplier",
    [
        (-1, 2),
        (1, 0.5),
        (1, float("inf")),
        (float("nan"), 2),
        ("1s", 2),
        (1, "2"),
    ],
)
def test_exp_timer_rejects_invalid_settings(interval, multiplier):
    with pytest.raises(InvalidBackoffError):
        ExpTimer(interval, multiplier)


def test_invalid_backoff_error_is_value_error():
    with pytest.raises(ValueError) as excinfo:
        ExpTimer(1, 0)

    assert "multiplier" in str(excinfo.value)


def test_exp_timer_from_policy_and_config():
    assert ExpTimer.from_policy(BackoffPolicy(initial_interval=2, multiplier=3)) == (
        ExpTimer(2, 3)
    )
    assert ExpTimer.from_config(RetleConfig(initial_interval=0.1)) == ExpTimer(
        0.1, DEFAULT_MULTIPLIER
    )


def test_exp_timer_repr_shows_state():
    timer = ExpTimer(1, 2)
    timer.next_duration()

    assert repr(timer) == "ExpTimer(interval=2.0, multiplier=2.0)"
