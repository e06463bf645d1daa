import pytest

from budget.months import (
    add_months,
    clamp_day,
    days_in_month,
    month_range,
    months_diff,
)


@pytest.mark.parametrize('ym, delta, expected', [
    ('2025-01', 1, '2025-02'),
    ('2025-12', 1, '2026-01'),
    ('2025-01', -1, '2024-12'),
    ('2025-03', 24, '2027-03'),
    ('2025-05', 0, '2025-05'),
])
def test_add_months(ym, delta, expected):
    assert add_months(ym, delta) == expected


def test_months_diff_crosses_years():
    assert months_diff('2024-11', '2025-02') == 3
    assert months_diff('2025-02', '2024-11') == -3


def test_month_range_is_inclusive():
    assert month_range('2024-11', '2025-02') == ['2024-11', '2024-12', '2025-01', '2025-02']
    assert month_range('2025-03', '2025-03') == ['2025-03']


def test_days_in_month_handles_leap_years():
    assert days_in_month('2024-02') == 29
    assert days_in_month('2025-02') == 28
    assert days_in_month('2025-04') == 30


def test_clamp_day_defaults_to_last_day():
    assert clamp_day('2025-02') == 28
    assert clamp_day('2025-01') == 31


def test_clamp_day_clamps_anchor_to_short_months():
    assert clamp_day('2025-02', 31) == 28
    assert clamp_day('2024-02', 30) == 29
    assert clamp_day('2025-03', 15) == 15
