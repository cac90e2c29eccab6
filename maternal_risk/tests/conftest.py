import pytest
from maternal_risk.data_model import WeeklyCheckIn

NEUTRAL_RATINGS = dict(headache=3, swelling=3, sleep_quality=3, fatigue=3, mood=3, dizziness=3)


def build_check_in(week=20, **overrides) -> WeeklyCheckIn:
    values = dict(NEUTRAL_RATINGS)
    values.update(overrides)
    values.setdefault("date", f"2026-01-{week % 28 + 1:02d}T09:00:00+00:00")
    return WeeklyCheckIn(week=week, **values)


@pytest.fixture
def make_check_in():
    """Factory for check-ins with mid-range (3) ratings unless overridden."""
    return build_check_in
