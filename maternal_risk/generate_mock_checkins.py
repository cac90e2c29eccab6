from datetime import datetime, timedelta, timezone
from maternal_risk.data_model import BloodPressure, WeeklyCheckIn
import random
import uuid
from typing import List, Optional

DEMO_WEEKS_APART = 2

# Demo history: a gradual rise in blood pressure, swelling and fatigue with mood dropping
DEMO_CHECK_INS = [
    dict(week=14, headache=1, swelling=1, sleep_quality=4, fatigue=2, mood=4, dizziness=1,
         blood_pressure=BloodPressure(110, 70)),
    dict(week=16, headache=1, swelling=2, sleep_quality=4, fatigue=2, mood=4, dizziness=1,
         blood_pressure=BloodPressure(112, 72)),
    dict(week=18, headache=2, swelling=3, sleep_quality=3, fatigue=3, mood=3, dizziness=2,
         blood_pressure=BloodPressure(118, 76)),
    dict(week=20, headache=3, swelling=3, sleep_quality=3, fatigue=3, mood=3, dizziness=2,
         blood_pressure=BloodPressure(125, 80)),
    dict(week=22, headache=3, swelling=4, sleep_quality=2, fatigue=4, mood=2, dizziness=3,
         blood_pressure=BloodPressure(135, 85)),
]


def generate_demo_check_ins(now: Optional[datetime] = None) -> List[WeeklyCheckIn]:
    """The fixed demo history, dated two weeks apart and ending just before `now`."""
    now = now or datetime.now(timezone.utc)
    total = len(DEMO_CHECK_INS)
    return [
        WeeklyCheckIn(
            id=f"demo-{i}",
            date=(now - timedelta(weeks=DEMO_WEEKS_APART * (total - i))).isoformat(),
            **values,
        )
        for i, values in enumerate(DEMO_CHECK_INS)
    ]


def generate_random_check_in(week: int, date: Optional[datetime] = None,
                             rng: Optional[random.Random] = None) -> WeeklyCheckIn:
    date = date or datetime.now(timezone.utc)
    rng = rng or random

    blood_pressure = None
    if rng.random() < 0.7:
        blood_pressure = BloodPressure(
            systolic=rng.randint(100, 150),
            diastolic=rng.randint(60, 100),
        )

    return WeeklyCheckIn(
        id=f"checkin-{uuid.uuid4().hex[:8]}",
        week=week,
        date=date.isoformat(),
        headache=rng.randint(1, 5),
        swelling=rng.randint(1, 5),
        sleep_quality=rng.randint(1, 5),
        fatigue=rng.randint(1, 5),
        mood=rng.randint(1, 5),
        dizziness=rng.randint(1, 5),
        blood_pressure=blood_pressure,
        blood_sugar=round(rng.uniform(80.0, 170.0), 1) if rng.random() < 0.5 else None,
        activity_level=rng.randint(1, 5) if rng.random() < 0.6 else None,
    )


def generate_multiple_check_ins(count: int, start_week: int = 12,
                                seed: Optional[int] = None) -> List[WeeklyCheckIn]:
    rng = random.Random(seed)
    start = datetime.now(timezone.utc) - timedelta(weeks=count)
    return [
        generate_random_check_in(start_week + i, start + timedelta(weeks=i), rng)
        for i in range(count)
    ]


def main(count: int = 6, seed: Optional[int] = None) -> List[WeeklyCheckIn]:
    check_ins = generate_multiple_check_ins(count, seed=seed)
    for c in check_ins:
        print(f"✅ Generated mock check-in: week {c.week} ({c.id})")
    return check_ins


if __name__ == "__main__":
    main()
