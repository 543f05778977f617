"""Age- and career-stage-dependent salary growth."""

# Career boost on top of inflation: (age upper bound, {stage: boost})
# Each row applies to ages below its bound; from 55 only inflation remains.
_CAREER_BOOST_SCHEDULE: tuple[tuple[int, dict[str, float]], ...] = (
    (35, {"junior": 0.035, "mid": 0.025, "senior": 0.015, "executive": 0.015}),
    (45, {"junior": 0.025, "mid": 0.020, "senior": 0.015, "executive": 0.020}),
    (55, {"junior": 0.010, "mid": 0.010, "senior": 0.010, "executive": 0.010}),
)
LATE_CAREER_BOOST = 0.0


def career_boost(age: int, stage: str) -> float:
    """Return the real (above-inflation) salary growth for an age and career stage."""
    for upper, boosts in _CAREER_BOOST_SCHEDULE:
        if age < upper:
            if stage not in boosts:
                raise ValueError(f"Unknown career stage: {stage!r}")
            return boosts[stage]
    return LATE_CAREER_BOOST


def salary_growth_rate(age: int, stage: str, inflation: float) -> float:
    """Nominal salary growth for the coming year = inflation + career boost."""
    return inflation + career_boost(age, stage)


def grow_salary(salary: float, age: int, stage: str, inflation: float,
                scenario_delta: float = 0.0) -> float:
    """Advance one earner's gross salary by one year."""
    return salary * (1 + salary_growth_rate(age, stage, inflation) + scenario_delta)
