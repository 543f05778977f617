"""Net-of-tax income factors and pillar-3 deduction estimates."""

# Working-phase net factor by canton (net ≈ gross × factor, all deductions included)
_CANTON_NET_FACTORS: dict[str, float] = {
    "zürich": 0.78,
    "zurich": 0.78,
    "zug": 0.82,
    "geneva": 0.70,
    "genève": 0.70,
    "vaud": 0.73,
}
DEFAULT_NET_FACTOR = 0.75

BONUS_NET_FACTOR = 0.65       # bonus taxed at the marginal rate
RETIREMENT_NET_FACTOR = 0.85  # pension income, lower social charges

# Pillar 3a: annual maximum for employees with a pension fund
PILLAR3_MAX_ANNUAL = 7_056
PILLAR3_MARGINAL_RATE = 0.25  # approximate marginal rate for deduction value


def canton_net_factor(canton: str | None) -> float:
    """Return the working-phase net-of-tax factor for a canton (default 0.75)."""
    if not canton:
        return DEFAULT_NET_FACTOR
    return _CANTON_NET_FACTORS.get(canton.strip().lower(), DEFAULT_NET_FACTOR)


def net_salary(gross: float, canton: str | None) -> float:
    return gross * canton_net_factor(canton)


def net_bonus(gross: float) -> float:
    return gross * BONUS_NET_FACTOR


def net_pension(gross: float) -> float:
    return gross * RETIREMENT_NET_FACTOR


def pillar3_gap(contribution_1: float, contribution_2: float) -> float:
    """Unused pillar-3 deduction room for the couple (CHF/year)."""
    return (
        max(0.0, PILLAR3_MAX_ANNUAL - contribution_1)
        + max(0.0, PILLAR3_MAX_ANNUAL - contribution_2)
    )


def pillar3_tax_saving(gap: float) -> float:
    """Yearly tax saving if the pillar-3 gap were filled.

    Contributions are fully deductible from taxable income, so the saving
    is the contribution times the marginal rate.
    """
    return gap * PILLAR3_MARGINAL_RATE
