"""Three-pillar retirement income: snapshot at retirement and yearly payments.

Pillar 1 (public): a couple-maximum annual amount that follows the
cumulative inflation factor, both at retirement and every year after.
Pillar 2 (occupational): capital converted once into a fixed nominal
annuity; the capital bucket is zero from retirement onwards.
Pillar 3 (private): capital drawn down linearly over the remaining
horizon, never more than what is left, while the rest earns a reduced
return.
"""

import enum
from dataclasses import dataclass

from family_plan_ch.params import END_AGE

PUBLIC_PENSION_COUPLE_MAX = 44_100    # CHF/year, current-year value
OCCUPATIONAL_CONVERSION_RATE = 0.058  # annuity = capital × rate
OCCUPATIONAL_INTEREST_RATE = 0.02     # minimum interest while working
OCCUPATIONAL_CONTRIBUTION_RATE = 0.12 # employer + employee, on gross salaries
DECUMULATION_RETURN_SHARE = 0.30      # private capital return after retirement


class PensionPhase(enum.Enum):
    WORKING = "working"
    RETIRED = "retired"


@dataclass(frozen=True)
class RetirementSnapshot:
    """Pension parameters frozen at the moment of retirement."""

    age: int
    public_annual: float
    occupational_annual: float
    private_annual: float


@dataclass(frozen=True)
class PensionPayment:
    public: float
    occupational: float
    private: float

    @property
    def total(self) -> float:
        return self.public + self.occupational + self.private


def public_pension(inflation_factor: float) -> float:
    return PUBLIC_PENSION_COUPLE_MAX * inflation_factor


def occupational_annuity(pillar2_capital: float) -> float:
    return pillar2_capital * OCCUPATIONAL_CONVERSION_RATE


def private_drawdown(pillar3_capital: float, retirement_age: int) -> float:
    """Linear drawdown over the years left until END_AGE (at least one)."""
    return pillar3_capital / max(1, END_AGE - retirement_age)


def decumulation_return(investment_return: float) -> float:
    return investment_return * DECUMULATION_RETURN_SHARE


class PensionModel:
    """WORKING → RETIRED state machine; the transition happens at most once."""

    def __init__(self, retirement_age: int):
        self.retirement_age = retirement_age
        self.phase = PensionPhase.WORKING
        self.snapshot: RetirementSnapshot | None = None

    def should_retire(self, age: int) -> bool:
        return self.phase is PensionPhase.WORKING and age >= self.retirement_age

    def retire(
        self, age: int, inflation_factor: float,
        pillar2_capital: float, pillar3_capital: float,
    ) -> RetirementSnapshot:
        if self.phase is PensionPhase.RETIRED:
            raise RuntimeError(f"already retired at {self.snapshot.age}")
        self.snapshot = RetirementSnapshot(
            age=age,
            public_annual=public_pension(inflation_factor),
            occupational_annual=occupational_annuity(pillar2_capital),
            private_annual=private_drawdown(pillar3_capital, self.retirement_age),
        )
        self.phase = PensionPhase.RETIRED
        return self.snapshot

    def pay(self, inflation_factor: float, pillar3_capital: float) -> PensionPayment:
        """Gross pension for one retired year."""
        if self.snapshot is None:
            raise RuntimeError("pension paid before retirement")
        return PensionPayment(
            public=public_pension(inflation_factor),
            occupational=self.snapshot.occupational_annual,
            private=min(pillar3_capital, self.snapshot.private_annual),
        )
