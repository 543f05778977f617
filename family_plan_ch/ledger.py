"""Multi-bucket wealth store with allocation and deficit-absorption rules."""

from dataclasses import dataclass

from family_plan_ch.pension import (
    OCCUPATIONAL_CONTRIBUTION_RATE,
    OCCUPATIONAL_INTEREST_RATE,
    decumulation_return,
)

CASH_SHARE = 0.30        # surplus (working or retired) and initial savings kept liquid
INVESTED_SHARE = 0.70


@dataclass(frozen=True)
class LedgerStep:
    """Outcome of one yearly ledger update."""

    net_cash_flow: float
    pillar3_contribution: float = 0.0
    unfunded_shortfall: float = 0.0


@dataclass
class WealthLedger:
    """Cash, invested, pillar-2 and pillar-3 buckets (all floored at zero)."""

    cash: float = 0.0
    invested: float = 0.0
    pillar2: float = 0.0
    pillar3: float = 0.0

    @classmethod
    def from_savings(cls, savings: float, pillar2: float, pillar3: float) -> "WealthLedger":
        return cls(
            cash=savings * CASH_SHARE,
            invested=savings * INVESTED_SHARE,
            pillar2=pillar2,
            pillar3=pillar3,
        )

    @property
    def free_assets(self) -> float:
        return self.cash + self.invested

    @property
    def pension_wealth(self) -> float:
        return self.pillar2 + self.pillar3

    @property
    def total(self) -> float:
        return self.cash + self.invested + self.pillar2 + self.pillar3

    def _allocate_surplus(self, surplus: float) -> None:
        self.cash += surplus * CASH_SHARE
        self.invested += surplus * INVESTED_SHARE

    def _absorb_deficit(self, deficit: float) -> float:
        """Draw cash first, then invested. Returns the part neither could cover."""
        from_cash = min(self.cash, deficit)
        self.cash -= from_cash
        remaining = deficit - from_cash
        from_invested = min(self.invested, remaining)
        self.invested -= from_invested
        return remaining - from_invested

    def _settle(self, net_cash_flow: float) -> float:
        if net_cash_flow > 0:
            self._allocate_surplus(net_cash_flow)
            return 0.0
        return self._absorb_deficit(-net_cash_flow)

    def advance_working(
        self,
        net_income: float,
        expenses: float,
        gross_salaries: float,
        planned_pillar3: float,
        investment_return: float,
    ) -> LedgerStep:
        """Apply one working year.

        The pillar-3 contribution is capped by net income (never negative),
        pillar 2 earns its fixed interest plus salary contributions, and the
        invested bucket compounds after the surplus/deficit step.
        """
        contribution = planned_pillar3 if net_income >= planned_pillar3 else max(0.0, net_income)
        net_cash_flow = net_income - contribution - expenses

        self.pillar2 = (
            self.pillar2 * (1 + OCCUPATIONAL_INTEREST_RATE)
            + gross_salaries * OCCUPATIONAL_CONTRIBUTION_RATE
        )
        self.pillar3 = self.pillar3 * (1 + investment_return) + contribution

        shortfall = self._settle(net_cash_flow)
        self.invested *= 1 + investment_return
        return LedgerStep(net_cash_flow, contribution, shortfall)

    def convert_pillar2(self) -> float:
        """Hand over pillar-2 capital for annuitisation; the bucket becomes zero."""
        capital = self.pillar2
        self.pillar2 = 0.0
        return capital

    def advance_retired(
        self,
        net_income: float,
        expenses: float,
        private_paid: float,
        investment_return: float,
    ) -> LedgerStep:
        """Apply one retired year after the pension has been paid."""
        net_cash_flow = net_income - expenses
        self.pillar2 = 0.0
        self.pillar3 = max(0.0, self.pillar3 - private_paid)
        self.pillar3 *= 1 + decumulation_return(investment_return)

        shortfall = self._settle(net_cash_flow)
        self.invested *= 1 + investment_return
        return LedgerStep(net_cash_flow, 0.0, shortfall)
