"""Core projection engine and earliest-retirement search."""

import dataclasses
import datetime
from dataclasses import dataclass, field

from family_plan_ch.children import ChildCostSchedule
from family_plan_ch.housing import HousingModel
from family_plan_ch.ledger import WealthLedger
from family_plan_ch.params import END_AGE, HouseholdProfile, ScenarioModifiers
from family_plan_ch.pension import PensionModel, PensionPhase, RetirementSnapshot
from family_plan_ch.salary import grow_salary
from family_plan_ch.tax import net_bonus, net_pension, net_salary

# Depletion: a deficit year that leaves free assets (cash + invested) at or
# below this amount, or total wealth at or below zero.
DEPLETION_EPSILON = 1.0

# Early retirement search range and acceptance buffer at END_AGE
EARLY_RETIREMENT_MIN_AGE = 45
EARLY_RETIREMENT_MAX_AGE = 65
RETIREMENT_SAFETY_BUFFER = 100_000

NOTE_RELOCATED = "relocated to a larger home"
NOTE_RETIRED = "retirement started"
NOTE_DEPLETED = "funds depleted"


@dataclass(frozen=True)
class YearlySnapshot:
    """State of the household at the end of one simulated year (CHF, nominal)."""

    age: int
    year: int
    phase: PensionPhase
    active_children: int

    # Income
    gross_income: float
    net_income: float
    salary_1: float = 0.0  # net
    salary_2: float = 0.0  # net
    bonus: float = 0.0     # net
    pension_public: float = 0.0
    pension_occupational: float = 0.0
    pension_private: float = 0.0

    # Expenses
    monthly_rent: float = 0.0
    housing_expenses: float = 0.0
    living_expenses: float = 0.0
    children_expenses: float = 0.0
    travel_expenses: float = 0.0

    # Flows
    pillar3_contribution: float = 0.0
    net_cash_flow: float = 0.0
    unfunded_shortfall: float = 0.0

    # Wealth buckets
    cash: float = 0.0
    invested: float = 0.0
    pillar2: float = 0.0
    pillar3: float = 0.0

    notes: tuple[str, ...] = ()

    @property
    def pension(self) -> float:
        return self.pension_public + self.pension_occupational + self.pension_private

    @property
    def total_expenses(self) -> float:
        return (
            self.housing_expenses + self.living_expenses
            + self.children_expenses + self.travel_expenses
        )

    @property
    def pension_wealth(self) -> float:
        return self.pillar2 + self.pillar3

    @property
    def total_wealth(self) -> float:
        return self.cash + self.invested + self.pillar2 + self.pillar3

    @property
    def is_deficit(self) -> bool:
        return self.net_cash_flow < 0

    @property
    def is_retired(self) -> bool:
        return self.phase is PensionPhase.RETIRED


@dataclass
class ScenarioResult:
    """One full projection run plus its aggregates."""

    scenario: str
    snapshots: list[YearlySnapshot] = field(default_factory=list)
    final_wealth: float = 0.0
    peak_wealth: float = 0.0
    depleted_age: int | None = None
    retirement: RetirementSnapshot | None = None
    total_unfunded_shortfall: float = 0.0

    @property
    def is_viable(self) -> bool:
        """Viable = free assets were never exhausted during the run."""
        return self.depleted_age is None

    def snapshot_at(self, age: int) -> YearlySnapshot | None:
        for snapshot in self.snapshots:
            if snapshot.age == age:
                return snapshot
        return None


def _is_depleted(ledger: WealthLedger, net_cash_flow: float) -> bool:
    if ledger.total <= 0:
        return True
    return net_cash_flow < 0 and ledger.free_assets <= DEPLETION_EPSILON


def simulate(
    profile: HouseholdProfile,
    modifiers: ScenarioModifiers = ScenarioModifiers(),
    scenario: str = "neutral",
    start_year: int | None = None,
) -> ScenarioResult:
    """Project the household from its current age to END_AGE, one year at a time.

    The profile is never mutated; every piece of evolving state (salaries,
    child ages, rent, wealth buckets, pension phase) lives in this call.
    Depletion is recorded but the run always covers the full horizon.
    """
    if start_year is None:
        start_year = datetime.date.today().year

    inflation = profile.expected_salary_increase + modifiers.inflation
    investment_return = max(0.0, profile.investment_return + modifiers.investment_return)
    multiplier = modifiers.expense_multiplier

    gross_1 = profile.salary_1
    gross_2 = profile.salary_2
    gross_bonus = profile.annual_bonus

    ledger = WealthLedger.from_savings(
        profile.current_savings, profile.pillar2_balance, profile.pillar3_balance,
    )
    children = ChildCostSchedule(profile)
    housing = HousingModel(
        profile.monthly_housing_cost,
        profile.current_rooms,
        profile.housing_cost_increase + modifiers.inflation,
    )
    pension = PensionModel(profile.retirement_age)

    result = ScenarioResult(scenario=scenario)

    for age in range(profile.current_age, END_AGE + 1):
        year_idx = age - profile.current_age
        inflation_factor = (1 + inflation) ** year_idx
        notes: list[str] = []

        children_cost, active_children = children.advance()
        children_cost *= multiplier
        if housing.advance(active_children):
            notes.append(NOTE_RELOCATED)

        living = profile.monthly_living_cost * 12 * inflation_factor * multiplier
        travel = profile.yearly_travel_budget * inflation_factor * multiplier
        housing_cost = housing.annual_rent
        expenses = housing_cost + living + children_cost + travel

        if pension.should_retire(age):
            result.retirement = pension.retire(
                age, inflation_factor, ledger.convert_pillar2(), ledger.pillar3,
            )
            notes.append(NOTE_RETIRED)

        income = {}
        if pension.phase is PensionPhase.WORKING:
            income["salary_1"] = net_salary(gross_1, profile.canton)
            income["salary_2"] = net_salary(gross_2, profile.canton)
            income["bonus"] = net_bonus(gross_bonus)
            gross_income = gross_1 + gross_2 + gross_bonus
            net_income = income["salary_1"] + income["salary_2"] + income["bonus"]
            step = ledger.advance_working(
                net_income, expenses, gross_1 + gross_2,
                profile.planned_pillar3_contribution, investment_return,
            )
            gross_1 = grow_salary(gross_1, age, profile.career_stage_1, inflation, modifiers.salary_growth)
            gross_2 = grow_salary(gross_2, age, profile.career_stage_2, inflation, modifiers.salary_growth)
            gross_bonus *= 1 + inflation
        else:
            payment = pension.pay(inflation_factor, ledger.pillar3)
            income["pension_public"] = payment.public
            income["pension_occupational"] = payment.occupational
            income["pension_private"] = payment.private
            gross_income = payment.total
            net_income = net_pension(gross_income)
            step = ledger.advance_retired(net_income, expenses, payment.private, investment_return)

        if result.depleted_age is None and _is_depleted(ledger, step.net_cash_flow):
            result.depleted_age = age
            notes.append(NOTE_DEPLETED)

        result.total_unfunded_shortfall += step.unfunded_shortfall
        result.snapshots.append(YearlySnapshot(
            age=age,
            year=start_year + year_idx,
            phase=pension.phase,
            active_children=active_children,
            gross_income=gross_income,
            net_income=net_income,
            monthly_rent=housing.monthly_rent,
            housing_expenses=housing_cost,
            living_expenses=living,
            children_expenses=children_cost,
            travel_expenses=travel,
            pillar3_contribution=step.pillar3_contribution,
            net_cash_flow=step.net_cash_flow,
            unfunded_shortfall=step.unfunded_shortfall,
            cash=ledger.cash,
            invested=ledger.invested,
            pillar2=ledger.pillar2,
            pillar3=ledger.pillar3,
            notes=tuple(notes),
            **income,
        ))

    if result.snapshots:
        result.final_wealth = result.snapshots[-1].total_wealth
        result.peak_wealth = max(s.total_wealth for s in result.snapshots)
    return result


def is_sustainable(result: ScenarioResult) -> bool:
    """Never depleted and ending above the safety buffer."""
    return result.is_viable and result.final_wealth > RETIREMENT_SAFETY_BUFFER


def find_earliest_retirement_age(
    profile: HouseholdProfile,
    modifiers: ScenarioModifiers = ScenarioModifiers(),
    min_age: int = EARLY_RETIREMENT_MIN_AGE,
    max_age: int = EARLY_RETIREMENT_MAX_AGE,
    start_year: int | None = None,
) -> int | None:
    """Find the lowest retirement age whose full projection is sustainable.

    Candidates run from max(min_age, current_age) to max_age inclusive, each
    a complete re-simulation with only the retirement age replaced.
    Returns None if no candidate qualifies.
    """
    for age in range(max(min_age, profile.current_age), max_age + 1):
        candidate = dataclasses.replace(profile, retirement_age=age)
        if is_sustainable(simulate(candidate, modifiers, start_year=start_year)):
            return age
    return None
