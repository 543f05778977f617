"""Rent inflation and the one-time capacity-triggered relocation."""

import enum

HOUSEHOLD_ADULTS = 2
ROOM_TOLERANCE = 0.5          # a 3.5-room flat fits 4 people
RELOCATION_RENT_FACTOR = 1.30


class HousingState(enum.Enum):
    NOT_RELOCATED = "not_relocated"
    RELOCATED = "relocated"


class HousingModel:
    """Tracks nominal monthly rent and a one-shot relocation latch."""

    def __init__(self, monthly_rent: float, rooms: float, annual_increase: float):
        self.monthly_rent = monthly_rent
        self.rooms = rooms
        self.annual_increase = annual_increase
        self.state = HousingState.NOT_RELOCATED
        self.rent_before_relocation: float | None = None

    @property
    def annual_rent(self) -> float:
        return self.monthly_rent * 12

    def needs_more_space(self, active_children: int) -> bool:
        return HOUSEHOLD_ADULTS + active_children > self.rooms + ROOM_TOLERANCE

    def advance(self, active_children: int) -> bool:
        """Inflate rent by one year and relocate if the household outgrew the home.

        Returns True in the year the relocation fires. Once relocated the
        state never changes back.
        """
        self.monthly_rent *= 1 + self.annual_increase
        if self.state is HousingState.NOT_RELOCATED and self.needs_more_space(active_children):
            self.rent_before_relocation = self.monthly_rent
            self.monthly_rent *= RELOCATION_RENT_FACTOR
            self.state = HousingState.RELOCATED
            return True
        return False
