"""Tests for rent inflation and the relocation latch."""

import pytest
from family_plan_ch.housing import HousingModel, HousingState


class TestHousingModel:
    def setup_method(self):
        self.h = HousingModel(2_000, 3.5, 0.02)

    def test_inflates_every_year(self):
        assert self.h.advance(0) is False
        assert self.h.monthly_rent == pytest.approx(2_040)
        assert self.h.annual_rent == pytest.approx(24_480)

    def test_room_tolerance(self):
        assert not self.h.needs_more_space(2)  # 4 people in 3.5 rooms
        assert self.h.needs_more_space(3)

    def test_relocation_fires_once(self):
        self.h.advance(0)
        self.h.advance(2)
        assert self.h.advance(3) is True
        assert self.h.state is HousingState.RELOCATED
        assert self.h.rent_before_relocation == pytest.approx(2_000 * 1.02 ** 3)
        assert self.h.monthly_rent == pytest.approx(2_000 * 1.02 ** 3 * 1.30)

        assert self.h.advance(4) is False
        assert self.h.monthly_rent == pytest.approx(2_000 * 1.02 ** 4 * 1.30)

    def test_stays_relocated_when_children_leave(self):
        self.h.advance(3)
        self.h.advance(0)
        assert self.h.state is HousingState.RELOCATED

    def test_no_rent(self):
        h = HousingModel(0, 3.5, 0.02)
        h.advance(5)
        assert h.monthly_rent == 0
        assert h.state is HousingState.RELOCATED
