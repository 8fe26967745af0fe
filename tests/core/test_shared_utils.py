from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
from pydantic import BaseModel

from voyage.core.exceptions import NotFoundError
from voyage.shared.utils.dates import add_months
from voyage.shared.utils.money import percent_of, round_money
from voyage.shared.utils.sync import sync_children
from voyage.shared.utils.validators import validate_aadhar, validate_gstin, validate_ifsc, validate_pan


class TestMoney:
    def test_round_half_up(self):
        assert round_money("10.125") == Decimal("10.13")
        assert round_money(Decimal("10.124")) == Decimal("10.12")

    def test_percent_of(self):
        assert percent_of(Decimal("10000"), Decimal("2.5")) == Decimal("250.00")
        assert percent_of(Decimal("999"), Decimal("18")) == Decimal("179.82")

    def test_percent_of_without_rate(self):
        assert percent_of(Decimal("10000"), None) == Decimal("0.00")


class TestAddMonths:
    def test_clamps_to_month_end(self):
        assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)

    def test_leap_year(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_crosses_year(self):
        assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)


class TestValidators:
    def test_gstin_normalised(self):
        assert validate_gstin(" 27aapfu0939f1zv ") == "27AAPFU0939F1ZV"

    def test_gstin_rejected(self):
        with pytest.raises(ValueError):
            validate_gstin("27AAPFU0939F1X")

    def test_blank_values_become_none(self):
        assert validate_gstin("") is None
        assert validate_pan(None) is None

    def test_pan(self):
        assert validate_pan("abcde1234f") == "ABCDE1234F"
        with pytest.raises(ValueError):
            validate_pan("ABCDE12345")

    def test_ifsc(self):
        assert validate_ifsc("hdfc0001234") == "HDFC0001234"
        with pytest.raises(ValueError):
            validate_ifsc("HDFC1001234")

    def test_aadhar_spaces_removed(self):
        assert validate_aadhar("1234 5678 9012") == "123456789012"
        with pytest.raises(ValueError):
            validate_aadhar("12345")


class Member(BaseModel):
    id: int | None = None
    name: str


class Child(SimpleNamespace):
    pass


class TestSyncChildren:
    def test_update_add_and_remove(self):
        keep = Child(id=1, name="Asha")
        drop = Child(id=2, name="Vikram")
        collection = [keep, drop]

        sync_children(
            collection,
            [Member(id=1, name="Asha K"), Member(name="Neha")],
            Child,
            "Member",
        )

        assert [c.name for c in collection] == ["Asha K", "Neha"]
        assert collection[0] is keep

    def test_unknown_id(self):
        with pytest.raises(NotFoundError):
            sync_children([Child(id=1, name="Asha")], [Member(id=9, name="X")], Child, "Member")
