"""Tests for the investment calculators and their field defaults."""
import math

import pytest

from models.calculators import (
    CALCULATORS, FIELDS, CalculatorType, calculate_investment, resolve_fields, run_calculator,
)

BTL_INPUT = {
    "purchase_price": "£200,000",
    "deposit_percent": 25,
    "monthly_rent": "£1,200",
    "mortgage_rate": 5,
    "council_tax": 150,
    "repairs_maintenance": 50,
    "utilities": 40,
    "water": 20,
    "broadband_tv": 30,
    "insurance": 25,
}

FLIP_INPUT = {
    "calculator_type": "flip",
    "purchase_price": 100000,
    "refurb_cost": 20000,
    "sale_price": 180000,
    "stamp_duty": 3000,
    "survey_cost": 500,
    "legal_fees": 1000,
    "legal_fees_sale": 1000,
    "estate_agent_fees": 3000,
    "finance_cost": 2000,
    "holding_period": 6,
}


def test_standard_btl_example():
    r = calculate_investment(BTL_INPUT)
    assert r["deposit_amount"] == 50000
    assert r["mortgage_amount"] == 150000
    assert r["annual_rent"] == 14400
    assert r["rental_yield"] == pytest.approx(7.2)
    assert r["annual_mortgage_interest"] == pytest.approx(7500)
    assert r["total_annual_expenses"] == pytest.approx(7815)
    assert r["annual_profit"] == pytest.approx(6585)
    assert r["monthly_profit"] == pytest.approx(6585 / 12)
    assert r["total_investment"] == 50000
    assert r["roi"] == pytest.approx(13.17)


def test_standard_btl_purchase_costs_count_towards_investment():
    r = calculate_investment({**BTL_INPUT, "stamp_duty": "£6,000", "legal_fees": 1500, "survey_cost": 500,
                              "loan_setup": 2000})
    assert r["total_purchase_costs"] == 10000
    assert r["total_investment"] == 60000
    assert r["roi"] == pytest.approx(6585 / 60000 * 100)


def test_flip_example():
    r = calculate_investment(FLIP_INPUT)
    assert r["total_investment"] == 126500
    assert r["total_sale_costs"] == 4000
    assert r["gross_profit"] == 49500
    assert r["net_profit"] == 49500
    assert round(r["roi"], 2) == 39.13
    assert round(r["monthly_roi"], 2) == 6.52


def test_purchase_uses_standard_formula():
    assert run_calculator("purchase", BTL_INPUT) == run_calculator("standard-btl", BTL_INPUT)


@pytest.mark.parametrize("raw, expected", [
    ("brr", CalculatorType.BRR),
    ("rent-to-serviced", CalculatorType.RENT_TO_SERVICED),
    (CalculatorType.FLIP, CalculatorType.FLIP),
    ("unknown", CalculatorType.STANDARD_BTL),
    ("", CalculatorType.STANDARD_BTL),
    (None, CalculatorType.STANDARD_BTL),
    ("BRR", CalculatorType.STANDARD_BTL),
    (" brr ", CalculatorType.STANDARD_BTL),
])
def test_coerce_matches_exact_values_only(raw, expected):
    assert CalculatorType.coerce(raw) is expected


def test_unknown_type_falls_back_to_standard_btl():
    assert calculate_investment({**BTL_INPUT, "calculator_type": "mystery"}) == calculate_investment(BTL_INPUT)


def test_every_type_has_a_calculator():
    assert set(CALCULATORS) == set(CalculatorType)
    assert set(FIELDS) == set(CalculatorType)


@pytest.mark.parametrize("calc_type", list(CalculatorType))
def test_empty_input_gives_finite_results(calc_type):
    r = run_calculator(calc_type, {})
    assert r
    for key, value in r.items():
        assert math.isfinite(value), key


def test_empty_input_applies_documented_defaults():
    fields = resolve_fields(CalculatorType.STANDARD_BTL, {})
    assert fields["deposit_percent"] == 20
    assert fields["mortgage_rate"] == 5.8
    assert fields["purchase_price"] == 0

    assert resolve_fields(CalculatorType.BRR, {})["refinance_ltv"] == 75
    assert resolve_fields(CalculatorType.FLIP, {})["holding_period"] == 6
    holiday = resolve_fields(CalculatorType.HOLIDAY_LET, {})
    assert (holiday["occupancy_rate"], holiday["management_fee"]) == (50, 20)
    hmo = resolve_fields(CalculatorType.RENT_TO_HMO, {})
    assert (hmo["occupancy_rate"], hmo["number_of_rooms"]) == (80, 1)
    serviced = resolve_fields(CalculatorType.RENT_TO_SERVICED, {})
    assert (serviced["occupancy_rate"], serviced["management_fee"]) == (60, 20)


def test_defaults_are_used_as_if_supplied():
    with_defaults = run_calculator("standard-btl", {"purchase_price": 100000, "deposit_percent": 20,
                                                    "mortgage_rate": 5.8, "monthly_rent": 700})
    implicit = run_calculator("standard-btl", {"purchase_price": 100000, "monthly_rent": 700})
    assert implicit == with_defaults
    assert implicit["annual_mortgage_interest"] == pytest.approx(80000 * 0.058)


def test_zero_rate_falls_back_to_default():
    r = run_calculator("standard-btl", {"purchase_price": 100000, "deposit_percent": "0"})
    assert r["deposit_amount"] == 20000


@pytest.mark.parametrize("calc_type", list(CalculatorType))
def test_roi_is_zero_when_basis_is_not_positive(calc_type):
    assert run_calculator(calc_type, {})["roi"] == 0


def test_roi_is_a_percentage_not_a_fraction():
    r = run_calculator("standard-btl", {"purchase_price": 100000, "monthly_rent": 1000, "mortgage_rate": 1})
    # 12000 rent - 800 interest over a 20000 deposit
    assert r["roi"] == pytest.approx(56.0)


def test_brr_refinance():
    r = run_calculator("brr", {
        "purchase_price": 100000, "deposit_percent": 25, "refurb_cost": 20000,
        "after_refurb_value": 150000, "refinance_ltv": 75, "monthly_rent": 1000,
        "mortgage_rate": 5, "council_tax": 1000, "repairs_maintenance": 500, "insurance": 300,
    })
    assert r["initial_mortgage"] == 75000
    assert r["total_initial_investment"] == 45000
    assert r["refinance_amount"] == 112500
    assert r["money_back"] == 37500
    assert r["net_investment"] == 7500
    assert r["rental_yield"] == pytest.approx(12000 / 150000 * 100)
    assert r["annual_mortgage_interest"] == pytest.approx(5625)
    assert r["annual_profit"] == pytest.approx(12000 - 5625 - 1800)
    assert r["roi"] == pytest.approx((12000 - 7425) / 7500 * 100)


def test_brr_money_back_exceeding_investment_gives_zero_roi():
    r = run_calculator("brr", {
        "purchase_price": 100000, "deposit_percent": 10, "after_refurb_value": 200000, "monthly_rent": 1000,
    })
    assert r["net_investment"] < 0
    assert r["roi"] == 0


def test_holiday_let_scales_with_occupied_weeks():
    r = run_calculator("holiday-let", {
        "purchase_price": 200000, "weekly_rent": 1000, "occupancy_rate": 50,
        "management_fee": 20, "cleaning_fee": 50, "mortgage_rate": 5,
    })
    assert r["occupied_weeks"] == 26
    assert r["annual_rent"] == 26000
    assert r["management_fee"] == pytest.approx(5200)
    assert r["total_cleaning_fees"] == 1300
    assert r["total_investment"] == 40000
    assert r["monthly_rent"] == pytest.approx(26000 / 12)
    expenses = 160000 * 0.05 + 5200 + 1300
    assert r["total_annual_expenses"] == pytest.approx(expenses)
    assert r["roi"] == pytest.approx((26000 - expenses) / 40000 * 100)


def test_rent_to_hmo_floors_occupied_rooms():
    r = run_calculator("rent-to-hmo", {
        "monthly_rent_paid": 1500, "number_of_rooms": 5, "rent_per_room": 500, "occupancy_rate": 90,
        "council_tax": 1200, "utilities": 2400, "insurance": 400, "management_fee": 1000,
    })
    assert r["occupied_rooms"] == 4
    assert r["monthly_income"] == 2000
    assert r["annual_income"] == 24000
    assert r["total_annual_expenses"] == 18000 + 5000
    assert r["annual_profit"] == 1000
    # return is measured against the rent paid to the landlord
    assert r["roi"] == pytest.approx(1000 / 18000 * 100)


def test_rent_to_serviced():
    r = run_calculator("rent-to-serviced", {
        "monthly_rent_paid": 1000, "daily_rate": 100, "occupancy_rate": 60,
        "cleaning_fee": 10, "management_fee": 20,
    })
    assert r["occupied_days"] == pytest.approx(219)
    assert r["annual_income"] == pytest.approx(21900)
    assert r["monthly_income"] == pytest.approx(21900 / 12)
    assert r["management_fee"] == pytest.approx(4380)
    assert r["total_cleaning_fees"] == pytest.approx(2190)
    assert r["total_annual_expenses"] == pytest.approx(12000 + 4380 + 2190)
    assert r["roi"] == pytest.approx((21900 - 18570) / 12000 * 100)


def test_calculators_are_pure():
    data = dict(BTL_INPUT)
    first = calculate_investment(data)
    assert calculate_investment(data) == first
    assert data == BTL_INPUT
