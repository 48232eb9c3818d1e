"""Property investment calculators, one pure formula per strategy.

Every calculator reads a flat mapping of form fields. Which fields it reads,
how each one is parsed and what it falls back to live in a single FIELDS table
per strategy, so the formulas below only ever see clean floats.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from models.currency import parse_currency, parse_number


class CalculatorType(str, Enum):
    STANDARD_BTL = "standard-btl"
    PURCHASE = "purchase"
    BRR = "brr"
    FLIP = "flip"
    HOLIDAY_LET = "holiday-let"
    RENT_TO_HMO = "rent-to-hmo"
    RENT_TO_SERVICED = "rent-to-serviced"

    @classmethod
    def coerce(cls, value) -> "CalculatorType":
        """Map a submitted calculator_type to a member; anything unknown is standard BTL."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.STANDARD_BTL

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]


DEFAULT_CALCULATOR = CalculatorType.STANDARD_BTL

DISPLAY_NAMES = {
    CalculatorType.STANDARD_BTL: "Standard Buy to Let",
    CalculatorType.PURCHASE: "Purchase",
    CalculatorType.BRR: "Buy Refurbish Refinance",
    CalculatorType.FLIP: "Flip",
    CalculatorType.HOLIDAY_LET: "Holiday Let",
    CalculatorType.RENT_TO_HMO: "Rent to HMO",
    CalculatorType.RENT_TO_SERVICED: "Rent to Serviced Accommodation",
}


@dataclass(frozen=True)
class FieldSpec:
    parser: Callable
    default: float = 0.0

    def parse(self, value) -> float:
        return self.parser(value, self.default)


def money() -> FieldSpec:
    return FieldSpec(parse_currency, 0.0)


def number(default: float) -> FieldSpec:
    return FieldSpec(parse_number, default)


_MORTGAGE = {
    "purchase_price": money(),
    "deposit_percent": number(20),
    "mortgage_rate": number(5.8),
}

STANDARD_BTL_FIELDS = {
    **_MORTGAGE,
    "monthly_rent": money(),
    "stamp_duty": money(),
    "survey_cost": money(),
    "legal_fees": money(),
    "loan_setup": money(),
    "council_tax": money(),
    "repairs_maintenance": money(),
    "utilities": money(),
    "water": money(),
    "broadband_tv": money(),
    "insurance": money(),
}

FIELDS: dict[CalculatorType, dict[str, FieldSpec]] = {
    CalculatorType.STANDARD_BTL: STANDARD_BTL_FIELDS,
    CalculatorType.PURCHASE: STANDARD_BTL_FIELDS,
    CalculatorType.BRR: {
        **_MORTGAGE,
        "refurb_cost": money(),
        "after_refurb_value": money(),
        "refinance_ltv": number(75),
        "monthly_rent": money(),
        "council_tax": money(),
        "repairs_maintenance": money(),
        "insurance": money(),
    },
    CalculatorType.FLIP: {
        "purchase_price": money(),
        "refurb_cost": money(),
        "sale_price": money(),
        "holding_period": number(6),
        "stamp_duty": money(),
        "survey_cost": money(),
        "legal_fees": money(),
        "legal_fees_sale": money(),
        "estate_agent_fees": money(),
        "finance_cost": money(),
    },
    CalculatorType.HOLIDAY_LET: {
        **_MORTGAGE,
        "weekly_rent": money(),
        "occupancy_rate": number(50),
        "management_fee": number(20),
        "cleaning_fee": money(),
        "council_tax": money(),
        "utilities": money(),
        "insurance": money(),
    },
    CalculatorType.RENT_TO_HMO: {
        "monthly_rent_paid": money(),
        "number_of_rooms": number(1),
        "rent_per_room": money(),
        "occupancy_rate": number(80),
        "council_tax": money(),
        "utilities": money(),
        "insurance": money(),
        "management_fee": money(),
    },
    CalculatorType.RENT_TO_SERVICED: {
        "monthly_rent_paid": money(),
        "daily_rate": money(),
        "occupancy_rate": number(60),
        "cleaning_fee": money(),
        "management_fee": number(20),
        "council_tax": money(),
        "utilities": money(),
        "insurance": money(),
    },
}

WEEKS_PER_YEAR = 52
DAYS_PER_YEAR = 365


def resolve_fields(calc_type: CalculatorType, data: dict) -> dict[str, float]:
    """Parse every field the calculator reads, applying its documented default."""
    data = data or {}
    return {name: spec.parse(data.get(name)) for name, spec in FIELDS[calc_type].items()}


def _pct_of(part: float, basis: float) -> float:
    """(part / basis) * 100, or 0 when the basis is not positive."""
    if basis <= 0:
        return 0.0
    return (part / basis) * 100


def calculate_standard_btl(f: dict) -> dict:
    purchase_price = f["purchase_price"]
    deposit_amount = purchase_price * (f["deposit_percent"] / 100)
    annual_rent = f["monthly_rent"] * 12

    total_purchase_costs = f["stamp_duty"] + f["survey_cost"] + f["legal_fees"] + f["loan_setup"]
    total_investment = deposit_amount + total_purchase_costs

    mortgage_amount = purchase_price - deposit_amount
    annual_mortgage_interest = mortgage_amount * (f["mortgage_rate"] / 100)

    total_annual_expenses = (
        annual_mortgage_interest + f["council_tax"] + f["repairs_maintenance"]
        + f["utilities"] + f["water"] + f["broadband_tv"] + f["insurance"]
    )
    annual_profit = annual_rent - total_annual_expenses

    return {
        "purchase_price": purchase_price,
        "deposit_percent": f["deposit_percent"],
        "deposit_amount": deposit_amount,
        "mortgage_rate": f["mortgage_rate"],
        "mortgage_amount": mortgage_amount,
        "stamp_duty": f["stamp_duty"],
        "survey_cost": f["survey_cost"],
        "legal_fees": f["legal_fees"],
        "loan_setup": f["loan_setup"],
        "total_purchase_costs": total_purchase_costs,
        "total_investment": total_investment,
        "monthly_rent": f["monthly_rent"],
        "annual_rent": annual_rent,
        "rental_yield": _pct_of(annual_rent, purchase_price),
        "annual_mortgage_interest": annual_mortgage_interest,
        "council_tax": f["council_tax"],
        "repairs_maintenance": f["repairs_maintenance"],
        "utilities": f["utilities"],
        "water": f["water"],
        "broadband_tv": f["broadband_tv"],
        "insurance": f["insurance"],
        "total_annual_expenses": total_annual_expenses,
        "annual_profit": annual_profit,
        "monthly_profit": annual_profit / 12,
        "roi": _pct_of(annual_profit, total_investment),
    }


def calculate_brr(f: dict) -> dict:
    purchase_price = f["purchase_price"]
    after_refurb_value = f["after_refurb_value"]
    deposit_amount = purchase_price * (f["deposit_percent"] / 100)
    initial_mortgage = purchase_price - deposit_amount
    total_initial_investment = deposit_amount + f["refurb_cost"]

    refinance_amount = after_refurb_value * (f["refinance_ltv"] / 100)
    money_back = refinance_amount - initial_mortgage
    net_investment = total_initial_investment - money_back

    annual_rent = f["monthly_rent"] * 12
    annual_mortgage_interest = refinance_amount * (f["mortgage_rate"] / 100)
    total_annual_expenses = (
        annual_mortgage_interest + f["council_tax"] + f["repairs_maintenance"] + f["insurance"]
    )
    annual_profit = annual_rent - total_annual_expenses

    return {
        "purchase_price": purchase_price,
        "refurb_cost": f["refurb_cost"],
        "after_refurb_value": after_refurb_value,
        "deposit_percent": f["deposit_percent"],
        "deposit_amount": deposit_amount,
        "initial_mortgage": initial_mortgage,
        "total_initial_investment": total_initial_investment,
        "refinance_ltv": f["refinance_ltv"],
        "refinance_amount": refinance_amount,
        "money_back": money_back,
        "net_investment": net_investment,
        "monthly_rent": f["monthly_rent"],
        "annual_rent": annual_rent,
        "rental_yield": _pct_of(annual_rent, after_refurb_value),
        "mortgage_rate": f["mortgage_rate"],
        "annual_mortgage_interest": annual_mortgage_interest,
        "council_tax": f["council_tax"],
        "repairs_maintenance": f["repairs_maintenance"],
        "insurance": f["insurance"],
        "total_annual_expenses": total_annual_expenses,
        "annual_profit": annual_profit,
        "monthly_profit": annual_profit / 12,
        "roi": _pct_of(annual_profit, net_investment),
    }


def calculate_flip(f: dict) -> dict:
    total_purchase_costs = f["stamp_duty"] + f["survey_cost"] + f["legal_fees"]
    total_sale_costs = f["legal_fees_sale"] + f["estate_agent_fees"]
    total_investment = (
        f["purchase_price"] + f["refurb_cost"] + total_purchase_costs + f["finance_cost"]
    )
    gross_profit = f["sale_price"] - total_investment - total_sale_costs
    net_profit = gross_profit
    roi = _pct_of(net_profit, total_investment)
    holding_period = f["holding_period"]

    return {
        "purchase_price": f["purchase_price"],
        "refurb_cost": f["refurb_cost"],
        "sale_price": f["sale_price"],
        "stamp_duty": f["stamp_duty"],
        "survey_cost": f["survey_cost"],
        "legal_fees": f["legal_fees"],
        "legal_fees_sale": f["legal_fees_sale"],
        "estate_agent_fees": f["estate_agent_fees"],
        "finance_cost": f["finance_cost"],
        "total_purchase_costs": total_purchase_costs,
        "total_sale_costs": total_sale_costs,
        "total_investment": total_investment,
        "gross_profit": gross_profit,
        "net_profit": net_profit,
        "roi": roi,
        "monthly_roi": roi / holding_period if holding_period > 0 else 0.0,
        "holding_period": holding_period,
    }


def calculate_holiday_let(f: dict) -> dict:
    purchase_price = f["purchase_price"]
    deposit_amount = purchase_price * (f["deposit_percent"] / 100)
    mortgage_amount = purchase_price - deposit_amount

    occupied_weeks = WEEKS_PER_YEAR * (f["occupancy_rate"] / 100)
    annual_rent = f["weekly_rent"] * occupied_weeks
    management_fee = annual_rent * (f["management_fee"] / 100)
    total_cleaning_fees = f["cleaning_fee"] * occupied_weeks

    annual_mortgage_interest = mortgage_amount * (f["mortgage_rate"] / 100)
    total_annual_expenses = (
        annual_mortgage_interest + management_fee + total_cleaning_fees
        + f["council_tax"] + f["utilities"] + f["insurance"]
    )
    annual_profit = annual_rent - total_annual_expenses

    return {
        "purchase_price": purchase_price,
        "deposit_percent": f["deposit_percent"],
        "deposit_amount": deposit_amount,
        "mortgage_amount": mortgage_amount,
        "total_investment": deposit_amount,
        "weekly_rent": f["weekly_rent"],
        "occupancy_rate": f["occupancy_rate"],
        "occupied_weeks": occupied_weeks,
        "annual_rent": annual_rent,
        "monthly_rent": annual_rent / 12,
        "rental_yield": _pct_of(annual_rent, purchase_price),
        "mortgage_rate": f["mortgage_rate"],
        "annual_mortgage_interest": annual_mortgage_interest,
        "management_fee_percent": f["management_fee"],
        "management_fee": management_fee,
        "cleaning_fee": f["cleaning_fee"],
        "total_cleaning_fees": total_cleaning_fees,
        "council_tax": f["council_tax"],
        "utilities": f["utilities"],
        "insurance": f["insurance"],
        "total_annual_expenses": total_annual_expenses,
        "annual_profit": annual_profit,
        "monthly_profit": annual_profit / 12,
        "roi": _pct_of(annual_profit, deposit_amount),
    }


def calculate_rent_to_hmo(f: dict) -> dict:
    annual_rent_paid = f["monthly_rent_paid"] * 12
    occupied_rooms = math.floor(f["number_of_rooms"] * (f["occupancy_rate"] / 100))
    monthly_income = f["rent_per_room"] * occupied_rooms
    annual_income = monthly_income * 12

    total_annual_expenses = (
        annual_rent_paid + f["council_tax"] + f["utilities"] + f["insurance"] + f["management_fee"]
    )
    annual_profit = annual_income - total_annual_expenses

    return {
        "monthly_rent_paid": f["monthly_rent_paid"],
        "annual_rent_paid": annual_rent_paid,
        "number_of_rooms": f["number_of_rooms"],
        "rent_per_room": f["rent_per_room"],
        "occupancy_rate": f["occupancy_rate"],
        "occupied_rooms": occupied_rooms,
        "monthly_income": monthly_income,
        "annual_income": annual_income,
        "council_tax": f["council_tax"],
        "utilities": f["utilities"],
        "insurance": f["insurance"],
        "management_fee": f["management_fee"],
        "total_annual_expenses": total_annual_expenses,
        "annual_profit": annual_profit,
        "monthly_profit": annual_profit / 12,
        # rent-to-rent has no equity; the lease cost is the return basis
        "roi": _pct_of(annual_profit, annual_rent_paid),
    }


def calculate_rent_to_serviced(f: dict) -> dict:
    annual_rent_paid = f["monthly_rent_paid"] * 12
    occupied_days = DAYS_PER_YEAR * (f["occupancy_rate"] / 100)
    annual_income = f["daily_rate"] * occupied_days
    management_fee = annual_income * (f["management_fee"] / 100)
    total_cleaning_fees = f["cleaning_fee"] * occupied_days

    total_annual_expenses = (
        annual_rent_paid + management_fee + total_cleaning_fees
        + f["council_tax"] + f["utilities"] + f["insurance"]
    )
    annual_profit = annual_income - total_annual_expenses

    return {
        "monthly_rent_paid": f["monthly_rent_paid"],
        "annual_rent_paid": annual_rent_paid,
        "daily_rate": f["daily_rate"],
        "occupancy_rate": f["occupancy_rate"],
        "occupied_days": occupied_days,
        "annual_income": annual_income,
        "monthly_income": annual_income / 12,
        "management_fee_percent": f["management_fee"],
        "management_fee": management_fee,
        "cleaning_fee": f["cleaning_fee"],
        "total_cleaning_fees": total_cleaning_fees,
        "council_tax": f["council_tax"],
        "utilities": f["utilities"],
        "insurance": f["insurance"],
        "total_annual_expenses": total_annual_expenses,
        "annual_profit": annual_profit,
        "monthly_profit": annual_profit / 12,
        "roi": _pct_of(annual_profit, annual_rent_paid),
    }


CALCULATORS: dict[CalculatorType, Callable[[dict], dict]] = {
    CalculatorType.STANDARD_BTL: calculate_standard_btl,
    CalculatorType.PURCHASE: calculate_standard_btl,
    CalculatorType.BRR: calculate_brr,
    CalculatorType.FLIP: calculate_flip,
    CalculatorType.HOLIDAY_LET: calculate_holiday_let,
    CalculatorType.RENT_TO_HMO: calculate_rent_to_hmo,
    CalculatorType.RENT_TO_SERVICED: calculate_rent_to_serviced,
}


def run_calculator(calc_type, data: dict) -> dict:
    """Run one calculator against a raw field mapping."""
    calc_type = CalculatorType.coerce(calc_type)
    return CALCULATORS[calc_type](resolve_fields(calc_type, data))


def calculate_investment(data: dict) -> dict:
    """Dispatch on data["calculator_type"] (default standard-btl)."""
    data = data or {}
    return run_calculator(data.get("calculator_type") or DEFAULT_CALCULATOR, data)
