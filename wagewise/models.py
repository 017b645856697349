"""Pydantic models for engine inputs, results and persisted form snapshots."""

from decimal import Decimal
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from wagewise.calculators.money import parse_money
from wagewise.calculators.tax_code import DEFAULT_TAX_CODE

# --- Enumerations ---


class Region(StrEnum):
    """Income tax region. England, Wales and Northern Ireland share bands."""

    ENGLAND = "england"
    SCOTLAND = "scotland"

    @classmethod
    def _missing_(cls, value: object) -> "Region | None":
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            if key in {"england", "wales", "england-wales", "ruk", "northern-ireland"}:
                return cls.ENGLAND
            if key == "scotland":
                return cls.SCOTLAND
        return None


class StudentLoanPlan(StrEnum):
    NONE = "none"
    PLAN_1 = "plan1"
    PLAN_2 = "plan2"
    PLAN_4 = "plan4"
    PLAN_5 = "plan5"
    POSTGRADUATE = "postgraduate"


class PayMode(StrEnum):
    """How the gross figure was entered on the form."""

    ANNUAL_SALARY = "annualSalary"
    HOURLY = "hourly"


# --- Engine inputs ---


def _money_or_zero(value: Any) -> Decimal:
    parsed = parse_money(value)
    return parsed if parsed is not None else Decimal("0")


class _CamelModel(BaseModel):
    """Accepts camelCase (persisted snapshot) or snake_case keys; ignores unknown keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class PayAssumptions(_CamelModel):
    """Everything about a computation except the gross amount."""

    region: Region = Region.ENGLAND
    tax_code: str = DEFAULT_TAX_CODE
    pension_percent: Decimal = Decimal("0")
    salary_sacrifice: bool = False
    student_loan: StudentLoanPlan = StudentLoanPlan.NONE
    tax_year: str | None = None

    @field_validator("tax_code", mode="before")
    @classmethod
    def _default_tax_code(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_TAX_CODE
        return str(value).strip() or DEFAULT_TAX_CODE

    @field_validator("pension_percent", mode="before")
    @classmethod
    def _parse_pension_percent(cls, value: Any) -> Decimal:
        return _money_or_zero(value)

    @field_validator("student_loan", mode="before")
    @classmethod
    def _default_student_loan(cls, value: Any) -> Any:
        if value in (None, ""):
            return StudentLoanPlan.NONE
        if isinstance(value, str):
            return StudentLoanPlan(value.strip().lower())
        return value

    @field_validator("region", mode="before")
    @classmethod
    def _default_region(cls, value: Any) -> Any:
        if value in (None, ""):
            return Region.ENGLAND
        if isinstance(value, str):
            return Region(value)
        return value


class ComputationInput(PayAssumptions):
    """A full take-home computation request."""

    gross_annual: Decimal = Decimal("0")

    @field_validator("gross_annual", mode="before")
    @classmethod
    def _parse_gross(cls, value: Any) -> Decimal:
        return max(Decimal("0"), _money_or_zero(value))


class PaySnapshot(PayAssumptions):
    """Form state as persisted by the client (last-used input or a named scenario)."""

    mode: PayMode = PayMode.ANNUAL_SALARY
    annual_salary: Decimal = Decimal("0")
    hourly_rate: Decimal = Decimal("0")
    hours_per_week: Decimal = Decimal("0")

    @field_validator("annual_salary", "hourly_rate", "hours_per_week", mode="before")
    @classmethod
    def _parse_amounts(cls, value: Any) -> Decimal:
        return _money_or_zero(value)

    @field_validator("mode", mode="before")
    @classmethod
    def _default_mode(cls, value: Any) -> Any:
        return PayMode.ANNUAL_SALARY if value in (None, "") else value


class SalaryFinderRequest(PayAssumptions):
    """Find the gross salary that yields a target annual take-home."""

    target_net_annual: Decimal = Field(ge=0)


# --- Engine outputs ---


class ComputationResult(BaseModel):
    """Annual take-home breakdown; every figure is rounded to pence."""

    gross_annual: float = 0.0
    income_tax_annual: float = 0.0
    national_insurance_annual: float = 0.0
    student_loan_annual: float = 0.0
    pension_annual: float = 0.0
    net_annual: float = 0.0
    net_monthly: float = 0.0
    net_weekly: float = 0.0


class TaxCodeEstimate(BaseModel):
    """Gross salary needed for the target take-home under one tax code."""

    tax_code: str
    gross_annual: float


class SalaryFinderEstimate(BaseModel):
    """Gross-from-net estimates across representative tax codes."""

    target_net_annual: float
    estimates: list[TaxCodeEstimate]
    low: float
    high: float
    is_range: bool
