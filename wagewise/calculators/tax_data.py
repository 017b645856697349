"""UK tax constants — income tax bands, NI, student loan thresholds.

Hardcoded Python constants (not DB-driven). One immutable table per tax
year, selected by the caller and passed into every calculator.
"""

from decimal import Decimal
from typing import NamedTuple


class Band(NamedTuple):
    """A single marginal-rate band."""

    upper: Decimal | None  # inclusive; None = unbounded
    rate: Decimal


class EnglandWalesBands(NamedTuple):
    """Income tax bands for England, Wales and Northern Ireland."""

    higher_rate_threshold: Decimal
    additional_rate_threshold: Decimal
    basic_rate: Decimal
    higher_rate: Decimal
    additional_rate: Decimal


class ScottishBands(NamedTuple):
    """Scottish income tax bands (upper bounds are on gross income)."""

    starter_upper: Decimal
    basic_upper: Decimal
    intermediate_upper: Decimal
    higher_upper: Decimal
    advanced_upper: Decimal
    starter_rate: Decimal
    basic_rate: Decimal
    intermediate_rate: Decimal
    higher_rate: Decimal
    advanced_rate: Decimal
    top_rate: Decimal


class NationalInsuranceRates(NamedTuple):
    """Employee Class 1 NI parameters for a tax year."""

    primary_threshold: Decimal
    upper_earnings_limit: Decimal
    main_rate: Decimal
    upper_rate: Decimal


class StudentLoanThresholds(NamedTuple):
    """Student loan repayment thresholds and rates for a tax year."""

    plan1_threshold: Decimal
    plan2_threshold: Decimal
    plan4_threshold: Decimal
    plan5_threshold: Decimal
    postgraduate_threshold: Decimal
    plan_rate: Decimal
    postgraduate_rate: Decimal


class TaxYearTable(NamedTuple):
    """All tax parameters for a single UK tax year."""

    personal_allowance: Decimal
    allowance_taper_start: Decimal
    england_wales: EnglandWalesBands
    scotland: ScottishBands
    national_insurance: NationalInsuranceRates
    student_loan: StudentLoanThresholds


class UnknownTaxYearError(KeyError):
    """Raised when a tax year key has no table."""

    def __init__(self, tax_year: str) -> None:
        self.tax_year = tax_year
        self.available = sorted(TAX_YEARS)
        super().__init__(tax_year)

    def __str__(self) -> str:
        return f"Unknown tax year: {self.tax_year}. Available: {', '.join(self.available)}"


# rUK thresholds frozen since 2023-24
_ENGLAND_WALES = EnglandWalesBands(
    higher_rate_threshold=Decimal("50270"),
    additional_rate_threshold=Decimal("125140"),
    basic_rate=Decimal("0.20"),
    higher_rate=Decimal("0.40"),
    additional_rate=Decimal("0.45"),
)

# Main 8% from 6 April 2024
_NATIONAL_INSURANCE = NationalInsuranceRates(
    primary_threshold=Decimal("12570"),
    upper_earnings_limit=Decimal("50270"),
    main_rate=Decimal("0.08"),
    upper_rate=Decimal("0.02"),
)

TAX_YEARS: dict[str, TaxYearTable] = {
    "2024/25": TaxYearTable(
        personal_allowance=Decimal("12570"),
        allowance_taper_start=Decimal("100000"),
        england_wales=_ENGLAND_WALES,
        scotland=ScottishBands(
            starter_upper=Decimal("14876"),
            basic_upper=Decimal("26561"),
            intermediate_upper=Decimal("43662"),
            higher_upper=Decimal("75000"),
            advanced_upper=Decimal("125140"),
            starter_rate=Decimal("0.19"),
            basic_rate=Decimal("0.20"),
            intermediate_rate=Decimal("0.21"),
            higher_rate=Decimal("0.42"),
            advanced_rate=Decimal("0.45"),
            top_rate=Decimal("0.48"),
        ),
        national_insurance=_NATIONAL_INSURANCE,
        student_loan=StudentLoanThresholds(
            plan1_threshold=Decimal("24990"),
            plan2_threshold=Decimal("27295"),
            plan4_threshold=Decimal("31395"),
            plan5_threshold=Decimal("25000"),  # no plan 5 repayments before April 2026
            postgraduate_threshold=Decimal("21000"),
            plan_rate=Decimal("0.09"),
            postgraduate_rate=Decimal("0.06"),
        ),
    ),
    "2025/26": TaxYearTable(
        personal_allowance=Decimal("12570"),
        allowance_taper_start=Decimal("100000"),
        england_wales=_ENGLAND_WALES,
        scotland=ScottishBands(
            starter_upper=Decimal("15397"),
            basic_upper=Decimal("27491"),
            intermediate_upper=Decimal("43662"),
            higher_upper=Decimal("75000"),
            advanced_upper=Decimal("125140"),
            starter_rate=Decimal("0.19"),
            basic_rate=Decimal("0.20"),
            intermediate_rate=Decimal("0.21"),
            higher_rate=Decimal("0.42"),
            advanced_rate=Decimal("0.45"),
            top_rate=Decimal("0.48"),
        ),
        national_insurance=_NATIONAL_INSURANCE,
        student_loan=StudentLoanThresholds(
            plan1_threshold=Decimal("26065"),
            plan2_threshold=Decimal("28470"),
            plan4_threshold=Decimal("32745"),
            plan5_threshold=Decimal("25000"),
            postgraduate_threshold=Decimal("21000"),
            plan_rate=Decimal("0.09"),
            postgraduate_rate=Decimal("0.06"),
        ),
    ),
}

DEFAULT_TAX_YEAR = "2025/26"


def normalize_tax_year(tax_year: str) -> str:
    """Normalise "2025-26" / " 2025/26 " to the "2025/26" key form."""
    return tax_year.strip().replace("-", "/")


def get_tax_year(tax_year: str | None = None) -> TaxYearTable:
    """Return the table for a tax year key, or the default year when None.

    Raises:
        UnknownTaxYearError: If no table exists for the key.
    """
    key = DEFAULT_TAX_YEAR if tax_year is None else normalize_tax_year(tax_year)
    try:
        return TAX_YEARS[key]
    except KeyError:
        raise UnknownTaxYearError(key) from None


def validate_table(table: TaxYearTable) -> list[str]:
    """Return a list of ordering problems in a table (empty when valid)."""
    problems: list[str] = []

    ew = table.england_wales
    if ew.higher_rate_threshold > ew.additional_rate_threshold:
        problems.append("higher-rate threshold exceeds additional-rate threshold")

    sc = table.scotland
    bounds = [
        sc.starter_upper,
        sc.basic_upper,
        sc.intermediate_upper,
        sc.higher_upper,
        sc.advanced_upper,
    ]
    if bounds != sorted(bounds):
        problems.append("Scottish band upper bounds are not non-decreasing")

    ni = table.national_insurance
    if ni.primary_threshold > ni.upper_earnings_limit:
        problems.append("NI primary threshold exceeds upper earnings limit")

    if table.personal_allowance > table.allowance_taper_start:
        problems.append("personal allowance exceeds taper start")

    return problems
