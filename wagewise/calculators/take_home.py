"""Take-home calculator — composites income tax, NI, student loan and pension."""

from decimal import Decimal

from wagewise.calculators.income_tax import calculate_income_tax
from wagewise.calculators.money import clamp, round2
from wagewise.calculators.national_insurance import calculate_national_insurance
from wagewise.calculators.student_loan import calculate_student_loan
from wagewise.calculators.tax_code import parse_tax_code
from wagewise.calculators.tax_data import TaxYearTable, get_tax_year
from wagewise.models import ComputationInput, ComputationResult, PayMode, PaySnapshot

WEEKS_PER_YEAR = 52
MONTHS_PER_YEAR = 12


def gross_from_hourly(hourly_rate: Decimal, hours_per_week: Decimal) -> Decimal:
    """Annualise an hourly rate over a 52-week year."""
    return hourly_rate * hours_per_week * WEEKS_PER_YEAR


def input_from_snapshot(snapshot: PaySnapshot) -> ComputationInput:
    """Turn a persisted form snapshot into a computation input."""
    if snapshot.mode is PayMode.HOURLY:
        gross = gross_from_hourly(snapshot.hourly_rate, snapshot.hours_per_week)
    else:
        gross = snapshot.annual_salary

    return ComputationInput(
        region=snapshot.region,
        tax_code=snapshot.tax_code,
        pension_percent=snapshot.pension_percent,
        salary_sacrifice=snapshot.salary_sacrifice,
        student_loan=snapshot.student_loan,
        tax_year=snapshot.tax_year,
        gross_annual=gross,
    )


def calculate_take_home(
    inputs: ComputationInput,
    table: TaxYearTable | None = None,
) -> ComputationResult:
    """Calculate the annual take-home breakdown.

    Simplified annualised estimate: every stage is rounded to pence before
    the next one uses it. Pension is deducted before tax, NI and student
    loan only under salary sacrifice; otherwise it comes out of net pay.

    Args:
        inputs: Gross pay and assumptions.
        table: Tax year constants; resolved from ``inputs.tax_year`` when omitted.

    Returns:
        ComputationResult with annual, monthly and weekly figures.

    Raises:
        UnknownTaxYearError: If no table is given and the tax year is unknown.
    """
    if table is None:
        table = get_tax_year(inputs.tax_year)

    gross = round2(inputs.gross_annual)
    pension_percent = clamp(inputs.pension_percent, Decimal("0"), Decimal("100"))
    pension = round2(gross * pension_percent / 100)

    deduction_base = max(Decimal("0"), gross - pension if inputs.salary_sacrifice else gross)

    policy = parse_tax_code(inputs.tax_code)
    income_tax = calculate_income_tax(inputs.region, deduction_base, policy, table)
    national_insurance = calculate_national_insurance(deduction_base, table)
    student_loan = calculate_student_loan(inputs.student_loan, deduction_base, table)

    net = round2(gross - income_tax - national_insurance - student_loan - pension)

    return ComputationResult(
        gross_annual=float(gross),
        income_tax_annual=float(income_tax),
        national_insurance_annual=float(national_insurance),
        student_loan_annual=float(student_loan),
        pension_annual=float(pension),
        net_annual=float(net),
        net_monthly=float(round2(net / MONTHS_PER_YEAR)),
        net_weekly=float(round2(net / WEEKS_PER_YEAR)),
    )
