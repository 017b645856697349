"""Student loan repayment calculator."""

from decimal import Decimal

from wagewise.calculators.money import round2
from wagewise.calculators.tax_data import TaxYearTable
from wagewise.models import StudentLoanPlan


def repayment_terms(plan: StudentLoanPlan, table: TaxYearTable) -> tuple[Decimal, Decimal] | None:
    """Return (threshold, rate) for a plan, or None when there is no loan."""
    sl = table.student_loan
    match plan:
        case StudentLoanPlan.NONE:
            return None
        case StudentLoanPlan.PLAN_1:
            return sl.plan1_threshold, sl.plan_rate
        case StudentLoanPlan.PLAN_2:
            return sl.plan2_threshold, sl.plan_rate
        case StudentLoanPlan.PLAN_4:
            return sl.plan4_threshold, sl.plan_rate
        case StudentLoanPlan.PLAN_5:
            return sl.plan5_threshold, sl.plan_rate
        case StudentLoanPlan.POSTGRADUATE:
            return sl.postgraduate_threshold, sl.postgraduate_rate


def calculate_student_loan(
    plan: StudentLoanPlan,
    annual_earnings: Decimal,
    table: TaxYearTable,
) -> Decimal:
    """Calculate annual student loan repayment.

    Repayment is charged at the plan's rate on earnings above its threshold.
    """
    terms = repayment_terms(plan, table)
    if terms is None:
        return Decimal("0")

    threshold, rate = terms
    earnings = max(Decimal("0"), annual_earnings)
    if earnings <= threshold:
        return Decimal("0")
    return round2((earnings - threshold) * rate)
