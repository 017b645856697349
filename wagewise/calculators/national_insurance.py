"""Employee Class 1 National Insurance calculator."""

from decimal import Decimal

from wagewise.calculators.money import round2
from wagewise.calculators.tax_data import TaxYearTable


def calculate_national_insurance(annual_earnings: Decimal, table: TaxYearTable) -> Decimal:
    """Calculate annual employee NI.

    Earnings between the primary threshold and the upper earnings limit pay
    the main rate; earnings above the limit pay the upper rate.
    """
    ni = table.national_insurance
    earnings = max(Decimal("0"), annual_earnings)
    if earnings <= ni.primary_threshold:
        return Decimal("0")

    main_band = min(earnings, ni.upper_earnings_limit) - ni.primary_threshold
    upper_band = max(Decimal("0"), earnings - ni.upper_earnings_limit)
    return round2(main_band * ni.main_rate + upper_band * ni.upper_rate)
