"""Personal allowance calculator with the high-income taper."""

from decimal import Decimal

from wagewise.calculators.money import round2
from wagewise.calculators.tax_code import TaxCodePolicy
from wagewise.calculators.tax_data import TaxYearTable


def personal_allowance(
    adjusted_net_income: Decimal,
    policy: TaxCodePolicy,
    table: TaxYearTable,
) -> Decimal:
    """Return the tax-free allowance for an income under a tax code.

    The allowance drops by 1 for every 2 of income above the taper start,
    down to zero. A no-tax code makes the whole income allowance.
    """
    if policy.is_no_tax:
        return adjusted_net_income

    base = (
        policy.allowance_override
        if policy.allowance_override is not None
        else table.personal_allowance
    )
    if base <= 0:
        return Decimal("0")
    if adjusted_net_income <= table.allowance_taper_start:
        return base

    reduction = (adjusted_net_income - table.allowance_taper_start) / 2
    return round2(max(Decimal("0"), base - reduction))
