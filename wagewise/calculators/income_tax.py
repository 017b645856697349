"""Income tax calculator — band-by-band marginal tax for England/Wales and Scotland."""

from decimal import Decimal

from wagewise.calculators.allowance import personal_allowance
from wagewise.calculators.money import clamp, round2
from wagewise.calculators.tax_code import TaxCodePolicy
from wagewise.calculators.tax_data import Band, TaxYearTable
from wagewise.models import Region


def region_bands(region: Region, table: TaxYearTable) -> tuple[Band, ...]:
    """Return the taxed bands for a region, ending in one unbounded band."""
    match region:
        case Region.SCOTLAND:
            sc = table.scotland
            return (
                Band(sc.starter_upper, sc.starter_rate),
                Band(sc.basic_upper, sc.basic_rate),
                Band(sc.intermediate_upper, sc.intermediate_rate),
                Band(sc.higher_upper, sc.higher_rate),
                Band(sc.advanced_upper, sc.advanced_rate),
                Band(None, sc.top_rate),
            )
        case Region.ENGLAND:
            ew = table.england_wales
            return (
                Band(ew.higher_rate_threshold, ew.basic_rate),
                Band(ew.additional_rate_threshold, ew.higher_rate),
                Band(None, ew.additional_rate),
            )


def build_bands(region: Region, allowance: Decimal, table: TaxYearTable) -> tuple[Band, ...]:
    """Prefix the region's bands with a zero-rate allowance band."""
    return (Band(allowance, Decimal("0")), *region_bands(region, table))


def apply_bands(income: Decimal, bands: tuple[Band, ...]) -> Decimal:
    """Tax income across ordered bands.

    Each band taxes the slice between the previous band's upper bound and its
    own. Income exactly on a boundary is taxed in the lower band.
    """
    tax = Decimal("0")
    lower = Decimal("0")

    for band in bands:
        upper = income if band.upper is None else min(income, band.upper)
        if upper > lower:
            tax += (upper - lower) * band.rate
        if band.upper is None or income <= band.upper:
            break
        lower = band.upper

    return round2(tax)


def calculate_income_tax(
    region: Region,
    adjusted_net_income: Decimal,
    policy: TaxCodePolicy,
    table: TaxYearTable,
) -> Decimal:
    """Calculate annual income tax.

    Args:
        region: England/Wales or Scotland.
        adjusted_net_income: Income after salary sacrifice; negatives count as 0.
        policy: Parsed tax code.
        table: Tax year constants.

    Returns:
        Annual income tax rounded to pence.
    """
    if policy.is_no_tax:
        return Decimal("0")

    income = max(Decimal("0"), adjusted_net_income)

    if policy.flat_rate is not None:
        return round2(income * policy.flat_rate)

    allowance = clamp(personal_allowance(income, policy, table), Decimal("0"), income)
    return apply_bands(income, build_bands(region, allowance, table))
