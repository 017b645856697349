"""Salary finder — solves the gross salary that yields a target take-home.

The forward calculation is piecewise linear but has no simple closed-form
inverse once the allowance taper and the bands interact, so the gross figure
is found by bisection, treating ``calculate_take_home`` as a black box. This
relies on net pay being non-decreasing in gross pay for the assumptions used.
"""

import logging
from decimal import Decimal
from functools import lru_cache
from typing import NamedTuple

from config import load_yaml_config
from wagewise.calculators.money import round2
from wagewise.calculators.take_home import calculate_take_home
from wagewise.calculators.tax_code import normalize_tax_code
from wagewise.calculators.tax_data import TaxYearTable, get_tax_year
from wagewise.models import (
    ComputationInput,
    PayAssumptions,
    SalaryFinderEstimate,
    TaxCodeEstimate,
)

logger = logging.getLogger(__name__)


class SolverConfig(NamedTuple):
    """Bisection bracket, iteration count and range reporting settings."""

    search_lower: Decimal = Decimal("0")
    search_upper: Decimal = Decimal("300000")
    iterations: int = 28
    range_margin: Decimal = Decimal("10")
    representative_tax_codes: tuple[str, ...] = ("BR", "1257L M1")

    def validate(self) -> "SolverConfig":
        if self.iterations < 1:
            raise ValueError(f"iterations must be at least 1, got {self.iterations}")
        if self.search_upper <= self.search_lower:
            raise ValueError(
                f"search_upper ({self.search_upper}) must exceed search_lower ({self.search_lower})"
            )
        return self


@lru_cache(maxsize=1)
def load_solver_config(filename: str = "salary_finder.yaml") -> SolverConfig:
    """Load solver settings from config/ (cached; the file is read once)."""
    raw = load_yaml_config(filename, section="salary_finder")
    return SolverConfig(
        search_lower=Decimal(str(raw.get("search_lower", 0))),
        search_upper=Decimal(str(raw.get("search_upper", 300000))),
        iterations=int(raw.get("iterations", 28)),
        range_margin=Decimal(str(raw.get("range_margin", 10))),
        representative_tax_codes=tuple(raw.get("representative_tax_codes", ())),
    ).validate()


def _net_for_gross(assumptions: PayAssumptions, gross: Decimal, table: TaxYearTable) -> Decimal:
    fields = assumptions.model_dump()
    fields["gross_annual"] = gross
    inputs = ComputationInput.model_validate(fields)
    return Decimal(str(calculate_take_home(inputs, table).net_annual))


def solve_gross_from_net(
    target_net_annual: Decimal,
    assumptions: PayAssumptions,
    table: TaxYearTable | None = None,
    config: SolverConfig | None = None,
) -> Decimal:
    """Find the gross annual income whose take-home matches a target.

    Args:
        target_net_annual: Desired annual take-home.
        assumptions: Region, tax code, pension, student loan and tax year.
        table: Tax year constants; resolved from ``assumptions.tax_year`` when omitted.
        config: Search settings; loaded from config/salary_finder.yaml when omitted.

    Returns:
        Gross annual income rounded to pence. Targets outside the attainable
        range converge on the nearest end of the search bracket.
    """
    if table is None:
        table = get_tax_year(assumptions.tax_year)
    if config is None:
        config = load_solver_config()
    config.validate()

    target = Decimal(str(target_net_annual))
    lower, upper = config.search_lower, config.search_upper

    if target > _net_for_gross(assumptions, upper, table):
        logger.warning(
            "Target net %s is above the take-home at the search ceiling %s", target, upper
        )
    elif target < _net_for_gross(assumptions, lower, table):
        logger.warning(
            "Target net %s is below the take-home at the search floor %s", target, lower
        )

    for _ in range(config.iterations):
        mid = (lower + upper) / 2
        if _net_for_gross(assumptions, mid, table) < target:
            lower = mid
        else:
            upper = mid

    gross = round2((lower + upper) / 2)
    logger.debug("Solved gross %s for net %s (tax code %s)", gross, target, assumptions.tax_code)
    return gross


def _candidate_codes(own_code: str, config: SolverConfig) -> list[str]:
    """Caller's code first, then the representative codes, without duplicates."""
    seen: set[str] = set()
    codes: list[str] = []
    for code in (own_code, *config.representative_tax_codes):
        key = normalize_tax_code(code)
        if key not in seen:
            seen.add(key)
            codes.append(code)
    return codes


def estimate_gross_range(
    target_net_annual: Decimal,
    assumptions: PayAssumptions,
    table: TaxYearTable | None = None,
    config: SolverConfig | None = None,
) -> SalaryFinderEstimate:
    """Estimate the gross salary needed for a take-home under several tax codes.

    The caller's own code is solved alongside a basic-rate and an emergency
    code. When the estimates differ by at least the configured margin the
    result is reported as a range.
    """
    if table is None:
        table = get_tax_year(assumptions.tax_year)
    if config is None:
        config = load_solver_config()

    estimates: list[TaxCodeEstimate] = []
    for code in _candidate_codes(assumptions.tax_code, config):
        code_assumptions = assumptions.model_copy(update={"tax_code": code})
        gross = solve_gross_from_net(target_net_annual, code_assumptions, table, config)
        estimates.append(TaxCodeEstimate(tax_code=code, gross_annual=float(gross)))

    grosses = [Decimal(str(e.gross_annual)) for e in estimates]
    low, high = min(grosses), max(grosses)
    is_range = high - low >= config.range_margin

    logger.info(
        "Salary finder: target net %s -> gross %s..%s across %d codes",
        target_net_annual,
        low,
        high,
        len(estimates),
    )

    return SalaryFinderEstimate(
        target_net_annual=float(target_net_annual),
        estimates=estimates,
        low=float(low),
        high=float(high),
        is_range=is_range,
    )
