"""CLI for the take-home estimator.

Usage:
    # Take-home for an annual salary
    python scripts/take_home.py --salary 50000

    # Hourly pay, Scotland, plan 2 loan, 5% salary-sacrifice pension
    python scripts/take_home.py --hourly-rate 18.50 --hours 37.5 --region scotland \\
        --student-loan plan2 --pension 5 --salary-sacrifice

    # Gross salary needed for a take-home of 40,000
    python scripts/take_home.py --net 40000

    # Verbose logging
    python scripts/take_home.py --salary 50000 -v
"""

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import settings
from wagewise.calculators.money import format_gbp, parse_money
from wagewise.calculators.salary_finder import estimate_gross_range
from wagewise.calculators.take_home import calculate_take_home, input_from_snapshot
from wagewise.calculators.tax_data import TAX_YEARS, UnknownTaxYearError, get_tax_year
from wagewise.models import (
    PayAssumptions,
    PayMode,
    PaySnapshot,
    Region,
    StudentLoanPlan,
)

logger = logging.getLogger(__name__)


def _money(value: str) -> Decimal:
    parsed = parse_money(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"not an amount: {value!r}")
    return parsed


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Estimate UK take-home pay")
    amount = parser.add_mutually_exclusive_group(required=True)
    amount.add_argument("--salary", type=_money, help="Gross annual salary")
    amount.add_argument("--hourly-rate", type=_money, help="Gross hourly rate (needs --hours)")
    amount.add_argument("--net", type=_money, help="Target annual take-home (salary finder)")
    parser.add_argument("--hours", type=_money, default=None, help="Hours per week")
    parser.add_argument(
        "--region",
        choices=[r.value for r in Region],
        default=Region.ENGLAND.value,
        help="Tax region (default: england, covers Wales and NI)",
    )
    parser.add_argument("--tax-code", default="1257L", help="PAYE tax code (default: 1257L)")
    parser.add_argument("--pension", type=_money, default=Decimal("0"), help="Pension %% of gross")
    parser.add_argument(
        "--salary-sacrifice",
        action="store_true",
        help="Pension taken before tax, NI and student loan",
    )
    parser.add_argument(
        "--student-loan",
        choices=[p.value for p in StudentLoanPlan],
        default=StudentLoanPlan.NONE.value,
    )
    parser.add_argument(
        "--tax-year",
        choices=sorted(TAX_YEARS),
        default=settings.default_tax_year,
        help=f"Tax year (default: {settings.default_tax_year})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    args = parser.parse_args(argv)
    if args.hourly_rate is not None and args.hours is None:
        parser.error("--hourly-rate requires --hours")
    return args


def run(args: argparse.Namespace) -> int:
    assumptions = {
        "region": args.region,
        "tax_code": args.tax_code,
        "pension_percent": args.pension,
        "salary_sacrifice": args.salary_sacrifice,
        "student_loan": args.student_loan,
        "tax_year": args.tax_year,
    }
    try:
        table = get_tax_year(args.tax_year)
    except UnknownTaxYearError as exc:
        logger.error("%s", exc)
        return 1

    if args.net is not None:
        estimate = estimate_gross_range(args.net, PayAssumptions(**assumptions), table)
        print(f"Target take-home (annual): {format_gbp(estimate.target_net_annual)}")
        for item in estimate.estimates:
            print(f"  {item.tax_code:<10} gross needed: {format_gbp(item.gross_annual)}")
        if estimate.is_range:
            print(f"Estimated gross: {format_gbp(estimate.low)} to {format_gbp(estimate.high)}")
        else:
            print(f"Estimated gross: {format_gbp(estimate.estimates[0].gross_annual)}")
        return 0

    if args.hourly_rate is not None:
        snapshot = PaySnapshot(
            mode=PayMode.HOURLY,
            hourly_rate=args.hourly_rate,
            hours_per_week=args.hours,
            **assumptions,
        )
    else:
        snapshot = PaySnapshot(mode=PayMode.ANNUAL_SALARY, annual_salary=args.salary, **assumptions)

    result = calculate_take_home(input_from_snapshot(snapshot), table)
    rows = [
        ("Gross pay (annual)", result.gross_annual),
        ("Income Tax (annual)", result.income_tax_annual),
        ("National Insurance (annual)", result.national_insurance_annual),
        ("Student Loan (annual)", result.student_loan_annual),
        ("Pension (annual)", result.pension_annual),
        ("Take-home (annual)", result.net_annual),
        ("Take-home (monthly)", result.net_monthly),
        ("Take-home (weekly)", result.net_weekly),
    ]
    for label, value in rows:
        print(f"{label:<30}{format_gbp(value):>14}")
    return 0


def main() -> None:
    args = parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    sys.exit(run(args))


if __name__ == "__main__":
    main()
