"""Tax code interpreter — maps a PAYE tax code to an allowance/rate policy."""

import logging
import re
from decimal import Decimal
from enum import StrEnum
from typing import NamedTuple

logger = logging.getLogger(__name__)

DEFAULT_TAX_CODE = "1257L"

_LEADING_DIGITS = re.compile(r"^(\d+)")


class TaxCodeKind(StrEnum):
    """Which rule governs a computation."""

    NO_TAX = "no_tax"
    FLAT_RATE = "flat_rate"
    ALLOWANCE = "allowance"


class TaxCodePolicy(NamedTuple):
    """Parsed tax code.

    ``allowance_override`` replaces the standard personal allowance when set;
    ``flat_rate`` bypasses banding entirely when set.
    """

    is_no_tax: bool = False
    allowance_override: Decimal | None = None
    flat_rate: Decimal | None = None

    @property
    def kind(self) -> TaxCodeKind:
        if self.is_no_tax:
            return TaxCodeKind.NO_TAX
        if self.flat_rate is not None:
            return TaxCodeKind.FLAT_RATE
        return TaxCodeKind.ALLOWANCE


STANDARD_POLICY = TaxCodePolicy()

SPECIAL_CODES: dict[str, TaxCodePolicy] = {
    "NT": TaxCodePolicy(is_no_tax=True),
    "BR": TaxCodePolicy(allowance_override=Decimal("0"), flat_rate=Decimal("0.20")),
    "D0": TaxCodePolicy(allowance_override=Decimal("0"), flat_rate=Decimal("0.40")),
    "D1": TaxCodePolicy(allowance_override=Decimal("0"), flat_rate=Decimal("0.45")),
}


def normalize_tax_code(raw: str | None) -> str:
    """Trim and uppercase a tax code; empty input becomes the default code."""
    code = (raw or "").strip().upper()
    return code or DEFAULT_TAX_CODE


def parse_tax_code(raw: str | None) -> TaxCodePolicy:
    """Interpret a tax code string.

    NT, BR, D0 and D1 are matched exactly. Otherwise a leading number N > 0
    gives an allowance of N x 10 (so 1257L -> 12,570). Anything else falls
    back to the standard allowance with normal banding; it never raises.
    """
    code = normalize_tax_code(raw)

    special = SPECIAL_CODES.get(code)
    if special is not None:
        return special

    match = _LEADING_DIGITS.match(code)
    if match:
        number = int(match.group(1))
        if number > 0:
            return TaxCodePolicy(allowance_override=Decimal(number) * 10)

    logger.debug("Unrecognised tax code %r, using standard allowance", code)
    return STANDARD_POLICY
