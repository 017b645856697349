"""Shared test fixtures."""

import pytest

from wagewise.calculators.salary_finder import SolverConfig
from wagewise.calculators.tax_data import TAX_YEARS, TaxYearTable
from wagewise.models import PayAssumptions


@pytest.fixture
def table_2025() -> TaxYearTable:
    return TAX_YEARS["2025/26"]


@pytest.fixture
def table_2024() -> TaxYearTable:
    return TAX_YEARS["2024/25"]


@pytest.fixture
def england() -> PayAssumptions:
    """Standard England employee: 1257L, no pension, no student loan."""
    return PayAssumptions(region="england", tax_code="1257L", tax_year="2025/26")


@pytest.fixture
def solver_config() -> SolverConfig:
    """Default bracket and iterations, with a fixed set of comparison codes."""
    return SolverConfig(representative_tax_codes=("BR", "1257L M1"))
