"""Tests for input models and persisted form snapshots."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from wagewise.calculators.take_home import calculate_take_home, input_from_snapshot
from wagewise.models import (
    ComputationInput,
    PayMode,
    PaySnapshot,
    Region,
    SalaryFinderRequest,
    StudentLoanPlan,
)


class TestComputationInput:
    def test_defaults(self) -> None:
        inputs = ComputationInput()
        assert inputs.region is Region.ENGLAND
        assert inputs.tax_code == "1257L"
        assert inputs.pension_percent == 0
        assert inputs.salary_sacrifice is False
        assert inputs.student_loan is StudentLoanPlan.NONE
        assert inputs.tax_year is None
        assert inputs.gross_annual == 0

    def test_camel_case_keys(self) -> None:
        inputs = ComputationInput.model_validate(
            {
                "grossAnnual": 42000,
                "taxCode": "BR",
                "pensionPercent": 4,
                "salarySacrifice": True,
                "studentLoan": "plan4",
                "taxYear": "2024/25",
            }
        )
        assert inputs.gross_annual == Decimal("42000")
        assert inputs.tax_code == "BR"
        assert inputs.pension_percent == Decimal("4")
        assert inputs.salary_sacrifice is True
        assert inputs.student_loan is StudentLoanPlan.PLAN_4
        assert inputs.tax_year == "2024/25"

    @pytest.mark.parametrize("raw", [None, "", "abc", "  "])
    def test_non_numeric_gross_is_zero(self, raw: object) -> None:
        assert ComputationInput(gross_annual=raw).gross_annual == 0

    def test_negative_gross_is_clamped(self) -> None:
        assert ComputationInput(gross_annual=-5000).gross_annual == 0

    def test_blank_tax_code_uses_default(self) -> None:
        assert ComputationInput(tax_code="   ").tax_code == "1257L"
        assert ComputationInput(tax_code=None).tax_code == "1257L"

    @pytest.mark.parametrize("raw", ["wales", "England", "england-wales", "northern_ireland"])
    def test_region_aliases(self, raw: str) -> None:
        assert ComputationInput(region=raw).region is Region.ENGLAND

    def test_scotland(self) -> None:
        assert ComputationInput(region=" Scotland ").region is Region.SCOTLAND

    def test_unknown_region_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ComputationInput(region="atlantis")

    def test_student_loan_case_insensitive(self) -> None:
        assert ComputationInput(student_loan="Plan2").student_loan is StudentLoanPlan.PLAN_2

    def test_unknown_student_loan_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ComputationInput(student_loan="plan3")

    def test_inputs_are_frozen(self) -> None:
        inputs = ComputationInput(gross_annual=1000)
        with pytest.raises(ValidationError):
            inputs.gross_annual = Decimal("2000")  # type: ignore[misc]


class TestSalaryFinderRequest:
    def test_target_required(self) -> None:
        with pytest.raises(ValidationError):
            SalaryFinderRequest.model_validate({"region": "england"})

    def test_negative_target_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SalaryFinderRequest(target_net_annual=-1)


class TestPaySnapshot:
    def test_hourly_snapshot(self) -> None:
        """A form snapshot in hourly mode annualises rate x hours x 52."""
        snapshot = PaySnapshot.model_validate(
            {
                "region": "england",
                "mode": "hourly",
                "hourlyRate": "15",
                "hoursPerWeek": "40",
                "taxCode": "1257L",
                "pensionPercent": "",
                "salarySacrifice": False,
                "studentLoan": "none",
            }
        )
        inputs = input_from_snapshot(snapshot)
        assert inputs.gross_annual == Decimal("31200")

        result = calculate_take_home(inputs)
        assert result.income_tax_annual == 3726.0
        assert result.national_insurance_annual == 1490.4
        assert result.net_annual == 25983.6

    def test_annual_salary_snapshot(self) -> None:
        snapshot = PaySnapshot.model_validate(
            {"mode": "annualSalary", "annualSalary": "50000", "hourlyRate": "99"}
        )
        assert input_from_snapshot(snapshot).gross_annual == Decimal("50000")

    def test_old_snapshot_without_newer_fields(self) -> None:
        """Snapshots saved before tax year and student loan existed still load."""
        snapshot = PaySnapshot.model_validate({"region": "scotland", "annualSalary": "28000"})
        assert snapshot.mode is PayMode.ANNUAL_SALARY
        assert snapshot.student_loan is StudentLoanPlan.NONE
        assert snapshot.tax_year is None
        assert calculate_take_home(input_from_snapshot(snapshot)).gross_annual == 28000.0

    def test_unknown_fields_are_ignored(self) -> None:
        snapshot = PaySnapshot.model_validate(
            {"annualSalary": "30000", "theme": "dark", "scenarioColour": "#fff", "version": 7}
        )
        assert snapshot.annual_salary == Decimal("30000")

    def test_garbage_amounts_default_to_zero(self) -> None:
        snapshot = PaySnapshot.model_validate(
            {"mode": "hourly", "hourlyRate": "twelve", "hoursPerWeek": None}
        )
        assert input_from_snapshot(snapshot).gross_annual == 0

    def test_decimal_comma(self) -> None:
        snapshot = PaySnapshot.model_validate(
            {"mode": "hourly", "hourlyRate": "12,50", "hoursPerWeek": "10"}
        )
        assert input_from_snapshot(snapshot).gross_annual == Decimal("6500")
