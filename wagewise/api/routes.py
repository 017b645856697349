"""API routes for the take-home estimator."""

import logging
from typing import TypeVar

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from config.settings import settings
from wagewise.calculators.salary_finder import SolverConfig, estimate_gross_range, load_solver_config
from wagewise.calculators.take_home import calculate_take_home, input_from_snapshot
from wagewise.calculators.tax_data import TAX_YEARS, UnknownTaxYearError, get_tax_year
from wagewise.models import (
    ComputationInput,
    ComputationResult,
    PayAssumptions,
    PaySnapshot,
    SalaryFinderEstimate,
    SalaryFinderRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

AssumptionsT = TypeVar("AssumptionsT", bound=PayAssumptions)


def _with_tax_year(body: AssumptionsT) -> AssumptionsT:
    """Fill in the configured default tax year when the request has none."""
    if body.tax_year is None:
        return body.model_copy(update={"tax_year": settings.default_tax_year})
    return body


def _unknown_tax_year(exc: UnknownTaxYearError) -> JSONResponse:
    logger.info("Rejected request: %s", exc)
    return JSONResponse({"error": str(exc)}, status_code=404)


def _solver_config(request: Request) -> SolverConfig:
    config = getattr(request.app.state, "solver_config", None)
    return config if config is not None else load_solver_config()


@router.get("/health")
def health() -> dict[str, object]:
    """Health check endpoint."""
    return {"status": "ok", "tax_years": sorted(TAX_YEARS)}


@router.get("/tax-years")
def tax_years() -> dict[str, object]:
    """List the tax years with tables and the configured default."""
    return {"default": settings.default_tax_year, "tax_years": sorted(TAX_YEARS)}


@router.post("/calculate", response_model=ComputationResult)
def calculate(body: ComputationInput) -> ComputationResult | JSONResponse:
    """Annual take-home breakdown for a gross salary."""
    body = _with_tax_year(body)
    try:
        table = get_tax_year(body.tax_year)
    except UnknownTaxYearError as exc:
        return _unknown_tax_year(exc)
    return calculate_take_home(body, table)


@router.post("/calculate/snapshot", response_model=ComputationResult)
def calculate_snapshot(body: PaySnapshot) -> ComputationResult | JSONResponse:
    """Take-home breakdown from a persisted form snapshot (salary or hourly)."""
    body = _with_tax_year(body)
    try:
        table = get_tax_year(body.tax_year)
    except UnknownTaxYearError as exc:
        return _unknown_tax_year(exc)
    return calculate_take_home(input_from_snapshot(body), table)


@router.post("/salary-finder", response_model=SalaryFinderEstimate)
def salary_finder(body: SalaryFinderRequest, request: Request) -> SalaryFinderEstimate | JSONResponse:
    """Gross salary needed for a target take-home, across representative tax codes."""
    body = _with_tax_year(body)
    try:
        table = get_tax_year(body.tax_year)
    except UnknownTaxYearError as exc:
        return _unknown_tax_year(exc)
    return estimate_gross_range(body.target_net_annual, body, table, _solver_config(request))
