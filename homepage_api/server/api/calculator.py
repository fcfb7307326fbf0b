"""Options Calculator API endpoints.

This module provides REST API endpoints for projecting option returns
across percentage moves in the underlying security.
"""

import logging

from fastapi import APIRouter, HTTPException, status

from homepage_api.exceptions import CalculationInputError
from homepage_api.server.models.calculator import (
    CalculationRequest,
    CalculationResultResponse,
    CalculationSummaryResponse,
)
from homepage_api.server.services.calculator_service import CalculatorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calculator", tags=["calculator"])


@router.post(
    "/options",
    response_model=list[CalculationResultResponse],
    summary="Calculate option returns",
    description=(
        "Projects profit/loss and return for every option at every percentage move. "
        "Results are ordered by option, then by increment, in request order."
    ),
)
def calculate_options(request: CalculationRequest) -> list[CalculationResultResponse]:
    """Calculate option returns across price scenarios.

    Args:
        request: Calculation request

    Returns:
        One result per (option, increment) pair

    Raises:
        HTTPException: If the input fails calculator validation

    Example:
        >>> POST /api/calculator/options
        >>> {
        >>>     "securityPrice": 100,
        >>>     "investmentAmount": 1000,
        >>>     "options": [{"strike": 100, "bid": 4, "ask": 6}],
        >>>     "percentageIncrements": [0, 10]
        >>> }
    """
    service = CalculatorService()
    try:
        return service.calculate(request)
    except CalculationInputError as e:
        logger.warning(f"Rejected calculation request: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e


@router.post(
    "/options/summary",
    response_model=CalculationSummaryResponse,
    summary="Summarize best options",
    description="Ranks affordable options per price target and picks the best two",
)
def summarize_options(request: CalculationRequest) -> CalculationSummaryResponse:
    """Rank options per price target.

    Args:
        request: Calculation request

    Returns:
        Sell prices, top results per increment and the best options
        at the highest increment
    """
    service = CalculatorService()
    try:
        return service.summarize(request)
    except CalculationInputError as e:
        logger.warning(f"Rejected summary request: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
