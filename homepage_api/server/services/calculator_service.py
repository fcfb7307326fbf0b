"""Service layer for the options return calculator.

Converts API request models into calculator inputs and calculator
results back into response models.
"""

import logging
from typing import Optional

from homepage_api.calculator import (
    CalculationRequest as CoreRequest,
    CalculationResult,
    OptionContract,
    OptionsReturnCalculator,
    OptionType,
)
from homepage_api.server.models.calculator import (
    BestOptions,
    CalculationMetadata,
    CalculationRequest,
    CalculationResultResponse,
    CalculationSummaryResponse,
    IncrementGroupResponse,
)

logger = logging.getLogger(__name__)


def _to_response(result: CalculationResult) -> CalculationResultResponse:
    return CalculationResultResponse(**result.to_dict())


def _to_optional_response(
    result: Optional[CalculationResult],
) -> Optional[CalculationResultResponse]:
    return _to_response(result) if result is not None else None


class CalculatorService:
    """Service for running options return calculations.

    Attributes:
        calculator: Pure calculator instance
    """

    def __init__(self, calculator: Optional[OptionsReturnCalculator] = None):
        """Initialize calculator service.

        Args:
            calculator: Calculator to use (default: standard 100-share contracts)
        """
        self.calculator = calculator or OptionsReturnCalculator()

    def build_request(self, request: CalculationRequest) -> CoreRequest:
        """Convert an API request into calculator input.

        Args:
            request: Validated API request

        Returns:
            Calculator request

        Raises:
            CalculationInputError: If the input fails calculator validation
        """
        return CoreRequest(
            security_price=request.security_price,
            investment_amount=request.investment_amount,
            options=[
                OptionContract(
                    strike=o.strike,
                    bid=o.bid,
                    ask=o.ask,
                    price=o.price,
                    option_type=OptionType(o.option_type),
                )
                for o in request.options
            ],
            percentage_increments=list(request.percentage_increments),
        )

    def calculate(self, request: CalculationRequest) -> list[CalculationResultResponse]:
        """Compute one result per (option, increment) pair.

        Args:
            request: Validated API request

        Returns:
            Results ordered options-outer, increments-inner
        """
        results = self.calculator.calculate(self.build_request(request))
        return [_to_response(r) for r in results]

    def summarize(self, request: CalculationRequest) -> CalculationSummaryResponse:
        """Compute the grouped best-options summary.

        Args:
            request: Validated API request

        Returns:
            Summary with ranked results per increment
        """
        summary = self.calculator.summarize(self.build_request(request))

        return CalculationSummaryResponse(
            sell_prices=summary.sell_prices,
            results_by_increment=[
                IncrementGroupResponse(
                    percentage_increment=group.percentage_increment,
                    sell_price=group.sell_price,
                    results=[_to_response(r) for r in group.results],
                )
                for group in summary.groups
            ],
            best_options=BestOptions(
                best=_to_optional_response(summary.best),
                second_best=_to_optional_response(summary.second_best),
            ),
            metadata=CalculationMetadata(
                calculated_at=summary.calculated_at,
                options_analyzed=summary.options_analyzed,
                price_targets=summary.price_targets,
            ),
        )
