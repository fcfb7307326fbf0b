"""
Options return calculator.

Projects the value of long option positions across a grid of percentage
moves in the underlying security. For every (option, increment) pair the
calculator reports the projected underlying price, the option's intrinsic
value at that price, how many contracts the investment buys, and the
resulting profit/loss and return.

Results are ordered options-outer, increments-inner, both in the order
supplied by the caller.

Usage:
    from homepage_api.calculator import (
        CalculationRequest,
        OptionContract,
        OptionsReturnCalculator,
    )

    request = CalculationRequest(
        security_price=100.0,
        investment_amount=1000.0,
        options=[OptionContract(strike=100.0, bid=4.0, ask=6.0)],
        percentage_increments=[0.0, 10.0],
    )
    results = OptionsReturnCalculator().calculate(request)
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from .constants import (
    CONTRACT_MULTIPLIER,
    MIN_PERCENTAGE_INCREMENT,
    TOP_RESULTS_PER_INCREMENT,
)
from .exceptions import CalculationInputError

logger = logging.getLogger(__name__)


class OptionType(str, Enum):
    """Option contract type."""

    CALL = "call"
    PUT = "put"


class ResultStatus(str, Enum):
    """Outcome flag attached to every calculation result."""

    OK = "ok"
    UNAFFORDABLE = "unaffordable"
    ZERO_PREMIUM = "zero_premium"


def round_to_cents(value: float) -> float:
    """Round a dollar amount to cents."""
    return round(value, 2)


def _check_number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CalculationInputError(f"{name} must be a number")
    if not math.isfinite(value):
        raise CalculationInputError(f"{name} must be a finite number")
    return float(value)


@dataclass
class OptionContract:
    """
    A single option quote to evaluate.

    Attributes:
        strike: Strike price
        bid: Bid price per share
        ask: Ask price per share
        price: Optional premium override (e.g., last traded); used verbatim
        option_type: Call or put; calls are assumed when not specified
    """

    strike: float
    bid: float
    ask: float
    price: Optional[float] = None
    option_type: OptionType = OptionType.CALL

    def __post_init__(self) -> None:
        """Validate contract fields."""
        self.strike = _check_number(self.strike, "strike")
        self.bid = _check_number(self.bid, "bid")
        self.ask = _check_number(self.ask, "ask")

        if self.strike <= 0:
            raise CalculationInputError("strike must be positive")
        if self.bid < 0 or self.ask < 0:
            raise CalculationInputError("bid and ask cannot be negative")
        if self.bid > self.ask:
            raise CalculationInputError(f"bid ({self.bid}) cannot exceed ask ({self.ask})")

        if self.price is not None:
            self.price = _check_number(self.price, "price")
            if self.price < 0:
                raise CalculationInputError("price cannot be negative")

        try:
            self.option_type = OptionType(self.option_type)
        except ValueError as e:
            raise CalculationInputError('option_type must be "call" or "put"') from e

    @property
    def premium(self) -> float:
        """Reference premium: the price override, else the bid/ask midpoint."""
        if self.price is not None:
            return self.price
        return (self.bid + self.ask) / 2

    def intrinsic_value(self, underlying_price: float) -> float:
        """In-the-money value per share at the given underlying price."""
        if self.option_type is OptionType.PUT:
            return max(0.0, self.strike - underlying_price)
        return max(0.0, underlying_price - self.strike)


@dataclass
class CalculationRequest:
    """
    Inputs for a calculator run.

    Attributes:
        security_price: Current price of the underlying security
        investment_amount: Cash available to buy contracts
        options: Contracts to evaluate
        percentage_increments: Underlying price moves in percent (e.g., -10, 0, 10)
    """

    security_price: float
    investment_amount: float
    options: list[OptionContract]
    percentage_increments: list[float]

    def __post_init__(self) -> None:
        """Validate the request; nothing is computed for malformed input."""
        self.security_price = _check_number(self.security_price, "security_price")
        self.investment_amount = _check_number(self.investment_amount, "investment_amount")

        if self.security_price <= 0:
            raise CalculationInputError("Security price must be a positive number")
        if self.investment_amount <= 0:
            raise CalculationInputError("Investment amount must be a positive number")
        if not self.options:
            raise CalculationInputError("At least one option must be provided")
        if not self.percentage_increments:
            raise CalculationInputError("Percentage increments must be provided")

        increments = []
        for i, increment in enumerate(self.percentage_increments):
            value = _check_number(increment, f"percentage_increments[{i}]")
            if value < MIN_PERCENTAGE_INCREMENT:
                raise CalculationInputError(
                    f"percentage_increments[{i}] must be >= {MIN_PERCENTAGE_INCREMENT:g}"
                )
            increments.append(value)
        self.percentage_increments = increments


@dataclass
class CalculationResult:
    """
    Projection for one option at one percentage move.

    Attributes:
        option_index: Position of the option in the request
        strike: Option strike price
        bid: Option bid price
        ask: Option ask price
        option_type: Call or put
        premium: Reference premium per share
        percentage_increment: Underlying move in percent
        projected_price: Underlying price after the move
        intrinsic_value: Option intrinsic value per share at the projected price
        extrinsic_value: Time value per share in the premium at the current price
        contracts: Whole contracts bought; None when the premium is zero
        cost: Total premium paid (one contract when unaffordable)
        profit_loss: Profit or loss at the projected price
        return_percentage: Return relative to premium paid; None when undefined
        affordable: Whether the investment buys at least one contract
        status: Outcome flag
    """

    option_index: int
    strike: float
    bid: float
    ask: float
    option_type: OptionType
    premium: float
    percentage_increment: float
    projected_price: float
    intrinsic_value: float
    extrinsic_value: float
    contracts: Optional[int]
    cost: float
    profit_loss: float
    return_percentage: Optional[float]
    affordable: bool
    status: ResultStatus

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "option_index": self.option_index,
            "strike": self.strike,
            "bid": self.bid,
            "ask": self.ask,
            "option_type": self.option_type.value,
            "premium": self.premium,
            "percentage_increment": self.percentage_increment,
            "projected_price": self.projected_price,
            "intrinsic_value": self.intrinsic_value,
            "extrinsic_value": self.extrinsic_value,
            "contracts": self.contracts,
            "cost": self.cost,
            "profit_loss": self.profit_loss,
            "return_percentage": self.return_percentage,
            "affordable": self.affordable,
            "status": self.status.value,
        }


@dataclass
class IncrementGroup:
    """Ranked affordable results for a single price target."""

    percentage_increment: float
    sell_price: float
    results: list[CalculationResult] = field(default_factory=list)


@dataclass
class CalculationSummary:
    """
    Grouped view of a calculator run.

    Attributes:
        sell_prices: Projected price per increment, rounded to cents
        groups: Top affordable results per increment, best first
        best: Best result at the highest increment
        second_best: Runner-up at the highest increment
        calculated_at: When the summary was produced
        options_analyzed: Number of options in the request
        price_targets: Number of increments in the request
    """

    sell_prices: list[float]
    groups: list[IncrementGroup]
    best: Optional[CalculationResult]
    second_best: Optional[CalculationResult]
    calculated_at: datetime
    options_analyzed: int
    price_targets: int


def _require_finite(index: int, what: str, value: float) -> None:
    if not math.isfinite(value):
        raise CalculationInputError(
            f"Option {index}: {what} overflows; inputs are too large to evaluate"
        )


def project_price(security_price: float, percentage_increment: float) -> float:
    """Underlying price after moving by percentage_increment percent."""
    return security_price * (1 + percentage_increment / 100)


class OptionsReturnCalculator:
    """Pure calculator for long option returns across price scenarios."""

    def __init__(
        self,
        multiplier: int = CONTRACT_MULTIPLIER,
        top_results: int = TOP_RESULTS_PER_INCREMENT,
    ):
        """
        Initialize the calculator.

        Args:
            multiplier: Shares per contract (default 100)
            top_results: Ranked results kept per increment in summaries
        """
        if multiplier <= 0:
            raise ValueError("multiplier must be positive")
        if top_results <= 0:
            raise ValueError("top_results must be positive")
        self.multiplier = multiplier
        self.top_results = top_results

    def contracts_affordable(self, investment_amount: float, premium: float) -> int:
        """
        Whole contracts purchasable with investment_amount at premium.

        Args:
            investment_amount: Cash available
            premium: Premium per share; must be positive

        Returns:
            Number of contracts (may be 0)

        Raises:
            CalculationInputError: If the premium is too small to size a position
        """
        ratio = investment_amount / (premium * self.multiplier)
        if not math.isfinite(ratio):
            raise CalculationInputError(
                f"Premium {premium:g} is too small to size a position for "
                f"${investment_amount:,.2f}"
            )
        # Absorb float noise such as 2.9999999999999996 before flooring.
        return math.floor(round(ratio, 9))

    def calculate(self, request: CalculationRequest) -> list[CalculationResult]:
        """
        Evaluate every option at every percentage increment.

        Args:
            request: Validated calculation request

        Returns:
            One result per (option, increment) pair, options outer
        """
        logger.info(
            f"Calculating returns for {len(request.options)} options x "
            f"{len(request.percentage_increments)} increments"
        )

        results = []
        for index, option in enumerate(request.options):
            results.extend(self._evaluate_option(index, option, request))

        return results

    def _evaluate_option(
        self, index: int, option: OptionContract, request: CalculationRequest
    ) -> list[CalculationResult]:
        premium = option.premium
        extrinsic = max(0.0, premium - option.intrinsic_value(request.security_price))

        if premium == 0:
            contracts: Optional[int] = None
            status = ResultStatus.ZERO_PREMIUM
            affordable = True
            logger.warning(f"Option {index} (strike {option.strike}) has zero premium")
        else:
            contracts = self.contracts_affordable(request.investment_amount, premium)
            affordable = contracts > 0
            status = ResultStatus.OK if affordable else ResultStatus.UNAFFORDABLE

        # Unaffordable and zero-premium results are normalized to one contract.
        units = contracts if contracts else 1
        cost_basis = premium * units * self.multiplier
        _require_finite(index, "cost", cost_basis)

        results = []
        for increment in request.percentage_increments:
            projected = project_price(request.security_price, increment)
            intrinsic = option.intrinsic_value(projected)
            profit_loss = (intrinsic - premium) * units * self.multiplier

            if status is ResultStatus.ZERO_PREMIUM:
                return_pct = None
            else:
                return_pct = round(profit_loss / cost_basis * 100, 4)

            _require_finite(index, f"projected price at {increment:g}%", projected)
            _require_finite(index, f"profit/loss at {increment:g}%", profit_loss)
            if return_pct is not None:
                _require_finite(index, f"return at {increment:g}%", return_pct)

            results.append(
                CalculationResult(
                    option_index=index,
                    strike=option.strike,
                    bid=option.bid,
                    ask=option.ask,
                    option_type=option.option_type,
                    premium=premium,
                    percentage_increment=increment,
                    projected_price=projected,
                    intrinsic_value=intrinsic,
                    extrinsic_value=extrinsic,
                    contracts=contracts,
                    cost=round_to_cents(cost_basis),
                    profit_loss=round_to_cents(profit_loss),
                    return_percentage=return_pct,
                    affordable=affordable,
                    status=status,
                )
            )

        return results

    def summarize(
        self,
        request: CalculationRequest,
        results: Optional[list[CalculationResult]] = None,
    ) -> CalculationSummary:
        """
        Group affordable results by increment and pick the best options.

        Args:
            request: Validated calculation request
            results: Results from calculate(); computed when omitted

        Returns:
            CalculationSummary with ranked groups and best/second-best options
        """
        if results is None:
            results = self.calculate(request)

        increments = request.percentage_increments
        per_option = len(increments)

        groups = []
        for position, increment in enumerate(increments):
            candidates = [
                results[i]
                for i in range(position, len(results), per_option)
                if results[i].status is ResultStatus.OK
            ]
            # sorted() is stable, so ties keep the order options were supplied
            ranked = sorted(candidates, key=lambda r: r.profit_loss, reverse=True)
            groups.append(
                IncrementGroup(
                    percentage_increment=increment,
                    sell_price=round_to_cents(project_price(request.security_price, increment)),
                    results=ranked[: self.top_results],
                )
            )

        highest = max(range(len(increments)), key=lambda i: increments[i])
        top = groups[highest].results

        return CalculationSummary(
            sell_prices=[group.sell_price for group in groups],
            groups=groups,
            best=top[0] if top else None,
            second_best=top[1] if len(top) > 1 else None,
            calculated_at=datetime.utcnow(),
            options_analyzed=len(request.options),
            price_targets=len(increments),
        )
