"""Pydantic models for Options Calculator API requests and responses.

Request models accept both snake_case and camelCase keys so the frontend
can post its existing payloads unchanged. Responses are snake_case.
"""

import math
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from homepage_api.constants import MIN_PERCENTAGE_INCREMENT


class OptionContractInput(BaseModel):
    """Request schema for one option contract.

    Attributes:
        strike: Strike price
        bid: Bid price per share
        ask: Ask price per share
        price: Optional premium override, used verbatim when given
        option_type: 'call' or 'put' (default 'call')
    """

    strike: float = Field(..., gt=0, allow_inf_nan=False, description="Strike price")
    bid: float = Field(..., ge=0, allow_inf_nan=False, description="Bid price per share")
    ask: float = Field(..., ge=0, allow_inf_nan=False, description="Ask price per share")
    price: Optional[float] = Field(
        None, ge=0, allow_inf_nan=False, description="Premium override per share"
    )
    option_type: Literal["call", "put"] = Field(
        "call", alias="optionType", description="Option type: 'call' or 'put'"
    )

    @field_validator("option_type", mode="before")
    @classmethod
    def normalize_option_type(cls, v: str) -> str:
        """Accept option type in any case.

        Args:
            v: Option type value

        Returns:
            Lowercase option type
        """
        return v.lower().strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def check_bid_ask(self) -> "OptionContractInput":
        """Reject quotes where the bid exceeds the ask."""
        if self.bid > self.ask:
            raise ValueError(f"bid ({self.bid}) cannot exceed ask ({self.ask})")
        return self

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {"strike": 100.0, "bid": 4.0, "ask": 6.0, "option_type": "call"}
        },
    }


class CalculationRequest(BaseModel):
    """Request schema for an options return calculation.

    Attributes:
        security_price: Current underlying price
        investment_amount: Cash available to buy contracts
        options: Contracts to evaluate
        percentage_increments: Underlying moves in percent

    Example:
        >>> CalculationRequest(
        >>>     security_price=100.0,
        >>>     investment_amount=1000.0,
        >>>     options=[{"strike": 100.0, "bid": 4.0, "ask": 6.0}],
        >>>     percentage_increments=[0, 10],
        >>> )
    """

    security_price: float = Field(
        ..., gt=0, allow_inf_nan=False, alias="securityPrice", description="Underlying price"
    )
    investment_amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        alias="investmentAmount",
        description="Cash available to invest",
    )
    options: list[OptionContractInput] = Field(
        ..., min_length=1, description="Option contracts to evaluate"
    )
    percentage_increments: list[float] = Field(
        ...,
        min_length=1,
        alias="percentageIncrements",
        description="Underlying price moves in percent",
    )

    @field_validator("percentage_increments")
    @classmethod
    def validate_increments(cls, v: list[float]) -> list[float]:
        """Validate every increment is finite and keeps the price non-negative.

        Args:
            v: Increments to validate

        Returns:
            Validated increments

        Raises:
            ValueError: If an increment is non-finite or below -100
        """
        for i, increment in enumerate(v):
            if not math.isfinite(increment):
                raise ValueError(f"Increment at position {i} must be a finite number")
            if increment < MIN_PERCENTAGE_INCREMENT:
                raise ValueError(
                    f"Increment at position {i} must be >= {MIN_PERCENTAGE_INCREMENT:g}"
                )
        return v

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "security_price": 100.0,
                "investment_amount": 1000.0,
                "options": [{"strike": 100.0, "bid": 4.0, "ask": 6.0}],
                "percentage_increments": [-10, 0, 10],
            }
        },
    }


class CalculationResultResponse(BaseModel):
    """Response schema for one (option, increment) projection.

    ``return_percentage`` is null and ``status`` is ``zero_premium`` when the
    premium is zero. ``affordable`` is false and ``status`` is
    ``unaffordable`` when the investment cannot buy one contract; such
    results are normalized to a single contract.
    """

    option_index: int = Field(..., description="Position of the option in the request")
    strike: float
    bid: float
    ask: float
    option_type: Literal["call", "put"]
    premium: float = Field(..., description="Reference premium per share")
    percentage_increment: float
    projected_price: float = Field(..., description="Underlying price after the move")
    intrinsic_value: float = Field(..., description="Intrinsic value per share at projected price")
    extrinsic_value: float = Field(..., description="Time value per share paid today")
    contracts: Optional[int] = Field(None, description="Contracts bought; null for zero premium")
    cost: float = Field(..., description="Total premium paid")
    profit_loss: float = Field(..., description="Profit or loss at projected price")
    return_percentage: Optional[float] = Field(
        None, description="Return on premium paid; null when undefined"
    )
    affordable: bool
    status: Literal["ok", "unaffordable", "zero_premium"]


class IncrementGroupResponse(BaseModel):
    """Top affordable results for one price target."""

    percentage_increment: float
    sell_price: float
    results: list[CalculationResultResponse]


class BestOptions(BaseModel):
    """Best and runner-up options at the highest price target."""

    best: Optional[CalculationResultResponse] = None
    second_best: Optional[CalculationResultResponse] = None


class CalculationMetadata(BaseModel):
    """Summary metadata."""

    calculated_at: datetime
    options_analyzed: int
    price_targets: int


class CalculationSummaryResponse(BaseModel):
    """Response schema for the grouped calculator summary.

    Attributes:
        sell_prices: Projected price per increment, rounded to cents
        results_by_increment: Top results per increment, best first
        best_options: Best two options at the highest increment
        metadata: Calculation metadata
    """

    sell_prices: list[float]
    results_by_increment: list[IncrementGroupResponse]
    best_options: BestOptions
    metadata: CalculationMetadata
