"""
Portfolio allocation analysis.

Computes position weights, concentration (Herfindahl-Hirschman index) and
sector exposure for a set of holdings, then classifies diversification and
risk level and produces plain-text recommendations.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Optional

from ..constants import (
    CONCENTRATED_HHI,
    MAX_SECTOR_WEIGHT,
    MAX_SINGLE_POSITION_WEIGHT,
    MIN_POSITIONS,
    MODERATE_HHI,
)
from ..utils.validation import normalize_symbol

logger = logging.getLogger(__name__)

UNCLASSIFIED_SECTOR = "Unclassified"


@dataclass
class Holding:
    """
    A position in the portfolio.

    Attributes:
        symbol: Ticker symbol
        shares: Share count
        price: Price per share
        sector: Optional sector label
    """

    symbol: str
    shares: float
    price: float
    sector: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate holding values."""
        self.symbol = normalize_symbol(self.symbol)
        if self.shares <= 0:
            raise ValueError(f"Shares must be positive for {self.symbol}")
        if self.price <= 0:
            raise ValueError(f"Price must be positive for {self.symbol}")

    @property
    def value(self) -> float:
        """Market value of the position."""
        return self.shares * self.price


@dataclass
class PositionWeight:
    """Value and portfolio weight of one holding."""

    symbol: str
    value: float
    weight: float


@dataclass
class PortfolioAnalysis:
    """
    Result of a portfolio analysis.

    Attributes:
        total_value: Sum of position values
        positions: Positions sorted by weight, largest first
        concentration_index: Herfindahl index (sum of squared weights)
        effective_positions: 1 / concentration_index
        sector_weights: Weight per sector
        diversification: Diversification label
        risk_level: Concentration risk label
        recommendations: Suggested actions
    """

    total_value: float
    positions: list[PositionWeight]
    concentration_index: float
    effective_positions: float
    sector_weights: dict[str, float]
    diversification: str
    risk_level: str
    recommendations: list[str] = field(default_factory=list)

    @property
    def largest_position(self) -> PositionWeight:
        """The heaviest position."""
        return self.positions[0]


class PortfolioAnalyzer:
    """Analyzer for portfolio concentration and diversification."""

    def analyze(self, holdings: list[Holding]) -> PortfolioAnalysis:
        """
        Analyze a list of holdings.

        Args:
            holdings: Positions to analyze; symbols must be unique

        Returns:
            PortfolioAnalysis

        Raises:
            ValueError: If holdings are empty or contain duplicate symbols
        """
        if not holdings:
            raise ValueError("At least one holding must be provided")

        symbols = [h.symbol for h in holdings]
        duplicates = sorted({s for s in symbols if symbols.count(s) > 1})
        if duplicates:
            raise ValueError(f"Duplicate holdings: {', '.join(duplicates)}")

        total_value = sum(h.value for h in holdings)
        positions = sorted(
            (
                PositionWeight(symbol=h.symbol, value=round(h.value, 2), weight=h.value / total_value)
                for h in holdings
            ),
            key=lambda p: p.weight,
            reverse=True,
        )

        hhi = sum(p.weight ** 2 for p in positions)

        sector_weights: dict[str, float] = defaultdict(float)
        for h in holdings:
            sector_weights[h.sector or UNCLASSIFIED_SECTOR] += h.value / total_value

        largest = positions[0]
        if hhi >= CONCENTRATED_HHI or largest.weight > 2 * MAX_SINGLE_POSITION_WEIGHT:
            diversification, risk_level = "Concentrated", "High"
        elif hhi >= MODERATE_HHI:
            diversification, risk_level = "Moderately diversified", "Moderate"
        else:
            diversification, risk_level = "Well diversified", "Low"

        analysis = PortfolioAnalysis(
            total_value=round(total_value, 2),
            positions=positions,
            concentration_index=hhi,
            effective_positions=1 / hhi,
            sector_weights=dict(sector_weights),
            diversification=diversification,
            risk_level=risk_level,
        )
        analysis.recommendations = self._recommend(analysis)

        logger.info(
            f"Analyzed {len(holdings)} holdings: total=${total_value:,.2f}, "
            f"HHI={hhi:.3f}, {diversification}"
        )
        return analysis

    def _recommend(self, analysis: PortfolioAnalysis) -> list[str]:
        recommendations = []

        for position in analysis.positions:
            if position.weight > MAX_SINGLE_POSITION_WEIGHT:
                recommendations.append(
                    f"Consider trimming {position.symbol}, which is "
                    f"{position.weight:.1%} of the portfolio"
                )

        for sector, weight in sorted(analysis.sector_weights.items()):
            if sector != UNCLASSIFIED_SECTOR and weight > MAX_SECTOR_WEIGHT:
                recommendations.append(
                    f"Consider rebalancing {sector} allocation ({weight:.1%} of the portfolio)"
                )

        if len(analysis.positions) < MIN_POSITIONS:
            recommendations.append(
                f"Consider adding positions; {len(analysis.positions)} holdings "
                f"offer limited diversification"
            )

        if not recommendations:
            recommendations.append("Allocation looks balanced; no changes suggested")

        return recommendations
