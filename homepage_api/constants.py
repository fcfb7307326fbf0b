"""
Shared constants for the options calculator and market data endpoints.

This module centralizes values used across multiple modules so that the
calculator, the API layer and the CLI agree on them.
"""

# =============================================================================
# Option Contracts
# =============================================================================

CONTRACT_MULTIPLIER = 100
"""Shares controlled by one standard equity option contract."""

MIN_PERCENTAGE_INCREMENT = -100.0
"""Lowest price move allowed; anything lower projects a negative price."""


# =============================================================================
# Calculator Summary
# =============================================================================

TOP_RESULTS_PER_INCREMENT = 5
"""Number of ranked results kept per price target in the summary view."""


# =============================================================================
# Risk Metrics
# =============================================================================

TRADING_DAYS_PER_YEAR = 252
"""Trading days used to annualize daily return statistics."""

DEFAULT_RISK_FREE_RATE = 0.05
"""Default risk-free rate for Sharpe ratio calculations (5%)."""


# =============================================================================
# Portfolio Concentration Thresholds
# =============================================================================

CONCENTRATED_HHI = 0.25
"""Herfindahl index at or above which a portfolio is considered concentrated."""

MODERATE_HHI = 0.15
"""Herfindahl index at or above which a portfolio is moderately diversified."""

MAX_SINGLE_POSITION_WEIGHT = 0.25
"""Position weight above which a trim recommendation is issued."""

MAX_SECTOR_WEIGHT = 0.40
"""Sector weight above which a sector recommendation is issued."""

MIN_POSITIONS = 5
"""Positions below which the portfolio is flagged as thin."""
