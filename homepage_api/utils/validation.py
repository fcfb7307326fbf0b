"""Input validation utilities."""

import logging
import math
import re
from collections.abc import Sequence

logger = logging.getLogger(__name__)

_SYMBOL_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9.\-]{0,9}$")


def normalize_symbol(symbol: str) -> str:
    """
    Normalize and validate a ticker symbol.

    Args:
        symbol: Raw ticker symbol (e.g., " aapl ", "BRK.B")

    Returns:
        Upper-cased, stripped symbol

    Raises:
        ValueError: If symbol is empty or contains unsupported characters
    """
    if not symbol or not isinstance(symbol, str):
        raise ValueError(f"Invalid symbol: {symbol}")

    normalized = symbol.strip().upper()
    if not _SYMBOL_PATTERN.match(normalized):
        raise ValueError(f"Symbol must be 1-10 alphanumeric characters, '.' or '-': {symbol}")

    return normalized


def validate_closes(closes: Sequence[float], symbol: str = "UNKNOWN") -> None:
    """
    Validate a closing price series.

    Args:
        closes: Closing prices in chronological order
        symbol: Symbol for error messages

    Raises:
        ValueError: If any price is non-positive or non-finite
    """
    for i, close in enumerate(closes):
        if not math.isfinite(close) or close <= 0:
            raise ValueError(f"Invalid closing price at index {i} for {symbol}: {close}")

        if i > 0 and closes[i - 1] > 0 and close / closes[i - 1] > 1.5:
            logger.warning(
                f"Large daily move at index {i} for {symbol}: "
                f"{closes[i - 1]} -> {close} ({close / closes[i - 1]:.2f}x)"
            )
