"""Backend for the homepage apps: options return calculator and market data lookups."""
