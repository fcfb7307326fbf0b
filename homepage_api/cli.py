"""
Click CLI for the homepage backend.

Provides commands for running the options calculator from the terminal,
fetching live quotes and starting the API server.

Example: homepage-api calculate --price 100 --investment 1000 \\
             --option 100:4:6 --option 105:2:2.5 --increments "-10,0,10"
"""

import json
import logging
import sys
from typing import Optional

import click

from .alphavantage_client import AlphaVantageClient
from .calculator import (
    CalculationRequest,
    CalculationResult,
    OptionContract,
    OptionsReturnCalculator,
    OptionType,
)
from .config import AlphaVantageConfig
from .exceptions import CalculationInputError, MarketDataError

logger = logging.getLogger(__name__)


def print_error(message: str) -> None:
    """Print error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def parse_option(value: str, option_type: OptionType) -> OptionContract:
    """
    Parse a STRIKE:BID:ASK[:PRICE] option specification.

    Args:
        value: Option specification (e.g., "100:4:6" or "100:4:6:5.25")
        option_type: Type applied to the contract

    Returns:
        OptionContract

    Raises:
        click.BadParameter: If the specification is malformed
    """
    parts = value.split(":")
    if len(parts) not in (3, 4):
        raise click.BadParameter(f"expected STRIKE:BID:ASK[:PRICE], got '{value}'")

    try:
        numbers = [float(p) for p in parts]
    except ValueError as e:
        raise click.BadParameter(f"non-numeric value in '{value}'") from e

    price = numbers[3] if len(numbers) == 4 else None
    try:
        return OptionContract(
            strike=numbers[0], bid=numbers[1], ask=numbers[2], price=price, option_type=option_type
        )
    except CalculationInputError as e:
        raise click.BadParameter(str(e)) from e


def parse_increments(value: str) -> list[float]:
    """Parse a comma-separated list of percentage increments."""
    try:
        return [float(p.strip()) for p in value.split(",") if p.strip()]
    except ValueError as e:
        raise click.BadParameter(f"increments must be numbers: '{value}'") from e


def format_result(result: CalculationResult) -> str:
    """Format one calculation result as a table row."""
    contracts = "-" if result.contracts is None else str(result.contracts)
    ret = "n/a" if result.return_percentage is None else f"{result.return_percentage:.2f}%"
    flag = "" if result.status.value == "ok" else f"  [{result.status.value}]"
    return (
        f"{result.strike:>9.2f} {result.premium:>8.2f} {result.percentage_increment:>+7.1f}% "
        f"{result.projected_price:>10.2f} {contracts:>5} {result.profit_loss:>12,.2f} {ret:>10}"
        f"{flag}"
    )


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """
    Homepage API tools - options calculator and market data.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.option("--price", "security_price", type=float, required=True, help="Underlying price")
@click.option("--investment", type=float, required=True, help="Cash available to invest")
@click.option(
    "--option",
    "option_specs",
    multiple=True,
    required=True,
    help="Option as STRIKE:BID:ASK[:PRICE] (repeatable)",
)
@click.option(
    "--increments",
    default="-10,-5,0,5,10",
    show_default=True,
    help="Comma-separated percentage moves",
)
@click.option("--put", "is_put", is_flag=True, help="Treat options as puts (default: calls)")
@click.option("--json", "output_json", is_flag=True, help="JSON output")
def calculate(
    security_price: float,
    investment: float,
    option_specs: tuple[str, ...],
    increments: str,
    is_put: bool,
    output_json: bool,
) -> None:
    """
    Project option returns across price moves.

    Example: homepage-api calculate --price 100 --investment 1000 --option 100:4:6
    """
    option_type = OptionType.PUT if is_put else OptionType.CALL
    options = [parse_option(spec, option_type) for spec in option_specs]

    try:
        request = CalculationRequest(
            security_price=security_price,
            investment_amount=investment,
            options=options,
            percentage_increments=parse_increments(increments),
        )
    except CalculationInputError as e:
        print_error(str(e))
        sys.exit(1)

    results = OptionsReturnCalculator().calculate(request)

    if output_json:
        click.echo(json.dumps([r.to_dict() for r in results], indent=2))
        return

    click.secho(
        f"=== {option_type.value.upper()} options, ${security_price:,.2f} underlying, "
        f"${investment:,.2f} invested ===",
        bold=True,
    )
    click.echo(
        f"{'Strike':>9} {'Premium':>8} {'Move':>8} {'Projected':>10} {'Qty':>5} "
        f"{'P/L':>12} {'Return':>10}"
    )
    for result in results:
        click.echo(format_result(result))


@cli.command()
@click.argument("symbol")
@click.option("--json", "output_json", is_flag=True, help="Print the quote as JSON")
def quote(symbol: str, output_json: bool) -> None:
    """
    Fetch a live stock quote from Alpha Vantage.

    Requires ALPHA_VANTAGE_API_KEY in the environment.

    Example: homepage-api quote AAPL
    """
    try:
        config = AlphaVantageConfig.from_env()
    except ValueError as e:
        print_error(str(e))
        sys.exit(1)

    try:
        with AlphaVantageClient(config) as client:
            stock = client.get_stock_quote(symbol)
    except (MarketDataError, ValueError) as e:
        print_error(str(e))
        sys.exit(1)

    if output_json:
        click.echo(json.dumps(stock.to_dict(), indent=2))
        return

    color = "green" if stock.change >= 0 else "red"
    click.secho(f"{stock.symbol}: ${stock.price:,.2f}", bold=True)
    click.secho(f"Change: {stock.change:+.2f} ({stock.change_percent:+.2f}%)", fg=color)
    if stock.latest_trading_day:
        click.echo(f"As of:  {stock.latest_trading_day}")


@cli.command()
@click.option("--host", default=None, help="Bind address (default: from settings)")
@click.option("--port", type=int, default=None, help="Port (default: from settings)")
@click.option("--reload", is_flag=True, help="Reload on code changes")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """
    Run the API server with uvicorn.

    Example: homepage-api serve --port 8080 --reload
    """
    import uvicorn

    from .server.config import settings

    uvicorn.run(
        "homepage_api.server.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level="debug" if settings.debug else "info",
    )


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
