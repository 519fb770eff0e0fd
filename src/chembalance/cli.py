"""Command-line entrypoints for chembalance."""

from __future__ import annotations

import json
import logging
from typing import Annotated

import typer

from chembalance.balance import BalanceConfiguration, balance
from chembalance.constants import DEFAULT_PRECISION
from chembalance.errors import EquationError
from chembalance.render import render as render_tokens
from chembalance.scanner import scan

app = typer.Typer(add_completion=False)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("balance")
def balance_command(
    equation: Annotated[str, typer.Argument(help='Equation, e.g. "[H*2]+[O*2]⇒[H*2 O]".')],
    precision: Annotated[
        int, typer.Option(help="Decimal places kept from the solver.")
    ] = DEFAULT_PRECISION,
    raw: Annotated[
        bool,
        typer.Option("--raw", help="Keep the first compound at 1 instead of scaling to whole numbers."),
    ] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print a JSON payload.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Balance an equation and print the result."""
    _configure_logging(verbose)
    configuration = BalanceConfiguration(precision=precision, normalize=not raw)
    try:
        result = balance(equation, configuration)
    except EquationError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    if not as_json:
        typer.echo(result.text.rstrip())
        return

    payload = {
        "equation": result.text.rstrip(),
        "reactants": list(result.reactant_coefficients),
        "products": list(result.product_coefficients),
        "coefficients": list(result.coefficients),
        "residuals": result.residuals(),
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command("render")
def render_command(
    equation: Annotated[str, typer.Argument(help="Equation in bracket notation.")],
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Print an equation in display notation without balancing it."""
    _configure_logging(verbose)
    typer.echo(render_tokens(scan(equation)).rstrip())
