"""Paywall CLI — inspect policies and evaluate them against local documents.

Usage:
    paywall --help

Commands:
    validate  → load a policy file and list its elements
    check     → first-match-wins decision for one document and path
    explain   → every element's individual outcome for one document and path
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from paywall.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import typer

from paywall.config import settings
from paywall.documents import DocumentAndPath, DocumentAndPathError
from paywall.policy import (
    ConditionsNotMet,
    NotPaywalled,
    PaywallConfig,
    PolicyLoadError,
    Price,
    PriceParsingError,
    load_policy,
)

app = typer.Typer(
    name="paywall",
    help="Paywall policy CLI.",
    no_args_is_help=True,
)

# Exit code for a request whose deciding element has a broken price source.
EXIT_PRICE_ERROR = 2


def _log_level(name: str) -> int:
    """Resolve a level name such as ``INFO``; unknown names fall back to WARNING."""
    level = logging.getLevelName(name.upper())
    if isinstance(level, int):
        return level
    typer.echo(f"[paywall] Unknown log level {name!r}, using WARNING.", err=True)
    return logging.WARNING


@app.callback()
def main() -> None:
    """Paywall policy CLI."""
    # Configure logging before any command runs.
    logging.basicConfig(
        level=_log_level(settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load_policy_or_exit(command: str, policy: Optional[Path]) -> PaywallConfig:
    try:
        return load_policy(policy)
    except (FileNotFoundError, PolicyLoadError) as exc:
        typer.echo(f"[{command}] {exc}", err=True)
        raise typer.Exit(1) from exc


def _load_request_or_exit(command: str, html_file: Path, path: str) -> DocumentAndPath:
    try:
        html = html_file.read_text(encoding="utf-8")
    except OSError as exc:
        typer.echo(f"[{command}] Cannot read {html_file}: {exc}", err=True)
        raise typer.Exit(1) from exc

    try:
        return DocumentAndPath.from_html_and_path_str(html, path)
    except DocumentAndPathError as exc:
        if exc.html_error is not None:
            typer.echo(f"[{command}] HTML: {exc.html_error}", err=True)
        if exc.path_error is not None:
            typer.echo(f"[{command}] Path: {exc.path_error}", err=True)
        raise typer.Exit(1) from exc


def _describe(option: object) -> str:
    if isinstance(option, Price):
        return f"Price {option.amount}"
    if isinstance(option, PriceParsingError):
        return f"Price parsing error: {option.message}"
    if isinstance(option, ConditionsNotMet):
        return "Conditions not met"
    if isinstance(option, NotPaywalled):
        return "Not paywalled"
    raise TypeError(f"Unknown outcome: {option!r}")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

@app.command("validate")
def validate(
    policy: Optional[Path] = typer.Option(None, help="Policy YAML file (default: $PAYWALL_POLICY)."),
) -> None:
    """Load a policy file and list its elements."""
    config = _load_policy_or_exit("validate", policy)
    typer.echo(f"[validate] {len(config)} element(s) loaded.")
    for index, element in enumerate(config):
        conditions = ", ".join(str(c) for c in element.paywall_conditions) or "(always applies)"
        typer.echo(f"  #{index}  {conditions}  →  {element.price_source}")


@app.command("check")
def check(
    html: Path = typer.Option(..., "--html", help="HTML file of the requested document."),
    path: str = typer.Option(..., "--path", help="URL path the document was requested at."),
    policy: Optional[Path] = typer.Option(None, help="Policy YAML file (default: $PAYWALL_POLICY)."),
) -> None:
    """Decide whether the document at PATH is paywalled, and at what price."""
    config = _load_policy_or_exit("check", policy)
    request = _load_request_or_exit("check", html, path)

    decision = config.evaluate(request)
    if decision.element_index is None:
        typer.echo(f"[check] {_describe(decision.outcome)}")
    else:
        typer.echo(f"[check] {_describe(decision.outcome)}  (element #{decision.element_index})")

    if isinstance(decision.outcome, PriceParsingError):
        raise typer.Exit(EXIT_PRICE_ERROR)


@app.command("explain")
def explain(
    html: Path = typer.Option(..., "--html", help="HTML file of the requested document."),
    path: str = typer.Option(..., "--path", help="URL path the document was requested at."),
    policy: Optional[Path] = typer.Option(None, help="Policy YAML file (default: $PAYWALL_POLICY)."),
) -> None:
    """Show how every element of the policy evaluates for one request."""
    config = _load_policy_or_exit("explain", policy)
    request = _load_request_or_exit("explain", html, path)

    for index, option in enumerate(config.evaluate_all(request)):
        typer.echo(f"  #{index}  {_describe(option)}")

    decision = config.evaluate(request)
    typer.echo(f"[explain] Decision: {_describe(decision.outcome)}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
