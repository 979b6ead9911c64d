"""Typer CLI for the Partner Event Planner."""

from __future__ import annotations

import json
import logging
import pathlib
import sys
from typing import Any

import httpx
import typer

from partner_event.client import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT_S,
    ApiError,
    PartnerApiClient,
)
from partner_event.payload import InvalidInputError, parse_payload, response_to_payload
from partner_event.scheduler import (
    CountryPlan,
    Response,
    format_calendar_view,
    format_plan,
    plan_countries,
)

app = typer.Typer(
    name="partner-event",
    help="Partner Event Planner: find the two-day window per country that "
    "the most partners can attend.",
    add_completion=False,
)

log = logging.getLogger("partner_event")


def setup_logging(level: int) -> None:
    log.setLevel(level)
    log.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    log.addHandler(handler)


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr."),
    debug: bool = typer.Option(False, "--debug", help="Log per-country details to stderr."),
) -> None:
    if debug:
        setup_logging(logging.DEBUG)
    elif verbose:
        setup_logging(logging.INFO)
    else:
        setup_logging(logging.WARNING)


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=1)


def _load_payload(path: str) -> Any:
    """Read a JSON payload from *path*, or from stdin when *path* is ``-``."""
    if path == "-":
        text = sys.stdin.read()
    else:
        p = pathlib.Path(path)
        if not p.exists():
            raise _fail(f"Input file not found: {path}")
        try:
            text = p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise _fail(f"Could not read input: {exc}") from None

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise _fail(f"Invalid JSON input: {exc}") from None


def _plan(data: Any) -> list[CountryPlan]:
    try:
        partners = parse_payload(data)
    except InvalidInputError as exc:
        raise _fail(f"Invalid input: {exc}") from None
    log.info("Planning for %d partners", len(partners))
    return plan_countries(partners)


def _result_payload(plans: list[CountryPlan]) -> dict[str, object]:
    return response_to_payload(Response(countries=[p.to_report() for p in plans]))


def _print_text(plans: list[CountryPlan], show_calendar: bool, show_tally: bool) -> None:
    w = 64
    typer.echo("=" * w)
    typer.echo("  PARTNER EVENT PLANNER")
    typer.echo("=" * w)
    typer.echo(f"  Countries: {len(plans)}")
    scheduled = sum(1 for p in plans if p.best.date is not None)
    typer.echo(f"  Countries with an event: {scheduled}")

    for plan in plans:
        typer.echo(format_plan(plan, show_tally=show_tally))
        if show_calendar:
            typer.echo(format_calendar_view(plan))

    typer.echo()
    typer.echo("=" * w)
    total = sum(len(p.attendees) for p in plans)
    typer.echo(f"  Total attendees: {total}")
    typer.echo("=" * w)


def _print_json(payload: dict[str, object]) -> None:
    json.dump(payload, sys.stdout, indent=2)
    typer.echo()


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def solve(
    path: str = typer.Argument(
        "-",
        help="Input JSON file with a 'partners' list. Use '-' for stdin.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output the result payload as JSON.",
    ),
    calendar: bool = typer.Option(
        False,
        "--calendar/--no-calendar",
        help="Show a calendar around each event window.",
    ),
    tally: bool = typer.Option(
        False,
        "--tally",
        help="List every candidate start date with its partner count.",
    ),
) -> None:
    """Pick the best event start date per country from a partner file."""
    plans = _plan(_load_payload(path))

    if output_json:
        _print_json(_result_payload(plans))
    else:
        _print_text(plans, calendar, tally)


def _make_client(base_url: str, user_key: str, timeout: float) -> PartnerApiClient:
    return PartnerApiClient(base_url=base_url, user_key=user_key, timeout_s=timeout)


@app.command()
def run(
    user_key: str = typer.Option(
        ...,
        "--user-key",
        "-k",
        envvar="PARTNER_EVENT_USER_KEY",
        help="API user key.",
    ),
    base_url: str = typer.Option(
        DEFAULT_BASE_URL,
        "--base-url",
        envvar="PARTNER_EVENT_BASE_URL",
        help="API base URL.",
    ),
    timeout: float = typer.Option(
        DEFAULT_TIMEOUT_S,
        "--timeout",
        envvar="PARTNER_EVENT_TIMEOUT",
        help="Request timeout in seconds.",
        min=0.1,
    ),
    submit: bool = typer.Option(
        True,
        "--submit/--no-submit",
        help="Post the result back to the API.",
    ),
    output_json: bool = typer.Option(
        False,
        "--json",
        help="Output the result payload as JSON.",
    ),
) -> None:
    """Fetch partners from the API, plan the events, and submit the result."""
    try:
        client = _make_client(base_url, user_key, timeout)
    except ValueError as exc:
        raise _fail(str(exc)) from None

    with client:
        try:
            data = client.fetch_partners()
        except (httpx.HTTPError, ApiError) as exc:
            raise _fail(f"Could not fetch partners: {exc}") from None

        plans = _plan(data)
        payload = _result_payload(plans)

        if output_json:
            _print_json(payload)
        else:
            _print_text(plans, show_calendar=False, show_tally=False)

        if not submit:
            return

        try:
            result = client.submit_results(payload)
        except httpx.HTTPError as exc:
            raise _fail(f"Submission failed: {exc}") from None

    typer.echo(f"Submitted results (HTTP {result.status_code}).", err=True)


def main() -> None:
    """Entry point for the CLI."""
    app()
