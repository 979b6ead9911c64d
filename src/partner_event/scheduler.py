"""Partner Event Planner

Find, for every country, the two-day window that the most partners can
attend, and the partners who can attend it.

The computation is a small pipeline run once per country:

  1. Group partners by country (first-appearance order)
  2. Find each partner's candidate starting dates (day d and d+1 available)
  3. Tally candidate starting dates across the country
  4. Select the most popular date, earliest date on ties
  5. Re-derive the attendee list for the selected date
"""

from __future__ import annotations

import calendar
import datetime
import logging
from collections.abc import Iterable
from typing import NamedTuple

log = logging.getLogger(__name__)

EVENT_LENGTH_DAYS = 2
ONE_DAY = datetime.timedelta(days=1)

# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


class Partner(NamedTuple):
    """A partner and the calendar dates they are available."""

    email: str
    country: str
    available_dates: tuple[datetime.date, ...]
    first_name: str = ""
    last_name: str = ""


class BestStart(NamedTuple):
    """The winning starting date of a country and how many partners share it."""

    date: datetime.date | None
    tally: int


class CountryReport(NamedTuple):
    name: str
    start_date: datetime.date | None
    attendee_count: int
    attendees: list[str]


class Response(NamedTuple):
    countries: list[CountryReport]


class CountryPlan(NamedTuple):
    """Everything computed for one country, kept for reporting.

    ``tally`` maps every candidate starting date to its partner count.
    """

    name: str
    tally: dict[datetime.date, int]
    best: BestStart
    attendees: list[str]

    @property
    def end_date(self) -> datetime.date | None:
        if self.best.date is None:
            return None
        return self.best.date + ONE_DAY * (EVENT_LENGTH_DAYS - 1)

    def to_report(self) -> CountryReport:
        return build_country_report(self.name, self.best, self.attendees)


CountryGroup = dict[str, list[Partner]]
CandidateDateTally = dict[datetime.date, int]

# ---------------------------------------------------------------------------
# Pipeline steps
# ---------------------------------------------------------------------------


def group_by_country(partners: Iterable[Partner]) -> CountryGroup:
    """Bucket partners by exact country name.

    Dict insertion order gives first-appearance order of the countries;
    partners keep their relative input order inside each bucket.
    """
    groups: CountryGroup = {}
    for partner in partners:
        groups.setdefault(partner.country, []).append(partner)
    return groups


def consecutive_start_dates(dates: Iterable[datetime.date]) -> list[datetime.date]:
    """Return the dates *d* for which *d* and the following day are both in *dates*.

    The result is ascending. Duplicate input dates are collapsed first and
    the caller's collection is left untouched.
    """
    ordered = sorted(set(dates))
    return [a for a, b in zip(ordered, ordered[1:]) if b - a == ONE_DAY]


def tally_start_dates(partners: Iterable[Partner]) -> CandidateDateTally:
    """Count, per candidate starting date, the partners who could start then."""
    tally: CandidateDateTally = {}
    for partner in partners:
        for d in consecutive_start_dates(partner.available_dates):
            tally[d] = tally.get(d, 0) + 1
    return tally


def select_best_start(tally: CandidateDateTally) -> BestStart:
    """Pick the date with the highest tally.

    Dates are scanned in ascending order and only a strictly greater count
    replaces the running best, so ties resolve to the earliest date.
    """
    best = BestStart(date=None, tally=0)
    for d in sorted(tally):
        if tally[d] > best.tally:
            best = BestStart(date=d, tally=tally[d])
    return best


def is_partner_available(partner: Partner, start_date: datetime.date) -> bool:
    return start_date in consecutive_start_dates(partner.available_dates)


def resolve_attendees(
    partners: Iterable[Partner], start_date: datetime.date | None
) -> list[str]:
    """Emails of the partners able to attend an event beginning on *start_date*."""
    if start_date is None:
        return []
    return [p.email for p in partners if is_partner_available(p, start_date)]


def build_country_report(
    name: str, best: BestStart, attendees: list[str]
) -> CountryReport:
    return CountryReport(
        name=name,
        start_date=best.date,
        attendee_count=len(attendees),
        attendees=list(attendees),
    )


# ---------------------------------------------------------------------------
# Drivers
# ---------------------------------------------------------------------------


def plan_country(name: str, partners: list[Partner]) -> CountryPlan:
    tally = tally_start_dates(partners)
    best = select_best_start(tally)
    attendees = resolve_attendees(partners, best.date)
    log.debug(
        "%s: %d partners, %d candidate dates, best=%s (%d)",
        name,
        len(partners),
        len(tally),
        best.date,
        best.tally,
    )
    return CountryPlan(name=name, tally=tally, best=best, attendees=attendees)


def plan_countries(partners: Iterable[Partner]) -> list[CountryPlan]:
    groups = group_by_country(partners)
    return [plan_country(name, members) for name, members in groups.items()]


def solve(partners: Iterable[Partner]) -> Response:
    """Compute the per-country event report for *partners*."""
    return Response(countries=[plan.to_report() for plan in plan_countries(partners)])


# ---------------------------------------------------------------------------
# Text output
# ---------------------------------------------------------------------------


def format_plan(plan: CountryPlan, show_tally: bool = False) -> str:
    """Return a human-readable summary of one country's plan."""
    lines: list[str] = []
    w = 64

    lines.append("")
    lines.append("=" * w)
    lines.append(f"  COUNTRY: {plan.name}")
    lines.append("=" * w)

    if plan.best.date is None or plan.end_date is None:
        lines.append("  No two consecutive days shared by any partner.")
        lines.append("  Attendees: 0")
        return "\n".join(lines)

    lines.append(
        f"  Event: {plan.best.date.strftime('%a, %b %d, %Y')} -> "
        f"{plan.end_date.strftime('%a, %b %d, %Y')}"
    )
    n = len(plan.attendees)
    lines.append(f"  Attendees: {n} partner{'s' if n != 1 else ''}")
    lines.append("")
    for email in plan.attendees:
        lines.append(f"    -> {email}")

    if show_tally:
        lines.append("")
        lines.append("  Candidate start dates:")
        lines.append("  " + "-" * (w - 4))
        for d in sorted(plan.tally):
            marker = "  *" if d == plan.best.date else ""
            lines.append(f"    {d.isoformat()}  {plan.tally[d]:>3}{marker}")

    return "\n".join(lines)


def format_calendar_view(plan: CountryPlan) -> str:
    """Return a calendar of the month(s) spanned by the event window."""
    start, end = plan.best.date, plan.end_date
    if start is None or end is None:
        return ""

    event_days = {start + ONE_DAY * i for i in range(EVENT_LENGTH_DAYS)}
    months = sorted({(d.year, d.month) for d in event_days})

    lines: list[str] = [
        "",
        "  Legend: E=Event day",
        "",
    ]

    cal = calendar.Calendar(firstweekday=0)

    for year, month in months:
        lines.append(f"  {calendar.month_name[month]} {year}")
        lines.append("  Mo  Tu  We  Th  Fr  Sa  Su")

        row = ""
        for day_num, weekday in cal.itermonthdays2(year, month):
            if day_num == 0:
                row += "    "
            else:
                d = datetime.date(year, month, day_num)
                if d in event_days:
                    cell = f" {day_num:>2}E"
                else:
                    cell = f"  {day_num:>2}"
                row += cell

            if weekday == 6:
                lines.append(row)
                row = ""

        if row.strip():
            lines.append(row)
        lines.append("")

    return "\n".join(lines)
