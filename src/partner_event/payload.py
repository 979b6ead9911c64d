"""Conversion between the JSON wire payloads and the planner's records.

Input::

    {"partners": [{"firstName": ..., "lastName": ..., "email": ...,
                   "country": ..., "availableDates": ["YYYY-MM-DD", ...]}]}

Output::

    {"countries": [{"attendeeCount": ..., "attendees": [...],
                    "name": ..., "startDate": "YYYY-MM-DD" | null}]}
"""

from __future__ import annotations

import datetime
import re
from typing import Any

from partner_event.scheduler import CountryReport, Partner, Response, solve

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

REQUIRED_FIELDS = ("email", "country", "availableDates")


class InvalidInputError(ValueError):
    """Raised when the input payload cannot be turned into partners."""

    def __init__(
        self,
        message: str,
        *,
        index: int | None = None,
        email: str | None = None,
        field: str | None = None,
    ):
        self.index = index
        self.email = email
        self.field = field
        where: list[str] = []
        if index is not None:
            where.append(f"partner #{index}")
        if email:
            where.append(email)
        prefix = f"{' '.join(where)}: " if where else ""
        super().__init__(f"{prefix}{message}")


def parse_date(value: object) -> datetime.date:
    """Parse a strict ``YYYY-MM-DD`` calendar date.

    Raises ``ValueError`` for anything else, including impossible dates.
    """
    if not isinstance(value, str) or not _ISO_DATE.fullmatch(value):
        raise ValueError(f"Invalid date {value!r}. Use YYYY-MM-DD.")
    try:
        return datetime.date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid date {value!r}. Not a calendar date.") from None


def parse_partner(raw: object, index: int) -> Partner:
    if not isinstance(raw, dict):
        raise InvalidInputError("partner record must be an object", index=index)

    email = raw.get("email")
    for field in REQUIRED_FIELDS:
        if raw.get(field) is None:
            raise InvalidInputError(
                f"missing required field {field!r}",
                index=index,
                email=email if isinstance(email, str) else None,
                field=field,
            )

    if not isinstance(email, str):
        raise InvalidInputError("'email' must be a string", index=index, field="email")

    country = raw["country"]
    if not isinstance(country, str):
        raise InvalidInputError(
            "'country' must be a string", index=index, email=email, field="country"
        )

    raw_dates = raw["availableDates"]
    if not isinstance(raw_dates, list):
        raise InvalidInputError(
            "'availableDates' must be a list", index=index, email=email, field="availableDates"
        )

    dates: list[datetime.date] = []
    for value in raw_dates:
        try:
            dates.append(parse_date(value))
        except ValueError as exc:
            raise InvalidInputError(
                str(exc), index=index, email=email, field="availableDates"
            ) from None

    return Partner(
        email=email,
        country=country,
        available_dates=tuple(dates),
        first_name=str(raw.get("firstName") or ""),
        last_name=str(raw.get("lastName") or ""),
    )


def parse_payload(data: Any) -> list[Partner]:
    """Validate an input payload and return its partners in input order."""
    if not isinstance(data, dict) or "partners" not in data:
        raise InvalidInputError("payload must be an object with a 'partners' key", field="partners")
    raw_partners = data["partners"]
    if not isinstance(raw_partners, list):
        raise InvalidInputError("'partners' must be a list", field="partners")
    return [parse_partner(raw, i) for i, raw in enumerate(raw_partners)]


def report_to_payload(report: CountryReport) -> dict[str, object]:
    return {
        "attendeeCount": report.attendee_count,
        "attendees": list(report.attendees),
        "name": report.name,
        "startDate": report.start_date.isoformat() if report.start_date else None,
    }


def response_to_payload(response: Response) -> dict[str, object]:
    return {"countries": [report_to_payload(r) for r in response.countries]}


def solve_payload(data: Any) -> dict[str, object]:
    """Parse *data*, solve it, and return the output payload."""
    return response_to_payload(solve(parse_payload(data)))
