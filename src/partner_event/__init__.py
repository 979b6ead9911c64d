"""Partner Event Planner.

Find, per country, the two consecutive days that the most partners can
attend, and list who can come.
"""

from partner_event.client import ApiError, PartnerApiClient, SubmitResult
from partner_event.payload import (
    InvalidInputError,
    parse_payload,
    response_to_payload,
    solve_payload,
)
from partner_event.scheduler import (
    BestStart,
    CountryPlan,
    CountryReport,
    Partner,
    Response,
    consecutive_start_dates,
    group_by_country,
    resolve_attendees,
    select_best_start,
    solve,
    tally_start_dates,
)

__all__ = [
    "ApiError",
    "BestStart",
    "CountryPlan",
    "CountryReport",
    "InvalidInputError",
    "Partner",
    "PartnerApiClient",
    "Response",
    "SubmitResult",
    "consecutive_start_dates",
    "group_by_country",
    "parse_payload",
    "resolve_attendees",
    "response_to_payload",
    "select_best_start",
    "solve",
    "solve_payload",
    "tally_start_dates",
]
