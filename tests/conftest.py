from __future__ import annotations

import copy
import logging
from collections.abc import Iterator

import pytest

EXAMPLE_PAYLOAD: dict[str, object] = {
    "partners": [
        {
            "firstName": "Darin",
            "lastName": "Daignault",
            "email": "ddaignault@hubspotpartners.com",
            "country": "United States",
            "availableDates": ["2017-05-03", "2017-05-06"],
        },
        {
            "firstName": "Crystal",
            "lastName": "Brenna",
            "email": "cbrenna@hubspotpartners.com",
            "country": "Ireland",
            "availableDates": ["2017-04-27", "2017-04-29", "2017-04-30"],
        },
        {
            "firstName": "Janyce",
            "lastName": "Gustison",
            "email": "jgustison@hubspotpartners.com",
            "country": "Spain",
            "availableDates": ["2017-04-29", "2017-04-30", "2017-05-01"],
        },
        {
            "firstName": "Tifany",
            "lastName": "Mozie",
            "email": "tmozie@hubspotpartners.com",
            "country": "Spain",
            "availableDates": ["2017-04-28", "2017-04-29", "2017-05-01", "2017-05-04"],
        },
        {
            "firstName": "Temple",
            "lastName": "Affelt",
            "email": "taffelt@hubspotpartners.com",
            "country": "Spain",
            "availableDates": ["2017-04-28", "2017-04-29", "2017-05-02", "2017-05-04"],
        },
        {
            "firstName": "Robyn",
            "lastName": "Yarwood",
            "email": "ryarwood@hubspotpartners.com",
            "country": "Spain",
            "availableDates": ["2017-04-29", "2017-04-30", "2017-05-02", "2017-05-03"],
        },
        {
            "firstName": "Shirlene",
            "lastName": "Filipponi",
            "email": "sfilipponi@hubspotpartners.com",
            "country": "Spain",
            "availableDates": ["2017-04-30", "2017-05-01"],
        },
        {
            "firstName": "Oliver",
            "lastName": "Majica",
            "email": "omajica@hubspotpartners.com",
            "country": "Spain",
            "availableDates": ["2017-04-28", "2017-04-29", "2017-05-01", "2017-05-03"],
        },
        {
            "firstName": "Wilber",
            "lastName": "Zartman",
            "email": "wzartman@hubspotpartners.com",
            "country": "Spain",
            "availableDates": ["2017-04-29", "2017-04-30", "2017-05-02", "2017-05-03"],
        },
        {
            "firstName": "Eugena",
            "lastName": "Auther",
            "email": "eauther@hubspotpartners.com",
            "country": "United States",
            "availableDates": ["2017-05-04", "2017-05-09"],
        },
    ]
}

EXAMPLE_RESULT: dict[str, object] = {
    "countries": [
        {
            "attendeeCount": 0,
            "attendees": [],
            "name": "United States",
            "startDate": None,
        },
        {
            "attendeeCount": 1,
            "attendees": ["cbrenna@hubspotpartners.com"],
            "name": "Ireland",
            "startDate": "2017-04-29",
        },
        {
            "attendeeCount": 3,
            "attendees": [
                "tmozie@hubspotpartners.com",
                "taffelt@hubspotpartners.com",
                "omajica@hubspotpartners.com",
            ],
            "name": "Spain",
            "startDate": "2017-04-28",
        },
    ]
}


@pytest.fixture(autouse=True)
def _reset_cli_logging() -> Iterator[None]:
    """Drop handlers the CLI bound to a CliRunner stream."""
    yield
    logger = logging.getLogger("partner_event")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def example_payload() -> dict[str, object]:
    return copy.deepcopy(EXAMPLE_PAYLOAD)


@pytest.fixture
def example_result() -> dict[str, object]:
    return copy.deepcopy(EXAMPLE_RESULT)
