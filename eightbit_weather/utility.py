import logging
import math
import datetime as dt
from typing import Union

import requests
from dateutil import parser

from eightbit_weather.config import REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

NULL_VALUE = -9999


def read_float(key) -> float:
    """ Read a numeric reading from a service payload

    Missing readings (None, garbage or the NULL sentinel) come back as NaN so that they can still flow through
    the comparisons done on a series.
    :param key: the raw value from the JSON payload
    :return: the float value or NaN
    """
    if key is None:
        return math.nan
    try:
        value = float(key)
    except (TypeError, ValueError):
        return math.nan
    return math.nan if value <= NULL_VALUE else value


def parse_timestamp(timestamp: Union[str, dt.datetime]) -> dt.datetime:
    """ Parse an ISO-ish timestamp ("2023-01-01T14:00") into a datetime """
    if isinstance(timestamp, dt.datetime):
        return timestamp
    return parser.parse(timestamp)


def format_time(timestamp: Union[str, dt.datetime]) -> str:
    """ Format a timestamp as a readable time, e.g. 2:00 PM """
    ts = parse_timestamp(timestamp)
    return f'{ts.hour % 12 or 12}:{ts.minute:02d} {"AM" if ts.hour < 12 else "PM"}'


def format_hour(timestamp: Union[str, dt.datetime]) -> str:
    """ Format a timestamp to the hour only, e.g. 2PM """
    ts = parse_timestamp(timestamp)
    return f'{ts.hour % 12 or 12}{"AM" if ts.hour < 12 else "PM"}'


class WeatherServiceError(Exception):
    """ Raised when one of the Open-Meteo services gives us something we can't use """


def get_json(url: str, params: dict = None, session=None, timeout: float = None) -> dict:
    """
    Issue a GET request and return the decoded JSON body
    :param url: the endpoint
    :param params: query string parameters
    :param session: a requests.Session (or anything with a compatible `get`), defaults to the requests module
    :param timeout: seconds to wait for the service, defaults to the configured request timeout
    :return: the JSON payload as a dictionary
    """
    http = session if session is not None else requests
    resp = http.get(url, params=params, timeout=timeout if timeout is not None else REQUEST_TIMEOUT)
    logger.debug(f'GET {resp.url} -> {resp.status_code}')
    if resp.status_code != 200:
        raise WeatherServiceError(f'Bad response from {url}: {resp.status_code}')
    return resp.json()
