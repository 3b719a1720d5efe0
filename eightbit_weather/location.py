import logging
from typing import List

import requests

from eightbit_weather import config
from eightbit_weather.utility import get_json, WeatherServiceError

__all__ = ['Location', 'search_locations', 'format_location_string']

logger = logging.getLogger(__name__)


class Location:
    """
    Encapsulates a candidate location returned by the Open-Meteo geocoding service
    """

    def __init__(self, name, latitude: float, longitude: float, admin1: str = None, country: str = None):
        """
        :param name: place name, e.g. Bentonville
        :param latitude: decimal degrees
        :param longitude: decimal degrees
        :param admin1: first administrative division (state, province) if known
        :param country: country name if known
        """
        self.name = name
        self.latitude = latitude
        self.longitude = longitude
        self.admin1 = admin1
        self.country = country

    @classmethod
    def from_json(cls, dct: dict) -> 'Location':
        return cls(name=dct.get('name'), latitude=dct.get('latitude'), longitude=dct.get('longitude'),
                   admin1=dct.get('admin1') or None, country=dct.get('country') or None)

    @property
    def lat_long(self):
        return self.latitude, self.longitude

    def __eq__(self, other):
        if not isinstance(other, Location):
            return NotImplemented
        return self.__dict__ == other.__dict__

    def __str__(self):
        return format_location_string(self)

    def __repr__(self):
        return '{0} ({1})'.format(object.__repr__(self), str(self))


def format_location_string(location: Location) -> str:
    """
    Format a location result into a display string
    :param location: the location to display
    :return: name, followed by the state/province and country where we have them
    """
    return ', '.join(p for p in [location.name, location.admin1, location.country] if p)


def search_locations(search_term: str, session=None) -> List[Location]:
    """
    Search for locations matching the given search term.

    Failures are logged and reported as "no matches" so that a flaky service just means no suggestions.
    :param search_term: free text such as 'Bentonville' or 'Sussex, WI'
    :param session: optional requests.Session to issue the request with
    :return: a list of candidate locations, possibly empty
    """
    if search_term is None or not str(search_term).strip():
        return []
    term = str(search_term).strip()
    logger.debug(f'Searching for locations matching {term}')
    try:
        data = get_json(f'{config.GEOCODING_BASE_URL}/search', params={'name': term}, session=session)
    except (requests.RequestException, WeatherServiceError) as e:
        logger.error(f'Error searching locations: {e}')
        return []
    return [Location.from_json(r) for r in (data or {}).get('results') or []]
