import logging
import datetime as dt
from typing import Optional, List

import pandas as pd
import requests

from eightbit_weather import config
from eightbit_weather.location import Location
from eightbit_weather.utility import get_json, read_float, parse_timestamp, format_time, WeatherServiceError
from eightbit_weather.weather_descriptions import Metric

__all__ = ['Observation', 'WeatherData', 'Weather', 'FctKeys']

logger = logging.getLogger(__name__)


class FctKeys:
    """
    The names Open-Meteo uses for each variable, kept in one place so the payload parsing and the requests agree
    """
    TIME = 'time'
    TEMPERATURE = 'temperature_2m'
    TEMPERATURE_80M = 'temperature_80m'
    PRECIPITATION = 'precipitation'
    PRECIP_PCT = 'precipitation_probability'
    CLOUD_COVER = 'cloud_cover'
    WIND_SPEED = 'wind_speed_10m'
    # Service variable -> the metric it feeds
    metric_for_key = {TEMPERATURE: Metric.TEMPERATURE, PRECIPITATION: Metric.PRECIPITATION,
                      PRECIP_PCT: Metric.PRECIPITATION_CHANCE, CLOUD_COVER: Metric.CLOUD_COVER,
                      WIND_SPEED: Metric.WIND_SPEED}


class Observation:
    """ The current conditions at a location """

    def __init__(self, time: dt.datetime = None, temperature: float = 0, precipitation: float = 0,
                 cloud_cover: float = 0, wind_speed: float = 0, precipitation_chance: float = 0):
        self.time = time
        self.temperature = temperature
        self.precipitation = precipitation
        self.cloud_cover = cloud_cover
        self.wind_speed = wind_speed
        self.precipitation_chance = precipitation_chance

    def value(self, metric) -> float:
        """ The current reading for a metric """
        return {Metric.TEMPERATURE: self.temperature,
                Metric.PRECIPITATION: self.precipitation,
                Metric.PRECIPITATION_CHANCE: self.precipitation_chance,
                Metric.CLOUD_COVER: self.cloud_cover,
                Metric.WIND_SPEED: self.wind_speed}[Metric(metric)]

    @property
    def civil_time(self):
        return format_time(self.time) if isinstance(self.time, dt.datetime) else None

    def __str__(self):
        return f'Observation at {self.civil_time}' \
            f'\n\tTemperature: {self.temperature} °F' \
            f'\n\tWind {self.wind_speed} mph' \
            f'\n\tCloud cover: {self.cloud_cover} %' \
            f'\n\tChance of precipitation: {self.precipitation_chance} %' \
            f'\n\tPrecipitation: {self.precipitation} in'


class WeatherData:
    """
    Current conditions plus the hourly forecast.  The hourly frame is indexed by timestamp and has one column per
    metric (plus any extra variables the service returned).
    """

    def __init__(self, current: Observation, hourly: pd.DataFrame, timezone: str = None,
                 timezone_abbreviation: str = None, latitude: float = None, longitude: float = None):
        self.current = current
        self.hourly = hourly
        self.timezone = timezone
        self.timezone_abbreviation = timezone_abbreviation
        self.latitude = latitude
        self.longitude = longitude

    def series(self, metric) -> pd.Series:
        """ The hourly forecast for a metric, empty if the service didn't send it """
        metric = Metric(metric)
        if metric.value not in self.hourly.columns:
            return pd.Series([], dtype=float)
        return self.hourly[metric.value]

    @property
    def hourly_times(self) -> List[dt.datetime]:
        return list(self.hourly.index)


class Weather:
    """ Client for the Open-Meteo forecast service """

    def __init__(self, session=None, horizon: int = config.DEFAULT_HORIZON):
        """
        :param session: optional requests.Session used for every call
        :param horizon: number of forecast hours to ask for
        """
        self.session = session
        self.horizon = horizon
        self.last_request_url: Optional[str] = None
        self._last_request = None

    def forecast_params(self, latitude: float, longitude: float) -> dict:
        return {
            'latitude': str(latitude),
            'longitude': str(longitude),
            'current': ','.join(config.current_variables),
            'hourly': ','.join(config.hourly_variables),
            'temperature_unit': config.temperature_unit,
            'wind_speed_unit': config.wind_speed_unit,
            'precipitation_unit': config.precipitation_unit,
            'timezone': 'auto',
            'forecast_days': '1',
            'forecast_hours': str(self.horizon),
        }

    def get_current_weather(self, latitude: float, longitude: float) -> Optional[WeatherData]:
        """
        Get current weather data for the specified coordinates
        :param latitude: decimal degrees
        :param longitude: decimal degrees
        :return: a WeatherData, or None if the service could not be reached or sent back garbage
        """
        url = f'{config.WEATHER_BASE_URL}/forecast'
        params = self.forecast_params(latitude, longitude)
        self._last_request = (latitude, longitude)
        self.last_request_url = requests.Request('GET', url, params=params).prepare().url
        logger.debug(f'Going out to Open-Meteo for {latitude},{longitude}')
        logger.debug(f'{self.last_request_url}')
        try:
            dct = get_json(url, params=params, session=self.session)
            return self.build_weather_data(dct)
        except (requests.RequestException, WeatherServiceError) as e:
            logger.error(f'Error fetching weather data: {e}')
            return None

    def get_weather(self, location: Location) -> Optional[WeatherData]:
        return self.get_current_weather(location.latitude, location.longitude)

    def refresh_weather(self) -> Optional[WeatherData]:
        """ Repeat the last request, None if nothing has been asked for yet """
        if self._last_request is None:
            logger.warning('Asked to refresh the weather before anything was requested')
            return None
        return self.get_current_weather(*self._last_request)

    @staticmethod
    def build_weather_data(dct: dict) -> WeatherData:
        """
        Converts the JSON returned from Open-Meteo into WeatherData
        :param dct: the decoded response
        :return: WeatherData with an hourly frame indexed by timestamp
        """
        if not isinstance(dct, dict) or 'current' not in dct:
            raise WeatherServiceError('Weather payload is missing the current conditions')
        cur = dct.get('current') or {}
        hourly = dct.get('hourly') or {}
        if not isinstance(cur, dict) or not isinstance(hourly, dict):
            raise WeatherServiceError('Weather payload has the wrong shape')
        try:
            now = parse_timestamp(cur[FctKeys.TIME]) if cur.get(FctKeys.TIME) else None
            times = [parse_timestamp(t) for t in hourly.get(FctKeys.TIME) or []]
        except (ValueError, TypeError, OverflowError) as e:
            raise WeatherServiceError(f'Weather payload has a bad timestamp: {e}') from e
        current = Observation(time=now,
                              temperature=read_float(cur.get(FctKeys.TEMPERATURE)),
                              precipitation=read_float(cur.get(FctKeys.PRECIPITATION)),
                              cloud_cover=read_float(cur.get(FctKeys.CLOUD_COVER)),
                              wind_speed=read_float(cur.get(FctKeys.WIND_SPEED)),
                              precipitation_chance=read_float(cur.get(FctKeys.PRECIP_PCT)))

        columns = {}
        for key, values in hourly.items():
            if key == FctKeys.TIME:
                continue
            name = FctKeys.metric_for_key.get(key, key)
            if not isinstance(values, list):
                values = []
            # Pad short columns so a partial payload doesn't blow up the frame
            readings = [read_float(v) for v in values][:len(times)]
            readings += [float('nan')] * (len(times) - len(readings))
            columns[str(name)] = readings
        df = pd.DataFrame(columns, index=pd.DatetimeIndex(times, name=FctKeys.TIME), dtype=float)

        return WeatherData(current=current, hourly=df, timezone=dct.get('timezone'),
                           timezone_abbreviation=dct.get('timezone_abbreviation'),
                           latitude=dct.get('latitude'), longitude=dct.get('longitude'))
