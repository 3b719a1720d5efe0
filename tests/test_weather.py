import datetime as dt
import math
from unittest import TestCase

import pandas as pd
import pytest
import requests
from pytest import fixture

from eightbit_weather import config
from eightbit_weather.location import Location
from eightbit_weather.weather_descriptions import Metric
from eightbit_weather.utility import WeatherServiceError
from eightbit_weather.weather_observation import Weather, WeatherData, Observation


@fixture
def weather_data(forecast_json):
    return Weather.build_weather_data(forecast_json)


def test_build_weather_data_current(weather_data):
    cur = weather_data.current
    assert cur.time == dt.datetime(2023, 1, 1, 13)
    assert cur.value(Metric.TEMPERATURE) == 70.0
    assert cur.value('precipitationChance') == 5
    assert cur.value('windSpeed') == 4.2
    assert cur.civil_time == '1:00 PM'


def test_build_weather_data_hourly(weather_data):
    df = weather_data.hourly
    assert isinstance(df.index, pd.DatetimeIndex)
    assert list(df.index) == [pd.Timestamp(2023, 1, 1, h) for h in (14, 15, 16, 17)]
    assert list(weather_data.series('temperature')) == [72.0, 65.0, 90.0, 68.0]
    assert 'temperature_80m' in df.columns
    assert weather_data.timezone == 'America/Chicago'
    assert weather_data.timezone_abbreviation == 'CST'


def test_null_readings_become_nan(weather_data):
    assert math.isnan(weather_data.series(Metric.PRECIPITATION_CHANCE).iloc[3])


def test_missing_hourly_metric_is_empty_series(forecast_json):
    del forecast_json['hourly']['cloud_cover']
    wd = Weather.build_weather_data(forecast_json)
    assert wd.series('cloudCover').empty


def test_short_hourly_column_is_padded(forecast_json):
    forecast_json['hourly']['wind_speed_10m'] = [1.0]
    wd = Weather.build_weather_data(forecast_json)
    assert len(wd.series('windSpeed')) == 4
    assert math.isnan(wd.series('windSpeed').iloc[1])


def test_get_current_weather(fake_session, fake_response, forecast_json):
    session = fake_session(fake_response(forecast_json))
    w = Weather(session=session)
    wd = w.get_current_weather(36.37, -94.21)
    assert isinstance(wd, WeatherData)
    url, params, _ = session.calls[0]
    assert url == f'{config.WEATHER_BASE_URL}/forecast'
    assert params['latitude'] == '36.37'
    assert params['hourly'].split(',') == config.hourly_variables
    assert params['temperature_unit'] == 'fahrenheit'
    assert params['wind_speed_unit'] == 'mph'
    assert params['precipitation_unit'] == 'inch'
    assert params['forecast_hours'] == str(config.DEFAULT_HORIZON)
    assert w.last_request_url.startswith(f'{config.WEATHER_BASE_URL}/forecast?latitude=36.37')


def test_get_weather_for_location(fake_session, fake_response, forecast_json):
    session = fake_session(fake_response(forecast_json))
    Weather(session=session).get_weather(Location('Bentonville', 36.37, -94.21))
    assert session.calls[0][1]['longitude'] == '-94.21'


@pytest.mark.parametrize("response", [requests.ConnectionError('down'), requests.Timeout('slow')])
def test_get_current_weather_transport_failure(fake_session, response):
    assert Weather(session=fake_session(response)).get_current_weather(1, 2) is None


def test_get_current_weather_bad_status(fake_session, fake_response):
    w = Weather(session=fake_session(fake_response({'error': True}, status_code=400)))
    assert w.get_current_weather(1, 2) is None
    assert w.last_request_url is not None


def test_get_current_weather_bad_payload(fake_session, fake_response):
    assert Weather(session=fake_session(fake_response({'reason': 'nope'}))).get_current_weather(1, 2) is None


def test_refresh_without_request():
    assert Weather().refresh_weather() is None


def test_refresh_repeats_last_request(fake_session, fake_response):
    payload = {'current': {'temperature_2m': 50}, 'hourly': {}}
    session = fake_session(fake_response(payload), fake_response(payload))
    w = Weather(session=session, horizon=6)
    w.get_current_weather(10.5, 20.25)
    wd = w.refresh_weather()
    assert wd.current.temperature == 50
    assert session.calls[0][1] == session.calls[1][1]
    assert session.calls[1][1]['forecast_hours'] == '6'


class TestObservation(TestCase):

    def test_value_unknown_metric(self):
        with self.assertRaises(ValueError):
            Observation().value('humidity')

    def test_str(self):
        o = Observation(time=dt.datetime(2023, 1, 1, 9), temperature=40, wind_speed=3)
        self.assertIn('9:00 AM', str(o))
        self.assertIn('Temperature: 40', str(o))


@pytest.mark.parametrize("where", ['hourly', 'current'])
def test_bad_timestamp_is_a_service_error(forecast_json, where):
    if where == 'hourly':
        forecast_json['hourly']['time'][0] = 'not-a-time'
    else:
        forecast_json['current']['time'] = 'not-a-time'
    with pytest.raises(WeatherServiceError):
        Weather.build_weather_data(forecast_json)


def test_null_hourly_column_is_treated_as_missing(forecast_json):
    forecast_json['hourly']['temperature_2m'] = None
    wd = Weather.build_weather_data(forecast_json)
    assert len(wd.series('temperature')) == 4
    assert wd.series('temperature').isna().all()


def test_wrong_shaped_payload_is_a_service_error(forecast_json):
    forecast_json['hourly'] = ['not', 'a', 'dict']
    with pytest.raises(WeatherServiceError):
        Weather.build_weather_data(forecast_json)


@pytest.mark.parametrize("breakage", ['bad_time', 'null_column'])
def test_get_current_weather_survives_malformed_payload(fake_session, fake_response, forecast_json, breakage):
    if breakage == 'bad_time':
        forecast_json['hourly']['time'][0] = 'not-a-time'
        expected_none = True
    else:
        forecast_json['hourly']['temperature_2m'] = None
        expected_none = False
    wd = Weather(session=fake_session(fake_response(forecast_json))).get_current_weather(36.37, -94.21)
    assert (wd is None) == expected_none
