import pytest
from pytest import fixture


class FakeResponse:
    def __init__(self, payload=None, status_code=200, url='https://example.test'):
        self._payload = payload
        self.status_code = status_code
        self.url = url

    def json(self):
        return self._payload


class FakeSession:
    """ Stands in for a requests.Session, hands back canned responses and remembers the calls """

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params, timeout))
        resp = self.responses.pop(0)
        if isinstance(resp, Exception):
            raise resp
        return resp


@fixture
def geocoding_json():
    return {'results': [
        {'id': 4101241, 'name': 'Bentonville', 'latitude': 36.37285, 'longitude': -94.20882,
         'admin1': 'Arkansas', 'country': 'United States'},
        {'id': 4255056, 'name': 'Bentonville', 'latitude': 38.83899, 'longitude': -78.31639,
         'admin1': 'Virginia', 'country': 'United States'},
    ], 'generationtime_ms': 0.5}


@fixture
def forecast_json():
    return {
        'latitude': 36.37,
        'longitude': -94.21,
        'timezone': 'America/Chicago',
        'timezone_abbreviation': 'CST',
        'current': {'time': '2023-01-01T13:00', 'temperature_2m': 70.0, 'precipitation': 0.0,
                    'cloud_cover': 20, 'wind_speed_10m': 4.2, 'precipitation_probability': 5},
        'hourly': {
            'time': ['2023-01-01T14:00', '2023-01-01T15:00', '2023-01-01T16:00', '2023-01-01T17:00'],
            'temperature_2m': [72.0, 65.0, 90.0, 68.0],
            'precipitation_probability': [5, 5, 40, None],
            'precipitation': [0.0, 0.0, 0.2, 0.0],
            'cloud_cover': [20, 20, 20, 20],
            'wind_speed_10m': [4.0, 12.5, 3.0, 2.0],
            'temperature_80m': [71.0, 64.0, 88.0, 67.0],
        },
    }


@fixture
def fake_response():
    return FakeResponse


@fixture
def fake_session():
    return FakeSession
