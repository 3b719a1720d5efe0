import os

import dotenv

# Pick up overrides from a local .env file if there is one
dotenv.load_dotenv()

GEOCODING_BASE_URL: str = os.getenv('EIGHTBIT_GEOCODING_URL', 'https://geocoding-api.open-meteo.com/v1')
WEATHER_BASE_URL: str = os.getenv('EIGHTBIT_WEATHER_URL', 'https://api.open-meteo.com/v1')
REQUEST_TIMEOUT: float = float(os.getenv('EIGHTBIT_TIMEOUT', '10'))

# Number of hours ahead we look for the most dramatic change
DEFAULT_HORIZON: int = int(os.getenv('EIGHTBIT_HORIZON', '12'))

# Variables requested from the forecast service
current_variables = ['temperature_2m', 'precipitation', 'cloud_cover', 'wind_speed_10m',
                     'precipitation_probability']
hourly_variables = ['temperature_2m', 'precipitation_probability', 'precipitation', 'cloud_cover',
                    'wind_speed_10m', 'temperature_80m']

temperature_unit = 'fahrenheit'
wind_speed_unit = 'mph'
precipitation_unit = 'inch'
