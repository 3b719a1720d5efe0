# -*- coding: utf-8 -*-
"""Top-level package for 8-Bit Weather."""
import logging

from eightbit_weather.dramatic_change import *
from eightbit_weather.weather_descriptions import *
from eightbit_weather.location import *
from eightbit_weather.weather_observation import *
from eightbit_weather.cards import *

__author__ = """Michael Dereszynski"""
__email__ = 'mlderes@hotmail.com'
__version__ = '0.1.0'

# Library code only logs, the console script decides where the messages go
logging.getLogger(__name__).addHandler(logging.NullHandler())
